"""Score signatures and the shared constant-time comparison.

A signature is the lowercase hex SHA-256 of ``"<score>-<secret>"``. The
verifier recomputes it from the submitted score, so no per-session secret
is stored. Every secret-bearing comparison in the engine (signatures and
the admin key) goes through ``constant_time_equals``.
"""

import hashlib
import hmac

import structlog

from ..models.session import RunRecord
from .errors import (
    ConfigurationError,
    IntegrityError,
    ValidationError,
    handle_error,
    require_finite,
)

log = structlog.stdlib.get_logger()


def constant_time_equals(a: str | bytes, b: str | bytes) -> bool:
    """Equal-length, equal-content check whose timing ignores the mismatch position."""
    a_bytes = a.encode("utf-8") if isinstance(a, str) else bytes(a)
    b_bytes = b.encode("utf-8") if isinstance(b, str) else bytes(b)
    if len(a_bytes) != len(b_bytes):
        return False
    return hmac.compare_digest(a_bytes, b_bytes)


def format_score(score: int | float) -> str:
    """Decimal form of a score; integral floats lose their ``.0``."""
    require_finite(score, "score")
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def _require_secret(secret: str | None, setting: str) -> str:
    if not isinstance(secret, str) or not secret:
        raise ConfigurationError(
            f"Server misconfiguration: {setting} not set",
            setting=setting,
            expected="a non-empty string",
        )
    return secret


def generate_signature(score: int | float, secret: str | None) -> str:
    """Sign a score with the shared secret.

    Raises:
        ConfigurationError: If the secret is missing or empty
        ValidationError: If the score is not a finite number
    """
    secret = _require_secret(secret, "signing_secret")
    payload = f"{format_score(score)}-{secret}".encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def verify_signature(score: int | float, signature: str | None, secret: str | None) -> bool:
    """Check a submitted signature. Fails closed on any configuration fault."""
    try:
        expected = generate_signature(score, secret)
    except (ConfigurationError, ValidationError) as e:
        handle_error(e, operation="verify_signature", component="signing")
        return False

    if not isinstance(signature, str):
        log.warning("Signature missing from submission")
        return False

    valid = constant_time_equals(expected, signature)
    if not valid:
        log.warning("Score signature mismatch", signature_length=len(signature))
    return valid


def verify_admin_key(provided: str | None, expected: str | None) -> bool:
    """Admin-key gate.

    Raises:
        ConfigurationError: If no admin key is configured on the server
    """
    expected = _require_secret(expected, "admin_key")
    if not provided:
        return False
    return constant_time_equals(provided, expected)


class ScoreSigner:
    """Signer bound to one configured secret."""

    def __init__(self, secret: str | None) -> None:
        self._secret = secret
        log.info("Score signer initialized", secret_configured=bool(secret))

    def sign(self, score: int | float) -> str:
        return generate_signature(score, self._secret)

    def verify(self, score: int | float, signature: str | None) -> bool:
        return verify_signature(score, signature, self._secret)

    def require_valid(self, run: RunRecord) -> None:
        """Reject a run whose total score does not match its signature.

        Raises:
            IntegrityError: If the signature is missing or does not verify
        """
        if not self.verify(run.total_score, run.signature):
            raise IntegrityError("Run score failed signature verification", score=run.total_score)
        log.info("Run signature verified", run_id=run.id)
