"""Hide a game's name inside its synopsis before showing it as a hint."""

import re

REDACTED = "[REDACTED]"

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "nor", "yet", "so",
    "at", "by", "for", "in", "of", "on", "to", "up", "with", "from",
    "is", "are", "was", "were", "be", "been", "being",
    "it", "its", "this", "that", "these", "those",
    "game", "video", "series", "edition", "version",
    "episode", "part", "vol", "volume", "chapter", "season",
    "remastered", "remake", "definitive", "collection", "anthology", "bundle", "pack",
})

_SUBTITLE_SPLIT = re.compile(r"[:\-–—]")
_TRAILING_NUMERAL = re.compile(r"\s+(I{1,3}|IV|VI{0,3}|IX|X|XI{0,3}|\d+)$", re.IGNORECASE)
_REPEATED_TAGS = re.compile(r"\[REDACTED\](\s*\[REDACTED\])+")


def _name_variations(game_name: str) -> list[str]:
    """Every spelling of the name worth hiding, longest first."""
    variations = [game_name]

    # Subtitle parts
    variations.extend(
        part.strip() for part in _SUBTITLE_SPLIT.split(game_name) if len(part.strip()) >= 3
    )

    # Base name without a trailing numeral
    base_name = re.sub(r"[:\-–]", " ", _TRAILING_NUMERAL.sub("", game_name)).strip()
    if len(base_name) >= 4 and base_name != game_name:
        variations.append(base_name)

    # Significant single words
    tokens = re.sub(r"[^\w\s]", "", game_name.lower()).split()
    variations.extend(t for t in tokens if t not in STOP_WORDS and len(t) >= 3)

    unique = {v.strip() for v in variations if len(v.strip()) >= 3}
    return sorted(unique, key=len, reverse=True)


def redact_game_name(synopsis: str, game_name: str) -> str:
    """Replace every variation of ``game_name`` in ``synopsis`` with ``[REDACTED]``.

    Matching is case-insensitive; single words only match on word
    boundaries. Adjacent tags collapse into one.
    """
    redacted = synopsis
    for variant in _name_variations(game_name):
        escaped = re.escape(variant)
        pattern = rf"\b{escaped}\b" if " " not in variant else escaped
        redacted = re.sub(pattern, REDACTED, redacted, flags=re.IGNORECASE)

    return _REPEATED_TAGS.sub(REDACTED, redacted)
