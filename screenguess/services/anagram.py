"""Anagram lifeline: turn a game title into scrambled letter tiles."""

import re

import structlog

from .random_source import RandomSource, random_index, resolve
from .sequencer import shuffle_string

log = structlog.stdlib.get_logger()

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def normalize_title(title: str) -> str:
    """Drop everything except ASCII letters and digits, then uppercase."""
    return _NON_ALPHANUMERIC.sub("", title).upper()


def generate_anagram(
    title: str,
    random_source: RandomSource | None = None,
    decoy: bool = False,
) -> str:
    """Scramble a title into space-separated letter tiles.

    The tiles hold exactly the characters of ``normalize_title(title)``
    unless ``decoy`` is set, in which case one random A-Z letter is mixed in.
    A title with no letters or digits yields an empty string, decoy or not;
    callers that need a non-empty puzzle must reject such titles first.
    """
    source = resolve(random_source)
    letters = normalize_title(title)
    if not letters:
        log.debug("Title has no letters to scramble", title=title)
        return ""

    if decoy:
        letters += chr(ord("A") + random_index(26, source))

    return shuffle_string(letters, source)
