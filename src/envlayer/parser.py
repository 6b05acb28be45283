"""Parse .env text into ordered key/value entries.

Lines are stripped, full-line ``#`` comments and blank lines are skipped, and
each remaining line is split on its first ``=``. Both sides then go through
the same normalizer, which either drops a trailing ``#`` comment (unquoted
text) or unwraps one layer of quotes (quoted text).
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator

from envlayer.models import Entry

QUOTES = ("'", '"')


class _ScanState(enum.Enum):
    NO_QUOTE = "no-quote"
    IN_QUOTE = "in-quote"
    CLOSED = "closed"


def filter_lines(text: str) -> Iterator[str]:
    """Yield stripped lines that are neither blank nor full-line comments.

    Only ``\\n`` and ``\\r\\n`` end a line; other control characters such as form
    feeds stay inside the value.
    """
    for line in text.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        yield line


def _strip_comment(raw: str) -> str:
    return raw.partition("#")[0].strip()


def _unquote(raw: str) -> str | None:
    state = _ScanState.NO_QUOTE
    delimiter = ""
    start = end = 0

    for i, char in enumerate(raw):
        if state is _ScanState.NO_QUOTE:
            if char not in QUOTES:
                continue
            delimiter = char
            start = i + 1
            state = _ScanState.IN_QUOTE
        elif state is _ScanState.IN_QUOTE and char == delimiter:
            end = i - 1
            state = _ScanState.CLOSED
            break

    if state is not _ScanState.CLOSED:
        return None
    # `end` is relative to the opening quote's frame, not an absolute index.
    if start + end > len(raw):
        return None
    return raw[start:start + end]


def normalize(raw: str) -> str | None:
    """Normalize one side of a ``key=value`` pair.

    Unquoted text loses everything from the first ``#`` on. Quoted text has
    its first quote pair removed, and quote characters of the other flavor
    inside that pair are kept as-is. A ``#`` after a closing quote is not
    treated as a comment. Returns ``None`` when no closing quote exists.
    """
    if not any(quote in raw for quote in QUOTES):
        return _strip_comment(raw)
    return _unquote(raw)


def extract(line: str) -> Entry | None:
    """Split a candidate line into an Entry, or None if it is not ``key=value``."""
    key, sep, value = line.partition("=")
    if not sep:
        return None

    value = normalize(value.strip())
    if value is None:
        return None

    key = normalize(key.strip())
    if not key:
        return None

    return Entry(key, value)


def parse(text: str) -> Iterator[Entry]:
    """Yield entries from .env text in source order, duplicates included."""
    for line in filter_lines(text):
        entry = extract(line)
        if entry is not None:
            yield entry


def parse_and_set(text: str, setter: Callable[[str, str], object]) -> None:
    """Call ``setter(key, value)`` for each entry parsed from ``text``.

    Useful when the destination is a side effect, e.g. ``os.environ.__setitem__``.
    """
    for key, value in parse(text):
        setter(key, value)
