"""Load layered .env sources and apply their entries to a sink.

Sources are given from most general to most specific. Entries are applied in
that order, so a sink that keeps one value per key (a dict, ``os.environ``)
ends up with the value from the most specific source.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, MutableMapping
from pathlib import Path

from envlayer.exceptions import SourceReadError
from envlayer.logging_config import get_logger
from envlayer.models import Entry, LoadReport, SourceResult
from envlayer.parser import parse

log = get_logger(__name__)


def read_source(path: str | Path, *, encoding: str = "utf-8") -> str:
    """Read one source file, raising SourceReadError if it is unreadable."""
    p = Path(path).expanduser()
    try:
        return p.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise SourceReadError(p, reason) from e


def load_sources(
    paths: Iterable[str | Path],
    *,
    strict: bool = False,
    encoding: str = "utf-8",
) -> LoadReport:
    """Parse every source in order and report per-source results.

    An unreadable source is recorded with its error and skipped, unless
    ``strict`` is set, in which case the SourceReadError propagates.
    """
    report = LoadReport()
    for path in paths:
        p = Path(path).expanduser()
        try:
            text = read_source(p, encoding=encoding)
        except SourceReadError as e:
            if strict:
                raise
            log.warning("Skipping source %s: %s", p, e.reason)
            report.sources.append(SourceResult(path=p, error=e.reason))
            continue
        entries = list(parse(text))
        log.debug("Loaded %d entries from %s", len(entries), p)
        report.sources.append(SourceResult(path=p, entries=entries))
    return report


def load_env_from(
    paths: Iterable[str | Path],
    *,
    strict: bool = False,
    encoding: str = "utf-8",
) -> list[Entry]:
    """Return all entries from ``paths``, general sources first.

    Unreadable sources contribute nothing unless ``strict`` is set.
    """
    return load_sources(paths, strict=strict, encoding=encoding).entries


def apply_entries(entries: Iterable[Entry], sink: Callable[[str, str], object]) -> int:
    """Call ``sink(key, value)`` for each entry in order. Returns the count."""
    count = 0
    for key, value in entries:
        sink(key, value)
        count += 1
    return count


def apply_to_environ(
    entries: Iterable[Entry],
    environ: MutableMapping[str, str] | None = None,
    *,
    override: bool = True,
) -> dict[str, str]:
    """Write entries into ``environ`` (``os.environ`` by default).

    With ``override=False`` keys that existed before the call are kept.
    Returns the keys and final values that were written.
    """
    target = os.environ if environ is None else environ
    existing = set() if override else set(target)
    written: dict[str, str] = {}

    def _set(key: str, value: str) -> None:
        if key in existing:
            log.debug("Keeping existing value for %s", key)
            return
        target[key] = value
        written[key] = value

    apply_entries(entries, _set)
    return written


def load_env(
    paths: Iterable[str | Path],
    *,
    override: bool = True,
    strict: bool = False,
    encoding: str = "utf-8",
    environ: MutableMapping[str, str] | None = None,
) -> LoadReport:
    """Load ``paths`` and apply the result to the environment in one step."""
    report = load_sources(paths, strict=strict, encoding=encoding)
    written = apply_to_environ(report.entries, environ, override=override)
    log.debug("Applied %d keys from %d sources", len(written), len(report.sources))
    return report
