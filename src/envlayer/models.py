"""Data types shared by the parser, loader and viewer."""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class Entry(NamedTuple):
    key: str
    value: str


class _EnvModel(BaseModel):
    """Base model that ignores unknown fields."""
    model_config = ConfigDict(extra="ignore")


class SourceResult(_EnvModel):
    """Entries read from a single source, or the reason it could not be read."""

    path: Path
    entries: list[Entry] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LoadReport(_EnvModel):
    """Per-source results of a layered load, in application order."""

    sources: list[SourceResult] = Field(default_factory=list)

    @property
    def entries(self) -> list[Entry]:
        return [entry for source in self.sources for entry in source.entries]

    @property
    def failed(self) -> list[SourceResult]:
        return [source for source in self.sources if not source.ok]

    def resolved(self) -> dict[str, str]:
        """Apply every entry in order to a dict; later writes win."""
        result: dict[str, str] = {}
        for key, value in self.entries:
            result[key] = value
        return result

    def origins(self) -> dict[str, Path]:
        """Map each key to the path of the source whose value won."""
        result: dict[str, Path] = {}
        for source in self.sources:
            for key, _ in source.entries:
                result[key] = source.path
        return result
