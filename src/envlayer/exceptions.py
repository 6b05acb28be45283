"""Custom exceptions for envlayer."""

from __future__ import annotations

from pathlib import Path


class EnvLayerError(Exception):
    """Base exception for envlayer errors."""


class SourceReadError(EnvLayerError):
    """A source file could not be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class ConfigError(EnvLayerError):
    """Invalid value in a TOML config file."""
