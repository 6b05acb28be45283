"""Configuration management for envlayer.

Reads and writes TOML config at ~/.config/envlayer/config.toml, plus an
optional per-project ``.envlayer`` file listing more specific sources.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w

from envlayer.exceptions import ConfigError
from envlayer.logging_config import get_logger

CONFIG_DIR = Path.home() / ".config" / "envlayer"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_FILE = ".envlayer"

log = get_logger(__name__)


@dataclass
class LoaderConfig:
    sources: list[str] = field(default_factory=lambda: [".env"])
    strict: bool = False
    encoding: str = "utf-8"


@dataclass
class UIConfig:
    theme: str = "dark"
    show_overridden: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class EnvLayerConfig:
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _string_list(value: object, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{name} must be a list of strings")
    return list(value)


def _table(data: dict, name: str) -> dict:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _option(section: dict, key: str, default, kind: type, name: str):
    value = section.get(key, default)
    if not isinstance(value, kind):
        raise ConfigError(f"{name}.{key} must be a {kind.__name__}")
    return value


def _read_toml(path: Path) -> dict | None:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.warning("Ignoring unreadable config %s: %s", path, e)
        return None


def load_config() -> EnvLayerConfig:
    """Load config from TOML file, returning defaults if missing or corrupt.

    Raises ConfigError when the file parses but a section is not a table or
    an option has the wrong type.
    """
    if not CONFIG_PATH.exists():
        return EnvLayerConfig()
    data = _read_toml(CONFIG_PATH)
    if data is None:
        return EnvLayerConfig()

    loader_data = _table(data, "loader")
    ui_data = _table(data, "ui")
    logging_data = _table(data, "logging")

    return EnvLayerConfig(
        loader=LoaderConfig(
            sources=_string_list(loader_data.get("sources", [".env"]), "loader.sources"),
            strict=_option(loader_data, "strict", False, bool, "loader"),
            encoding=_option(loader_data, "encoding", "utf-8", str, "loader"),
        ),
        ui=UIConfig(
            theme=_option(ui_data, "theme", "dark", str, "ui"),
            show_overridden=_option(ui_data, "show_overridden", True, bool, "ui"),
        ),
        logging=LoggingConfig(
            level=_option(logging_data, "level", "WARNING", str, "logging"),
        ),
    )


def save_config(config: EnvLayerConfig) -> None:
    """Write config to TOML file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)

    data = {
        "loader": {
            "sources": list(config.loader.sources),
            "strict": config.loader.strict,
            "encoding": config.loader.encoding,
        },
        "ui": {
            "theme": config.ui.theme,
            "show_overridden": config.ui.show_overridden,
        },
        "logging": {
            "level": config.logging.level,
        },
    }

    with open(CONFIG_PATH, "wb") as f:
        tomli_w.dump(data, f)
    os.chmod(CONFIG_PATH, 0o600)


@dataclass
class ProjectConfig:
    sources: list[str] = field(default_factory=list)


def load_project_config() -> ProjectConfig:
    """Load project config from .envlayer in the current directory."""
    path = Path.cwd() / PROJECT_FILE
    if not path.exists():
        return ProjectConfig()
    data = _read_toml(path)
    if data is None:
        return ProjectConfig()
    return ProjectConfig(sources=_string_list(data.get("sources", []), "sources"))


def save_project_config(config: ProjectConfig) -> None:
    """Write project config to .envlayer in the current directory."""
    path = Path.cwd() / PROJECT_FILE
    if not config.sources:
        if path.exists():
            path.unlink()
        return
    with open(path, "wb") as f:
        tomli_w.dump({"sources": list(config.sources)}, f)


def resolve_sources(config: EnvLayerConfig, project: ProjectConfig) -> list[Path]:
    """Global sources followed by project sources, general to specific.

    A path listed twice keeps only its later (more specific) position.
    """
    ordered = [Path(s).expanduser() for s in [*config.loader.sources, *project.sources]]
    result: list[Path] = []
    for path in ordered:
        if path in result:
            result.remove(path)
        result.append(path)
    return result
