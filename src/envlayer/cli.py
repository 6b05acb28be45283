"""CLI entry point for the envlayer command."""

from __future__ import annotations

import argparse
import json
import shlex
from pathlib import Path

from rich.console import Console

from envlayer.config import load_config, load_project_config, resolve_sources
from envlayer.exceptions import EnvLayerError
from envlayer.loader import load_sources
from envlayer.logging_config import setup_logging
from envlayer.models import LoadReport

FORMATS = ("env", "export", "json")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="envlayer",
        description="Load layered .env files (general first, specific last) and print the result.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Sources in application order. Defaults to the configured sources.",
    )
    parser.add_argument("--strict", action="store_true", help="Fail if any source is unreadable.")
    parser.add_argument("--format", choices=FORMATS, default="env", help="Output format.")
    parser.add_argument(
        "--show-origin",
        action="store_true",
        help="Annotate each key with the source it came from.",
    )
    parser.add_argument("--tui", action="store_true", help="Open the interactive viewer.")
    parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG.")
    return parser.parse_args(argv)


def render(report: LoadReport, fmt: str = "env", *, show_origin: bool = False) -> str:
    """Render the resolved mapping of a report as text."""
    resolved = report.resolved()
    if fmt == "json":
        return json.dumps(resolved, indent=2)

    origins = report.origins()
    lines: list[str] = []
    current_origin: Path | None = None
    for key, value in resolved.items():
        if show_origin and origins[key] != current_origin:
            current_origin = origins[key]
            lines.append(f"# from {current_origin}")
        if fmt == "export":
            lines.append(f"export {key}={shlex.quote(value)}")
        else:
            lines.append(f"{key}={value}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Run the envlayer command. Returns the process exit code."""
    args = parse_args(argv)
    err = Console(stderr=True, soft_wrap=True)

    try:
        logger = setup_logging(args.log_level)
        if logger is None:
            # Report config problems before the configured level is known.
            setup_logging("WARNING")
        config = load_config()
        if logger is None:
            setup_logging(config.logging.level)
        paths = args.paths or resolve_sources(config, load_project_config())
        strict = args.strict or config.loader.strict

        if args.tui:
            from envlayer.app import EnvLayerApp

            app = EnvLayerApp(
                paths,
                strict=strict,
                encoding=config.loader.encoding,
                show_overridden=config.ui.show_overridden,
                theme_name=config.ui.theme,
            )
            app.run()
            return 0

        report = load_sources(paths, strict=strict, encoding=config.loader.encoding)
    except (EnvLayerError, ValueError) as e:
        err.print(f"envlayer: {e}", markup=False, highlight=False)
        return 1

    output = render(report, args.format, show_origin=args.show_origin)
    if output:
        Console(soft_wrap=True).out(output, highlight=False)
    return 0
