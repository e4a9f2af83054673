"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from mdrich.config import Settings, load_config
from mdrich.core.buffer import Run
from mdrich.core.continuation import on_line_break
from mdrich.core.emit import to_markdown
from mdrich.core.styler import style_markdown


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)


def _styled_payload(text: str, settings: Settings) -> dict[str, Any]:
    buffer = style_markdown(text, settings.base_size, settings.match_mode, settings.parser_config)
    return {
        "text": buffer.text(),
        "base_size": settings.base_size,
        "runs": [run.model_dump(mode="json") for run in buffer.runs()],
    }


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Markdown <-> styled rich text conversion."""
    settings = _settings()
    logging.basicConfig(
        level="DEBUG" if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def style_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to style")],
    base_size: Annotated[Optional[float], typer.Option("--base-size", help="Body text size")] = None,
    match_mode: Annotated[Optional[str], typer.Option("--match-mode", help="aligned or legacy")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Convert markdown into styled runs, printed as JSON."""
    settings = _settings(overrides={"base_size": base_size, "match_mode": match_mode, "parser_config": parser})
    payload = _styled_payload(_read(path), settings)
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def export_cmd(
    path: Annotated[Path, typer.Argument(help="Runs JSON file produced by 'mdrich style'")],
    base_size: Annotated[Optional[float], typer.Option("--base-size", help="Base size the runs were styled with")] = None,
    ):
    """Rebuild markdown from styled runs JSON."""
    settings = _settings()
    try:
        payload = json.loads(_read(path))
        runs = [Run.model_validate(r) for r in payload["runs"]]
    except (ValueError, KeyError, TypeError) as e:
        _fail(f"Invalid runs file {path}", e)
    size = base_size or payload.get("base_size") or settings.base_size
    typer.echo(to_markdown(runs, size), nl=False)


def roundtrip_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to convert there and back")],
    base_size: Annotated[Optional[float], typer.Option("--base-size", help="Body text size")] = None,
    match_mode: Annotated[Optional[str], typer.Option("--match-mode", help="aligned or legacy")] = None,
    ):
    """Style a markdown file and emit it back as markdown."""
    settings = _settings(overrides={"base_size": base_size, "match_mode": match_mode})
    buffer = style_markdown(_read(path), settings.base_size, settings.match_mode, settings.parser_config)
    typer.echo(to_markdown(buffer, settings.base_size), nl=False)


def continue_cmd(
    text: Annotated[str, typer.Argument(help="Full editor text")],
    offset: Annotated[Optional[int], typer.Option("--offset", help="Break offset; defaults to end of text")] = None,
    ):
    """Show what a line break at offset would insert."""
    cont = on_line_break(text, len(text) if offset is None else offset)
    typer.echo(cont.model_dump_json())
