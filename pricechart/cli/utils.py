"""Utility helpers shared across CLI commands."""

from __future__ import annotations

import json
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Mapping, TextIO

import typer

from .constants import VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, create_formatter


def prepare_output(ctx: typer.Context) -> tuple[OutputFormatter, TextIO, ExitStack]:
    """Resolve formatter and writable stream for the current command."""

    ctx.ensure_object(dict)
    options = ctx.obj or {}
    formatter = create_formatter(str(options.get("format", "table")), no_color=bool(options.get("no_color", False)))

    stack = ExitStack()
    stream: TextIO = sys.stdout
    output_path: Path | None = options.get("output_path")
    if output_path is not None:
        try:
            stream = stack.enter_context(open(output_path, "w", encoding="utf-8"))
        except OSError as exc:
            stack.close()
            emit_error(f"Unable to open '{output_path}': {exc}", "OUTPUT_WRITE_ERROR")
            raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc
    return formatter, stream, stack


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = {key: value if isinstance(value, (str, int, float, bool)) or value is None else str(value) for key, value in details.items()}
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


__all__ = ["prepare_output", "emit_error"]
