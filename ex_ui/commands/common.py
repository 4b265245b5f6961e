from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, TypeVar

import typer

from ex_common.errors import ExplorerError, error_to_payload
from ex_ui.dependencies import CliContext

T = TypeVar("T")


def run_or_exit(ctx: CliContext, action: Callable[[], T]) -> T:
    """Run ``action``; report ExplorerErrors through the UI and exit 1.

    With JSON errors enabled the report is the error payload as one JSON line.
    """
    try:
        return action()
    except ExplorerError as exc:
        if ctx.json_errors:
            ctx.ui.present.error(json.dumps(error_to_payload(exc), ensure_ascii=False))
        else:
            ctx.ui.present.error(str(exc))
        raise typer.Exit(1)


def read_text(ctx: CliContext, path: Path) -> str:
    # utf-8-sig drops the BOM spreadsheet exports put before the header
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        ctx.ui.present.error(f"Cannot read {path}: {exc}")
        raise typer.Exit(1)
