from __future__ import annotations

from pathlib import Path

import typer

from ex_matrix.api import ExplorerProgram
from ex_ui.commands.common import read_text, run_or_exit
from ex_ui.dependencies import CliContext
from ex_ui.presenters.program import build_invalid_cells_table, build_program_summary


def create_program_app(ctx: CliContext) -> typer.Typer:
    """Build the program Typer app (validate explorer programs)."""
    app = typer.Typer(help="Validate and inspect explorer programs.", no_args_is_help=True)

    def _load(path: Path) -> ExplorerProgram:
        settings = run_or_exit(ctx, ctx.settings)
        return ExplorerProgram(path.stem, read_text(ctx, path), settings=settings)

    @app.command("check")
    def program_check(
        path: Path = typer.Argument(..., help="Explorer program (tab-delimited)."),
    ) -> None:
        """Validate every cell; exit 1 when any cell is invalid."""
        program = _load(path)
        invalid = program.validate()
        if not invalid:
            ctx.ui.present.success(f"{path.name}: no problems found")
            return
        ctx.ui.tables.show(build_invalid_cells_table(invalid, title=f"{path.name}: invalid cells"))
        ctx.ui.present.error(f"{len(invalid)} invalid cell(s)")
        raise typer.Exit(1)

    @app.command("info")
    def program_info(
        path: Path = typer.Argument(..., help="Explorer program (tab-delimited)."),
    ) -> None:
        """Summarize an explorer program."""
        program = _load(path)
        summary = run_or_exit(ctx, lambda: build_program_summary(program))
        ctx.ui.tables.show(summary)

    return app
