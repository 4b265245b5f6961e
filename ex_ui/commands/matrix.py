from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ex_matrix.api import DecisionMatrix, ExplorerProgram
from ex_ui.commands.common import read_text, run_or_exit
from ex_ui.dependencies import CliContext
from ex_ui.presenters.matrix import build_choices_table, build_rows_table
from ex_ui.tui.models import TableModel


def _parse_assignment(raw: str) -> tuple[str, Optional[str]]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise typer.BadParameter(f"Expected GROUP=VALUE, got '{raw}'")
    return name.strip(), value.strip() or None


def create_matrix_app(ctx: CliContext) -> typer.Typer:
    """Build the matrix Typer app (inspect decision matrices)."""
    app = typer.Typer(help="Inspect decision matrices.", no_args_is_help=True)

    def _load(path: Path, program: bool, query: str = "") -> DecisionMatrix:
        text = read_text(ctx, path)
        settings = run_or_exit(ctx, ctx.settings)
        if program:
            explorer = ExplorerProgram(path.stem, text, settings=settings)
            code = explorer.decision_matrix_code
            query = query or explorer.default_view
            return run_or_exit(ctx, lambda: DecisionMatrix(code, query, settings=settings))
        return run_or_exit(ctx, lambda: DecisionMatrix(text, query, settings=settings))

    program_option = typer.Option(
        False,
        "--program",
        "-p",
        help="Read the matrix from the switcher block of an explorer program.",
    )

    @app.command("show")
    def matrix_show(
        path: Path = typer.Argument(..., help="Decision matrix (CSV/TSV) or explorer program."),
        assignments: List[str] = typer.Option(
            [], "--set", "-s", help="Choose GROUP=VALUE (repeatable, applied in order)."
        ),
        query: str = typer.Option("", "--query", "-q", help="Initial choices as a query string."),
        program: bool = program_option,
    ) -> None:
        """Show choice groups, option availability and the selected chart."""
        matrix = _load(path, program, query)
        for raw in assignments:
            name, value = _parse_assignment(raw)
            matrix.set_value(name, value)

        if not matrix.choice_names:
            ctx.ui.present.warning("The matrix has no choice groups.")
        else:
            ctx.ui.tables.show(build_choices_table(matrix, title=path.name))
        for error in matrix.rejected_values:
            ctx.ui.present.warning(f"Ignored: {error}")

        chart_id = matrix.selected_chart_id
        if chart_id is None:
            ctx.ui.present.warning("The matrix has no rows.")
            return
        ctx.ui.present.success(f"Selected chart {chart_id} {matrix.to_query_string()}".rstrip())

    @app.command("ids")
    def matrix_ids(
        path: Path = typer.Argument(..., help="Decision matrix (CSV/TSV) or explorer program."),
        program: bool = program_option,
    ) -> None:
        """List the chart ids the matrix needs, in row order."""
        matrix = _load(path, program)
        ids = matrix.table.required_chart_ids
        ctx.ui.tables.show(
            TableModel(
                title="Required Charts",
                columns=["Chart"],
                rows=[[str(chart_id)] for chart_id in ids],
            )
        )

    @app.command("urls")
    def matrix_urls(
        path: Path = typer.Argument(..., help="Decision matrix (CSV/TSV) or explorer program."),
        program: bool = program_option,
    ) -> None:
        """List one canonical query string per matrix row."""
        matrix = _load(path, program)
        ctx.ui.tables.show(build_rows_table(matrix))

    return app
