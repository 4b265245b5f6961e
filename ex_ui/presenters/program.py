"""Presenters for explorer programs."""

from __future__ import annotations

from typing import Sequence, Tuple

from rich.markup import escape

from ex_matrix.api import CellResult, ExplorerProgram
from ex_ui.tui.models import TableModel

_MAX_SUGGESTIONS = 3


def build_invalid_cells_table(
    invalid: Sequence[Tuple[int, int, CellResult]],
    title: str = "Invalid Cells",
) -> TableModel:
    rows = [
        [
            str(row + 1),
            str(col + 1),
            escape(result.value.strip()),
            escape(result.comment),
            escape(", ".join(result.options[:_MAX_SUGGESTIONS])),
        ]
        for row, col, result in invalid
    ]
    return TableModel(
        title=title,
        columns=["Line", "Cell", "Value", "Problem", "Suggestions"],
        rows=rows,
    )


def build_program_summary(program: ExplorerProgram) -> TableModel:
    ids = program.required_chart_ids
    rows = [
        ["Slug", escape(program.slug)],
        ["Title", escape(program.title or "-")],
        ["Subtitle", escape(program.subtitle or "-")],
        ["Published", "yes" if program.is_published else "no"],
        ["Default view", escape(program.default_view or "-")],
        ["CMS block", str(program.wp_block_id) if program.wp_block_id is not None else "-"],
        ["Google Sheet", escape(program.google_sheet or "-")],
        ["Charts", ", ".join(str(chart_id) for chart_id in ids) or "-"],
    ]
    return TableModel(title="Explorer Program", columns=["Field", "Value"], rows=rows)
