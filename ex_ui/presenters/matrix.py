"""Presenters for decision matrices."""

from __future__ import annotations

from typing import List, Sequence

from rich.markup import escape

from ex_matrix.api import ChoiceGroupView, DecisionMatrix
from ex_ui.tui.models import TableModel
from ex_ui.tui.theme import option_text


def build_choices_table(matrix: DecisionMatrix, title: str = "Choices") -> TableModel:
    """One row per choice group with its options marked by availability."""
    views: Sequence[ChoiceGroupView] = matrix.choices_with_availability()
    rows = [
        [
            escape(view.name),
            view.kind.value,
            escape(view.value) if view.value is not None else "-",
            "\n".join(
                option_text(option.value, option.available, option.checked)
                for option in view.options
            ),
        ]
        for view in views
    ]
    chart_id = matrix.selected_chart_id
    suffix = f" (chart {chart_id})" if chart_id is not None else ""
    return TableModel(
        title=f"{title}{suffix}",
        columns=["Group", "Kind", "Value", "Options"],
        rows=rows,
    )


def build_rows_table(matrix: DecisionMatrix) -> TableModel:
    """Chart id and canonical query string of every matrix row."""
    rows: List[List[str]] = [
        [str(row.chart_id), escape(query) or "-"]
        for row, query in zip(matrix.table.rows, matrix.all_options_as_query_strings())
    ]
    return TableModel(title="Matrix Rows", columns=["Chart", "Query"], rows=rows)
