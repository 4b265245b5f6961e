"""Decision matrix and explorer program interpreter."""

from ex_matrix.api import (
    DecisionMatrix,
    ExplorerProgram,
    MatrixSettings,
    parse_table,
    required_chart_ids,
)

__all__ = [
    "DecisionMatrix",
    "ExplorerProgram",
    "MatrixSettings",
    "parse_table",
    "required_chart_ids",
]
