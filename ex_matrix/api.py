"""Public API surface for ex_matrix."""

from ex_matrix.decision_matrix import (
    ChoiceGroupView,
    ChoiceOptionView,
    DecisionMatrix,
    Selection,
)
from ex_matrix.grammar import DEFAULT_ID_COLUMN, KEYWORDS, ChoiceKind, ExplorerBoolean
from ex_matrix.program import DEFAULT_PROGRAM, CellResult, ExplorerProgram
from ex_matrix.query_params import query_params_to_str, str_to_query_params
from ex_matrix.settings import MatrixSettings, load_settings
from ex_matrix.table import ChoiceGroup, ChoiceTable, Row, parse_table, required_chart_ids

__all__ = [
    "CellResult",
    "ChoiceGroup",
    "ChoiceGroupView",
    "ChoiceKind",
    "ChoiceOptionView",
    "ChoiceTable",
    "DEFAULT_ID_COLUMN",
    "DEFAULT_PROGRAM",
    "DecisionMatrix",
    "ExplorerBoolean",
    "ExplorerProgram",
    "KEYWORDS",
    "MatrixSettings",
    "Row",
    "Selection",
    "load_settings",
    "parse_table",
    "query_params_to_str",
    "required_chart_ids",
    "str_to_query_params",
]
