"""Choice table: the parsed, immutable form of a decision matrix."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ex_common.errors import MissingIdColumnError
from ex_matrix.delimited import parse_delimited
from ex_matrix.grammar import ChoiceKind, split_column_header
from ex_matrix.settings import MatrixSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """One preset of the matrix. Blank cells are wildcards."""

    index: int
    chart_id: int
    cells: Mapping[str, str]

    def get(self, column: str) -> Optional[str]:
        return self.cells.get(column) or None

    def matches(
        self,
        query: Mapping[str, Optional[str]],
        exact_column: Optional[str] = None,
    ) -> bool:
        """Return True when every set query value is compatible with this row.

        A blank cell accepts any value, except in ``exact_column`` where the
        cell must hold the queried value itself.
        """
        for column, value in query.items():
            if value is None:
                continue
            cell = self.cells.get(column, "")
            if cell == value:
                continue
            if cell == "" and column != exact_column:
                continue
            return False
        return True


@dataclass(frozen=True)
class ChoiceGroup:
    name: str
    kind: ChoiceKind
    options: Tuple[str, ...]

    @property
    def is_degenerate(self) -> bool:
        return len(self.options) == 1

    def has_option(self, value: Optional[str]) -> bool:
        return value is not None and value in self.options


@dataclass(frozen=True)
class ChoiceTable:
    id_column: str
    groups: Tuple[ChoiceGroup, ...] = ()
    rows: Tuple[Row, ...] = ()
    _by_name: Mapping[str, ChoiceGroup] = field(default_factory=dict, repr=False, compare=False)

    @property
    def group_names(self) -> List[str]:
        return [group.name for group in self.groups]

    @property
    def chart_ids(self) -> List[int]:
        return [row.chart_id for row in self.rows]

    @property
    def required_chart_ids(self) -> List[int]:
        """Distinct chart ids in row order."""
        return list(dict.fromkeys(self.chart_ids))

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def group(self, name: str) -> ChoiceGroup:
        return self._by_name[name]

    def find_group(self, name: str) -> Optional[ChoiceGroup]:
        return self._by_name.get(name)


def resolve_kind(options: Tuple[str, ...], settings: MatrixSettings) -> ChoiceKind:
    if settings.is_boolean_pair(options):
        return ChoiceKind.checkbox
    return settings.default_kind


def _parse_chart_id(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


def parse_table(text: str, settings: Optional[MatrixSettings] = None) -> ChoiceTable:
    """Parse delimited decision matrix text into a ChoiceTable.

    Raises MissingIdColumnError when a header exists but has no id column.
    Rows whose id is blank or not an integer are skipped.
    """
    settings = settings or MatrixSettings()
    header, raw_rows = parse_delimited(text)
    if not header:
        return ChoiceTable(id_column=settings.id_column)

    if settings.id_column not in header:
        raise MissingIdColumnError(
            f"Decision matrix has no '{settings.id_column}' column",
            context={"header": header, "id_column": settings.id_column},
        )
    id_index = header.index(settings.id_column)

    # column index -> (group name, explicit kind)
    columns: Dict[int, Tuple[str, Optional[ChoiceKind]]] = {}
    seen: set[str] = set()
    for index, cell in enumerate(header):
        if index == id_index or not cell:
            continue
        name, kind = split_column_header(cell)
        if name in seen or name == settings.id_column:
            logger.warning("Ignoring duplicate column %r in decision matrix", cell)
            continue
        seen.add(name)
        columns[index] = (name, kind)

    rows: List[Row] = []
    for raw in raw_rows:
        chart_id = _parse_chart_id(raw[id_index])
        if chart_id is None:
            logger.warning(
                "Skipping decision matrix row with invalid %s %r",
                settings.id_column,
                raw[id_index],
            )
            continue
        cells = {name: raw[index] for index, (name, _kind) in columns.items()}
        rows.append(Row(index=len(rows), chart_id=chart_id, cells=MappingProxyType(cells)))

    groups: List[ChoiceGroup] = []
    for name, explicit_kind in columns.values():
        options = tuple(dict.fromkeys(row.cells[name] for row in rows if row.cells[name]))
        kind = explicit_kind or resolve_kind(options, settings)
        groups.append(ChoiceGroup(name=name, kind=kind, options=options))

    logger.debug(
        "Parsed decision matrix with %d rows and %d choice groups",
        len(rows),
        len(groups),
    )
    return ChoiceTable(
        id_column=settings.id_column,
        groups=tuple(groups),
        rows=tuple(rows),
        _by_name=MappingProxyType({group.name: group for group in groups}),
    )


def required_chart_ids(text: str, settings: Optional[MatrixSettings] = None) -> List[int]:
    """Return the distinct chart ids of a decision matrix in row order."""
    return parse_table(text, settings).required_chart_ids
