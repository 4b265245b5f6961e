"""Decision matrix: selection state and option availability over a ChoiceTable.

Groups are resolved in header order and earlier groups take precedence: the
availability of an option is judged against the choices of the groups before
it, so a later choice can never invalidate an earlier one. When a selected
value becomes unavailable it is replaced by the first available option of its
group, or left unset when none is available. This walk always leaves at least
one matching row in a non-empty table; should that ever fail the first row is
used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ex_common.errors import InvalidOptionValue
from ex_matrix.grammar import ChoiceKind
from ex_matrix.query_params import query_params_to_str, str_to_query_params
from ex_matrix.settings import MatrixSettings
from ex_matrix.table import ChoiceGroup, ChoiceTable, Row, parse_table

logger = logging.getLogger(__name__)

ChoiceState = Mapping[str, Optional[str]]


@dataclass(frozen=True)
class ChoiceOptionView:
    value: str
    available: bool
    checked: bool


@dataclass(frozen=True)
class ChoiceGroupView:
    name: str
    kind: ChoiceKind
    value: Optional[str]
    options: Tuple[ChoiceOptionView, ...]


class Selection:
    """Current value per choice group; ``None`` means unset."""

    def __init__(self, names: List[str]) -> None:
        self._values: Dict[str, Optional[str]] = {name: None for name in names}

    def __getitem__(self, name: str) -> Optional[str]:
        return self._values[name]

    def __setitem__(self, name: str, value: Optional[str]) -> None:
        if name not in self._values:
            raise KeyError(name)
        self._values[name] = value

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> Dict[str, Optional[str]]:
        return dict(self._values)


class DecisionMatrix:
    """Resolve choices against a decision matrix.

    The selection starts from the first row's values and is then updated by
    ``query_string`` (if any) and by ``set_value`` calls.
    """

    def __init__(
        self,
        text: str = "",
        query_string: str = "",
        *,
        settings: Optional[MatrixSettings] = None,
        table: Optional[ChoiceTable] = None,
    ) -> None:
        self.table = table if table is not None else parse_table(text, settings)
        self.selection = Selection(self.table.group_names)
        self.rejected_values: List[InvalidOptionValue] = []
        if self.table.rows:
            first = self.table.rows[0]
            for name in self.selection:
                self.selection[name] = first.get(name)
        if query_string:
            self.set_values_from_query_string(query_string)

    @property
    def groups(self) -> Tuple[ChoiceGroup, ...]:
        return self.table.groups

    @property
    def choice_names(self) -> List[str]:
        return self.table.group_names

    @property
    def is_valid(self) -> bool:
        """False once any set_value call has been rejected."""
        return not self.rejected_values

    def to_object(self) -> Dict[str, Optional[str]]:
        return self.selection.as_dict()

    def set_value(self, name: str, value: Optional[str]) -> bool:
        """Select ``value`` for group ``name``; ``None`` clears the group.

        Unknown groups and values that were never observed in the group's
        column are rejected without changing the selection.
        """
        group = self.table.find_group(name)
        if group is not None and (value is None or group.has_option(value)):
            self.selection[name] = value
            return True
        error = InvalidOptionValue(name, value)
        self.rejected_values.append(error)
        logger.debug("Rejected %r for choice group %r", value, name)
        return False

    def set_values_from_query_string(self, query_string: str) -> bool:
        """Apply ``group=value`` pairs in order. Blank values clear the group."""
        results = [
            self.set_value(name, value or None)
            for name, value in str_to_query_params(query_string).items()
        ]
        return all(results)

    def _preceding(self, name: str) -> List[str]:
        names = self.choice_names
        return names[: names.index(name)]

    def is_option_available(
        self,
        name: str,
        value: Optional[str],
        state: Optional[ChoiceState] = None,
    ) -> bool:
        """Return True when some row holds ``value`` for ``name`` and agrees
        with the choices of every preceding group in ``state``.

        ``state`` defaults to the current (unconstrained) selection.
        """
        group = self.table.find_group(name)
        if group is None or not group.has_option(value):
            return False
        if group.is_degenerate:
            return True
        if state is None:
            state = self.to_object()
        query: Dict[str, Optional[str]] = {
            other: state.get(other) for other in self._preceding(name)
        }
        query[name] = value
        return any(row.matches(query, exact_column=name) for row in self.table.rows)

    def first_available_option(self, name: str, state: ChoiceState) -> Optional[str]:
        group = self.table.group(name)
        for option in group.options:
            if self.is_option_available(name, option, state):
                return option
        return None

    def to_constrained_options(self) -> Dict[str, Optional[str]]:
        """Return the selection with every unavailable value replaced."""
        constrained: Dict[str, Optional[str]] = {}
        for name in self.choice_names:
            value = self.selection[name]
            if value is not None and not self.is_option_available(name, value, constrained):
                value = self.first_available_option(name, constrained)
            constrained[name] = value
        return constrained

    @property
    def selected_row(self) -> Optional[Row]:
        if self.table.is_empty:
            return None
        constrained = self.to_constrained_options()
        for row in self.table.rows:
            if row.matches(constrained):
                return row
        logger.warning(
            "No decision matrix row matches %s; using the first row",
            query_params_to_str(constrained),
        )
        return self.table.rows[0]

    @property
    def selected_chart_id(self) -> Optional[int]:
        row = self.selected_row
        return row.chart_id if row is not None else None

    def choices_with_availability(self) -> List[ChoiceGroupView]:
        """Per group, the constrained value and each option's availability.

        An option is checked when it is available and equals the group's
        constrained value, so the views always agree with
        ``to_constrained_options``.
        """
        constrained = self.to_constrained_options()
        views = []
        for group in self.groups:
            if group.is_degenerate:
                only = group.options[0]
                views.append(
                    ChoiceGroupView(
                        name=group.name,
                        kind=group.kind,
                        value=only,
                        options=(ChoiceOptionView(value=only, available=True, checked=True),),
                    )
                )
                continue
            value = constrained[group.name]
            options = []
            for option in group.options:
                available = self.is_option_available(group.name, option, constrained)
                options.append(
                    ChoiceOptionView(
                        value=option,
                        available=available,
                        checked=available and option == value,
                    )
                )
            views.append(
                ChoiceGroupView(name=group.name, kind=group.kind, value=value, options=tuple(options))
            )
        return views

    def to_query_string(self) -> str:
        return query_params_to_str(self.to_constrained_options())

    def all_options_as_query_strings(self) -> List[str]:
        """One canonical query string per row, in row order."""
        return [
            query_params_to_str({name: row.get(name) for name in self.choice_names})
            for row in self.table.rows
        ]
