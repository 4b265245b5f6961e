"""Explorer programs: tab-delimited keyword files embedding a decision matrix.

A program line starts with a keyword cell followed by its value::

    title       Data Explorer
    isPublished false
    switcher
                chartId   Device Radio
                35        Internet

Block keywords (``switcher``, ``table``) own the indented lines that follow
them, blank lines included.
"""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ex_common.errors import MissingIdColumnError, ProgramParseError
from ex_matrix.decision_matrix import DecisionMatrix
from ex_matrix.grammar import (
    KEYWORDS,
    SWITCHER_KEYWORD,
    ChoiceKind,
    ExplorerBoolean,
    Keyword,
    ValueType,
    split_column_header,
)
from ex_matrix.query_params import str_to_query_params
from ex_matrix.settings import MatrixSettings
from ex_matrix.table import required_chart_ids

logger = logging.getLogger(__name__)

CELL_DELIMITER = "\t"

DEFAULT_PROGRAM = "\n".join(
    [
        "title\tData Explorer",
        "isPublished\tfalse",
        "switcher",
        "\tchartId\tDevice Radio",
        "\t35\tInternet",
    ]
)


@dataclass(frozen=True)
class CellResult:
    value: str
    is_valid: bool = True
    options: Tuple[str, ...] = ()
    comment: str = ""


def suggest_keywords(word: str) -> Tuple[str, ...]:
    """All keywords, closest matches to ``word`` first."""
    close = difflib.get_close_matches(word, list(KEYWORDS), n=len(KEYWORDS), cutoff=0.3)
    rest = [keyword for keyword in KEYWORDS if keyword not in close]
    return tuple(close + rest)


def _is_blank(cells: List[str]) -> bool:
    return not any(cell.strip() for cell in cells)


class ExplorerProgram:
    def __init__(
        self,
        slug: str,
        text: str,
        *,
        settings: Optional[MatrixSettings] = None,
    ) -> None:
        self.slug = slug
        self.text = text
        self.settings = settings or MatrixSettings()
        self.lines: List[List[str]] = [
            line.rstrip("\r").split(CELL_DELIMITER) for line in text.split("\n")
        ]

    @classmethod
    def from_file(cls, path: Path, *, settings: Optional[MatrixSettings] = None) -> "ExplorerProgram":
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ProgramParseError(
                f"Cannot read explorer program: {path}",
                context={"path": path},
                cause=exc,
            )
        return cls(Path(path).stem, text, settings=settings)

    # -- line structure -------------------------------------------------

    def _keyword_row(self, keyword: str) -> Optional[int]:
        for index, cells in enumerate(self.lines):
            if cells[0].strip() == keyword:
                return index
        return None

    def _block_rows(self, keyword_row: int) -> List[int]:
        """Indexes of the lines owned by the block starting at keyword_row."""
        rows = []
        for index in range(keyword_row + 1, len(self.lines)):
            cells = self.lines[index]
            if _is_blank(cells):
                rows.append(index)
                continue
            if cells[0].strip():
                break
            rows.append(index)
        while rows and _is_blank(self.lines[rows[-1]]):
            rows.pop()
        return rows

    def _block_owner(self, row: int) -> Optional[int]:
        """Keyword row of the block that owns ``row``, if any."""
        for index in range(row - 1, -1, -1):
            keyword = self.lines[index][0].strip()
            if not keyword:
                continue
            definition = KEYWORDS.get(keyword)
            if definition is not None and definition.is_block and row in self._block_rows(index):
                return index
            return None
        return None

    def get_line_value(self, keyword: str) -> Optional[str]:
        row = self._keyword_row(keyword)
        if row is None:
            return None
        cells = self.lines[row]
        return cells[1].strip() if len(cells) > 1 else ""

    def get_block(self, keyword: str) -> Optional[List[str]]:
        row = self._keyword_row(keyword)
        if row is None:
            return None
        return [CELL_DELIMITER.join(self.lines[index][1:]) for index in self._block_rows(row)]

    # -- typed accessors ------------------------------------------------

    @property
    def title(self) -> Optional[str]:
        return self.get_line_value("title")

    @property
    def subtitle(self) -> Optional[str]:
        return self.get_line_value("subtitle")

    @property
    def is_published(self) -> bool:
        return self.get_line_value("isPublished") == ExplorerBoolean.true.value

    @property
    def hide_alert_banner(self) -> bool:
        return self.get_line_value("hideAlertBanner") == ExplorerBoolean.true.value

    @property
    def default_view(self) -> str:
        return self.get_line_value("defaultView") or ""

    @property
    def thumbnail(self) -> Optional[str]:
        return self.get_line_value("thumbnail") or None

    @property
    def google_sheet(self) -> Optional[str]:
        return self.get_line_value("googleSheet") or None

    @property
    def wp_block_id(self) -> Optional[int]:
        value = self.get_line_value("wpBlockId")
        try:
            return int(value) if value else None
        except ValueError:
            return None

    @property
    def decision_matrix_code(self) -> str:
        block = self.get_block(SWITCHER_KEYWORD)
        return "\n".join(block) if block else ""

    @property
    def required_chart_ids(self) -> List[int]:
        return required_chart_ids(self.decision_matrix_code, self.settings)

    @property
    def decision_matrix(self) -> DecisionMatrix:
        return DecisionMatrix(
            self.decision_matrix_code,
            self.default_view,
            settings=self.settings,
        )

    # -- validation -----------------------------------------------------

    def get_cell(self, row: int, col: int) -> CellResult:
        if row < 0 or row >= len(self.lines) or col < 0 or col >= len(self.lines[row]):
            return CellResult(value="")
        cells = self.lines[row]
        value = cells[col]
        first = cells[0].strip()

        if not first:
            if col == 0 or not value.strip():
                return CellResult(value=value)
            owner = self._block_owner(row)
            if owner is None:
                return CellResult(
                    value=value,
                    is_valid=False,
                    comment="Indented cell is not inside a block",
                )
            if self.lines[owner][0].strip() == SWITCHER_KEYWORD:
                return self._switcher_cell(owner, row, col, value)
            return CellResult(value=value)

        definition = KEYWORDS.get(first)
        if col == 0:
            if definition is None:
                return CellResult(
                    value=value,
                    is_valid=False,
                    options=suggest_keywords(first),
                    comment=f"Unknown keyword '{first}'",
                )
            return CellResult(value=value, comment=definition.description)
        if definition is None:
            return CellResult(value=value)
        if col == 1:
            return self._keyword_value_cell(definition, value)
        if value.strip():
            return CellResult(
                value=value,
                is_valid=False,
                comment=f"'{definition.keyword}' takes a single value",
            )
        return CellResult(value=value)

    def _keyword_value_cell(self, definition: Keyword, value: str) -> CellResult:
        text = value.strip()
        value_type = definition.value_type
        if value_type is ValueType.boolean:
            options = tuple(item.value for item in ExplorerBoolean)
            if text and text not in options:
                return CellResult(
                    value=value,
                    is_valid=False,
                    options=options,
                    comment=f"'{definition.keyword}' must be true or false",
                )
            return CellResult(value=value, options=options)
        if value_type is ValueType.integer and text:
            try:
                int(text)
            except ValueError:
                return CellResult(
                    value=value,
                    is_valid=False,
                    comment=f"'{definition.keyword}' must be an integer",
                )
        if value_type is ValueType.url and text and not text.startswith(("http://", "https://")):
            return CellResult(
                value=value,
                is_valid=False,
                comment=f"'{definition.keyword}' must be an http(s) URL",
            )
        if value_type is ValueType.query and text:
            return self._default_view_cell(value)
        if value_type is ValueType.block and text:
            return CellResult(
                value=value,
                is_valid=False,
                comment=f"'{definition.keyword}' starts a block; put its rows on the lines below",
            )
        return CellResult(value=value)

    def _default_view_cell(self, value: str) -> CellResult:
        try:
            matrix = DecisionMatrix(self.decision_matrix_code, settings=self.settings)
        except MissingIdColumnError as exc:
            return CellResult(value=value, is_valid=False, comment=str(exc))
        names = matrix.choice_names
        unknown = [name for name in str_to_query_params(value) if name not in names]
        if unknown:
            return CellResult(
                value=value,
                is_valid=False,
                options=tuple(names),
                comment=f"Unknown choice groups: {', '.join(unknown)}",
            )
        if not matrix.set_values_from_query_string(value):
            return CellResult(
                value=value,
                is_valid=False,
                comment="; ".join(str(error) for error in matrix.rejected_values),
            )
        return CellResult(value=value)

    def _switcher_cell(self, owner: int, row: int, col: int, value: str) -> CellResult:
        block_rows = [index for index in self._block_rows(owner) if not _is_blank(self.lines[index])]
        header_row = block_rows[0]
        header = [cell.strip() for cell in self.lines[header_row]]
        id_column = self.settings.id_column

        if row == header_row:
            if id_column not in header:
                return CellResult(
                    value=value,
                    is_valid=False,
                    options=(id_column,),
                    comment=f"The switcher needs a '{id_column}' column",
                )
            name, kind = split_column_header(value)
            if name == id_column:
                return CellResult(value=value, comment="Chart id of each row")
            options = tuple(f"{name} {item.value}" for item in ChoiceKind)
            description = f"{kind.value} group" if kind else "Kind resolved from its options"
            return CellResult(value=value, options=options, comment=description)

        if col < len(header) and header[col] == id_column:
            try:
                int(value.strip())
            except ValueError:
                return CellResult(
                    value=value,
                    is_valid=False,
                    comment=f"'{id_column}' must be an integer; this row is ignored",
                )
        return CellResult(value=value)

    def iter_cells(self) -> Iterator[Tuple[int, int, CellResult]]:
        for row, cells in enumerate(self.lines):
            for col in range(len(cells)):
                yield row, col, self.get_cell(row, col)

    def validate(self) -> List[Tuple[int, int, CellResult]]:
        """Every invalid cell as (row, col, result)."""
        invalid = [item for item in self.iter_cells() if not item[2].is_valid]
        if invalid:
            logger.info("Explorer program %s has %d invalid cells", self.slug, len(invalid))
        return invalid
