"""Keywords and column grammar shared by explorer programs and decision matrices."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

DEFAULT_ID_COLUMN = "chartId"


class ExplorerBoolean(str, Enum):
    true = "true"
    false = "false"


class ChoiceKind(str, Enum):
    """How a choice group is rendered by the explorer controls."""

    radio = "Radio"
    checkbox = "Checkbox"
    dropdown = "Dropdown"

    @classmethod
    def parse(cls, token: str) -> Optional["ChoiceKind"]:
        lowered = token.strip().lower()
        for kind in cls:
            if kind.value.lower() == lowered:
                return kind
        return None


def split_column_header(header: str) -> Tuple[str, Optional[ChoiceKind]]:
    """Split ``"<name>[ <Kind>]"`` into the group name and its explicit kind.

    The trailing word only counts as a kind when it names a known kind, so
    ``"Life expectancy"`` stays a plain name.
    """
    text = header.strip()
    name, sep, last = text.rpartition(" ")
    if sep and name.strip():
        kind = ChoiceKind.parse(last)
        if kind is not None:
            return name.strip(), kind
    return text, None


class ValueType(str, Enum):
    string = "string"
    boolean = "boolean"
    integer = "integer"
    url = "url"
    query = "query"
    block = "block"


@dataclass(frozen=True)
class Keyword:
    keyword: str
    description: str
    value_type: ValueType = ValueType.string

    @property
    def is_block(self) -> bool:
        return self.value_type is ValueType.block


_KEYWORD_LIST = (
    Keyword("title", "Title shown at the top of the explorer."),
    Keyword("subtitle", "Short description shown under the title."),
    Keyword("isPublished", "Whether the explorer is publicly listed.", ValueType.boolean),
    Keyword("defaultView", "Query string selecting the initial choices.", ValueType.query),
    Keyword("wpBlockId", "Id of the CMS block rendered below the explorer.", ValueType.integer),
    Keyword("thumbnail", "URL of the preview image.", ValueType.url),
    Keyword("googleSheet", "URL of the spreadsheet this program was synced from.", ValueType.url),
    Keyword("hideAlertBanner", "Hide the site-wide alert banner.", ValueType.boolean),
    Keyword(
        "switcher",
        "Decision matrix: one row per chart, one column per choice group.",
        ValueType.block,
    ),
    Keyword("table", "Inline data table, passed through untouched.", ValueType.block),
)

KEYWORDS: Dict[str, Keyword] = {item.keyword: item for item in _KEYWORD_LIST}
SWITCHER_KEYWORD = "switcher"
