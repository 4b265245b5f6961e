from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from ex_ui.tui import theme
from ex_ui.tui.components.table_layout import build_rich_table
from ex_ui.tui.models import TableModel
from ex_ui.tui.protocols import Presenter, PresenterSink, TablePresenter


class _RichPresenterSink(PresenterSink):
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        template = theme.PRESENTER_TEMPLATES.get(level, "{message}")
        self._console.print(template.format(message=escape(message)))


class RichTablePresenter(TablePresenter):
    def __init__(self, console: Console):
        self._console = console

    def show(self, table: TableModel) -> None:
        rich_table = build_rich_table(
            table,
            console=self._console,
            show_lines=True,
            border_style=theme.RICH_BORDER_STYLE,
            header_style=theme.RICH_ACCENT_BOLD,
            title_style=theme.RICH_ACCENT_BOLD,
        )
        self._console.print(rich_table)


@dataclass
class RichUI:
    console: Console = field(default_factory=Console)

    def __post_init__(self) -> None:
        self.tables = RichTablePresenter(self.console)
        self.present = Presenter(_RichPresenterSink(self.console))
