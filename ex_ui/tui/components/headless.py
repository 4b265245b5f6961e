from dataclasses import dataclass, field

from ex_ui.tui.models import TableModel
from ex_ui.tui.protocols import Presenter, PresenterSink, TablePresenter


@dataclass
class HeadlessUI:
    """UI that records tables and messages instead of printing them."""

    recorded_tables: list[TableModel] = field(default_factory=list)
    recorded_messages: list[tuple[str, str]] = field(default_factory=list)

    def __post_init__(self):
        self.tables = _HeadlessTablePresenter(self)
        self.present = Presenter(_HeadlessPresenterSink(self))

    def messages(self, level: str) -> list[str]:
        return [message for recorded, message in self.recorded_messages if recorded == level]


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def show(self, table: TableModel) -> None:
        self._ui.recorded_tables.append(table)


class _HeadlessPresenterSink(PresenterSink):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def emit(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append((level, message))
