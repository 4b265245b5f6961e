from typing import Protocol

from ex_ui.tui.models import TableModel


class TablePresenter(Protocol):
    def show(self, table: TableModel) -> None: ...


class PresenterSink(Protocol):
    def emit(self, level: str, message: str) -> None: ...


class Presenter:
    def __init__(self, sink: PresenterSink) -> None:
        self._sink = sink

    def warning(self, message: str) -> None:
        self._sink.emit("warning", message)

    def error(self, message: str) -> None:
        self._sink.emit("error", message)

    def success(self, message: str) -> None:
        self._sink.emit("success", message)


class UI(Protocol):
    tables: TablePresenter
    present: Presenter
