"""Stable UI API surface."""

from ex_ui.cli import app, ctx_store, main
from ex_ui.tui.components.headless import HeadlessUI
from ex_ui.tui.components.rich_ui import RichUI
from ex_ui.tui.models import TableModel

__all__ = ["app", "ctx_store", "main", "HeadlessUI", "RichUI", "TableModel"]
