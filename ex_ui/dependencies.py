"""Shared state for the CLI command apps."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ex_common.logging import configure_logging
from ex_matrix.api import MatrixSettings, load_settings
from ex_ui.tui.components.headless import HeadlessUI
from ex_ui.tui.components.rich_ui import RichUI
from ex_ui.tui.protocols import UI


def create_ui(headless: bool = False) -> UI:
    return HeadlessUI() if headless else RichUI()


@dataclass
class CliContext:
    """UI and settings resolved by the root callback, read by every command."""

    ui: UI = field(default_factory=create_ui)
    config_path: Optional[Path] = None
    json_errors: bool = False
    _settings: Optional[MatrixSettings] = None

    def settings(self) -> MatrixSettings:
        if self._settings is None:
            self._settings = load_settings(self.config_path)
        return self._settings

    def reset(self, config_path: Optional[Path], json_errors: bool = False) -> None:
        self.config_path = config_path
        self.json_errors = json_errors
        self._settings = None


__all__ = ["CliContext", "configure_logging", "create_ui"]
