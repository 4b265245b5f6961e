"""Settings controlling how decision matrices are parsed."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ex_common.config import parse_list_env
from ex_common.errors import ConfigurationError
from ex_matrix.grammar import DEFAULT_ID_COLUMN, ChoiceKind

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "EX_CONFIG_PATH"
BOOLEAN_PAIRS_ENV = "EX_BOOLEAN_PAIRS"


class MatrixSettings(BaseModel):
    """Parsing options for decision matrix tables."""

    id_column: str = Field(
        default=DEFAULT_ID_COLUMN,
        min_length=1,
        description="Header of the column holding the chart id of each row",
    )
    boolean_pairs: List[Tuple[str, str]] = Field(
        default_factory=lambda: [("true", "false"), ("yes", "no"), ("on", "off")],
        description="Option pairs that make an untyped column a checkbox",
    )
    default_kind: ChoiceKind = Field(
        default=ChoiceKind.radio,
        description="Kind of untyped columns that are not boolean",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("id_column")
    @classmethod
    def _strip_id_column(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("id_column must be non-empty")
        return value

    def is_boolean_pair(self, options: Tuple[str, ...]) -> bool:
        """Return True when two options form one of the boolean label pairs."""
        if len(options) != 2:
            return False
        observed = {option.lower() for option in options}
        return any(
            observed == {first.lower(), second.lower()}
            for first, second in self.boolean_pairs
        )


def _pairs_from_env(value: Optional[str]) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for token in parse_list_env(value):
        first, sep, second = token.partition("/")
        if sep and first.strip() and second.strip():
            pairs.append((first.strip(), second.strip()))
        else:
            logger.warning("Ignoring malformed boolean pair %r in %s", token, BOOLEAN_PAIRS_ENV)
    return pairs


def load_settings(config_path: Optional[Path] = None) -> MatrixSettings:
    """Load settings from a JSON file, ``$EX_CONFIG_PATH`` or defaults.

    ``$EX_BOOLEAN_PAIRS`` (``"true/false,yes/no"``) replaces the boolean pairs
    of whatever was loaded.
    """
    resolved = config_path
    if resolved is None and os.environ.get(CONFIG_PATH_ENV):
        resolved = Path(os.environ[CONFIG_PATH_ENV])

    if resolved is None:
        settings = MatrixSettings()
    else:
        resolved = Path(resolved).expanduser()
        try:
            payload = json.loads(resolved.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read settings file: {resolved}",
                context={"path": resolved},
                cause=exc,
            )
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Settings file is not valid JSON: {resolved}",
                context={"path": resolved, "line": exc.lineno},
                cause=exc,
            )
        try:
            settings = MatrixSettings.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid settings in {resolved}",
                context={"path": resolved, "errors": [err["msg"] for err in exc.errors()]},
                cause=exc,
            )
        logger.debug("Loaded matrix settings from %s", resolved)

    env_pairs = _pairs_from_env(os.environ.get(BOOLEAN_PAIRS_ENV))
    if env_pairs:
        settings = settings.model_copy(update={"boolean_pairs": env_pairs})
    return settings
