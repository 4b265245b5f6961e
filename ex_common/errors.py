"""Shared error taxonomy for explorer-matrix-lib."""

from __future__ import annotations

from typing import Any, Mapping


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class ExplorerError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__


class MissingIdColumnError(ExplorerError):
    """Decision matrix header lacks the row identifier column."""


class ProgramParseError(ExplorerError):
    """Failure while reading an explorer program."""


class ConfigurationError(ExplorerError):
    """Failure due to invalid configuration."""


class InvalidOptionValue(ExplorerError):
    """A value that is not an observed option of its choice group.

    Recorded by the decision matrix instead of being raised.
    """

    def __init__(self, group: str, value: Any) -> None:
        super().__init__(
            f"'{value}' is not an option of '{group}'",
            context={"group": group, "value": value},
        )
        self.group = group
        self.value = value


def error_to_payload(error: ExplorerError) -> dict[str, Any]:
    """Convert an ExplorerError to a serializable payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
