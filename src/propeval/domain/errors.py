# src/propeval/domain/errors.py
from __future__ import annotations

from typing import Iterable


class PropertyValidationError(ValueError):
    """
    Raised when a property payload cannot be analyzed.

    `fields` holds the offending wire-level field names (camelCase) so the
    caller can highlight them.
    """

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.fields: list[str] = list(fields)


class ComputationFault(RuntimeError):
    """An internal invariant broke after validation passed. This is a bug."""
