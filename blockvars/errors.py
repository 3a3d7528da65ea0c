"""
Custom exceptions for variable management.

All errors are raised before any namespace state is touched, so callers can
recover (re-prompt, report) without cleaning up partial mutations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockvars.variables.models import VariableRecord


class VariableError(Exception):
    """Base exception for all variable-related errors."""

    pass


class NameTypeConflictError(VariableError):
    """A name collides with an existing variable record."""

    def __init__(self, message: str, name: str, existing: VariableRecord):
        super().__init__(message)
        self.name = name
        self.existing = existing


class MissingTypeError(VariableError):
    """A variable was looked up by name without a type."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class InvalidRootError(VariableError):
    """Collection was invoked on something that is not a usage site or document."""

    def __init__(self, message: str, root: object):
        super().__init__(message)
        self.root = root
