"""Exceptions for the task interpreter module."""

from typing import Any, Optional

from .models import FailureKind


class InterpreterError(Exception):
    """Base exception for task interpreter errors."""

    pass


class InputError(InterpreterError):
    """Raised when user input cannot be turned into a task.

    These are recoverable: the caller should ask the user to retry.

    Attributes:
        text: The original input.
        reason: Why interpretation failed.
    """

    failure_kind: FailureKind

    def __init__(self, text: Optional[str], reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Failed to interpret '{text}': {reason}")


class EmptyInputError(InputError):
    """Raised when the input is empty or whitespace only."""

    failure_kind = FailureKind.EMPTY_INPUT

    def __init__(self, text: Optional[str]):
        super().__init__(text, "input is empty")


class UnintelligibleInputError(InputError):
    """Raised when nothing is left to form a title."""

    failure_kind = FailureKind.UNINTELLIGIBLE_INPUT

    def __init__(self, text: Optional[str]):
        super().__init__(text, "no title text remains after extraction")


class AmbiguousDateError(InputError):
    """Raised when a date phrase cannot resolve to one calendar date."""

    failure_kind = FailureKind.AMBIGUOUS_DATE

    def __init__(self, text: Optional[str], phrase: str, detail: str):
        self.phrase = phrase
        self.detail = detail
        super().__init__(text, f"date '{phrase}' {detail}")


class DraftValidationError(InterpreterError):
    """Raised when an extraction stage produced a value outside its closed set.

    This signals a bug in the interpreter, not bad user input.
    """

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for '{field}': {value!r}")
