"""Task interpreter module for turning spoken or typed text into board tasks.

This module takes a noisy transcript plus a reference date and produces a
validated TaskDraft (title, description, assignee, color, due date), or a
ParseFailure the caller can show to the user.

Public API:
    interpret: Interpret text with the default lexicon.
    TaskInterpreter: Interpreter with overridable word tables.
    TaskDraft: The structured task produced on success.
    ParseFailure: The typed failure produced otherwise.
    Assignee, TaskColor, TaskStatus, FailureKind: Closed value sets.
    InterpreterError: Base exception for module errors.

Example:
    from datetime import date
    from src.interpreter import TaskDraft, interpret

    result = interpret("Pri needs to book dentist red priority by Friday", date(2025, 8, 18))
    if isinstance(result, TaskDraft):
        print(result.title, result.assignee.value, result.due_date)
    else:
        print(result.message)
"""

from .exceptions import (
    AmbiguousDateError,
    DraftValidationError,
    EmptyInputError,
    InputError,
    InterpreterError,
    UnintelligibleInputError,
)
from .models import (
    MAX_TITLE_LENGTH,
    Assignee,
    FailureKind,
    ParseFailure,
    TaskColor,
    TaskDraft,
    TaskStatus,
)
from .task_interpreter import TaskInterpreter, interpret

__all__ = [
    # Main entry points
    "interpret",
    "TaskInterpreter",
    # Models
    "Assignee",
    "FailureKind",
    "MAX_TITLE_LENGTH",
    "ParseFailure",
    "TaskColor",
    "TaskDraft",
    "TaskStatus",
    # Exceptions
    "InterpreterError",
    "InputError",
    "EmptyInputError",
    "UnintelligibleInputError",
    "AmbiguousDateError",
    "DraftValidationError",
]
