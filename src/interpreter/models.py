"""Data models for the task interpreter module."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional


class Assignee(Enum):
    """Household members a task can be assigned to."""

    PERSON1 = "person1"
    PERSON2 = "person2"
    PERSON3 = "person3"

    @property
    def display_name(self) -> str:
        """Name shown on the board for this assignee."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Assignee.PERSON1: "Sid",
    Assignee.PERSON2: "Pri",
    Assignee.PERSON3: "Gui",
}


class TaskColor(Enum):
    """Card colors available on the board."""

    YELLOW = "yellow"
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    PURPLE = "purple"
    ORANGE = "orange"


class TaskStatus(Enum):
    """Board column a stored task sits in."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class FailureKind(Enum):
    """Reasons an utterance could not be turned into a task."""

    EMPTY_INPUT = "empty_input"
    UNINTELLIGIBLE_INPUT = "unintelligible_input"
    AMBIGUOUS_DATE = "ambiguous_date"


DEFAULT_ASSIGNEE = Assignee.PERSON1
DEFAULT_COLOR = TaskColor.YELLOW
URGENT_COLOR = TaskColor.RED

MAX_TITLE_LENGTH = 50


@dataclass(frozen=True)
class TaskDraft:
    """A structured task interpreted from free text.

    Attributes:
        title: Short task title, 1-50 characters.
        description: Extra context, or None.
        assignee: Who the task is for.
        color: Card color (red when the task is urgent).
        due_date: Resolved due date, or None.
    """

    title: str
    description: Optional[str] = None
    assignee: Assignee = DEFAULT_ASSIGNEE
    color: TaskColor = DEFAULT_COLOR
    due_date: Optional[date] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "title": self.title,
            "description": self.description,
            "assignee": self.assignee.value,
            "color": self.color.value,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }

    def to_record(self) -> dict[str, Any]:
        """Build the insert row for the task store.

        The store assigns id, created_at and updated_at itself.
        """
        return {
            "title": self.title,
            "description": self.description,
            "status": TaskStatus.PENDING.value,
            "assigned_to": self.assignee.value,
            "color": self.color.value,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskDraft":
        """Deserialize from dictionary.

        Accepts either ``assignee`` or the store's ``assigned_to`` key.

        Raises:
            KeyError: If the title is missing.
            ValueError: If an enum value or the date is not recognized.
        """
        assignee = data.get("assignee") or data.get("assigned_to")
        return cls(
            title=data["title"],
            description=data.get("description") or None,
            assignee=Assignee(assignee) if assignee else DEFAULT_ASSIGNEE,
            color=TaskColor(data["color"]) if data.get("color") else DEFAULT_COLOR,
            due_date=date.fromisoformat(data["due_date"]) if data.get("due_date") else None,
        )


_FAILURE_MESSAGES = {
    FailureKind.EMPTY_INPUT: "Nothing was heard. Please say the task again.",
    FailureKind.UNINTELLIGIBLE_INPUT: "Couldn't work out the task. Please rephrase it.",
    FailureKind.AMBIGUOUS_DATE: "Couldn't work out the due date. Please pick a date.",
}


@dataclass(frozen=True)
class ParseFailure:
    """An utterance the interpreter could not turn into a task.

    Attributes:
        kind: What went wrong.
        text: The original input, for diagnostics.
        reason: Technical detail for logs.
    """

    kind: FailureKind
    text: Optional[str]
    reason: str = ""

    @property
    def message(self) -> str:
        """Actionable message to show the user."""
        return _FAILURE_MESSAGES[self.kind]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "kind": self.kind.value,
            "text": self.text,
            "reason": self.reason,
            "message": self.message,
        }
