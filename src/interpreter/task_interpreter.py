"""TaskInterpreter for turning noisy transcripts into structured tasks."""

import logging
import re
from datetime import date, datetime
from typing import Optional, Union

from .date_resolver import alternation, extract_due_date
from .exceptions import (
    AmbiguousDateError,
    DraftValidationError,
    EmptyInputError,
    InputError,
    UnintelligibleInputError,
)
from .lexicon import (
    ASSIGNEE_ALIASES,
    ASSIGNEE_FOLLOW_UPS,
    ASSIGNEE_LEAD_INS,
    CASE_SENSITIVE_ALIASES,
    COLOR_FOLLOW_UPS,
    COLOR_LEAD_INS,
    COLOR_WORDS,
    DANGLING_WORDS,
    FILLER_PREFIXES,
    NOISE_CORRECTIONS,
    NON_URGENT_PHRASES,
    URGENCY_KEYWORDS,
)
from .models import (
    DEFAULT_ASSIGNEE,
    DEFAULT_COLOR,
    MAX_TITLE_LENGTH,
    URGENT_COLOR,
    Assignee,
    ParseFailure,
    TaskColor,
    TaskDraft,
)

logger = logging.getLogger(__name__)


def _name_alternation(names: list[str]) -> str:
    """Alternation of names; single letters and word-like names keep their case."""
    parts = []
    for name in sorted(names, key=len, reverse=True):
        escaped = re.escape(name)
        if len(name) == 1:
            parts.append(f"(?-i:{escaped.upper()})")
        elif name in CASE_SENSITIVE_ALIASES:
            parts.append(f"(?-i:{escaped})")
        else:
            parts.append(escaped)
    return "|".join(parts)


class TaskInterpreter:
    """Interprets a free-text utterance as a task for the household board.

    The interpreter runs a fixed pipeline over one string: noise correction,
    assignee, priority/color, due date, then title/description. It holds no
    per-call state, so one instance can serve any number of callers.

    Example usage:
        interpreter = TaskInterpreter()
        result = interpreter.interpret("Remind Sid to take out trash tomorrow", date(2025, 8, 18))
        if isinstance(result, TaskDraft):
            print(result.title, result.due_date)

    With an extra mis-hearing:
        aliases = {**ASSIGNEE_ALIASES, "Seed": Assignee.PERSON1}
        interpreter = TaskInterpreter(assignee_aliases=aliases)
    """

    SENTENCE_BREAK = re.compile(r"\s*[.!?;]+\s+|\s+-+\s+|\s+(?=(?:because|so\s+that)\b)", re.IGNORECASE)
    EDGE_PUNCTUATION = " ,.;:!?-\"'"

    def __init__(
        self,
        noise_corrections: Optional[dict[str, str]] = None,
        assignee_aliases: Optional[dict[str, Assignee]] = None,
        urgency_keywords: Optional[tuple[str, ...]] = None,
        color_words: Optional[dict[str, TaskColor]] = None,
    ):
        """Initialize the TaskInterpreter.

        Args:
            noise_corrections: Regex -> replacement table for known
                mis-transcriptions. Defaults to NOISE_CORRECTIONS.
            assignee_aliases: Spoken name -> Assignee. Defaults to
                ASSIGNEE_ALIASES.
            urgency_keywords: Phrases that force the urgent color. Defaults
                to URGENCY_KEYWORDS.
            color_words: Spoken color -> TaskColor. Defaults to COLOR_WORDS.
        """
        corrections = NOISE_CORRECTIONS if noise_corrections is None else noise_corrections
        aliases = ASSIGNEE_ALIASES if assignee_aliases is None else assignee_aliases
        keywords = URGENCY_KEYWORDS if urgency_keywords is None else urgency_keywords
        colors = COLOR_WORDS if color_words is None else color_words

        self._noise_corrections = [
            (re.compile(pattern, re.IGNORECASE), replacement)
            for pattern, replacement in corrections.items()
        ]
        self._assignee_aliases = {name.lower(): who for name, who in aliases.items()}
        self._color_words = {word.lower(): color for word, color in colors.items()}

        self._assignee_pattern = (
            re.compile(
                rf"(?:\b(?:{alternation(ASSIGNEE_LEAD_INS)})\s+)?"
                rf"\b(?P<name>{_name_alternation(list(aliases))})\b(?:'s\b)?"
                rf"(?:\s+(?:{alternation(ASSIGNEE_FOLLOW_UPS)})\b)?",
                re.IGNORECASE,
            )
            if aliases
            else None
        )
        self._non_urgent_pattern = re.compile(
            rf"\b(?:{alternation(NON_URGENT_PHRASES)})\b", re.IGNORECASE
        )
        self._urgency_pattern = (
            re.compile(
                r"(?:\b(?:it'?s|it\s+is|this\s+is)\s+)?"
                r"(?:\b(?:very|super|really|extremely)\s+)?"
                rf"\b(?:{alternation(keywords)})\b",
                re.IGNORECASE,
            )
            if keywords
            else None
        )
        self._color_pattern = (
            re.compile(
                rf"(?:\b(?:{alternation(COLOR_LEAD_INS)})\s+)?"
                rf"\b(?P<color>{alternation(colors)})\b"
                rf"(?:\s+(?:{alternation(COLOR_FOLLOW_UPS)})\b)?",
                re.IGNORECASE,
            )
            if colors
            else None
        )
        self._filler_patterns = [
            re.compile(rf"^{pattern}", re.IGNORECASE) for pattern in FILLER_PREFIXES
        ]

    # -------------------- Stages --------------------

    def correct_noise(self, text: str) -> str:
        """Apply the known mis-transcription fixes to text."""
        corrected = _collapse_whitespace(text)
        for pattern, replacement in self._noise_corrections:
            fixed = pattern.sub(replacement, corrected)
            if fixed != corrected:
                logger.debug("Noise correction %r: %r -> %r", pattern.pattern, corrected, fixed)
                corrected = fixed
        return _collapse_whitespace(corrected)

    def extract_assignee(self, text: str) -> tuple[Assignee, str]:
        """Find who the task is for.

        The left-most name mention wins and is removed with its carrier
        words ("remind Sid to", "Pri needs to").

        Returns:
            Tuple of (assignee, remaining text).
        """
        if self._assignee_pattern is None:
            return DEFAULT_ASSIGNEE, text

        match = self._assignee_pattern.search(text)
        if match is None:
            return DEFAULT_ASSIGNEE, text

        assignee = self._assignee_aliases[match.group("name").lower()]
        remaining = _cut(text, match.start(), match.end())
        logger.debug("Assignee %s from %r", assignee.value, match.group(0))
        return assignee, remaining

    def extract_color(self, text: str) -> tuple[TaskColor, str]:
        """Work out the card color.

        Urgency keywords force the urgent color over any named color.
        Otherwise the left-most color word wins. Every priority and color
        phrase is removed from the text.

        Returns:
            Tuple of (color, remaining text).
        """
        remaining = self._non_urgent_pattern.sub(" ", text)

        urgent = False
        if self._urgency_pattern is not None:
            remaining, hits = self._urgency_pattern.subn(" ", remaining)
            urgent = hits > 0

        named: Optional[TaskColor] = None
        if self._color_pattern is not None:
            match = self._color_pattern.search(remaining)
            if match is not None:
                named = self._color_words[match.group("color").lower()]
            remaining = self._color_pattern.sub(" ", remaining)

        if urgent:
            color = URGENT_COLOR
        else:
            color = named or DEFAULT_COLOR
        logger.debug("Color %s (urgent=%s, named=%s)", color.value, urgent, named)
        return color, _collapse_whitespace(remaining)

    def split_title(self, text: str) -> tuple[str, Optional[str]]:
        """Form the title and optional description from the leftover text.

        Returns:
            Tuple of (title, description or None). The title is empty when
            nothing usable is left.
        """
        residue = self._tidy(text)
        if not residue:
            return "", None

        title = residue
        description: Optional[str] = None
        parts = self.SENTENCE_BREAK.split(residue, maxsplit=1)
        if len(parts) == 2:
            head, tail = self._tidy(parts[0]), self._tidy(parts[1], strip_fillers=False)
            if head and tail:
                title, description = head, _capitalize(tail)

        if len(title) > MAX_TITLE_LENGTH:
            description = _capitalize(residue)
            title = self._truncate(title)

        return _capitalize(title), description

    # -------------------- Helpers --------------------

    def _strip_fillers(self, text: str) -> str:
        changed = True
        while changed and text:
            changed = False
            for pattern in self._filler_patterns:
                stripped = pattern.sub("", text, count=1).lstrip(self.EDGE_PUNCTUATION)
                if stripped != text:
                    text = stripped
                    changed = True
        return text

    def _strip_dangling(self, text: str) -> str:
        words = text.split()
        while words and words[-1].lower().strip(self.EDGE_PUNCTUATION) in DANGLING_WORDS:
            words.pop()
        return " ".join(words)

    def _tidy(self, text: str, strip_fillers: bool = True) -> str:
        text = _collapse_whitespace(text)
        text = re.sub(r"\s+([,.;:!?])", r"\1", text)
        text = re.sub(r"([,;:])(?:\s*[,;:])+", r"\1", text)
        text = text.strip(self.EDGE_PUNCTUATION)
        if strip_fillers:
            text = self._strip_fillers(text)
            text = self._strip_dangling(text)
        return text.strip(self.EDGE_PUNCTUATION)

    def _truncate(self, title: str) -> str:
        head = title[: MAX_TITLE_LENGTH + 1]
        cut = head.rfind(" ")
        truncated = self._strip_dangling(head[:cut]).rstrip(self.EDGE_PUNCTUATION) if cut > 0 else ""
        return truncated or title[:MAX_TITLE_LENGTH].rstrip()

    def _validate(self, draft: TaskDraft) -> TaskDraft:
        """Check the draft against its closed sets before handing it out."""
        if not isinstance(draft.title, str) or not draft.title.strip():
            raise DraftValidationError("title", draft.title)
        if len(draft.title) > MAX_TITLE_LENGTH or draft.title != draft.title.strip():
            raise DraftValidationError("title", draft.title)
        if not isinstance(draft.assignee, Assignee):
            raise DraftValidationError("assignee", draft.assignee)
        if not isinstance(draft.color, TaskColor):
            raise DraftValidationError("color", draft.color)
        if draft.due_date is not None and (
            not isinstance(draft.due_date, date) or isinstance(draft.due_date, datetime)
        ):
            raise DraftValidationError("due_date", draft.due_date)
        return draft

    # -------------------- Main Entry Points --------------------

    def parse(self, text: Optional[str], reference_date: date) -> TaskDraft:
        """Interpret text as a task, raising on failure.

        Args:
            text: Transcript or typed utterance.
            reference_date: Anchor for relative dates such as "tomorrow".

        Returns:
            A validated TaskDraft.

        Raises:
            EmptyInputError: If text is empty or whitespace only.
            AmbiguousDateError: If the date phrases do not name one real day.
            UnintelligibleInputError: If nothing is left to form a title.
            DraftValidationError: If a stage produced an invalid value.
        """
        if isinstance(reference_date, datetime):
            reference_date = reference_date.date()
        if not isinstance(reference_date, date):
            raise TypeError(f"reference_date must be a date, got {type(reference_date).__name__}")

        if text is None or not text.strip():
            raise EmptyInputError(text)

        working = self.correct_noise(text)
        assignee, working = self.extract_assignee(working)
        color, working = self.extract_color(working)
        try:
            due_date, working = extract_due_date(working, reference_date)
        except AmbiguousDateError as e:
            raise AmbiguousDateError(text, e.phrase, e.detail) from e

        title, description = self.split_title(working)
        if not title:
            raise UnintelligibleInputError(text)

        draft = TaskDraft(
            title=title,
            description=description,
            assignee=assignee,
            color=color,
            due_date=due_date,
        )
        try:
            return self._validate(draft)
        except DraftValidationError:
            logger.error("Interpreter produced an invalid draft for %r: %r", text, draft)
            raise

    def interpret(
        self, text: Optional[str], reference_date: date
    ) -> Union[TaskDraft, ParseFailure]:
        """Interpret text as a task.

        Expected user-input problems come back as a ParseFailure the caller
        can show to the user. Invalid drafts are a bug and still raise.

        Args:
            text: Transcript or typed utterance.
            reference_date: Anchor for relative dates such as "tomorrow".

        Returns:
            TaskDraft on success, ParseFailure otherwise.

        Raises:
            DraftValidationError: If a stage produced an invalid value.
        """
        try:
            return self.parse(text, reference_date)
        except InputError as e:
            logger.info(
                "Could not interpret %r: %s",
                text,
                e.reason,
                extra={"failure_kind": e.failure_kind.value},
            )
            return ParseFailure(kind=e.failure_kind, text=text, reason=e.reason)


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def _cut(text: str, start: int, end: int) -> str:
    return _collapse_whitespace(f"{text[:start]} {text[end:]}")


def _capitalize(text: str) -> str:
    # Characters like "ß" grow when upper-cased; leave those alone.
    head = text[:1].upper()
    return head + text[1:] if len(head) == 1 else text


_default_interpreter = TaskInterpreter()


def interpret(text: Optional[str], reference_date: date) -> Union[TaskDraft, ParseFailure]:
    """Interpret text with the default lexicon. See TaskInterpreter.interpret."""
    return _default_interpreter.interpret(text, reference_date)
