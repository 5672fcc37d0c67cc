"""Date phrase extraction and resolution for the task interpreter.

Every relative phrase is resolved against a caller-supplied reference date:

- today / tonight: the reference date
- tomorrow: +1 day, the day after tomorrow: +2 days
- a weekday ("Friday", "this Friday", "next Friday"): the next such day
  strictly after the reference date
- next week: +7 days
- a weekday together with "next week": that weekday in the calendar week
  following the reference date's week
- in N days / in N weeks: +N days / +7N days
- absolute dates ("August 22", "22nd of Aug", "8/22", "2025-08-22"); without a
  year, the next such date on or after the reference date
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterable, Optional

from .exceptions import AmbiguousDateError
from .lexicon import DATE_LEAD_INS, MONTHS, NUMBER_WORDS, WEEKDAYS

logger = logging.getLogger(__name__)


def alternation(words: Iterable[str]) -> str:
    """Build a regex alternation, longest phrase first, spaces as \\s+."""
    ordered = sorted(words, key=len, reverse=True)
    return "|".join(re.escape(w).replace(r"\ ", r"\s+") for w in ordered)


def next_weekday(reference_date: date, weekday: int) -> date:
    """Next occurrence of weekday strictly after the reference date."""
    days_ahead = (weekday - reference_date.weekday()) % 7 or 7
    return reference_date + timedelta(days=days_ahead)


def weekday_of_next_week(reference_date: date, weekday: int) -> date:
    """The given weekday in the week (Monday-Sunday) after the reference week."""
    week_start = reference_date - timedelta(days=reference_date.weekday())
    return week_start + timedelta(days=7 + weekday)


@dataclass(frozen=True)
class DateMatch:
    """A date phrase found in the text.

    Attributes:
        phrase: The matched text, lead-in preposition included.
        start: Start offset in the searched text.
        end: End offset in the searched text.
        kind: Which rule matched.
        value: The date the phrase resolves to on its own.
        weekday: Weekday number for bare weekday phrases.
    """

    phrase: str
    start: int
    end: int
    kind: str
    value: date
    weekday: Optional[int] = None


_LEAD = rf"(?:\b(?:{alternation(DATE_LEAD_INS)})\s+)?"
_MONTH = rf"(?P<month>{alternation(MONTHS)})"
_WEEKDAY = rf"(?P<weekday>{alternation(WEEKDAYS)})"
_NUMBER = rf"(?P<amount>\d+|{alternation(NUMBER_WORDS)})"
_ORDINAL = r"(?:st|nd|rd|th)?"
_YEAR = r"(?:,?\s+(?P<year>\d{4})\b)?"


def _full_year(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    year = int(raw)
    return year + 2000 if year < 100 else year


def _on_or_after(reference_date: date, month: int, day: int, year: Optional[int]) -> date:
    if year is not None:
        return date(year, month, day)
    # Feb 29 can be up to eight years away; anything else is never a date.
    for offset in range(9):
        try:
            candidate = date(reference_date.year + offset, month, day)
        except ValueError:
            continue
        if candidate >= reference_date:
            return candidate
    raise ValueError(f"no date {month}/{day} on or after {reference_date}")


def _resolve_iso(m: re.Match, ref: date) -> date:
    return date(int(m.group("year")), int(m.group("month_num")), int(m.group("day")))


def _resolve_month_name(m: re.Match, ref: date) -> date:
    month = MONTHS[m.group("month").lower()]
    return _on_or_after(ref, month, int(m.group("day")), _full_year(m.group("year")))


def _resolve_numeric(m: re.Match, ref: date) -> date:
    return _on_or_after(
        ref, int(m.group("month_num")), int(m.group("day")), _full_year(m.group("year"))
    )


def _resolve_offset(days: int) -> Callable[[re.Match, date], date]:
    def resolve(m: re.Match, ref: date) -> date:
        return ref + timedelta(days=days)

    return resolve


def _resolve_in_n(m: re.Match, ref: date) -> date:
    raw = m.group("amount").lower()
    amount = int(raw) if raw.isdigit() else NUMBER_WORDS[raw]
    unit = 7 if m.group("unit").lower().startswith("week") else 1
    return ref + timedelta(days=amount * unit)


def _resolve_weekday_next_week(m: re.Match, ref: date) -> date:
    return weekday_of_next_week(ref, WEEKDAYS[m.group("weekday").lower()])


def _resolve_weekday(m: re.Match, ref: date) -> date:
    return next_weekday(ref, WEEKDAYS[m.group("weekday").lower()])


def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


# Ordered: longer, more specific phrases claim their span first.
_RULES: list[tuple[str, re.Pattern, Callable[[re.Match, date], date]]] = [
    (
        "iso",
        _compile(rf"{_LEAD}\b(?P<year>\d{{4}})-(?P<month_num>\d{{1,2}})-(?P<day>\d{{1,2}})\b"),
        _resolve_iso,
    ),
    (
        "month_day",
        _compile(rf"{_LEAD}\b{_MONTH}\.?\s+(?:the\s+)?(?P<day>\d{{1,2}}){_ORDINAL}\b{_YEAR}"),
        _resolve_month_name,
    ),
    (
        "day_month",
        _compile(rf"{_LEAD}\b(?:the\s+)?(?P<day>\d{{1,2}}){_ORDINAL}\s+(?:of\s+)?{_MONTH}\b{_YEAR}"),
        _resolve_month_name,
    ),
    (
        "numeric",
        _compile(rf"{_LEAD}\b(?P<month_num>\d{{1,2}})/(?P<day>\d{{1,2}})(?:/(?P<year>\d{{2,4}}))?\b"),
        _resolve_numeric,
    ),
    (
        "day_after_tomorrow",
        _compile(rf"{_LEAD}\b(?:the\s+)?day\s+after\s+tomorrow\b"),
        _resolve_offset(2),
    ),
    ("tomorrow", _compile(rf"{_LEAD}\btomorrow\b"), _resolve_offset(1)),
    ("today", _compile(rf"{_LEAD}\b(?:today|tonight|this\s+evening)\b"), _resolve_offset(0)),
    (
        "weekday_next_week",
        _compile(rf"{_LEAD}\b{_WEEKDAY}\s+(?:of\s+)?next\s+week\b"),
        _resolve_weekday_next_week,
    ),
    (
        "weekday_next_week",
        _compile(rf"{_LEAD}\bnext\s+week\s+(?:on\s+)?{_WEEKDAY}\b"),
        _resolve_weekday_next_week,
    ),
    ("in_n", _compile(rf"{_LEAD}\bin\s+{_NUMBER}\s+(?P<unit>days?|weeks?)\b"), _resolve_in_n),
    ("next_week", _compile(rf"{_LEAD}\b(?:next|the\s+following)\s+week\b"), _resolve_offset(7)),
    (
        "weekday",
        _compile(rf"{_LEAD}\b(?:(?:this\s+coming|this|next|coming)\s+)?{_WEEKDAY}\b"),
        _resolve_weekday,
    ),
]


def find_date_phrases(text: str, reference_date: date) -> list[DateMatch]:
    """Find every date phrase in text, left to right.

    Raises:
        AmbiguousDateError: If a phrase names an impossible calendar date.
    """
    matches: list[DateMatch] = []
    for kind, pattern, resolve in _RULES:
        for m in pattern.finditer(text):
            if any(m.start() < other.end and other.start < m.end() for other in matches):
                continue
            phrase = m.group(0)
            try:
                value = resolve(m, reference_date)
            except (ValueError, OverflowError) as e:
                raise AmbiguousDateError(text, phrase, "is not a valid calendar date") from e
            weekday = WEEKDAYS[m.group("weekday").lower()] if kind == "weekday" else None
            matches.append(DateMatch(phrase, m.start(), m.end(), kind, value, weekday))
    return sorted(matches, key=lambda d: d.start)


def _candidate_dates(matches: list[DateMatch], reference_date: date) -> list[date]:
    kinds = {m.kind for m in matches}
    if "next_week" in kinds and "weekday" in kinds:
        # "next week ... on Friday": the weekday is read inside next week
        return [
            weekday_of_next_week(reference_date, m.weekday)
            if m.weekday is not None
            else m.value
            for m in matches
            if m.kind != "next_week"
        ]
    return [m.value for m in matches]


def remove_spans(text: str, matches: list[DateMatch]) -> str:
    """Drop the matched spans from text."""
    parts = []
    cursor = 0
    for m in sorted(matches, key=lambda d: d.start):
        parts.append(text[cursor : m.start])
        cursor = m.end
    parts.append(text[cursor:])
    return " ".join(p.strip() for p in parts if p.strip())


def extract_due_date(text: str, reference_date: date) -> tuple[Optional[date], str]:
    """Resolve the due date mentioned in text.

    Args:
        text: Text to scan.
        reference_date: Anchor for relative phrases.

    Returns:
        Tuple of (due date or None, text with the date phrases removed).

    Raises:
        AmbiguousDateError: If a phrase is not a real date, or the phrases
            disagree on the day.
    """
    matches = find_date_phrases(text, reference_date)
    if not matches:
        return None, text

    candidates = _candidate_dates(matches, reference_date)
    if len(set(candidates)) > 1:
        phrases = ", ".join(m.phrase for m in matches)
        raise AmbiguousDateError(text, phrases, "resolves to more than one day")

    logger.debug(
        "Resolved due date %s from %s (reference %s)",
        candidates[0].isoformat(),
        [m.phrase for m in matches],
        reference_date.isoformat(),
    )
    return candidates[0], remove_spans(text, matches)
