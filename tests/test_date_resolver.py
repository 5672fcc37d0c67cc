"""Unit tests for date phrase resolution."""

from datetime import date

import pytest

from src.interpreter import AmbiguousDateError
from src.interpreter.date_resolver import (
    extract_due_date,
    find_date_phrases,
    next_weekday,
    weekday_of_next_week,
)

MONDAY = date(2025, 8, 18)
SATURDAY = date(2025, 8, 23)


class TestWeekdayArithmetic:
    """Tests for the weekday helpers."""

    def test_next_weekday_later_this_week(self):
        assert next_weekday(MONDAY, 4) == date(2025, 8, 22)

    def test_next_weekday_same_day_rolls_a_week(self):
        assert next_weekday(MONDAY, 0) == date(2025, 8, 25)

    def test_next_weekday_wraps_past_sunday(self):
        assert next_weekday(SATURDAY, 1) == date(2025, 8, 26)

    def test_weekday_of_next_week_from_monday(self):
        assert weekday_of_next_week(MONDAY, 4) == date(2025, 8, 29)

    def test_weekday_of_next_week_from_saturday(self):
        # Still the calendar week starting Monday the 25th
        assert weekday_of_next_week(SATURDAY, 0) == date(2025, 8, 25)
        assert weekday_of_next_week(SATURDAY, 4) == date(2025, 8, 29)


class TestExtractDueDate:
    """Tests for extract_due_date."""

    def test_no_phrase(self):
        assert extract_due_date("buy milk", MONDAY) == (None, "buy milk")

    def test_removes_phrase_and_lead_in(self):
        due, remaining = extract_due_date("buy milk by friday please", MONDAY)
        assert due == date(2025, 8, 22)
        assert remaining == "buy milk please"

    @pytest.mark.parametrize(
        "phrase, expected",
        [
            ("this friday", date(2025, 8, 22)),
            ("next friday", date(2025, 8, 22)),
            ("coming sunday", date(2025, 8, 24)),
            ("tues", date(2025, 8, 19)),
            ("in a week", date(2025, 8, 25)),
            ("in 10 days", date(2025, 8, 28)),
            ("due in one day", date(2025, 8, 19)),
            ("the following week", date(2025, 8, 25)),
            ("aug 20th", date(2025, 8, 20)),
            ("the 22nd of august", date(2025, 8, 22)),
            ("21 Aug", date(2025, 8, 21)),
            ("september 3, 2026", date(2026, 9, 3)),
            ("8/30", date(2025, 8, 30)),
            ("8/30/26", date(2026, 8, 30)),
        ],
    )
    def test_phrases(self, phrase, expected):
        due, remaining = extract_due_date(f"buy milk {phrase}", MONDAY)
        assert due == expected
        assert remaining == "buy milk"

    def test_month_day_already_past_rolls_to_next_year(self):
        due, _ = extract_due_date("renew passport by August 1", MONDAY)
        assert due == date(2026, 8, 1)

    def test_month_day_across_new_year(self):
        due, _ = extract_due_date("pay rent on january 3", date(2025, 12, 30))
        assert due == date(2026, 1, 3)

    @pytest.mark.parametrize(
        "reference, expected",
        [
            (date(2027, 3, 1), date(2028, 2, 29)),
            (date(2024, 3, 1), date(2028, 2, 29)),
            (date(2024, 1, 10), date(2024, 2, 29)),
        ],
    )
    def test_leap_day_without_year_finds_next_leap_year(self, reference, expected):
        due, remaining = extract_due_date("renew passport on feb 29", reference)
        assert due == expected
        assert remaining == "renew passport"

    def test_same_day_twice_is_fine(self):
        due, remaining = extract_due_date("tomorrow buy milk tomorrow", MONDAY)
        assert due == date(2025, 8, 19)
        assert remaining == "buy milk"

    def test_weekday_and_matching_date_agree(self):
        due, _ = extract_due_date("buy milk friday august 22", MONDAY)
        assert due == date(2025, 8, 22)

    def test_next_week_with_separate_weekday(self):
        due, remaining = extract_due_date("next week buy milk on thursday", MONDAY)
        assert due == date(2025, 8, 28)
        assert remaining == "buy milk"

    def test_case_insensitive(self):
        due, _ = extract_due_date("BUY MILK TOMORROW", MONDAY)
        assert due == date(2025, 8, 19)


class TestAmbiguousDates:
    """Tests for phrases that cannot resolve to one day."""

    @pytest.mark.parametrize(
        "text",
        [
            "pay rent february 30",
            "pay rent 31st of june",
            "pay rent 2/29/25",
            "pay rent 2025-13-01",
        ],
    )
    def test_impossible_dates(self, text):
        with pytest.raises(AmbiguousDateError) as exc_info:
            extract_due_date(text, MONDAY)
        assert exc_info.value.detail == "is not a valid calendar date"
        assert exc_info.value.text == text

    @pytest.mark.parametrize(
        "text",
        [
            "pay rent in 9999999 days",
            "pay rent in 99999999999 weeks",
        ],
    )
    def test_offset_past_last_representable_date(self, text):
        with pytest.raises(AmbiguousDateError) as exc_info:
            extract_due_date(text, MONDAY)
        assert exc_info.value.detail == "is not a valid calendar date"
        assert exc_info.value.phrase.startswith("in ")

    def test_conflicting_phrases(self):
        with pytest.raises(AmbiguousDateError) as exc_info:
            extract_due_date("pay rent today or tomorrow", MONDAY)
        assert "today" in exc_info.value.phrase
        assert "tomorrow" in exc_info.value.phrase


class TestFindDatePhrases:
    """Tests for find_date_phrases."""

    def test_left_to_right_without_overlap(self):
        matches = find_date_phrases("friday next week or tomorrow", MONDAY)
        assert [m.phrase for m in matches] == ["friday next week", "tomorrow"]
        assert [m.kind for m in matches] == ["weekday_next_week", "tomorrow"]

    def test_bare_weekday_records_weekday(self):
        (match,) = find_date_phrases("on sunday", MONDAY)
        assert match.kind == "weekday"
        assert match.weekday == 6
        assert match.value == date(2025, 8, 24)
