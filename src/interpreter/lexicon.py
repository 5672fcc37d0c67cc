"""Word tables used by the task interpreter.

Every table here is plain data so new mis-hearings, names or phrasings can be
added without touching the extraction code. Keys are matched
case-insensitively as whole words unless noted otherwise.
"""

from .models import Assignee, TaskColor

# --- NOISE CORRECTIONS ---
# Regex -> replacement, applied in order before anything is extracted.
# Known speech-to-text slips for this household's vocabulary.
NOISE_CORRECTIONS: dict[str, str] = {
    r"^\s*pets\b": "update",
    r"\bup\s+date\b": "update",
    r"\bat\s+dresses\b": "addresses",
    r"^\s*look\s+(?=(?:an?\s+|the\s+)?(?:dentist|doctor|vet|appointment|table|flight|hotel|haircut)\b)": "book ",
    r"\bto\s+morrow\b": "tomorrow",
    r"\btom+or+ow\b": "tomorrow",
    r"\bto\s+day\b": "today",
    r"\bfri\s+day\b": "friday",
    r"\bsun\s+day\b": "sunday",
    r"\bmon\s+day\b": "monday",
    r"\bwenesday\b|\bwednes\s+day\b": "wednesday",
    r"\bthirsday\b|\bthurs\s+day\b": "thursday",
    r"\ba\s+sap\b|\ba\s+s\s+a\s+p\b": "asap",
}

# --- ASSIGNEES ---
# Name variants, including common mis-hearings. Single-letter aliases are
# matched in upper case only.
ASSIGNEE_ALIASES: dict[str, Assignee] = {
    "Sid": Assignee.PERSON1,
    "Sit": Assignee.PERSON1,
    "Said": Assignee.PERSON1,
    "Pri": Assignee.PERSON2,
    "Pre": Assignee.PERSON2,
    "Pree": Assignee.PERSON2,
    "Gui": Assignee.PERSON3,
    "Guy": Assignee.PERSON3,
    "G": Assignee.PERSON3,
}

# Aliases that are also ordinary English words. Like single letters, they only
# count as a name when spoken with a capital ("Tell Guy to", not "the guy").
CASE_SENSITIVE_ALIASES: frozenset[str] = frozenset({"Guy"})

# Words that carry a name into the sentence ("remind Sid to", "for Pri").
ASSIGNEE_LEAD_INS: tuple[str, ...] = (
    "remind",
    "tell",
    "ask",
    "have",
    "get",
    "let",
    "for",
    "assign to",
    "assign it to",
    "assigned to",
    "give it to",
    "give to",
)

ASSIGNEE_FOLLOW_UPS: tuple[str, ...] = (
    "needs to",
    "need to",
    "has to",
    "have to",
    "is going to",
    "should",
    "must",
    "will",
    "can",
    "gotta",
    "to",
)

# --- PRIORITY ---
URGENCY_KEYWORDS: tuple[str, ...] = (
    "urgent",
    "urgently",
    "important",
    "high priority",
    "high-priority",
    "top priority",
    "asap",
    "as soon as possible",
)

# Checked before urgency so "not urgent" never turns a card red.
NON_URGENT_PHRASES: tuple[str, ...] = (
    "not urgent",
    "not important",
    "no rush",
    "no hurry",
    "low priority",
    "low-priority",
    "medium priority",
    "normal priority",
)

# --- COLORS ---
COLOR_WORDS: dict[str, TaskColor] = {
    "yellow": TaskColor.YELLOW,
    "blue": TaskColor.BLUE,
    "green": TaskColor.GREEN,
    "red": TaskColor.RED,
    "purple": TaskColor.PURPLE,
    "orange": TaskColor.ORANGE,
}

COLOR_LEAD_INS: tuple[str, ...] = (
    "make it",
    "mark it",
    "color it",
    "colour it",
    "colored",
    "coloured",
    "color",
    "colour",
    "in",
)

COLOR_FOLLOW_UPS: tuple[str, ...] = (
    "color",
    "colour",
    "card",
    "sticky",
    "note",
    "label",
    "tag",
    "priority",
)

# --- DATES ---
WEEKDAYS: dict[str, int] = {
    "monday": 0,
    "tuesday": 1,
    "tues": 1,
    "wednesday": 2,
    "thursday": 3,
    "thurs": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

MONTHS: dict[str, int] = {
    "january": 1,
    "jan": 1,
    "february": 2,
    "feb": 2,
    "march": 3,
    "mar": 3,
    "april": 4,
    "apr": 4,
    "may": 5,
    "june": 6,
    "jun": 6,
    "july": 7,
    "jul": 7,
    "august": 8,
    "aug": 8,
    "september": 9,
    "sept": 9,
    "sep": 9,
    "october": 10,
    "oct": 10,
    "november": 11,
    "nov": 11,
    "december": 12,
    "dec": 12,
}

NUMBER_WORDS: dict[str, int] = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
}

# Prepositions swallowed together with a date phrase ("by Friday").
DATE_LEAD_INS: tuple[str, ...] = (
    "due by",
    "due on",
    "by",
    "on",
    "due",
    "before",
    "until",
    "till",
    "for",
)

# --- TITLE CLEANUP ---
# Lead-ins removed from the start of the title, repeatedly.
FILLER_PREFIXES: tuple[str, ...] = (
    r"(?:ok(?:ay)?|hey|so|um+|uh+|please)\b[\s,]*",
    r"(?:can|could|would)\s+you\s+(?:please\s+)?",
    r"(?:add|create|make|new|put)\s+(?:a\s+)?(?:new\s+)?(?:task|to-?do|reminder|item)\b\s*(?:to\b|for\b|:)?\s*",
    r"(?:remind\s+me\s+to|remember\s+to|don'?t\s+forget\s+to|reminder\s+to)\s+",
    r"(?:i|we)\s+(?:need|have|want)\s+to\s+",
    r"(?:needs?|has|have)\s+to\s+",
    r"to\s+",
    r"(?:and|also|then)\s+",
)

# Words that make no sense at the end of a title once dates/names are gone.
DANGLING_WORDS: frozenset[str] = frozenset(
    {
        "a",
        "an",
        "and",
        "at",
        "before",
        "by",
        "due",
        "for",
        "in",
        "is",
        "it",
        "of",
        "on",
        "or",
        "please",
        "the",
        "to",
        "until",
        "with",
    }
)
