"""Slash-command grammar for the expense bot.

Recognised input (after trimming, keywords are case-insensitive):

- ``""``, ``help``, ``hjelp``, ``?`` -> Help
- ``month``, ``måned``, ``maned`` -> MonthSummary
- ``today``, ``i dag``, ``idag``, ``dag`` -> TodaySummary
- ``list``, ``liste``, ``siste`` -> ListRecent
- ``<amount> <note> [#category]`` -> AddExpense, e.g. ``120 kaffe #mat``
  or ``99,50 lunsj``

Anything else is Invalid. The amount prefix and the category tag are scanned
by hand so the anchoring rules are explicit rather than left to a regex engine.
"""

import math

from expense_bot.models.command import (
    AddExpense,
    Help,
    Invalid,
    ListRecent,
    MonthSummary,
    ParsedCommand,
    TodaySummary,
)

HELP_KEYWORDS = frozenset({"help", "hjelp", "?"})
MONTH_KEYWORDS = frozenset({"month", "måned", "maned"})
TODAY_KEYWORDS = frozenset({"today", "i dag", "idag", "dag"})
LIST_KEYWORDS = frozenset({"list", "liste", "siste"})

DECIMAL_SEPARATORS = ".,"
_ASCII_DIGITS = frozenset("0123456789")
# The note may span whitespace but never a line break.
_LINE_BREAKS = frozenset("\n\r\u2028\u2029")


def parse_command(text: str) -> ParsedCommand:
    """Classify slash-command text into exactly one command.

    Never raises: malformed expense attempts come back as ``Invalid``.
    """
    t = text.strip()
    lower = t.lower()

    if not t or lower in HELP_KEYWORDS:
        return Help()
    if lower in MONTH_KEYWORDS:
        return MonthSummary()
    if lower in TODAY_KEYWORDS:
        return TodaySummary()
    if lower in LIST_KEYWORDS:
        return ListRecent()

    split = split_amount(t)
    if split is None:
        return Invalid()
    number, rest = split

    amount = float(number.replace(",", "."))
    category, note = extract_category(rest)

    if not math.isfinite(amount) or amount <= 0 or not note:
        return Invalid()

    return AddExpense(amount=amount, note=note, category=category)


def _skip_digits(s: str, start: int) -> int:
    """Return the index of the first non-ASCII-digit at or after ``start``."""
    i = start
    while i < len(s) and s[i] in _ASCII_DIGITS:
        i += 1
    return i


def split_amount(t: str) -> tuple[str, str] | None:
    """Split trimmed text into its leading number token and the rest.

    The number is one or more digits, optionally followed by a single ``.``
    or ``,`` and more digits. It must be followed by whitespace and then at
    least one more character. Returns None when the text does not have
    that shape.
    """
    end = _skip_digits(t, 0)
    if end == 0:
        return None

    if end < len(t) and t[end] in DECIMAL_SEPARATORS:
        fraction_end = _skip_digits(t, end + 1)
        if fraction_end > end + 1:
            end = fraction_end

    rest_start = end
    while rest_start < len(t) and t[rest_start].isspace():
        rest_start += 1
    if rest_start == end:
        return None

    rest = t[rest_start:]
    if not rest or any(ch in _LINE_BREAKS for ch in rest):
        return None

    return t[:end], rest


def extract_category(rest: str) -> tuple[str | None, str]:
    """Pull the first ``#category`` tag out of the note text.

    A tag starts with ``#`` at the very beginning of ``rest`` or right after
    whitespace, and runs until the next whitespace. The tag and the single
    delimiter before it are removed. Later tags stay in the note as text.

    Returns:
        Tuple of (category without '#', or None; trimmed note).
    """
    for i, ch in enumerate(rest):
        if ch != "#":
            continue
        if i > 0 and not rest[i - 1].isspace():
            continue

        end = i + 1
        while end < len(rest) and not rest[end].isspace():
            end += 1
        if end == i + 1:
            continue

        tag_start = i - 1 if i > 0 else i
        note = (rest[:tag_start] + rest[end:]).strip()
        return rest[i + 1 : end], note

    return None, rest.strip()
