"""
Field Validation Predicates

DESIGN DECISION: Every user-supplied field is checked by one pure
predicate before anything is mutated. Predicates never raise and never
fix input; they answer yes or no, and the dispatcher turns "no" into a
rejection.

Each predicate combines:
- a length bound
- a character-class check (printable ASCII, optionally without '"')
- for numbers, a digit-only check plus a range check done on Python's
  unbounded int, so values outside the 32-bit range are refused before
  anything narrows them

IMPORTANT: Query-time keyword matching (`show -keyword=`) is deliberately
weaker than the write path (`modify -keyword=`). A query term only has
to be non-empty and free of '|'.
"""

import string
from typing import Optional


MAX_INT32 = 2147483647

_ID_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DIGITS = frozenset(string.digits)

KEYWORD_DELIMITER = "|"


def _printable(s: str, lowest: int = 32, forbid_quote: bool = False) -> bool:
    for c in s:
        code = ord(c)
        if code < lowest or code > 126:
            return False
        if forbid_quote and c == '"':
            return False
    return True


# =============================================================================
# ACCOUNT FIELDS
# =============================================================================

def is_valid_user_id(s: str) -> bool:
    """1..30 characters of letters, digits and underscore."""
    return 0 < len(s) <= 30 and all(c in _ID_CHARS for c in s)


def is_valid_password(s: str) -> bool:
    """Same rule as the user ID."""
    return is_valid_user_id(s)


def is_valid_username(s: str) -> bool:
    """1..30 printable ASCII characters."""
    return 0 < len(s) <= 30 and _printable(s)


def is_valid_privilege(s: str) -> bool:
    """Exactly one digit naming an assignable level (1, 3 or 7)."""
    return len(s) == 1 and s in {"1", "3", "7"}


# =============================================================================
# BOOK FIELDS
# =============================================================================

def is_valid_isbn(s: str) -> bool:
    """1..20 visible ASCII characters (no spaces)."""
    return 0 < len(s) <= 20 and _printable(s, lowest=33)


def is_valid_book_text(s: str) -> bool:
    """Book name or author: 1..60 printable ASCII characters, no double quote."""
    return 0 < len(s) <= 60 and _printable(s, forbid_quote=True)


def is_valid_keyword_list(s: str) -> bool:
    """
    A stored keyword list.

    Same charset as book text, and every '|'-separated token must be
    non-empty and unique within the list.
    """
    if not is_valid_book_text(s):
        return False
    tokens = s.split(KEYWORD_DELIMITER)
    if any(token == "" for token in tokens):
        return False
    return len(set(tokens)) == len(tokens)


def is_valid_keyword_query(s: str) -> bool:
    """A single search term: non-empty and without the delimiter."""
    return len(s) > 0 and KEYWORD_DELIMITER not in s


def is_valid_price(s: str) -> bool:
    """
    1..13 characters: digits and at most one decimal point.

    At least one digit is required so that "." alone is refused.
    """
    if not 0 < len(s) <= 13:
        return False
    if s.count(".") > 1:
        return False
    if not all(c in _DIGITS or c == "." for c in s):
        return False
    return any(c in _DIGITS for c in s)


# =============================================================================
# COUNTS
# =============================================================================

def _parse_bounded(s: str) -> Optional[int]:
    if not 0 < len(s) <= 10:
        return None
    if not all(c in _DIGITS for c in s):
        return None
    value = int(s)
    if value > MAX_INT32:
        return None
    return value


def is_valid_quantity(s: str) -> bool:
    """A strictly positive count that fits a signed 32-bit integer."""
    value = _parse_bounded(s)
    return value is not None and value > 0


def parse_quantity(s: str) -> Optional[int]:
    """Return the quantity as an int, or None when `is_valid_quantity` fails."""
    if not is_valid_quantity(s):
        return None
    return int(s)


def parse_count(s: str) -> Optional[int]:
    """A non-negative count that fits a signed 32-bit integer, or None."""
    return _parse_bounded(s)
