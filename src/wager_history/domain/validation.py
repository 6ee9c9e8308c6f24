"""
Field rules for history records.

Pure functions only: every validator returns an error message (empty string
when the value is fine) and never raises, so the edit session can merge the
results into its error mapping and decide pass/fail in one place.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from wager_history.domain.models import TypeOption

# Digit -> rank. Zero outranks every other digit; 9..1 rank by value.
DIGIT_PRIORITY: Mapping[int, int] = {
    0: 10,
    9: 9,
    8: 8,
    7: 7,
    6: 6,
    5: 5,
    4: 4,
    3: 3,
    2: 2,
    1: 1,
}

MAX_NUMBER_LENGTH = 3

NUMBER_REQUIRED = "Number is required."
NUMBER_NOT_DIGITS = "Number must contain digits only."
NUMBER_TOO_LONG = "Number cannot exceed 3 digits."
NUMBER_FAILS_PRIORITY = "Three digit number does not pass priority check."
AMOUNT_NOT_POSITIVE = "Amount must be greater than zero."

# Lower-cased type labels legal for each number length.
_LABELS_BY_LENGTH: Mapping[int, frozenset] = {
    1: frozenset({"open", "close"}),
    2: frozenset({"jodi"}),
    3: frozenset({"open pana", "close pana"}),
}


def is_valid_three_digit(digits: Sequence[int]) -> bool:
    """
    Check that digit priorities never decrease from left to right.

    >>> is_valid_three_digit([8, 9, 0])
    True
    >>> is_valid_three_digit([9, 0, 1])
    False
    """
    if any(d not in DIGIT_PRIORITY for d in digits):
        return False
    return all(
        DIGIT_PRIORITY[digits[i - 1]] <= DIGIT_PRIORITY[digits[i]] for i in range(1, len(digits))
    )


def parse_amount(value: object) -> Optional[Decimal]:
    """Parse user input into a finite Decimal, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
    if not parsed.is_finite():
        return None
    return parsed


def _is_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def validate_number(value: object) -> str:
    text = "" if value is None else str(value)
    # A record number is always 1-3 digits, so short input is checked too.
    if not text:
        return NUMBER_REQUIRED
    if len(text) > MAX_NUMBER_LENGTH:
        return NUMBER_TOO_LONG
    if len(text) == MAX_NUMBER_LENGTH:
        if not _is_digits(text) or not is_valid_three_digit([int(ch) for ch in text]):
            return NUMBER_FAILS_PRIORITY
        return ""
    if not _is_digits(text):
        return NUMBER_NOT_DIGITS
    return ""


def validate_amount(value: object) -> str:
    parsed = parse_amount(value)
    if parsed is None or parsed <= 0:
        return AMOUNT_NOT_POSITIVE
    return ""


def validate_fields(number: object, amount: object) -> Dict[str, str]:
    """
    Full validation used on submit: only fields with a problem are present.
    """
    errors: Dict[str, str] = {}
    number_error = validate_number(number)
    if number_error:
        errors["number"] = number_error
    amount_error = validate_amount(amount)
    if amount_error:
        errors["amount"] = amount_error
    return errors


def eligible_types(number_length: int, all_types: Iterable[TypeOption]) -> List[TypeOption]:
    """
    Bet types a number of the given length may be booked under.

    Matching is on the lower-cased label and keeps the order of `all_types`.
    """
    labels = _LABELS_BY_LENGTH.get(number_length)
    if not labels:
        return []
    return [option for option in all_types if option.label.lower() in labels]


__all__ = [
    "DIGIT_PRIORITY",
    "MAX_NUMBER_LENGTH",
    "NUMBER_REQUIRED",
    "NUMBER_NOT_DIGITS",
    "NUMBER_TOO_LONG",
    "NUMBER_FAILS_PRIORITY",
    "AMOUNT_NOT_POSITIVE",
    "is_valid_three_digit",
    "parse_amount",
    "validate_number",
    "validate_amount",
    "validate_fields",
    "eligible_types",
]
