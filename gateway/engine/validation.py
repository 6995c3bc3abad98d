"""
Payment request validation with field-level violations.

Before a payment is forwarded to the acquiring bank, we verify:
  1. Card number is 14-19 digits
  2. Expiry month is 1-12 and expiry year is a 4-digit year
  3. The card has not expired (valid through the last day of its month)
  4. Currency is on the allow-list (USD, EUR, GBP)
  5. Amount is a positive integer in the minor currency unit
  6. CVV is 3 or 4 digits (100-9999)

Every rule runs: a request with three problems gets three violations, in
the order above. The same rules guard the bank boundary, where the expiry
arrives combined as "MM/YYYY".
"""

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from gateway.models.enums import SUPPORTED_CURRENCIES
from gateway.models.payment import PaymentRequest
from gateway.providers.base import BankRequest

CARD_NUMBER_MIN_LENGTH = 14
CARD_NUMBER_MAX_LENGTH = 19
CVV_MIN = 100
CVV_MAX = 9999

_DIGITS = re.compile(r"[0-9]+")
_EXPIRY_DATE = re.compile(r"(0[1-9]|1[0-2])/([1-9][0-9]{3})")


@dataclass
class Violation:
    """A single failed rule, naming the offending field."""

    field: str
    message: str


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _missing(value: Any) -> bool:
    return value is None or value == ""


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def expiry_is_in_future(year: int, month: int, now: datetime) -> bool:
    """
    True while the last day of the expiry month is still ahead of `now`.

    A card printed 10/2026 stays valid until midnight UTC on 31 October 2026.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    expiry = datetime(year, month, last_day_of_month(year, month), tzinfo=timezone.utc)
    return expiry > now


# --- Single-field checks: return an error message, or None when the value passes.


def check_card_number(value: Any) -> Optional[str]:
    if _missing(value):
        return "Card number is required."
    if not isinstance(value, str) or not _DIGITS.fullmatch(value):
        return "Card number must only contain numeric characters."
    if not CARD_NUMBER_MIN_LENGTH <= len(value) <= CARD_NUMBER_MAX_LENGTH:
        return "Card number must be between 14 and 19 digits."
    return None


def check_expiry_month(value: Any) -> Optional[str]:
    if value is None:
        return "Expiry month is required."
    if not _is_int(value) or not 1 <= value <= 12:
        return "Expiry month must be between 1 and 12."
    return None


def check_expiry_year(value: Any) -> Optional[str]:
    if value is None:
        return "Expiry year is required."
    if not _is_int(value) or not 1000 <= value <= 9999:
        return "Expiry year must be a 4-digit year."
    return None


def check_expiry_date(value: Any, now: datetime) -> Optional[str]:
    """Combined "MM/YYYY" check used at the bank boundary."""
    if _missing(value):
        return "Expiry date is required."
    match = _EXPIRY_DATE.fullmatch(value) if isinstance(value, str) else None
    if not match:
        return "Expiry date must be in the format MM/YYYY."
    month, year = int(match.group(1)), int(match.group(2))
    if not expiry_is_in_future(year, month, now):
        return "The card expiry date must be in the future."
    return None


def check_currency(value: Any) -> Optional[str]:
    if _missing(value):
        return "Currency is required."
    if not isinstance(value, str) or value not in SUPPORTED_CURRENCIES:
        return "Currency must be one of the following: USD, EUR, GBP."
    return None


def check_amount(value: Any) -> Optional[str]:
    if value is None:
        return "Amount is required."
    if not _is_int(value) or value < 1:
        return "Amount must be a positive integer."
    return None


def check_cvv(value: Any) -> Optional[str]:
    if value is None:
        return "CVV is required."
    if not _is_int(value) or not CVV_MIN <= value <= CVV_MAX:
        return "CVV must be 3 or 4 digits."
    return None


# --- Cross-field check: needs both month and year.


def check_card_not_expired(request: PaymentRequest, now: datetime) -> Optional[str]:
    # A malformed month or year is already reported by its own rule.
    if check_expiry_month(request.expiry_month) or check_expiry_year(request.expiry_year):
        return None
    if not expiry_is_in_future(request.expiry_year, request.expiry_month, now):
        return "The card expiry date must be in the future."
    return None


Rule = Callable[[Any, datetime], Optional[str]]

PAYMENT_REQUEST_RULES: list[tuple[str, Rule]] = [
    ("card_number", lambda r, now: check_card_number(r.card_number)),
    ("expiry_month", lambda r, now: check_expiry_month(r.expiry_month)),
    ("expiry_year", lambda r, now: check_expiry_year(r.expiry_year)),
    ("expiry_year", check_card_not_expired),
    ("currency", lambda r, now: check_currency(r.currency)),
    ("amount", lambda r, now: check_amount(r.amount)),
    ("cvv", lambda r, now: check_cvv(r.cvv)),
]

BANK_REQUEST_RULES: list[tuple[str, Rule]] = [
    ("card_number", lambda r, now: check_card_number(r.card_number)),
    ("expiry_date", lambda r, now: check_expiry_date(r.expiry_date, now)),
    ("currency", lambda r, now: check_currency(r.currency)),
    ("amount", lambda r, now: check_amount(r.amount)),
    ("cvv", lambda r, now: check_cvv(r.cvv)),
]


def _apply(rules: list[tuple[str, Rule]], target: Any, now: Optional[datetime]) -> list[Violation]:
    now = now or datetime.now(timezone.utc)
    violations = []
    for field_name, rule in rules:
        message = rule(target, now)
        if message:
            violations.append(Violation(field=field_name, message=message))
    return violations


def validate_payment_request(
    request: PaymentRequest,
    now: Optional[datetime] = None,
) -> list[Violation]:
    """
    Check an inbound payment request against every rule.

    Args:
        request: The untrusted request as received from the caller.
        now: Reference time for the expiry check. Defaults to the current UTC time.

    Returns:
        All violations in rule order; an empty list means the request is valid.
    """
    return _apply(PAYMENT_REQUEST_RULES, request, now)


def validate_bank_request(
    request: BankRequest,
    now: Optional[datetime] = None,
) -> list[Violation]:
    """Same rules as validate_payment_request(), for the bank's request shape."""
    return _apply(BANK_REQUEST_RULES, request, now)
