"""Domain objects for payment submission and storage."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from gateway.models.enums import PaymentStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_payment_id() -> str:
    return str(uuid.uuid4())


def _int_or_none(value: Any) -> Optional[int]:
    # Rejected attempts may carry junk; the record keeps only well-typed values
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def last_four(card_number: Optional[str]) -> str:
    """Trailing four characters of a card number, or as many as there are."""
    if not card_number:
        return ""
    return str(card_number)[-4:]


def format_expiry(month: Any, year: Any) -> str:
    """Combine month and year into the "MM/YYYY" form the bank expects."""
    if not isinstance(month, int) or not isinstance(year, int):
        return ""
    return f"{month:02d}/{year}"


def parse_expiry(value: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Split an "MM/YYYY" string into (month, year).

    Returns None when the string does not split into exactly two integers.
    Range checks are left to the validator.
    """
    if not value:
        return None
    parts = value.split("/")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


@dataclass
class PaymentRequest:
    """
    An inbound payment request, exactly as the caller sent it.

    Nothing here is trusted: any field may be missing or malformed until
    validate_payment_request() has passed it. Amount is in the minor
    currency unit ($10.50 is 1050).
    """

    card_number: Optional[str] = None
    expiry_month: Optional[int] = None
    expiry_year: Optional[int] = None
    currency: Optional[str] = None
    amount: Optional[int] = None
    cvv: Optional[int] = None

    @property
    def expiry_date(self) -> str:
        return format_expiry(self.expiry_month, self.expiry_year)

    @expiry_date.setter
    def expiry_date(self, value: Optional[str]) -> None:
        parsed = parse_expiry(value)
        if parsed is not None:
            self.expiry_month, self.expiry_year = parsed


@dataclass(frozen=True)
class PaymentRecord:
    """
    The stored outcome of one payment attempt.

    Frozen: the id is generated once by the service and the status is
    decided once before the record is built. Only the last four card digits
    are kept. The authorization code is internal and never leaves the API.
    """

    id: str
    status: PaymentStatus
    card_number_last_four: str
    expiry_month: Optional[int]
    expiry_year: Optional[int]
    currency: Optional[str]
    amount: Optional[int]
    authorization_code: Optional[str] = field(default=None, repr=False)
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_request(
        cls,
        payment_id: str,
        request: PaymentRequest,
        status: PaymentStatus,
        authorization_code: Optional[str] = None,
    ) -> "PaymentRecord":
        return cls(
            id=payment_id,
            status=status,
            card_number_last_four=last_four(request.card_number),
            expiry_month=_int_or_none(request.expiry_month),
            expiry_year=_int_or_none(request.expiry_year),
            currency=request.currency if isinstance(request.currency, str) else None,
            amount=_int_or_none(request.amount),
            authorization_code=authorization_code,
        )
