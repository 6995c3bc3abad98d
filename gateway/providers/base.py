"""
Abstract acquiring bank interface.

The gateway never talks to card networks itself: every validated payment is
forwarded to an acquiring bank, which authorizes or declines it. Production
uses the HTTP implementation; tests and local runs use the in-process mock.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from gateway.models.payment import PaymentRequest


@dataclass
class BankRequest:
    """Payment as sent to the acquiring bank."""

    card_number: Optional[str]
    expiry_date: str  # "MM/YYYY"
    currency: Optional[str]
    amount: Optional[int]
    cvv: Optional[int]

    @classmethod
    def from_payment_request(cls, request: PaymentRequest) -> "BankRequest":
        return cls(
            card_number=request.card_number,
            expiry_date=request.expiry_date,
            currency=request.currency,
            amount=request.amount,
            cvv=request.cvv,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "card_number": self.card_number,
            "expiry_date": self.expiry_date,
            "currency": self.currency,
            "amount": self.amount,
            "cvv": self.cvv,
        }


@dataclass
class BankResult:
    """
    Outcome of a bank call.

    Exactly one of three shapes:
      - authorized: authorized=True, authorization_code set
      - declined:   authorized=False, error_message empty
      - bank error: authorized=False, error_message set
    """

    authorized: bool
    authorization_code: str = ""
    error_message: str = ""

    @classmethod
    def declined(cls) -> "BankResult":
        return cls(authorized=False)

    @classmethod
    def error(cls, message: str) -> "BankResult":
        return cls(authorized=False, error_message=message)


class AcquiringBank(ABC):
    """Abstract base class for acquiring bank clients."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Bank client identifier (e.g. 'http_acquiring_bank')."""
        ...

    @abstractmethod
    async def make_payment(self, request: BankRequest) -> BankResult:
        """
        Ask the bank to authorize a payment.

        Implementations must not raise: transport failures, bad responses and
        requests the bank would refuse are all reported as a BankResult with
        authorized=False and an error message.
        """
        ...
