"""Enumerations for the payment gateway domain model."""

from enum import Enum


class PaymentStatus(str, Enum):
    """Terminal states of a payment attempt. No transitions after storage."""

    REJECTED = "Rejected"  # failed input validation, never reached the bank
    AUTHORIZED = "Authorized"
    DECLINED = "Declined"
    BANK_ERROR = "BankError"  # bank reachable but could not process
    GATEWAY_ERROR = "GatewayError"  # unexpected failure inside the gateway


class Currency(str, Enum):
    """Currencies accepted by the gateway."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


SUPPORTED_CURRENCIES = {c.value for c in Currency}
