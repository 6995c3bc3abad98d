from gateway.models.enums import Currency, PaymentStatus, SUPPORTED_CURRENCIES
from gateway.models.payment import PaymentRecord, PaymentRequest

__all__ = [
    "Currency",
    "PaymentStatus",
    "PaymentRecord",
    "PaymentRequest",
    "SUPPORTED_CURRENCIES",
]
