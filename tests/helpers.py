"""Request builders and test doubles shared by the test modules."""

from datetime import datetime, timezone

from gateway.models.payment import PaymentRecord, PaymentRequest
from gateway.store.memory import PaymentStore

FUTURE_YEAR = datetime.now(timezone.utc).year + 2


class CountingStore(PaymentStore):
    """PaymentStore that remembers how many times add() was called."""

    def __init__(self):
        super().__init__()
        self.add_calls = 0

    async def add(self, record: PaymentRecord) -> None:
        self.add_calls += 1
        await super().add(record)


def make_request(**overrides) -> PaymentRequest:
    fields = {
        "card_number": "1000000000000001",
        "expiry_month": 4,
        "expiry_year": FUTURE_YEAR,
        "currency": "GBP",
        "amount": 100,
        "cvv": 123,
    }
    fields.update(overrides)
    return PaymentRequest(**fields)
