"""Tests for the in-memory payment store."""

import asyncio

import pytest

from gateway.models.enums import PaymentStatus
from gateway.models.payment import PaymentRecord
from gateway.store.memory import PaymentStore


def _record(payment_id: str, status: PaymentStatus = PaymentStatus.AUTHORIZED) -> PaymentRecord:
    return PaymentRecord(
        id=payment_id,
        status=status,
        card_number_last_four="8877",
        expiry_month=4,
        expiry_year=2030,
        currency="GBP",
        amount=100,
    )


@pytest.mark.asyncio
async def test_add_and_get():
    store = PaymentStore()
    record = _record("pay-1")
    await store.add(record)
    assert await store.get("pay-1") is record
    assert len(store) == 1


@pytest.mark.asyncio
async def test_get_unknown_id():
    store = PaymentStore()
    await store.add(_record("pay-1"))
    assert await store.get("pay-2") is None
    assert await store.get("pay") is None  # exact match only


@pytest.mark.asyncio
async def test_add_none_rejected():
    store = PaymentStore()
    with pytest.raises(ValueError):
        await store.add(None)


@pytest.mark.asyncio
async def test_concurrent_adds_and_reads():
    store = PaymentStore()
    ids = [f"pay-{i}" for i in range(200)]

    await asyncio.gather(*(store.add(_record(i)) for i in ids))
    found = await asyncio.gather(*(store.get(i) for i in ids))

    assert len(store) == 200
    assert [r.id for r in found] == ids
