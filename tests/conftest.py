"""Shared test fixtures."""

import os

# Settings are read at import time; the gateway refuses to start without a bank URL.
os.environ.setdefault("ACQUIRING_BANK_URL", "http://bank.test/payments")

import pytest

from gateway.engine.orchestrator import PaymentService
from gateway.models.payment import PaymentRequest
from gateway.providers.mock_bank import MockAcquiringBank
from tests.helpers import CountingStore, make_request


@pytest.fixture
def valid_request() -> PaymentRequest:
    return make_request()


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def bank() -> MockAcquiringBank:
    return MockAcquiringBank()


@pytest.fixture
def service(store: CountingStore, bank: MockAcquiringBank) -> PaymentService:
    return PaymentService(store, bank)
