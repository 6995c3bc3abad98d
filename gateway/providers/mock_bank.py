"""
Mock acquiring bank for tests and local development.

Behaves like the bank simulator used during development, keyed on the last
digit of the card number:
  - odd  (1, 3, 5, 7, 9) → authorized with a fixed authorization code
  - even (2, 4, 6, 8)    → declined
  - 0                    → bank error

Can also be pinned to a fixed result, or made to raise, to drive the
gateway through every status.
"""

import asyncio
from typing import Optional

from gateway.providers.base import AcquiringBank, BankRequest, BankResult

DEFAULT_AUTHORIZATION_CODE = "Test-Authorisation-Code"


class MockAcquiringBank(AcquiringBank):
    """In-process acquiring bank. Records every request it receives."""

    def __init__(
        self,
        result: Optional[BankResult] = None,
        raises: Optional[Exception] = None,
        latency_ms: int = 0,
        authorization_code: str = DEFAULT_AUTHORIZATION_CODE,
    ):
        self._result = result
        self._raises = raises
        self._latency_ms = latency_ms
        self._authorization_code = authorization_code
        self.requests: list[BankRequest] = []

    @property
    def name(self) -> str:
        return "mock_acquiring_bank"

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def make_payment(self, request: BankRequest) -> BankResult:
        self.requests.append(request)

        if self._latency_ms > 0:
            await asyncio.sleep(self._latency_ms / 1000)

        # Deliberately breaks the AcquiringBank contract to simulate a gateway fault
        if self._raises is not None:
            raise self._raises

        if self._result is not None:
            return self._result

        last_digit = (request.card_number or "")[-1:]
        if last_digit == "0":
            return BankResult.error("AcquiringBank server error")
        if last_digit.isdigit() and int(last_digit) % 2 == 1:
            return BankResult(authorized=True, authorization_code=self._authorization_code)
        return BankResult.declined()
