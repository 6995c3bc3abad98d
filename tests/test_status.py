"""Tests for payment status resolution."""

import pytest

from gateway.engine.status import resolve_status
from gateway.models.enums import PaymentStatus
from gateway.providers.base import BankResult


class TestResolveStatus:
    def test_validation_failure_is_rejected(self):
        assert resolve_status(False, None) == PaymentStatus.REJECTED

    def test_validation_failure_wins_over_bank_result(self):
        assert resolve_status(False, BankResult(authorized=True, authorization_code="x")) == PaymentStatus.REJECTED

    def test_authorized(self):
        result = BankResult(authorized=True, authorization_code="auth-123")
        assert resolve_status(True, result) == PaymentStatus.AUTHORIZED

    def test_declined(self):
        assert resolve_status(True, BankResult.declined()) == PaymentStatus.DECLINED

    def test_bank_error(self):
        assert resolve_status(True, BankResult.error("AcquiringBank server error")) == PaymentStatus.BANK_ERROR

    def test_invalid_request_inside_bank_client_is_bank_error(self):
        """The bank client's own refusal is not a plain decline."""
        assert resolve_status(True, BankResult.error("Invalid payment request")) == PaymentStatus.BANK_ERROR

    def test_missing_bank_result(self):
        with pytest.raises(ValueError):
            resolve_status(True, None)
