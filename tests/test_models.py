"""Tests for payment domain objects."""

import dataclasses

import pytest

from gateway.models.enums import PaymentStatus
from gateway.models.payment import PaymentRecord, PaymentRequest, format_expiry, last_four, parse_expiry
from gateway.providers.base import BankRequest


class TestExpiryDate:
    def test_combined_from_month_and_year(self):
        request = PaymentRequest(expiry_month=3, expiry_year=2024)
        assert request.expiry_date == "03/2024"

    def test_setter_splits_into_month_and_year(self):
        request = PaymentRequest()
        request.expiry_date = "12/2025"
        assert request.expiry_month == 12
        assert request.expiry_year == 2025

    def test_setter_ignores_malformed_value(self):
        request = PaymentRequest(expiry_month=4, expiry_year=2030)
        for value in ("", "12-2025", "ab/2025", "1/2/2025", None):
            request.expiry_date = value
            assert (request.expiry_month, request.expiry_year) == (4, 2030)

    def test_missing_parts_format_as_empty(self):
        assert format_expiry(None, 2030) == ""
        assert PaymentRequest().expiry_date == ""

    def test_parse(self):
        assert parse_expiry("01/2031") == (1, 2031)
        assert parse_expiry("nonsense") is None


class TestLastFour:
    def test_last_four(self):
        assert last_four("1000000000000001") == "0001"

    def test_short_card_number(self):
        assert last_four("1") == "1"

    def test_missing_card_number(self):
        assert last_four(None) == ""


class TestPaymentRecord:
    def _record(self, **overrides):
        request = PaymentRequest(
            card_number="2222405343248877", expiry_month=4, expiry_year=2030, currency="EUR", amount=250, cvv=123
        )
        return PaymentRecord.from_request("pay-1", request, PaymentStatus.AUTHORIZED, **overrides)

    def test_keeps_only_last_four(self):
        record = self._record()
        assert record.card_number_last_four == "8877"
        assert "2222405343248877" not in repr(record)

    def test_copies_request_fields(self):
        record = self._record()
        assert (record.expiry_month, record.expiry_year, record.currency, record.amount) == (4, 2030, "EUR", 250)

    def test_authorization_code_hidden_from_repr(self):
        record = self._record(authorization_code="secret-code")
        assert record.authorization_code == "secret-code"
        assert "secret-code" not in repr(record)

    def test_frozen(self):
        record = self._record()
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.status = PaymentStatus.DECLINED

    def test_wrong_typed_values_dropped(self):
        request = PaymentRequest(
            card_number=4111111111111111, expiry_month="April", expiry_year=True, currency=826, amount=10.5, cvv="abc"
        )
        record = PaymentRecord.from_request("pay-2", request, PaymentStatus.REJECTED)
        assert record.card_number_last_four == "1111"
        assert (record.expiry_month, record.expiry_year, record.currency, record.amount) == (None, None, None, None)


def test_status_wire_values():
    assert [s.value for s in PaymentStatus] == ["Rejected", "Authorized", "Declined", "BankError", "GatewayError"]


class TestBankRequest:
    def test_translation_is_field_copy_plus_expiry(self):
        request = PaymentRequest(
            card_number="2222405343248877", expiry_month=4, expiry_year=2030, currency="GBP", amount=100, cvv=123
        )
        bank_request = BankRequest.from_payment_request(request)
        assert bank_request.to_payload() == {
            "card_number": "2222405343248877",
            "expiry_date": "04/2030",
            "currency": "GBP",
            "amount": 100,
            "cvv": 123,
        }
