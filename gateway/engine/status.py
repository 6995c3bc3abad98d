"""
Payment status resolution.

Maps the validation outcome and the bank's answer to a terminal status:

  - validation failed                       → Rejected (bank never called)
  - bank authorized                         → Authorized
  - bank refused with an error message      → BankError
  - bank refused without an error message   → Declined

Gateway faults (exceptions after validation) are not decided here; the
orchestrator catches those and stores GatewayError.
"""

from typing import Optional

from gateway.models.enums import PaymentStatus
from gateway.providers.base import BankResult


def resolve_status(validation_passed: bool, bank_result: Optional[BankResult]) -> PaymentStatus:
    if not validation_passed:
        return PaymentStatus.REJECTED

    if bank_result is None:
        raise ValueError("A validated payment needs a bank result to resolve its status")

    if bank_result.authorized:
        return PaymentStatus.AUTHORIZED

    if bank_result.error_message:
        return PaymentStatus.BANK_ERROR

    return PaymentStatus.DECLINED
