"""
Payment service: the submission pipeline.

The flow for each payment:

  1. Id generation (before anything can fail)
  2. Validation (all rules, no short-circuit)
  3. Bank call (translated request, single attempt)
  4. Status resolution (Authorized / Declined / BankError)
  5. Storage (exactly once, on every path)

Error containment:
  - Validation failures are stored as Rejected and reported field by field
  - Bank refusals and bank errors are ordinary statuses, never exceptions
  - Any exception after validation is stored as GatewayError; the caller
    gets an opaque internal error, never the exception text
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from gateway.audit.logger import log_event
from gateway.engine.status import resolve_status
from gateway.engine.validation import Violation, validate_payment_request
from gateway.models.enums import PaymentStatus
from gateway.models.payment import PaymentRecord, PaymentRequest, new_payment_id
from gateway.providers.base import AcquiringBank, BankRequest
from gateway.store.memory import PaymentStore

logger = logging.getLogger("payment_gateway.orchestrator")


class SubmissionOutcome(str, Enum):
    """Transport-level signal returned alongside the stored record."""

    ACCEPTED = "accepted"  # processed; the record's status says how it went
    REJECTED = "rejected"  # caller error, fix the request and resubmit
    FAILED = "failed"  # gateway fault


@dataclass
class SubmissionResult:
    record: PaymentRecord
    outcome: SubmissionOutcome
    violations: list[Violation] = field(default_factory=list)


class PaymentService:
    """Runs submissions against a bank and a store, and serves lookups."""

    def __init__(self, store: PaymentStore, bank: AcquiringBank):
        self._store = store
        self._bank = bank

    async def submit(self, request: PaymentRequest) -> SubmissionResult:
        """
        Process a single payment attempt.

        The attempt is always stored, whatever happens after the id is
        generated, so every submission is auditable by its id.

        Returns:
            The stored record, the transport-level outcome and, for rejected
            requests, the validation violations.
        """
        payment_id = new_payment_id()
        log_event("payment_received", payment_id=payment_id, details={
            "currency": request.currency,
            "amount": request.amount,
        })

        # Step 1: Validation
        violations = validate_payment_request(request)
        if violations:
            logger.info(
                "Payment %s rejected: %s",
                payment_id,
                "; ".join(v.message for v in violations),
            )
            log_event("validation_failed", payment_id=payment_id, details={
                "violations": [{"field": v.field, "message": v.message} for v in violations],
            })
            record = PaymentRecord.from_request(payment_id, request, resolve_status(False, None))
            await self._persist(record)
            return SubmissionResult(record, SubmissionOutcome.REJECTED, violations)

        # Step 2: Bank call and status resolution
        authorization_code: Optional[str] = None
        try:
            bank_request = BankRequest.from_payment_request(request)
            log_event("bank_request_sent", payment_id=payment_id, details={"bank": self._bank.name})

            bank_result = await self._bank.make_payment(bank_request)
            status = resolve_status(True, bank_result)
            if status is PaymentStatus.AUTHORIZED:
                authorization_code = bank_result.authorization_code
            elif status is PaymentStatus.BANK_ERROR:
                logger.warning("Bank error for payment %s: %s", payment_id, bank_result.error_message)

            log_event("bank_responded", payment_id=payment_id, details={
                "status": status.value,
                "error": bank_result.error_message or None,
            })
            outcome = SubmissionOutcome.ACCEPTED

        except Exception as e:
            logger.exception("Payment gateway unhandled exception for payment %s", payment_id)
            log_event("gateway_fault", payment_id=payment_id, details={"error_type": type(e).__name__})
            status = PaymentStatus.GATEWAY_ERROR
            authorization_code = None
            outcome = SubmissionOutcome.FAILED

        # Step 3: Storage, once, with the final status
        record = PaymentRecord.from_request(payment_id, request, status, authorization_code)
        await self._persist(record)
        return SubmissionResult(record, outcome)

    async def retrieve(self, payment_id: str) -> Optional[PaymentRecord]:
        """Look up a stored payment. Returns None when the id is unknown."""
        return await self._store.get(payment_id)

    async def _persist(self, record: PaymentRecord) -> None:
        await self._store.add(record)
        log_event("payment_stored", payment_id=record.id, details={"status": record.status.value})
