"""
Payment endpoints.

POST /payments              Submit a payment for authorization.
GET  /payments/{payment_id} Retrieve a previously submitted payment.
"""

import re
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from gateway.dependencies import get_payment_service
from gateway.engine.orchestrator import PaymentService, SubmissionOutcome
from gateway.models.enums import PaymentStatus
from gateway.models.payment import PaymentRecord, PaymentRequest

router = APIRouter(prefix="/payments", tags=["payments"])

_WHOLE_NUMBER = re.compile(r"-?[0-9]+")


class PostPaymentRequest(BaseModel):
    """
    Payment details as posted by the merchant.

    Either expiry_month + expiry_year or the combined expiry_date ("MM/YYYY")
    may be supplied. Amount is in the minor currency unit.

    Fields are loosely typed: a value of the wrong type still reaches the
    payment service, which stores the attempt as rejected with a field error.
    """

    card_number: Any = None
    expiry_month: Any = None
    expiry_year: Any = None
    expiry_date: Any = None
    currency: Any = None
    amount: Any = None
    cvv: Any = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "card_number": "1000000000000001",
                    "expiry_month": 11,
                    "expiry_year": 2030,
                    "currency": "GBP",
                    "amount": 100,
                    "cvv": 123,
                }
            ]
        }
    }

    @field_validator("expiry_month", "expiry_year", "amount", "cvv", mode="before")
    @classmethod
    def whole_numbers_to_int(cls, value):
        # "100" and 100.0 become 100; anything else is left for the validator to report
        if isinstance(value, str) and _WHOLE_NUMBER.fullmatch(value.strip()):
            return int(value)
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    def to_payment_request(self) -> PaymentRequest:
        request = PaymentRequest(
            card_number=self.card_number,
            expiry_month=self.expiry_month,
            expiry_year=self.expiry_year,
            currency=self.currency,
            amount=self.amount,
            cvv=self.cvv,
        )
        if isinstance(self.expiry_date, str) and self.expiry_month is None and self.expiry_year is None:
            request.expiry_date = self.expiry_date
        return request


class PaymentResponse(BaseModel):
    id: str
    status: PaymentStatus
    card_number_last_four: str
    expiry_month: Optional[int]
    expiry_year: Optional[int]
    currency: Optional[str]
    amount: Optional[int]


class FieldError(BaseModel):
    field: str
    message: str


class RejectedPaymentResponse(PaymentResponse):
    errors: list[FieldError]


def _record_to_response(record: PaymentRecord) -> PaymentResponse:
    return PaymentResponse(
        id=record.id,
        status=record.status,
        card_number_last_four=record.card_number_last_four,
        expiry_month=record.expiry_month,
        expiry_year=record.expiry_year,
        currency=record.currency,
        amount=record.amount,
    )


@router.post(
    "",
    response_model=PaymentResponse,
    responses={
        400: {"model": RejectedPaymentResponse, "description": "The request failed validation"},
        500: {"model": PaymentResponse, "description": "The gateway failed to process the payment"},
    },
)
async def submit_payment(
    body: PostPaymentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Submit a payment.

    The attempt is stored whatever the outcome and can be retrieved by the
    returned id. Declined and BankError payments still return 200: the
    status field carries the bank's answer.
    """
    result = await service.submit(body.to_payment_request())
    response = _record_to_response(result.record)

    if result.outcome is SubmissionOutcome.REJECTED:
        rejected = RejectedPaymentResponse(
            **response.model_dump(),
            errors=[FieldError(field=v.field, message=v.message) for v in result.violations],
        )
        return JSONResponse(status_code=400, content=rejected.model_dump(mode="json"))

    if result.outcome is SubmissionOutcome.FAILED:
        return JSONResponse(status_code=500, content=response.model_dump(mode="json"))

    return response


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str, service: PaymentService = Depends(get_payment_service)):
    """Get a single payment by id."""
    record = await service.retrieve(payment_id)
    if not record:
        raise HTTPException(status_code=404, detail=f"Payment not found: {payment_id}")
    return _record_to_response(record)
