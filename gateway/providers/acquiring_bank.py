"""
HTTP client for the acquiring bank.

One POST per payment, no retries: automatically re-sending an authorization
can charge the card twice, so retries belong to a reconciliation process,
not to the request path.

Every failure is folded into a BankResult:
  - request the bank would refuse   → "Invalid payment request" (no call made)
  - non-2xx, connection, timeout    → "AcquiringBank server error"
  - body is not the expected JSON   → "JSON error"
  - anything else                   → "An unexpected error occurred"
"""

import json
import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError, field_validator

from gateway.engine.validation import validate_bank_request
from gateway.providers.base import AcquiringBank, BankRequest, BankResult

logger = logging.getLogger("payment_gateway.acquiring_bank")

INVALID_REQUEST = "Invalid payment request"
SERVER_ERROR = "AcquiringBank server error"
JSON_ERROR = "JSON error"
UNEXPECTED_ERROR = "An unexpected error occurred"


class AcquiringBankResponse(BaseModel):
    """Wire format of the bank's answer."""

    authorized: bool = False
    authorization_code: str = ""
    error_message: str = ""

    @field_validator("authorization_code", "error_message", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value


class HttpAcquiringBank(AcquiringBank):
    """
    Acquiring bank reached over HTTP.

    The httpx.AsyncClient is owned by the caller (the app lifespan) and shared
    across submissions, so concurrent payments each await their own request.
    """

    def __init__(self, api_url: str, client: httpx.AsyncClient):
        self._api_url = api_url
        self._client = client

    @property
    def name(self) -> str:
        return "http_acquiring_bank"

    async def make_payment(self, request: BankRequest) -> BankResult:
        violations = validate_bank_request(request)
        if violations:
            logger.warning(
                "Refusing to send invalid payment request to bank: %s",
                "; ".join(f"{v.field}: {v.message}" for v in violations),
            )
            return BankResult.error(INVALID_REQUEST)

        try:
            response = await self._client.post(self._api_url, json=request.to_payload())
            response.raise_for_status()
            return self._parse(response)

        except httpx.HTTPError as e:
            logger.warning("AcquiringBank server error: %s", e)
            return BankResult.error(SERVER_ERROR)

        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("JSON error reading bank response: %s", e)
            return BankResult.error(JSON_ERROR)

        except Exception as e:
            logger.error("An unexpected error occurred calling the bank: %s", e, exc_info=True)
            return BankResult.error(UNEXPECTED_ERROR)

    @staticmethod
    def _parse(response: httpx.Response) -> BankResult:
        payload: Optional[dict] = response.json()
        if payload is None or payload == {}:
            # null or {} from the bank: nothing authorized, nothing reported
            return BankResult.declined()

        # Any other non-object body (false, 0, "", []) fails validation here
        parsed = AcquiringBankResponse.model_validate(payload)
        return BankResult(
            authorized=parsed.authorized,
            authorization_code=parsed.authorization_code,
            error_message=parsed.error_message,
        )
