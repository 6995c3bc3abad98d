"""
Audit trail for payment submissions.

Every step of a submission gets one audit line with:
  - Payment ID (generated before validation, so rejected attempts have one too)
  - Action (what happened)
  - Details (status, violations, bank classification)

Card numbers and CVVs must never be passed in details: only the last four
digits of a card are ever written.
"""

import json
import logging
from typing import Any, Optional

logger = logging.getLogger("payment_gateway.audit")

_REDACTED_KEYS = {"card_number", "cvv"}


def log_event(
    action: str,
    payment_id: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
) -> None:
    """
    Write an audit entry.

    Args:
        action: What happened (e.g. "payment_received", "bank_responded").
        payment_id: The payment attempt this event relates to.
        details: Arbitrary context (serialized to JSON). Sensitive card fields
            are dropped.
    """
    safe = {k: v for k, v in (details or {}).items() if k not in _REDACTED_KEYS}
    logger.info(
        "AUDIT | payment=%s action=%s | %s",
        payment_id or "-",
        action,
        json.dumps(safe, default=str)[:500] if safe else "",
    )
