"""
Payment Gateway: card payment facade over an acquiring bank.

Merchants submit card payments here; the gateway validates them, asks the
acquiring bank for authorization, and keeps a record of every attempt that
can be retrieved later by id.

Start the server:
    ACQUIRING_BANK_URL=http://localhost:8080/payments uvicorn gateway.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from gateway.api.health import router as health_router
from gateway.api.payments import router as payments_router
from gateway.config import settings
from gateway.engine.orchestrator import PaymentService
from gateway.providers.acquiring_bank import HttpAcquiringBank
from gateway.providers.base import AcquiringBank
from gateway.store.memory import PaymentStore

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger("payment_gateway.main")


def create_app(
    bank: Optional[AcquiringBank] = None,
    store: Optional[PaymentStore] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        bank: Acquiring bank client. Defaults to the HTTP client pointed at
            settings.acquiring_bank_url.
        store: Payment store. Defaults to a fresh in-memory store.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Wire the payment service on startup; close the bank connection on shutdown."""
        client: Optional[httpx.AsyncClient] = None
        acquiring_bank = bank
        if acquiring_bank is None:
            client = httpx.AsyncClient(timeout=settings.bank_timeout_seconds)
            acquiring_bank = HttpAcquiringBank(settings.acquiring_bank_url, client)

        payment_store = store if store is not None else PaymentStore()
        app.state.payment_service = PaymentService(payment_store, acquiring_bank)
        logger.info("Payment gateway started (bank=%s)", acquiring_bank.name)
        try:
            yield
        finally:
            if client is not None:
                await client.aclose()

    app = FastAPI(
        title="Payment Gateway",
        description=(
            "Validates card payments, forwards them to the acquiring bank for "
            "authorization, and stores every attempt for later retrieval."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health_router)
    app.include_router(payments_router, prefix="/api")
    return app


app = create_app()
