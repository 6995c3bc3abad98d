"""Request-scoped access to the objects built at startup."""

from fastapi import Request

from gateway.engine.orchestrator import PaymentService


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payment_service
