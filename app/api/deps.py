from fastapi import Request
from app.core.config import Settings
from app.services.payment_service import PaymentService

# Settings and the payment service are built once in create_app() and kept on
# app.state. Handlers reach them through these dependencies so tests can swap either one.


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payment_service
