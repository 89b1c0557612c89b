from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from app.schemas.common import ErrorResponse
from app.schemas.payment import (
    OrderCreateRequest,
    OrderResponse,
    PaymentCallbackResponse,
    PaymentVerificationRequest,
    PaymentVerificationResponse,
    UpiVerificationRequest,
    UpiVerificationResponse,
)
from app.services.gateways.base import PaymentGatewayError
from app.services.payment_service import PaymentService
from app.api.deps import get_payment_service
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def signature_mismatch() -> JSONResponse:
    return JSONResponse(status_code=400, content={"verified": False, "error": "Signature mismatch."})


@router.post("/create-order", response_model=OrderResponse, responses=ERROR_RESPONSES)
async def create_order(request: OrderCreateRequest, service: PaymentService = Depends(get_payment_service)):
    """
    Create a Razorpay order for a donation.

    Accepts: amount (paise), currency, donor {name, email, phone}
    Returns: orderId, amount, currency, keyId
    """
    donor = request.donor.model_dump() if request.donor else {}
    try:
        order = await service.create_order(request.amount, request.currency, donor)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PaymentGatewayError as e:
        logger.error(f"Error creating Razorpay order: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Unable to create order.")

    return OrderResponse(**order)


@router.post(
    "/verify-payment",
    response_model=PaymentVerificationResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def verify_payment(request: PaymentVerificationRequest, service: PaymentService = Depends(get_payment_service)):
    """
    Verify the signature Razorpay Checkout hands back after a payment.
    """
    try:
        verified = service.verify_signature(
            request.razorpay_order_id,
            request.razorpay_payment_id,
            request.razorpay_signature,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not verified:
        return signature_mismatch()
    return {"verified": True}


@router.post("/", response_model=PaymentCallbackResponse, responses=ERROR_RESPONSES)
async def handle_payment_return(request: Request, service: PaymentService = Depends(get_payment_service)):
    # Target of the Checkout callback_url: the same signature check, but form encoded.
    form_data = await request.form()
    order_id = form_data.get("razorpay_order_id")
    payment_id = form_data.get("razorpay_payment_id")

    try:
        verified = service.verify_signature(order_id, payment_id, form_data.get("razorpay_signature"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not verified:
        return signature_mismatch()
    return PaymentCallbackResponse(verified=True, orderId=order_id, paymentId=payment_id)


@router.post(
    "/verify-upi-payment",
    response_model=UpiVerificationResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def verify_upi_payment(request: UpiVerificationRequest, service: PaymentService = Depends(get_payment_service)):
    """
    Reconcile a UPI payment by handle and amount (rupees).

    - With **paymentId** the payment is fetched directly.
    - Without it, the last week of payments is searched (first page only).
    """
    try:
        verified, payment = await service.verify_upi_payment(request.upiId, request.amount, request.paymentId)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PaymentGatewayError as e:
        logger.error(f"Error verifying UPI payment: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Unable to verify payment.")

    return UpiVerificationResponse(verified=verified, payment=payment)
