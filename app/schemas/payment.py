from typing import Any, Optional
from pydantic import BaseModel


class DonorDetails(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class OrderCreateRequest(BaseModel):
    amount: Any = None  # Smallest currency unit (e.g., paise); numeric strings are accepted
    currency: Optional[str] = "INR"
    donor: Optional[DonorDetails] = None


class OrderResponse(BaseModel):
    orderId: str
    amount: int
    currency: str
    keyId: str


class PaymentVerificationRequest(BaseModel):
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None


class PaymentVerificationResponse(BaseModel):
    verified: bool
    error: Optional[str] = None


class PaymentCallbackResponse(BaseModel):
    verified: bool
    orderId: str
    paymentId: str


class UpiVerificationRequest(BaseModel):
    upiId: Optional[str] = None
    amount: Any = None  # Major currency unit (e.g., rupees)
    paymentId: Optional[str] = None


class UpiPayment(BaseModel):
    id: Optional[str] = None
    status: Optional[str] = None
    method: Optional[str] = None
    vpa: Optional[str] = None
    amount: Optional[int] = None


class UpiVerificationResponse(BaseModel):
    verified: bool
    payment: UpiPayment
