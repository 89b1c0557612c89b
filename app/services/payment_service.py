import logging
import math
import time
from typing import Any, Dict, Optional, Tuple
import razorpay
from razorpay.errors import SignatureVerificationError
from fastapi.concurrency import run_in_threadpool
from app.core.config import Settings
from app.services.gateways.base import PaymentGateway, check_order

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_positive_amount(value: Any) -> Optional[float]:
    """
    Coerce a JSON scalar to a positive, finite number.

    Returns None for missing, boolean, non-numeric, zero or negative input.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def payment_vpa(payment: Dict[str, Any]) -> str:
    vpa = payment.get("vpa")
    if not vpa:
        vpa = (payment.get("upi") or {}).get("vpa")
    return vpa or ""


def is_matching_upi_payment(payment: Dict[str, Any], upi_id: str, expected_amount: int) -> bool:
    return (
        payment.get("method") == "upi"
        and payment.get("status") == "captured"
        and payment_vpa(payment).lower() == upi_id.lower()
        and payment.get("amount") == expected_amount
    )


def echo_payment(payment: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if payment is None:
        return {}
    return {
        "id": payment.get("id"),
        "status": payment.get("status"),
        "method": payment.get("method"),
        "vpa": payment_vpa(payment),
        "amount": payment.get("amount"),
    }


class PaymentService:
    def __init__(self, settings: Settings, gateway: PaymentGateway):
        self.settings = settings
        self.gateway = gateway
        self.key_id = settings.RAZORPAY_KEY_ID
        # Used only for the local signature check, never for network calls.
        self.client = razorpay.Client(auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET))

    async def create_order(self, amount: Any, currency: str = "INR", donor: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        parsed_amount = parse_positive_amount(amount)
        if parsed_amount is None:
            raise ValueError("Invalid donation amount.")

        donor = donor or {}
        data = {
            "amount": round_half_up(parsed_amount),
            "currency": currency or "INR",
            "receipt": f"donation_{int(time.time() * 1000)}",
            "notes": {
                "name": donor.get("name") or "",
                "email": donor.get("email") or "",
                "phone": donor.get("phone") or "",
            },
        }

        order = check_order(await run_in_threadpool(self.gateway.create_order, data))
        logger.info(f"Created order {order['id']} for {order['amount']} {order['currency']}")
        return {
            "orderId": order["id"],
            "amount": order["amount"],
            "currency": order["currency"],
            "keyId": self.key_id,
        }

    def verify_signature(self, order_id: Optional[str], payment_id: Optional[str], signature: Optional[str]) -> bool:
        """
        Check a Checkout signature for an order/payment pair.

        Raises ValueError when any part of the payload is missing. Returns False on
        mismatch, including a signature that differs only in letter case.
        """
        if not order_id or not payment_id or not signature:
            raise ValueError("Missing payment verification payload.")

        params = {
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "razorpay_signature": signature,
        }
        # The SDK compares str digests, which only accepts ASCII input.
        verified = signature.isascii()
        if verified:
            try:
                self.client.utility.verify_payment_signature(params)
            except SignatureVerificationError:
                verified = False
        if not verified:
            logger.warning(f"Signature mismatch for order {order_id}, payment {payment_id}")
        return verified

    async def verify_upi_payment(self, upi_id: Optional[str], amount: Any, payment_id: Optional[str] = None) -> Tuple[bool, Dict[str, Any]]:
        """
        Reconcile a UPI payment against the provider.

        Returns ``(verified, payment)`` where ``payment`` echoes id, status,
        method, vpa and amount of the inspected record.
        """
        strategy = self.settings.UPI_VERIFICATION_STRATEGY
        if strategy == "auto":
            strategy = "direct" if payment_id else "search"

        if not upi_id or not amount or (strategy == "direct" and not payment_id):
            raise ValueError("Missing paymentId, upiId, or amount.")

        parsed_amount = parse_positive_amount(amount)
        if parsed_amount is None:
            raise ValueError("Invalid amount.")
        expected_amount = round_half_up(parsed_amount * 100)

        if strategy == "direct":
            return await self._verify_by_id(payment_id, upi_id, expected_amount)
        return await self._verify_by_search(upi_id, expected_amount)

    async def _verify_by_id(self, payment_id: str, upi_id: str, expected_amount: int) -> Tuple[bool, Dict[str, Any]]:
        # The payment id comes from the caller and is not tied to an order here.
        payment = await run_in_threadpool(self.gateway.fetch_payment, payment_id)
        verified = is_matching_upi_payment(payment, upi_id, expected_amount)
        logger.info(f"UPI lookup for payment {payment_id}: verified={verified}")
        return verified, echo_payment(payment)

    async def _verify_by_search(self, upi_id: str, expected_amount: int) -> Tuple[bool, Dict[str, Any]]:
        to_ts = int(time.time())
        from_ts = to_ts - self.settings.UPI_LOOKBACK_DAYS * SECONDS_PER_DAY

        # Single page only: a match beyond UPI_SEARCH_PAGE_SIZE records is not found.
        payments = await run_in_threadpool(
            self.gateway.list_payments, from_ts, to_ts, self.settings.UPI_SEARCH_PAGE_SIZE
        )
        match = next((p for p in payments if is_matching_upi_payment(p, upi_id, expected_amount)), None)
        logger.info(f"UPI search over {len(payments)} payments: verified={match is not None}")
        return match is not None, echo_payment(match)
