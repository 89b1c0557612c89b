import logging
from typing import Any, Dict, List
import razorpay
from app.services.gateways.base import PaymentGateway, PaymentGatewayError, check_order

logger = logging.getLogger(__name__)


class RazorpayGateway(PaymentGateway):
    """
    Thin adapter over the Razorpay SDK client.

    The SDK keeps no per-request state, so one instance is shared by every request.
    SDK and transport errors are re-raised as PaymentGatewayError with the
    original exception chained.
    """

    def __init__(self, key_id: str, key_secret: str, client: Any = None):
        self.client = client or razorpay.Client(auth=(key_id, key_secret))

    def create_order(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            order = self.client.order.create(data=data)
        except Exception as e:
            raise PaymentGatewayError(f"Razorpay order creation failed: {e}") from e
        return check_order(order)

    def fetch_payment(self, payment_id: str) -> Dict[str, Any]:
        try:
            payment = self.client.payment.fetch(payment_id)
        except Exception as e:
            raise PaymentGatewayError(f"Razorpay payment fetch failed for {payment_id}: {e}") from e

        if not isinstance(payment, dict):
            raise PaymentGatewayError(f"Malformed payment record from Razorpay for {payment_id}")
        return payment

    def list_payments(self, from_ts: int, to_ts: int, count: int) -> List[Dict[str, Any]]:
        # Only the first page is requested.
        try:
            response = self.client.payment.all({"from": from_ts, "to": to_ts, "count": count})
        except Exception as e:
            raise PaymentGatewayError(f"Razorpay payment listing failed: {e}") from e

        if not isinstance(response, dict) or not isinstance(response.get("items"), list):
            raise PaymentGatewayError("Malformed payment listing from Razorpay")
        logger.info(f"Fetched {len(response['items'])} payments between {from_ts} and {to_ts}")
        return response["items"]
