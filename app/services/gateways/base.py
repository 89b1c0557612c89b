from typing import Any, Dict, List


class PaymentGatewayError(Exception):
    """Raised when the payment provider cannot be reached or answers with an error."""


def check_order(order: Any) -> Dict[str, Any]:
    """
    Reject an order record that lacks a string id, an integer amount or a string currency.
    """
    if (
        not isinstance(order, dict)
        or not isinstance(order.get("id"), str)
        or not order["id"]
        or isinstance(order.get("amount"), bool)
        or not isinstance(order.get("amount"), int)
        or not isinstance(order.get("currency"), str)
    ):
        raise PaymentGatewayError("Malformed order record from the payment provider")
    return order


class PaymentGateway:
    """Payment provider interface consumed by the payment service."""

    def create_order(self, data: Dict[str, Any]) -> Dict[str, Any]:  # pragma: no cover
        raise NotImplementedError

    def fetch_payment(self, payment_id: str) -> Dict[str, Any]:  # pragma: no cover
        raise NotImplementedError

    def list_payments(self, from_ts: int, to_ts: int, count: int) -> List[Dict[str, Any]]:  # pragma: no cover
        raise NotImplementedError
