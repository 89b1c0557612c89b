import itertools
import time
from typing import Any, Dict, List, Optional, Tuple
from app.services.gateways.base import PaymentGateway, PaymentGatewayError


class InMemoryGateway(PaymentGateway):
    """
    Deterministic stand-in for the provider, used by the test suite.

    Every call is appended to ``calls`` as ``(operation, args)`` so tests can
    assert that the provider was, or was not, contacted. Setting ``fail`` makes
    every operation raise PaymentGatewayError.
    """

    def __init__(self, payments: Optional[List[Dict[str, Any]]] = None, fail: bool = False):
        self.payments: List[Dict[str, Any]] = list(payments or [])
        self.orders: List[Dict[str, Any]] = []
        self.calls: List[Tuple[str, Any]] = []
        self.fail = fail
        self._order_seq = itertools.count(1)

    def add_payment(self, **fields: Any) -> Dict[str, Any]:
        payment = {
            "id": f"pay_{len(self.payments) + 1:06d}",
            "entity": "payment",
            "currency": "INR",
            "created_at": int(time.time()),
        }
        payment.update(fields)
        self.payments.append(payment)
        return payment

    def _check(self):
        if self.fail:
            raise PaymentGatewayError("gateway unavailable")

    def create_order(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create_order", data))
        self._check()
        order = {
            "id": f"order_{next(self._order_seq):06d}",
            "entity": "order",
            "amount": data["amount"],
            "currency": data["currency"],
            "receipt": data.get("receipt"),
            "notes": data.get("notes", {}),
            "status": "created",
        }
        self.orders.append(order)
        return order

    def fetch_payment(self, payment_id: str) -> Dict[str, Any]:
        self.calls.append(("fetch_payment", payment_id))
        self._check()
        for payment in self.payments:
            if payment["id"] == payment_id:
                return payment
        raise PaymentGatewayError(f"The id provided does not exist: {payment_id}")

    def list_payments(self, from_ts: int, to_ts: int, count: int) -> List[Dict[str, Any]]:
        self.calls.append(("list_payments", (from_ts, to_ts, count)))
        self._check()
        # Newest first, like the provider's listing endpoint.
        in_range = [p for p in self.payments if from_ts <= p["created_at"] <= to_ts]
        in_range.sort(key=lambda p: p["created_at"], reverse=True)
        return in_range[:count]
