import hashlib
import hmac
import pytest
from conftest import make_settings
from app.services.gateways.memory import InMemoryGateway
from app.services.payment_service import PaymentService


def sign(order_id, payment_id, secret="s3cr3t"):
    return hmac.new(secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


@pytest.fixture
def service():
    return PaymentService(make_settings(), InMemoryGateway())


def test_verify_signature_accepts_hmac_sha256_digest(service):
    expected = hmac.new(b"s3cr3t", b"order_abc|pay_xyz", hashlib.sha256).hexdigest()

    assert sign("order_abc", "pay_xyz") == expected
    assert service.verify_signature("order_abc", "pay_xyz", expected) is True


def test_signature_is_deterministic():
    assert sign("order_abc", "pay_xyz") == sign("order_abc", "pay_xyz")


def test_verify_signature_rejects_any_changed_input(service):
    signature = sign("order_abc", "pay_xyz")
    other_secret = PaymentService(make_settings(RAZORPAY_KEY_SECRET="other"), InMemoryGateway())

    assert service.verify_signature("order_abd", "pay_xyz", signature) is False
    assert service.verify_signature("order_abc", "pay_xyy", signature) is False
    assert other_secret.verify_signature("order_abc", "pay_xyz", signature) is False


def test_verify_signature_is_case_sensitive(service):
    signature = sign("order_abc", "pay_xyz")

    assert service.verify_signature("order_abc", "pay_xyz", signature.upper()) is False


def test_verify_signature_rejects_non_ascii_signature(service):
    assert service.verify_signature("order_abc", "pay_xyz", "signé") is False


def test_verify_payment_accepts_valid_signature(client, gateway):
    response = client.post(
        "/verify-payment",
        json={
            "razorpay_order_id": "order_abc",
            "razorpay_payment_id": "pay_xyz",
            "razorpay_signature": sign("order_abc", "pay_xyz"),
        },
    )

    assert response.status_code == 200
    assert response.json() == {"verified": True}
    assert gateway.calls == []


def test_verify_payment_rejects_mismatch(client):
    response = client.post(
        "/verify-payment",
        json={
            "razorpay_order_id": "order_abc",
            "razorpay_payment_id": "pay_xyz",
            "razorpay_signature": sign("order_abc", "pay_other"),
        },
    )

    assert response.status_code == 400
    assert response.json() == {"verified": False, "error": "Signature mismatch."}


@pytest.mark.parametrize("missing", ["razorpay_order_id", "razorpay_payment_id", "razorpay_signature"])
def test_verify_payment_requires_all_fields(client, gateway, missing):
    payload = {
        "razorpay_order_id": "order_abc",
        "razorpay_payment_id": "pay_xyz",
        "razorpay_signature": sign("order_abc", "pay_xyz"),
    }
    payload[missing] = ""

    response = client.post("/verify-payment", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing payment verification payload."}
    assert gateway.calls == []


def test_checkout_callback_verifies_form_post(client):
    response = client.post(
        "/",
        data={
            "razorpay_order_id": "order_abc",
            "razorpay_payment_id": "pay_xyz",
            "razorpay_signature": sign("order_abc", "pay_xyz"),
        },
    )

    assert response.status_code == 200
    assert response.json() == {"verified": True, "orderId": "order_abc", "paymentId": "pay_xyz"}


def test_checkout_callback_rejects_bad_signature(client):
    response = client.post(
        "/",
        data={"razorpay_order_id": "order_abc", "razorpay_payment_id": "pay_xyz", "razorpay_signature": "deadbeef"},
    )

    assert response.status_code == 400
    assert response.json()["verified"] is False


def test_checkout_callback_requires_fields(client):
    response = client.post("/", data={"razorpay_order_id": "order_abc"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing payment verification payload."}
