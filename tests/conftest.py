import pytest
from fastapi.testclient import TestClient
from app.core.config import Settings
from app.main import create_app
from app.services.gateways.memory import InMemoryGateway

KEY_ID = "rzp_test_key"
KEY_SECRET = "s3cr3t"


def make_settings(**overrides) -> Settings:
    values = {
        "RAZORPAY_KEY_ID": KEY_ID,
        "RAZORPAY_KEY_SECRET": KEY_SECRET,
        "UPI_VERIFICATION_STRATEGY": "auto",
        "UPI_LOOKBACK_DAYS": 7,
        "UPI_SEARCH_PAGE_SIZE": 100,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def gateway():
    return InMemoryGateway()


@pytest.fixture
def client(settings, gateway):
    with TestClient(create_app(settings, gateway)) as test_client:
        yield test_client


@pytest.fixture
def client_with(gateway):
    """Build a client whose settings differ from the defaults."""
    clients = []

    def build(**overrides):
        test_client = TestClient(create_app(make_settings(**overrides), gateway))
        clients.append(test_client)
        return test_client.__enter__()

    yield build
    for test_client in clients:
        test_client.__exit__(None, None, None)
