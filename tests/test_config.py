import logging
import pytest
from conftest import make_settings
from app.core.config import ConfigurationError, load_settings
from app.main import create_app, run
from app.services.gateways.memory import InMemoryGateway


@pytest.mark.parametrize("missing", ["RAZORPAY_KEY_ID", "RAZORPAY_KEY_SECRET"])
def test_missing_credentials_are_rejected(missing):
    settings = make_settings(**{missing: ""})

    with pytest.raises(ConfigurationError):
        settings.require_credentials()
    with pytest.raises(ConfigurationError):
        create_app(settings, InMemoryGateway())


def test_unknown_upi_strategy_is_rejected():
    with pytest.raises(ConfigurationError):
        make_settings(UPI_VERIFICATION_STRATEGY="fuzzy").require_credentials()


def test_cors_origins_are_split():
    settings = make_settings(BACKEND_CORS_ORIGINS="https://a.example.org, https://b.example.org")

    assert settings.cors_origins == ["https://a.example.org", "https://b.example.org"]


def test_run_exits_without_credentials(monkeypatch, caplog):
    monkeypatch.setenv("RAZORPAY_KEY_ID", "")
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", "")

    with caplog.at_level(logging.CRITICAL), pytest.raises(SystemExit) as exc_info:
        run()

    assert exc_info.value.code == 1
    assert "Missing Razorpay credentials" in caplog.text


@pytest.mark.parametrize("name", ["PORT", "UPI_LOOKBACK_DAYS", "UPI_SEARCH_PAGE_SIZE"])
def test_run_exits_on_non_numeric_setting(monkeypatch, caplog, name):
    monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_test_key")
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", "s3cr3t")
    monkeypatch.setenv(name, "abc")

    with caplog.at_level(logging.CRITICAL), pytest.raises(SystemExit) as exc_info:
        run()

    assert exc_info.value.code == 1
    assert "Invalid configuration" in caplog.text


def test_load_settings_reads_numeric_settings_from_environment(monkeypatch):
    monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_test_key")
    monkeypatch.setenv("RAZORPAY_KEY_SECRET", "s3cr3t")
    monkeypatch.setenv("PORT", "8080")

    assert load_settings().PORT == 8080
