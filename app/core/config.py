import os
from typing import List
from pydantic import ValidationError
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """Raised when the process cannot start with the current settings."""


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Donation Payment Gateway")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = 5000

    RAZORPAY_KEY_ID: str = os.getenv("RAZORPAY_KEY_ID", "")
    RAZORPAY_KEY_SECRET: str = os.getenv("RAZORPAY_KEY_SECRET", "")

    # auto | direct | search
    UPI_VERIFICATION_STRATEGY: str = os.getenv("UPI_VERIFICATION_STRATEGY", "auto")
    UPI_LOOKBACK_DAYS: int = 7
    UPI_SEARCH_PAGE_SIZE: int = 100

    # CORS, comma separated
    BACKEND_CORS_ORIGINS: str = os.getenv("BACKEND_CORS_ORIGINS", "*")

    # Organization identity, echoed by /org-details
    ORG_NAME: str = ""
    ORG_ADDRESS: str = ""
    ORG_PAN: str = ""
    ORG_GSTIN: str = ""
    ORG_REGISTRATION_NUMBER: str = ""
    ORG_80G_REGISTRATION: str = ""
    ORG_12A_REGISTRATION: str = ""
    ORG_EMAIL: str = ""
    ORG_PHONE: str = ""
    ORG_WEBSITE: str = ""

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]

    def require_credentials(self) -> "Settings":
        if not self.RAZORPAY_KEY_ID or not self.RAZORPAY_KEY_SECRET:
            raise ConfigurationError(
                "Missing Razorpay credentials. Set RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET."
            )
        if self.UPI_VERIFICATION_STRATEGY not in ("auto", "direct", "search"):
            raise ConfigurationError(
                f"Unknown UPI_VERIFICATION_STRATEGY: {self.UPI_VERIFICATION_STRATEGY!r}"
            )
        return self

    class Config:
        case_sensitive = True
        extra = "ignore"


def load_settings() -> Settings:
    """
    Build the process settings once and fail fast if credentials are absent.
    """
    try:
        settings = Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    return settings.require_credentials()
