"""
Application configuration settings.
Handles environment variables and application-wide settings.
"""
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application settings
    app_name: str = Field(default="TradeHub Storefront API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    app_description: str = Field(
        default="Storefront orders, OPay checkout and the TradeHub admin console",
        alias="APP_DESCRIPTION",
    )
    debug: bool = Field(default=False, alias="DEBUG")

    # Server settings
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    reload: bool = Field(default=True, alias="RELOAD")

    # Logging settings
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    ping_message: str = Field(default="ping", alias="PING_MESSAGE")

    # Payment gateway settings
    payment_mode: Literal["demo", "production"] = Field(default="demo", alias="PAYMENT_MODE")
    opay_api_url: str = Field(default="https://api.opaycheckout.com", alias="OPAY_API_URL")
    demo_opay_api_url: str = Field(default="https://sandbox.opaycheckout.com", alias="DEMO_OPAY_API_URL")
    opay_secret_key: str = Field(default="", alias="OPAY_SECRET_KEY")
    demo_opay_cashier_url: str = Field(
        default="https://sandbox.opaycheckout.com/demo", alias="DEMO_OPAY_CASHIER_URL"
    )
    payment_callback_timeout: int = Field(default=30000, ge=1, alias="PAYMENT_CALLBACK_TIMEOUT")
    webhook_signature_header: str = Field(default="opay-signature", alias="WEBHOOK_SIGNATURE_HEADER")
    payment_currency: str = Field(default="NGN", alias="PAYMENT_CURRENCY")
    payment_country: str = Field(default="NG", alias="PAYMENT_COUNTRY")

    # Admin auth settings
    jwt_secret: str = Field(default="dev-secret-key", alias="JWT_SECRET")
    jwt_expiry_hours: int = Field(default=24, gt=0, alias="JWT_EXPIRY_HOURS")

    # Business logic settings
    tax_rate: float = Field(default=0.075, ge=0, alias="TAX_RATE")
    delivery_days: int = Field(default=7, ge=0, alias="DELIVERY_DAYS")
    invoice_due_days: int = Field(default=30, ge=0, alias="INVOICE_DUE_DAYS")


@lru_cache()
def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
