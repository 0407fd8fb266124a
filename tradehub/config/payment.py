"""
Payment gateway configuration.
Resolves the OPay endpoint, secret and mode from application settings.
"""
from dataclasses import dataclass, field
from typing import List, Literal

from .settings import Settings, get_settings


@dataclass(frozen=True)
class PaymentConfig:
    """Resolved payment settings for one process."""
    mode: Literal["demo", "production"]
    opay_api_url: str
    opay_secret_key: str
    demo_cashier_url: str
    callback_timeout: int  # milliseconds
    webhook_signature_header: str
    currency: str
    country: str

    @property
    def is_production(self) -> bool:
        return self.mode == "production"

    @property
    def timeout_seconds(self) -> float:
        return self.callback_timeout / 1000


@dataclass
class PaymentConfigValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)


def get_payment_config(settings: Settings = None) -> PaymentConfig:
    """Build the payment config; production mode talks to the live API URL."""
    settings = settings or get_settings()
    is_production = settings.payment_mode == "production"

    return PaymentConfig(
        mode=settings.payment_mode,
        opay_api_url=settings.opay_api_url if is_production else settings.demo_opay_api_url,
        opay_secret_key=settings.opay_secret_key,
        demo_cashier_url=settings.demo_opay_cashier_url,
        callback_timeout=settings.payment_callback_timeout,
        webhook_signature_header=settings.webhook_signature_header.lower(),
        currency=settings.payment_currency,
        country=settings.payment_country,
    )


def validate_payment_config(config: PaymentConfig) -> PaymentConfigValidation:
    """Check the fields production mode cannot run without."""
    errors: List[str] = []

    if config.is_production:
        if not config.opay_secret_key:
            errors.append("OPAY_SECRET_KEY is required in production mode")
        if not config.opay_api_url:
            errors.append("OPAY_API_URL is required in production mode")

    return PaymentConfigValidation(valid=not errors, errors=errors)
