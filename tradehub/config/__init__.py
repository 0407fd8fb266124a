from .settings import Settings, get_settings
from .payment import PaymentConfig, get_payment_config, validate_payment_config
from .stores import StoreManager, lifespan

__all__ = [
    "Settings",
    "get_settings",
    "PaymentConfig",
    "get_payment_config",
    "validate_payment_config",
    "StoreManager",
    "lifespan",
]
