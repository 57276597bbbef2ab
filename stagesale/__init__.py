"""
stagesale - учётный движок продажи в три фазы

Отслеживает распроданный объём фиксированного предложения, переводит
платежи в токены по цене активной фазы и автоматически продвигает фазы по
времени или кумулятивному объёму.
"""

from stagesale.core.errors import (
    AccessError,
    CapacityError,
    ConfigurationError,
    PricingError,
    SaleError,
    TransferError,
    UnauthorizedError,
)
from stagesale.sale import StagedSale

__version__ = "1.0.0"

__all__ = [
    "StagedSale",
    "SaleError",
    "ConfigurationError",
    "AccessError",
    "UnauthorizedError",
    "PricingError",
    "CapacityError",
    "TransferError",
]
