"""
Contract Validation Module

Модуль для валидации JSON контрактов конфигурации продажи.
"""

from .validators import (
    ContractValidator,
    SaleConfigValidator,
    SchemaLoader,
    load_sale_config,
    validate_sale_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SaleConfigValidator",
    # Functions
    "validate_sale_config",
    "load_sale_config",
]
