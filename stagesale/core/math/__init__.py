"""
Core math modules для stagesale

Целочисленные fixed-point примитивы без float.
"""

from stagesale.core.math.fixed_point import (
    # Шкалы
    FIXED_RATE_EXPONENT,
    MAX_PAYMENT_DECIMALS,
    ONE_TOKEN,
    ONE_USD,
    PRICE_DECIMALS,
    PRICE_SCALE,
    TOKEN_DECIMALS,
    USD_DECIMALS,
    # Конверсии
    fixed_rate_scale,
    mul_div_floor,
    normalize_to_decimals,
    pow10,
    # Валидация
    validate_decimals,
    validate_non_negative_int,
    validate_positive_int,
)

__all__ = [
    # Шкалы
    "FIXED_RATE_EXPONENT",
    "MAX_PAYMENT_DECIMALS",
    "ONE_TOKEN",
    "ONE_USD",
    "PRICE_DECIMALS",
    "PRICE_SCALE",
    "TOKEN_DECIMALS",
    "USD_DECIMALS",
    # Конверсии
    "fixed_rate_scale",
    "mul_div_floor",
    "normalize_to_decimals",
    "pow10",
    # Валидация
    "validate_decimals",
    "validate_non_negative_int",
    "validate_positive_int",
]
