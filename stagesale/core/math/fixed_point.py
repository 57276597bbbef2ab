"""
Fixed-Point Primitives - целочисленная арифметика продажи

Все суммы в движке - целые числа в минимальных единицах своего актива.
Float нигде не участвует: любое округление - floor при целочисленном делении,
поэтому ни один участник не может получить больше токенов, чем оплатил.

Шкалы:
- Токены продаваемого актива: 18 decimals
- Цена фазы (price_denominator): USD с 6 decimals (50_000 = $0.05)
- Цена oracle после нормализации: USD с 18 decimals

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление только floor, только на строго положительный делитель
2. Отрицательные степени 10 невозможны (decimals > 18 отклоняются)
3. Все операции детерминированы и воспроизводимы
"""

from typing import Final

# =============================================================================
# ШКАЛЫ
# =============================================================================

# Decimals продаваемого токена
TOKEN_DECIMALS: Final[int] = 18

# Decimals USD-цены фазы (price_denominator)
USD_DECIMALS: Final[int] = 6

# Decimals нормализованной цены oracle
PRICE_DECIMALS: Final[int] = 18

# Максимально допустимая точность платёжного актива
MAX_PAYMENT_DECIMALS: Final[int] = 18

# Экспонента числителя fixed-rate пути: 18 (token) + 6 (USD цена)
FIXED_RATE_EXPONENT: Final[int] = TOKEN_DECIMALS + USD_DECIMALS

ONE_TOKEN: Final[int] = 10**TOKEN_DECIMALS
ONE_USD: Final[int] = 10**USD_DECIMALS
PRICE_SCALE: Final[int] = 10**PRICE_DECIMALS


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_non_negative_int(value: int, name: str) -> None:
    """
    Валидация, что значение - неотрицательное целое.

    bool отклоняется явно: True/False не являются суммами.

    Raises:
        ValueError: Если value не int или value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_positive_int(value: int, name: str) -> None:
    """
    Валидация, что значение - строго положительное целое.

    Raises:
        ValueError: Если value не int или value <= 0
    """
    validate_non_negative_int(value, name)

    if value == 0:
        raise ValueError(f"{name} must be positive, got 0")


def validate_decimals(decimals: int, name: str, max_decimals: int) -> None:
    """
    Валидация точности актива.

    Raises:
        ValueError: Если decimals < 0 или decimals > max_decimals
    """
    validate_non_negative_int(decimals, name)

    if decimals > max_decimals:
        raise ValueError(f"{name} must be <= {max_decimals}, got {decimals}")


# =============================================================================
# КОНВЕРСИИ
# =============================================================================


def pow10(exponent: int) -> int:
    """
    Целая степень 10.

    Raises:
        ValueError: Если exponent < 0 (защита от отрицательной экспоненты)
    """
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    return 10**exponent


def fixed_rate_scale(payment_decimals: int) -> int:
    """
    Множитель числителя fixed-rate пути: 10^(24 - payment_decimals).

    Переводит оплаченную сумму к шкале token(18) * USD(6), после чего
    деление на price_denominator даёт токены с 18 decimals.

    Examples:
        >>> fixed_rate_scale(6)
        1000000000000000000
        >>> fixed_rate_scale(18)
        1000000

    Raises:
        ValueError: Если payment_decimals > 18
    """
    validate_decimals(payment_decimals, "payment_decimals", MAX_PAYMENT_DECIMALS)
    return pow10(FIXED_RATE_EXPONENT - payment_decimals)


def normalize_to_decimals(value: int, from_decimals: int, to_decimals: int = PRICE_DECIMALS) -> int:
    """
    Масштабирование значения с from_decimals до to_decimals (только вверх).

    Examples:
        >>> normalize_to_decimals(2000_00000000, 8)
        2000000000000000000000

    Raises:
        ValueError: Если from_decimals > to_decimals
    """
    validate_decimals(from_decimals, "from_decimals", to_decimals)
    return value * pow10(to_decimals - from_decimals)


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator) без промежуточного округления.

    Python int не переполняется, поэтому умножение выполняется до деления.

    Raises:
        ValueError: Если a или b отрицательны, либо denominator <= 0
    """
    validate_non_negative_int(a, "a")
    validate_non_negative_int(b, "b")
    validate_positive_int(denominator, "denominator")

    return (a * b) // denominator
