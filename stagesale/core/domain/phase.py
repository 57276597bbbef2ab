"""
Phase - ценовая/ёмкостная ступень продажи

Immutable Pydantic модель. Ровно три фазы (индексы 0..2) создаются один раз
при конфигурации и не меняются.

total_sold_limit - кумулятивный потолок (не дельта фазы), end_time - момент,
после которого фаза считается истёкшей. Обе последовательности должны быть
неубывающими; движок это НЕ проверяет (ответственность конфигурации).
"""

from typing import Final

from pydantic import BaseModel, Field

# =============================================================================
# CONSTANTS
# =============================================================================

# Фиксированное число фаз
PHASE_COUNT: Final[int] = 3

# Индекс последней фазы: дальше неё переход невозможен
LAST_PHASE_INDEX: Final[int] = PHASE_COUNT - 1


# =============================================================================
# PHASE MODEL
# =============================================================================


class Phase(BaseModel):
    """
    Одна ступень продажи.

    price_denominator - цена одного токена в USD с 6 decimals
    (например, 50_000 = $0.05).
    """

    total_sold_limit: int = Field(
        ..., ge=0, description="Кумулятивный потолок total_sold для фазы (единицы токена)"
    )
    price_denominator: int = Field(
        ..., gt=0, description="Цена токена в USD, 6 decimals"
    )
    end_time: int = Field(..., ge=0, description="Unix timestamp окончания фазы (секунды)")

    model_config = {"frozen": True}


def phases_monotonic(phases: tuple[Phase, ...]) -> bool:
    """
    Проверка, что лимиты и end_time фаз не убывают.

    Нарушение не блокирует продажу: фаза с инвертированным порядком
    становится недостижимой или пропускается сразу.
    """
    for previous, current in zip(phases, phases[1:]):
        if current.total_sold_limit < previous.total_sold_limit:
            return False
        if current.end_time < previous.end_time:
            return False
    return True
