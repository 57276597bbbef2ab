"""Phases - машина состояний фаз продажи.

- Три упорядоченные фазы, переход только вперёд
- Переход по времени (end_time) или по объёму (total_sold_limit)
- Пересчёт лениво, только как побочный эффект покупки
"""

from .controller import (
    PhaseController,
    PhaseStep,
    PhaseTransitionResult,
    evaluate_phase,
    next_phase,
)

__all__ = [
    "PhaseController",
    "PhaseStep",
    "PhaseTransitionResult",
    "evaluate_phase",
    "next_phase",
]
