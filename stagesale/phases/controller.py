"""Phase Controller - ленивая машина состояний фаз продажи.

Правила перехода (пока активная фаза не последняя):
- now строго позже end_time активной фазы → следующая фаза
- total_sold + prospective_amount строго больше total_sold_limit → следующая фаза
- иначе - остановка

Свойства:
- только вперёд: индекс никогда не уменьшается и не заворачивается
- не более PHASE_COUNT - 1 шагов за один вызов
- вызывается ДО прибавления покупки к total_sold, поэтому условие
  проверяет prospective total, а не уже зафиксированный

Граница: total_sold + amount == limit НЕ вызывает переход. Покупка, которая
ровно закрывает лимит, учитывается по цене текущей фазы; переход делает
следующая покупка. Это сохраняемое поведение, а не off-by-one.

Фоновых переходов нет: фаза пересчитывается только как побочный эффект
следующей покупки.
"""

import logging
from dataclasses import dataclass

from stagesale.core.domain.phase import LAST_PHASE_INDEX, Phase
from stagesale.core.domain.sale_state import SaleState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseStep:
    """Один шаг перехода фазы."""

    from_index: int
    to_index: int
    reason: str  # "phase_time_expired" | "phase_limit_exceeded"


@dataclass(frozen=True)
class PhaseTransitionResult:
    """Результат оценки перехода фазы."""

    previous_index: int
    new_index: int
    steps: tuple[PhaseStep, ...]

    # Диагностика
    transition_occurred: bool
    transition_reason: str
    details: str


def _step_reason(phase: Phase, total_sold: int, prospective_amount: int, now: int) -> str | None:
    """Причина покинуть фазу или None, если фаза остаётся активной."""
    if now > phase.end_time:
        return "phase_time_expired"
    if total_sold + prospective_amount > phase.total_sold_limit:
        return "phase_limit_exceeded"
    return None


def evaluate_phase(
    phases: tuple[Phase, ...],
    current_index: int,
    total_sold: int,
    prospective_amount: int,
    now: int,
) -> PhaseTransitionResult:
    """Чистая оценка перехода без изменения состояния.

    Args:
        phases: таблица фаз (ровно три)
        current_index: текущий индекс фазы
        total_sold: уже зафиксированный total_sold
        prospective_amount: токены, которые добавит покупка
        now: текущее время (Unix timestamp, секунды)

    Returns:
        PhaseTransitionResult с новым индексом и пройденными шагами
    """
    index = current_index
    steps: list[PhaseStep] = []

    while index < LAST_PHASE_INDEX:
        reason = _step_reason(phases[index], total_sold, prospective_amount, now)
        if reason is None:
            break
        steps.append(PhaseStep(from_index=index, to_index=index + 1, reason=reason))
        index += 1

    if not steps:
        return PhaseTransitionResult(
            previous_index=current_index,
            new_index=current_index,
            steps=(),
            transition_occurred=False,
            transition_reason="no_transition",
            details=(
                f"Phase {current_index} active: total_sold={total_sold}, "
                f"prospective={prospective_amount}, now={now}"
            ),
        )

    return PhaseTransitionResult(
        previous_index=current_index,
        new_index=index,
        steps=tuple(steps),
        transition_occurred=True,
        transition_reason=steps[-1].reason,
        details=" → ".join(
            [str(current_index)] + [f"{s.to_index} ({s.reason})" for s in steps]
        ),
    )


def next_phase(
    phases: tuple[Phase, ...],
    state: SaleState,
    prospective_amount: int,
    now: int,
) -> int:
    """Индекс фазы, которая станет активной после покупки prospective_amount."""
    return evaluate_phase(
        phases, state.current_phase_index, state.total_sold, prospective_amount, now
    ).new_index


class PhaseController:
    """Контроллер фаз поверх неизменяемой таблицы фаз.

    evaluate() - чистая функция; advance() применяет результат к SaleState.
    """

    def __init__(self, phases: tuple[Phase, ...]):
        self.phases = phases

    def active_phase(self, state: SaleState) -> Phase:
        return self.phases[state.current_phase_index]

    def evaluate(self, prospective_amount: int, now: int, state: SaleState) -> PhaseTransitionResult:
        return evaluate_phase(
            self.phases,
            state.current_phase_index,
            state.total_sold,
            prospective_amount,
            now,
        )

    def advance(self, prospective_amount: int, now: int, state: SaleState) -> PhaseTransitionResult:
        """Оценка и применение перехода к state.

        Индекс меняется только если переход действительно произошёл.
        """
        result = self.evaluate(prospective_amount, now, state)
        self.apply(result, state)
        return result

    def apply(self, result: PhaseTransitionResult, state: SaleState) -> None:
        if not result.transition_occurred:
            return

        # Монотонность: результат, посчитанный для устаревшего state, не применяется
        if result.previous_index != state.current_phase_index or result.new_index < state.current_phase_index:
            raise RuntimeError(
                f"Stale phase transition {result.previous_index} → {result.new_index} "
                f"for current index {state.current_phase_index}"
            )

        state.current_phase_index = result.new_index
        logger.info("Phase changed: %s", result.details)
