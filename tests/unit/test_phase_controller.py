"""Тесты для Phase Controller.

Coverage:
- Граница лимита: ровно limit не переводит фазу, строгое превышение переводит
- Двойной переход за один вызов
- Переход по времени (строго после end_time)
- Последняя фаза никогда не покидается
- Монотонность и отсутствие side effects у evaluate()
- Немонотонная таблица фаз
"""

import pytest

from stagesale.core.domain import Phase, SaleState
from stagesale.phases import PhaseController, evaluate_phase, next_phase


@pytest.fixture
def controller(config):
    return PhaseController(config.phases)


class TestLimitBoundary:
    """Переходы по кумулятивному объёму."""

    def test_exact_limit_does_not_advance(self, controller):
        state = SaleState(total_sold=0)

        result = controller.advance(100_000, now=1500, state=state)

        assert not result.transition_occurred
        assert result.transition_reason == "no_transition"
        assert state.current_phase_index == 0

    def test_strict_excess_advances(self, controller):
        state = SaleState(total_sold=100_000)

        result = controller.advance(1, now=1500, state=state)

        assert result.transition_occurred
        assert result.transition_reason == "phase_limit_exceeded"
        assert (result.previous_index, result.new_index) == (0, 1)
        assert state.current_phase_index == 1

    def test_zero_prospective_at_limit_does_not_advance(self, controller):
        state = SaleState(total_sold=100_000)
        assert controller.advance(0, now=1500, state=state).new_index == 0

    def test_double_jump_in_one_call(self, controller):
        state = SaleState(total_sold=0)

        result = controller.advance(300_001, now=1500, state=state)

        assert result.new_index == 2
        assert len(result.steps) == 2
        assert [s.reason for s in result.steps] == ["phase_limit_exceeded", "phase_limit_exceeded"]
        assert state.current_phase_index == 2

    def test_prospective_not_committed(self, controller):
        state = SaleState(total_sold=50_000)
        controller.advance(60_000, now=1500, state=state)
        assert state.total_sold == 50_000


class TestTimeBoundary:
    """Переходы по end_time."""

    def test_at_end_time_stays(self, controller):
        state = SaleState()
        assert controller.advance(1, now=2000, state=state).new_index == 0

    def test_after_end_time_advances(self, controller):
        state = SaleState()

        result = controller.advance(1, now=2001, state=state)

        assert result.new_index == 1
        assert result.transition_reason == "phase_time_expired"

    def test_both_phases_expired(self, controller):
        state = SaleState()
        assert controller.advance(1, now=3001, state=state).new_index == 2

    def test_mixed_time_then_limit(self, controller):
        # Фаза 0 истекла по времени, фаза 1 превышена по объёму
        state = SaleState(total_sold=250_000)

        result = controller.advance(60_000, now=2500, state=state)

        assert [s.reason for s in result.steps] == ["phase_time_expired", "phase_limit_exceeded"]
        assert result.new_index == 2


class TestLastPhase:
    def test_last_phase_never_left(self, controller):
        state = SaleState(current_phase_index=2, total_sold=999_999)

        result = controller.advance(10**9, now=10**9, state=state)

        assert not result.transition_occurred
        assert state.current_phase_index == 2


class TestPurity:
    """evaluate() и next_phase() не меняют state."""

    def test_evaluate_has_no_side_effects(self, controller):
        state = SaleState(total_sold=100_000)

        result = controller.evaluate(1, now=1500, state=state)

        assert result.new_index == 1
        assert state.current_phase_index == 0

    def test_next_phase_function(self, config):
        state = SaleState(total_sold=100_000)
        assert next_phase(config.phases, state, 1, 1500) == 1
        assert state.current_phase_index == 0

    def test_stale_result_not_applied(self, controller):
        state = SaleState()
        result = controller.evaluate(1, now=2500, state=state)
        state.current_phase_index = 2

        with pytest.raises(RuntimeError, match="Stale"):
            controller.apply(result, state)

        assert state.current_phase_index == 2

    def test_index_never_decreases(self, controller):
        state = SaleState()
        seen = []
        for total, now in [(0, 1500), (150_000, 1500), (0, 1000), (500_000, 1000), (0, 1000)]:
            state.total_sold = total
            controller.advance(0, now=now, state=state)
            seen.append(state.current_phase_index)

        assert seen == sorted(seen)
        assert seen[-1] == 2


class TestNonMonotonicTable:
    def test_lower_second_limit_is_skipped(self):
        phases = (
            Phase(total_sold_limit=100_000, price_denominator=50_000, end_time=2000),
            Phase(total_sold_limit=50_000, price_denominator=100_000, end_time=3000),
            Phase(total_sold_limit=1_000_000, price_denominator=200_000, end_time=4000),
        )

        result = evaluate_phase(phases, 0, 99_000, 2_000, 1500)

        # Фаза 1 сразу пропускается: её потолок ниже уже проданного объёма
        assert result.new_index == 2
