"""Тесты SaleState: checkpoint/rollback и снапшоты."""

import pytest
from pydantic import ValidationError

from stagesale.core.domain import SaleSnapshot, SaleState


class TestCheckpoint:
    def test_rollback_restores_all_fields(self):
        state = SaleState(current_phase_index=1, total_sold=300, balances={"alice": 300})
        checkpoint = state.checkpoint()

        state.current_phase_index = 2
        state.total_sold = 900
        state.balances["bob"] = 600
        state.blocked.add("mallory")

        state.rollback(checkpoint)

        assert state.current_phase_index == 1
        assert state.total_sold == 300
        assert state.balances == {"alice": 300}
        assert state.blocked == set()

    def test_checkpoint_is_a_copy(self):
        state = SaleState(balances={"alice": 1})
        checkpoint = state.checkpoint()

        state.balances["alice"] = 99

        assert dict(checkpoint.balances) == {"alice": 1}


class TestSnapshot:
    def test_snapshot_fields(self):
        state = SaleState(total_sold=250, balances={"alice": 250}, blocked={"b", "a"})

        snapshot = state.to_snapshot(global_cap=1_000)

        assert snapshot.remaining_supply == 750
        assert snapshot.blocked == ["a", "b"]
        assert snapshot.balances == {"alice": 250}

    def test_snapshot_detached_from_state(self):
        state = SaleState(balances={"alice": 1})
        snapshot = state.to_snapshot(global_cap=10)

        state.balances["alice"] = 5

        assert snapshot.balances == {"alice": 1}

    def test_snapshot_frozen(self):
        snapshot = SaleState().to_snapshot(global_cap=10)
        with pytest.raises(ValidationError):
            snapshot.total_sold = 1

    def test_snapshot_rejects_bad_phase(self):
        with pytest.raises(ValidationError):
            SaleSnapshot(current_phase_index=3, total_sold=0, global_cap=1, remaining_supply=1)

    def test_defaults(self):
        state = SaleState()
        assert state.current_phase_index == 0
        assert state.balance_of("anyone") == 0
        assert not state.is_blocked("anyone")
