"""Тесты для Claim Ledger.

Coverage:
- claim ровно в close_time запрещён, через секунду разрешён
- нулевой баланс → AccessError
- round-trip: покупка → claim возвращает ровно зачисленное
- повторный claim → AccessError
"""

import pytest

from stagesale.accounting import ClaimLedger, PricingPath, PurchaseAccountant
from stagesale.core.domain import SaleState
from stagesale.core.errors import AccessError
from stagesale.pricing import PricingEngine


@pytest.fixture
def ledger(config):
    return ClaimLedger(config)


class TestClaimWindow:
    def test_claim_at_close_rejected_then_succeeds(self, ledger):
        state = SaleState(total_sold=500, balances={"alice": 500})

        with pytest.raises(AccessError) as exc_info:
            ledger.claim("alice", 5000, state)
        assert exc_info.value.reason == "claim_before_close"
        assert state.balance_of("alice") == 500

        assert ledger.claim("alice", 5001, state) == 500

    def test_claim_long_after_close(self, ledger):
        state = SaleState(balances={"alice": 7})
        assert ledger.claim("alice", 10**10, state) == 7

    def test_zero_balance_rejected(self, ledger, state):
        with pytest.raises(AccessError) as exc_info:
            ledger.claim("nobody", 6000, state)
        assert exc_info.value.reason == "nothing_to_claim"


class TestRoundTrip:
    def test_purchase_then_claim(self, config, oracle, ledger, state):
        accountant = PurchaseAccountant(config, PricingEngine(config, oracle))
        receipt = accountant.purchase(
            "alice", 250, 1500, PricingPath.FIXED_RATE, state, asset_id="DAI"
        )

        claimed = ledger.claim("alice", 5001, state)

        assert claimed == receipt.tokens == 5_000
        assert state.balance_of("alice") == 0
        # total_sold не уменьшается при claim
        assert state.total_sold == 5_000

        with pytest.raises(AccessError) as exc_info:
            ledger.claim("alice", 5002, state)
        assert exc_info.value.reason == "nothing_to_claim"

    def test_claim_does_not_touch_other_balances(self, ledger):
        state = SaleState(balances={"alice": 1, "bob": 2})

        ledger.claim("alice", 5001, state)

        assert state.balances == {"bob": 2}
