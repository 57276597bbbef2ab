"""
Purchase Accountant - единственный писатель прогресса продажи

Порядок шагов покупки (каждый - жёсткое предусловие):
1. GATE 0: участник не заблокирован                      → AccessError
2. GATE 1: now внутри окна продажи                       → AccessError
3. PricingEngine: токены по активной фазе, не ноль       → PricingError
4. PhaseController: оценка перехода по prospective total
5. GATE 2: total_sold + tokens <= global_cap             → CapacityError
6. Commit: фаза, total_sold, баланс покупателя
7. Возврат tokens для внешнего сбора платежа

Атомарность: шаги 1-5 ничего не меняют, поэтому любой отказ оставляет state
нетронутым; переход фазы применяется только вместе с зачислением.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from stagesale.core.domain.sale_config import SaleConfig
from stagesale.core.domain.sale_state import SaleState
from stagesale.core.errors import AccessError, CapacityError
from stagesale.gatekeeper import (
    Gate00Blocklist,
    Gate01SaleWindow,
    Gate02SupplyCap,
    enforce,
)
from stagesale.phases.controller import PhaseController, PhaseTransitionResult
from stagesale.pricing.engine import PricingEngine, TokenQuote

logger = logging.getLogger(__name__)


class PricingPath(str, Enum):
    """Путь ценообразования покупки."""

    FIXED_RATE = "fixed_rate"
    ORACLE = "oracle"


@dataclass(frozen=True)
class PurchaseReceipt:
    """Результат зафиксированной покупки."""

    buyer: str
    tokens: int
    quote: TokenQuote
    phase_transition: PhaseTransitionResult
    total_sold_after: int


class PurchaseAccountant:
    """Оркестратор одной покупки: validation → phase → cap → credit."""

    def __init__(
        self,
        config: SaleConfig,
        pricing: PricingEngine,
        phase_controller: PhaseController | None = None,
    ):
        self.config = config
        self.pricing = pricing
        self.phase_controller = phase_controller or PhaseController(config.phases)

        self.gate00 = Gate00Blocklist()
        self.gate01 = Gate01SaleWindow(config)
        self.gate02 = Gate02SupplyCap(config)

    def quote(
        self,
        paid_amount: int,
        pricing_path: PricingPath,
        state: SaleState,
        asset_id: str | None = None,
    ) -> TokenQuote:
        """Токены по фазе, активной в state (без изменения state)."""
        phase = self.phase_controller.active_phase(state)

        if pricing_path == PricingPath.ORACLE:
            return self.pricing.quote_native(paid_amount, phase)
        return self.pricing.quote_stable(asset_id, paid_amount, phase)

    def purchase(
        self,
        buyer: str,
        paid_amount: int,
        now: int,
        pricing_path: PricingPath,
        state: SaleState,
        asset_id: str | None = None,
    ) -> PurchaseReceipt:
        """
        Оценка и фиксация одной покупки.

        Args:
            buyer: покупатель
            paid_amount: оплаченная сумма в минимальных единицах платёжного актива
            now: текущее время (Unix timestamp, секунды)
            pricing_path: FIXED_RATE (требует asset_id) или ORACLE
            state: изменяемое состояние продажи
            asset_id: fixed-rate платёжный актив

        Returns:
            PurchaseReceipt; receipt.tokens зачислены на баланс buyer

        Raises:
            AccessError, PricingError, CapacityError - state не изменён
        """
        # 1-2. Допуск участника и окно продажи
        enforce(self.gate00.evaluate(buyer, state), AccessError)
        enforce(self.gate01.evaluate(now), AccessError)

        # 3. Ценообразование
        quote = self.quote(paid_amount, pricing_path, state, asset_id)
        tokens = quote.tokens

        # 4. Переход фазы (пока только оценка)
        transition = self.phase_controller.evaluate(tokens, now, state)

        # 5. Global cap
        enforce(self.gate02.evaluate(tokens, state), CapacityError)

        # 6. Commit
        self.phase_controller.apply(transition, state)
        state.total_sold += tokens
        state.balances[buyer] = state.balance_of(buyer) + tokens

        logger.info(
            "Purchase committed: buyer=%s tokens=%s asset=%s paid=%s phase=%s total_sold=%s",
            buyer, tokens, quote.payment_asset, paid_amount,
            state.current_phase_index, state.total_sold,
        )

        return PurchaseReceipt(
            buyer=buyer,
            tokens=tokens,
            quote=quote,
            phase_transition=transition,
            total_sold_after=state.total_sold,
        )
