"""
StagedSale - фасад продажи над общим SaleState

Модель исполнения: один писатель, строго последовательно. Каждая изменяющая
операция (покупка, claim, block/unblock) выполняется целиком внутри одной
критической секции; две операции никогда не чередуются.

Порядок изменяющей операции:
1. checkpoint состояния
2. внутренний учёт (PurchaseAccountant / ClaimLedger)
3. внешний перевод (AssetTransfer) - только после учёта
4. отказ перевода → rollback к checkpoint, TransferError
5. успех → публикация буферизованных событий (best-effort: отказ sink
   логируется и не отменяет зафиксированную операцию)

Read-only запросы не берут блокировку и не меняют состояние.
"""

import logging
import threading

from stagesale.accounting.claims import ClaimLedger
from stagesale.accounting.purchase import PricingPath, PurchaseAccountant, PurchaseReceipt
from stagesale.core.domain.events import PhaseChanged, PurchaseCompleted, SaleEvent, TokensClaimed
from stagesale.core.domain.phase import Phase
from stagesale.core.domain.sale_config import SaleConfig
from stagesale.core.domain.sale_state import SaleSnapshot, SaleState
from stagesale.core.errors import TransferError
from stagesale.interfaces import AccessControl, AssetTransfer, NotificationSink, PriceOracle
from stagesale.phases.controller import PhaseController
from stagesale.pricing.engine import PricingEngine

logger = logging.getLogger(__name__)


class StagedSale:
    """Продажа в три фазы с отложенной выдачей токенов."""

    def __init__(
        self,
        config: SaleConfig,
        oracle: PriceOracle,
        transfer: AssetTransfer,
        access_control: AccessControl,
        sink: NotificationSink | None = None,
        state: SaleState | None = None,
    ):
        self.config = config
        self.oracle = oracle
        self.transfer = transfer
        self.access_control = access_control
        self.sink = sink
        self.state = state or SaleState()

        self.phase_controller = PhaseController(config.phases)
        self.pricing = PricingEngine(config, oracle)
        self.accountant = PurchaseAccountant(config, self.pricing, self.phase_controller)
        self.ledger = ClaimLedger(config)

        self._lock = threading.Lock()

        if not config.phases_monotonic:
            logger.warning(
                "Sale %s configured with non-monotonic phase table; "
                "some phases may be unreachable or skipped",
                config.sold_asset,
            )

    # =========================================================================
    # PURCHASES
    # =========================================================================

    def buy_with_stable(self, buyer: str, asset_id: str, amount: int, now: int) -> int:
        """
        Покупка за fixed-rate актив.

        Returns:
            Зачисленные токены

        Raises:
            AccessError, PricingError, CapacityError, TransferError
        """
        return self._purchase(buyer, amount, now, PricingPath.FIXED_RATE, asset_id).tokens

    def buy_with_native(self, buyer: str, amount: int, now: int) -> int:
        """Покупка за нативный актив по цене oracle."""
        return self._purchase(buyer, amount, now, PricingPath.ORACLE, None).tokens

    def _purchase(
        self,
        buyer: str,
        amount: int,
        now: int,
        pricing_path: PricingPath,
        asset_id: str | None,
    ) -> PurchaseReceipt:
        with self._lock:
            checkpoint = self.state.checkpoint()
            receipt = self.accountant.purchase(
                buyer, amount, now, pricing_path, self.state, asset_id=asset_id
            )

            try:
                self._move(
                    self.transfer.collect,
                    buyer, receipt.quote.payment_asset, amount, self.config.destination,
                )
            except TransferError:
                self.state.rollback(checkpoint)
                logger.warning(
                    "Purchase rolled back: buyer=%s asset=%s amount=%s",
                    buyer, receipt.quote.payment_asset, amount,
                )
                raise

            events: list[SaleEvent] = []
            transition = receipt.phase_transition
            if transition.transition_occurred:
                events.append(PhaseChanged(transition.previous_index, transition.new_index))
            events.append(
                PurchaseCompleted(
                    participant=buyer,
                    tokens=receipt.tokens,
                    payment_asset=receipt.quote.payment_asset,
                    paid_amount=amount,
                    phase_index=self.state.current_phase_index,
                )
            )
            self._publish(events)

        return receipt

    # =========================================================================
    # CLAIMS
    # =========================================================================

    def claim(self, participant: str, now: int) -> int:
        """
        Выдача зачисленных токенов после закрытия продажи.

        Raises:
            AccessError: claim до закрытия или нулевой баланс
            TransferError: отказ выдачи (баланс восстановлен)
        """
        with self._lock:
            checkpoint = self.state.checkpoint()
            amount = self.ledger.claim(participant, now, self.state)

            try:
                self._move(self.transfer.disburse, participant, self.config.sold_asset, amount)
            except TransferError:
                self.state.rollback(checkpoint)
                logger.warning("Claim rolled back: participant=%s amount=%s", participant, amount)
                raise

            self._publish([TokensClaimed(participant, amount)])

        return amount

    # =========================================================================
    # ADMINISTRATIVE OPERATIONS
    # =========================================================================

    def block(self, caller: str, participant: str) -> None:
        self.access_control.require_owner(caller)
        with self._lock:
            self.state.blocked.add(participant)
        logger.info("Participant blocked: %s", participant)

    def unblock(self, caller: str, participant: str) -> None:
        self.access_control.require_owner(caller)
        with self._lock:
            self.state.blocked.discard(participant)
        logger.info("Participant unblocked: %s", participant)

    def sweep(self, caller: str, asset: str, amount: int) -> None:
        """Вывод актива владельцу без влияния на учёт продажи."""
        self.access_control.require_owner(caller)
        with self._lock:
            self._move(self.transfer.disburse, caller, asset, amount)
        logger.info("Swept %s of %s to %s", amount, asset, caller)

    def sweep_native(self, caller: str, amount: int) -> None:
        self.sweep(caller, self.config.native_asset, amount)

    # =========================================================================
    # READ-ONLY QUERIES
    # =========================================================================

    def current_phase(self) -> int:
        return self.state.current_phase_index

    def active_phase(self) -> Phase:
        return self.phase_controller.active_phase(self.state)

    def total_sold(self) -> int:
        return self.state.total_sold

    def remaining_supply(self) -> int:
        return max(self.config.global_cap - self.state.total_sold, 0)

    def balance_of(self, participant: str) -> int:
        return self.state.balance_of(participant)

    def is_blocked(self, participant: str) -> bool:
        return self.state.is_blocked(participant)

    def latest_price(self) -> int:
        """Цена нативного актива (USD, 18 decimals)."""
        return self.pricing.latest_price()

    def quote_stable(self, asset_id: str, amount: int) -> int:
        """Токены за amount по текущей фазе (фаза не пересчитывается)."""
        return self.accountant.quote(amount, PricingPath.FIXED_RATE, self.state, asset_id).tokens

    def quote_native(self, amount: int) -> int:
        return self.accountant.quote(amount, PricingPath.ORACLE, self.state).tokens

    def snapshot(self) -> SaleSnapshot:
        return self.state.to_snapshot(self.config.global_cap)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _move(self, operation, *args) -> None:
        """Вызов коллаборатора перевода; False или exception → TransferError."""
        try:
            ok = operation(*args)
        except Exception as e:
            raise TransferError(f"{operation.__name__} failed: {e}", reason="transfer_failed") from e

        if not ok:
            raise TransferError(f"{operation.__name__} reported failure", reason="transfer_failed")

    def _publish(self, events: list[SaleEvent]) -> None:
        """Публикация после commit; отказ наблюдателя не отменяет операцию."""
        if self.sink is None:
            return
        for event in events:
            try:
                self.sink.publish(event)
            except Exception:
                logger.exception("Event publication failed: %s", event)
