"""
Collaborator interfaces - внешние границы движка

Движок не перемещает активы, не хранит состояние во внешнем хранилище и не
проверяет права сам. Всё это делают коллабораторы:

- PriceOracle: последняя цена нативного актива
- AssetTransfer: сбор платежа и выдача активов
- AccessControl: единственный привилегированный владелец для admin-операций
- NotificationSink: приёмник append-only событий

In-memory реализации ниже используются в тестах и локальных прогонах.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from stagesale.core.domain.events import SaleEvent
from stagesale.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


# =============================================================================
# PROTOCOLS
# =============================================================================


@dataclass(frozen=True)
class OracleRound:
    """Ответ price feed (signed value + метаданные раунда)."""

    answer: int
    updated_at: int
    round_id: int = 0
    started_at: int = 0
    answered_in_round: int = 0


class PriceOracle(Protocol):
    """Price feed нативного актива в USD."""

    decimals: int

    def latest_price(self) -> OracleRound: ...


class AssetTransfer(Protocol):
    """Перемещение активов. False или exception - фатальный отказ операции."""

    def collect(self, payer: str, asset: str, amount: int, destination: str) -> bool: ...

    def disburse(self, recipient: str, asset: str, amount: int) -> bool: ...


class AccessControl(Protocol):
    """Гейт административных операций."""

    def require_owner(self, caller: str) -> None: ...


class NotificationSink(Protocol):
    def publish(self, event: SaleEvent) -> None: ...


# =============================================================================
# IN-MEMORY IMPLEMENTATIONS
# =============================================================================


@dataclass
class StaticPriceOracle:
    """Oracle с вручную выставляемой ценой."""

    answer: int
    decimals: int = 8
    updated_at: int = 0
    round_id: int = 1

    def set_price(self, answer: int, updated_at: int | None = None) -> None:
        self.answer = answer
        self.round_id += 1
        if updated_at is not None:
            self.updated_at = updated_at

    def latest_price(self) -> OracleRound:
        return OracleRound(
            answer=self.answer,
            updated_at=self.updated_at,
            round_id=self.round_id,
            started_at=self.updated_at,
            answered_in_round=self.round_id,
        )


@dataclass(frozen=True)
class Movement:
    """Одно перемещение актива, выполненное InMemoryTransfer."""

    kind: str  # "collect" | "disburse"
    party: str
    asset: str
    amount: int
    destination: str


@dataclass
class InMemoryTransfer:
    """Журнал перемещений; fail=True имитирует отказ транспорта."""

    fail: bool = False
    movements: list[Movement] = field(default_factory=list)

    def collect(self, payer: str, asset: str, amount: int, destination: str) -> bool:
        if self.fail:
            return False
        self.movements.append(Movement("collect", payer, asset, amount, destination))
        return True

    def disburse(self, recipient: str, asset: str, amount: int) -> bool:
        if self.fail:
            return False
        self.movements.append(Movement("disburse", recipient, asset, amount, recipient))
        return True

    def total(self, kind: str, asset: str) -> int:
        return sum(m.amount for m in self.movements if m.kind == kind and m.asset == asset)


@dataclass
class SingleOwnerAccessControl:
    owner: str

    def require_owner(self, caller: str) -> None:
        if caller != self.owner:
            raise UnauthorizedError(f"{caller!r} is not the sale owner", reason="not_owner")


@dataclass
class EventLog:
    """NotificationSink, сохраняющий события в порядке публикации."""

    events: list[SaleEvent] = field(default_factory=list)

    def publish(self, event: SaleEvent) -> None:
        logger.debug("Event published: %s", event)
        self.events.append(event)

    def of_type(self, event_type: type) -> list[SaleEvent]:
        return [e for e in self.events if isinstance(e, event_type)]
