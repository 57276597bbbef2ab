"""
Notification events - append-only сигналы для внешних наблюдателей

Движок их только публикует и никогда не читает сам.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PurchaseCompleted:
    """Покупка зафиксирована: участнику зачислены токены."""

    participant: str
    tokens: int
    payment_asset: str
    paid_amount: int
    phase_index: int


@dataclass(frozen=True)
class PhaseChanged:
    """Индекс активной фазы изменился (old_index < new_index)."""

    old_index: int
    new_index: int


@dataclass(frozen=True)
class TokensClaimed:
    """Участник забрал зачисленный баланс после закрытия продажи."""

    participant: str
    amount: int


SaleEvent = PurchaseCompleted | PhaseChanged | TokensClaimed
