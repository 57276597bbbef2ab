"""
SaleState - единственная изменяемая сущность продажи

Жизненный цикл:
- создаётся с фазой 0, total_sold = 0, пустыми балансами
- total_sold, balances, current_phase_index меняет только PurchaseAccountant
- blocked меняют только административные операции
- баланс участника обнуляется ClaimLedger при успешном claim
- живёт всё время продажи, включая период после закрытия (claim не ограничен)

SaleSnapshot - immutable Pydantic снапшот для read-only запросов.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from stagesale.core.domain.phase import LAST_PHASE_INDEX


@dataclass(frozen=True)
class SaleCheckpoint:
    """Копия состояния для отката операции при отказе коллаборатора."""

    current_phase_index: int
    total_sold: int
    balances: tuple[tuple[str, int], ...]
    blocked: frozenset[str]


@dataclass
class SaleState:
    """Изменяемое состояние продажи."""

    current_phase_index: int = 0
    total_sold: int = 0
    balances: dict[str, int] = field(default_factory=dict)
    blocked: set[str] = field(default_factory=set)

    def balance_of(self, participant: str) -> int:
        """Зачисленный, но не востребованный баланс участника."""
        return self.balances.get(participant, 0)

    def is_blocked(self, participant: str) -> bool:
        return participant in self.blocked

    def total_credited(self) -> int:
        """Сумма всех балансов (совпадает с total_sold до первого claim)."""
        return sum(self.balances.values())

    def checkpoint(self) -> SaleCheckpoint:
        """Снимок для последующего rollback()."""
        return SaleCheckpoint(
            current_phase_index=self.current_phase_index,
            total_sold=self.total_sold,
            balances=tuple(self.balances.items()),
            blocked=frozenset(self.blocked),
        )

    def rollback(self, checkpoint: SaleCheckpoint) -> None:
        """Восстановление состояния из checkpoint()."""
        self.current_phase_index = checkpoint.current_phase_index
        self.total_sold = checkpoint.total_sold
        self.balances = dict(checkpoint.balances)
        self.blocked = set(checkpoint.blocked)

    def to_snapshot(self, global_cap: int) -> "SaleSnapshot":
        return SaleSnapshot(
            current_phase_index=self.current_phase_index,
            total_sold=self.total_sold,
            global_cap=global_cap,
            remaining_supply=max(global_cap - self.total_sold, 0),
            balances=dict(self.balances),
            blocked=sorted(self.blocked),
        )


class SaleSnapshot(BaseModel):
    """
    Снапшот состояния продажи (read-only).

    Immutable модель (frozen=True), безопасна для передачи наружу.
    """

    current_phase_index: int = Field(
        ..., ge=0, le=LAST_PHASE_INDEX, description="Индекс активной фазы"
    )
    total_sold: int = Field(..., ge=0, description="Кумулятивно распределённые токены")
    global_cap: int = Field(..., gt=0, description="Жёсткий потолок продажи")
    remaining_supply: int = Field(..., ge=0, description="Остаток до global cap")
    balances: dict[str, int] = Field(
        default_factory=dict, description="Невостребованные балансы участников"
    )
    blocked: list[str] = Field(default_factory=list, description="Заблокированные участники")

    model_config = {"frozen": True}
