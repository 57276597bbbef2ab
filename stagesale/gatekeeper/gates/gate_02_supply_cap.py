"""GATE 2: Global Supply Cap

Проверяется после оценки перехода фазы, до фиксации покупки:
- total_sold + tokens > global_cap → global_cap_exceeded
- Ровно global_cap допустимо
"""

from dataclasses import dataclass

from stagesale.core.domain.sale_config import SaleConfig
from stagesale.core.domain.sale_state import SaleState


@dataclass(frozen=True)
class Gate02Result:
    """Результат GATE 2."""

    entry_allowed: bool
    block_reason: str

    tokens: int
    total_sold_after: int
    global_cap: int

    # Детали
    details: str


class Gate02SupplyCap:
    """GATE 2: кумулятивный total_sold никогда не превышает global cap."""

    def __init__(self, config: SaleConfig):
        self.config = config

    def evaluate(self, tokens: int, state: SaleState) -> Gate02Result:
        global_cap = self.config.global_cap
        total_sold_after = state.total_sold + tokens

        if total_sold_after > global_cap:
            return Gate02Result(
                entry_allowed=False,
                block_reason="global_cap_exceeded",
                tokens=tokens,
                total_sold_after=total_sold_after,
                global_cap=global_cap,
                details=(
                    f"total_sold would be {total_sold_after} > cap {global_cap} "
                    f"(remaining {max(global_cap - state.total_sold, 0)})"
                ),
            )

        return Gate02Result(
            entry_allowed=True,
            block_reason="",
            tokens=tokens,
            total_sold_after=total_sold_after,
            global_cap=global_cap,
            details=f"PASS: total_sold {total_sold_after}/{global_cap}",
        )
