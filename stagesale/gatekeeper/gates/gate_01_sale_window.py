"""GATE 1: Sale Window

Второй gate покупки (после GATE 0):
- now < open_time → sale_not_open
- now > close_time → sale_closed
- Границы включительны: покупка ровно в open_time и ровно в close_time допустима

Время задаёт вызывающая сторона; внутренних таймаутов нет.
"""

from dataclasses import dataclass

from stagesale.core.domain.sale_config import SaleConfig


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    entry_allowed: bool
    block_reason: str

    now: int
    open_time: int
    close_time: int

    # Детали
    details: str


class Gate01SaleWindow:
    """GATE 1: покупка только внутри окна [open_time, close_time]."""

    def __init__(self, config: SaleConfig):
        self.config = config

    def evaluate(self, now: int) -> Gate01Result:
        open_time = self.config.open_time
        close_time = self.config.close_time

        if now < open_time:
            return Gate01Result(
                entry_allowed=False,
                block_reason="sale_not_open",
                now=now,
                open_time=open_time,
                close_time=close_time,
                details=f"Sale opens at {open_time}, now={now}",
            )

        if now > close_time:
            return Gate01Result(
                entry_allowed=False,
                block_reason="sale_closed",
                now=now,
                open_time=open_time,
                close_time=close_time,
                details=f"Sale closed at {close_time}, now={now}",
            )

        return Gate01Result(
            entry_allowed=True,
            block_reason="",
            now=now,
            open_time=open_time,
            close_time=close_time,
            details=f"PASS: window [{open_time}, {close_time}], now={now}",
        )
