"""GATE 0: Blocklist

Первый gate покупки:
- Блокирует покупку, если участник в blocked set
- Проверяется раньше окна продажи и ценообразования
"""

from dataclasses import dataclass

from stagesale.core.domain.sale_state import SaleState


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    entry_allowed: bool
    block_reason: str

    participant: str

    # Детали
    details: str


class Gate00Blocklist:
    """GATE 0: участник не должен быть заблокирован."""

    def evaluate(self, participant: str, state: SaleState) -> Gate00Result:
        if state.is_blocked(participant):
            return Gate00Result(
                entry_allowed=False,
                block_reason="participant_blocked",
                participant=participant,
                details=f"Participant {participant!r} is blocked",
            )

        return Gate00Result(
            entry_allowed=True,
            block_reason="",
            participant=participant,
            details="PASS",
        )
