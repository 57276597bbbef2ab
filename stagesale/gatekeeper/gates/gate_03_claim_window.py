"""GATE 3: Claim Window

Gate для claim:
- now <= close_time → claim_before_close (claim ровно в close_time запрещён)
- нулевой баланс → nothing_to_claim

После закрытия claim доступен бессрочно.
"""

from dataclasses import dataclass

from stagesale.core.domain.sale_config import SaleConfig
from stagesale.core.domain.sale_state import SaleState


@dataclass(frozen=True)
class Gate03Result:
    """Результат GATE 3."""

    entry_allowed: bool
    block_reason: str

    participant: str
    balance: int

    # Детали
    details: str


class Gate03ClaimWindow:
    """GATE 3: claim только строго после закрытия и только ненулевого баланса."""

    def __init__(self, config: SaleConfig):
        self.config = config

    def evaluate(self, participant: str, now: int, state: SaleState) -> Gate03Result:
        balance = state.balance_of(participant)

        if now <= self.config.close_time:
            return Gate03Result(
                entry_allowed=False,
                block_reason="claim_before_close",
                participant=participant,
                balance=balance,
                details=f"Claims open after {self.config.close_time}, now={now}",
            )

        if balance == 0:
            return Gate03Result(
                entry_allowed=False,
                block_reason="nothing_to_claim",
                participant=participant,
                balance=balance,
                details=f"Participant {participant!r} has no credited balance",
            )

        return Gate03Result(
            entry_allowed=True,
            block_reason="",
            participant=participant,
            balance=balance,
            details=f"PASS: balance={balance}",
        )
