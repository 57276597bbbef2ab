"""
Claim Ledger - выдача зачисленных балансов после закрытия продажи

Баланс обнуляется ДО внешнего перевода: повторный claim того же кредита
невозможен, даже если шаг перевода повторяется.
"""

import logging

from stagesale.core.domain.sale_config import SaleConfig
from stagesale.core.domain.sale_state import SaleState
from stagesale.core.errors import AccessError
from stagesale.gatekeeper import Gate03ClaimWindow, enforce

logger = logging.getLogger(__name__)


class ClaimLedger:
    def __init__(self, config: SaleConfig):
        self.config = config
        self.gate03 = Gate03ClaimWindow(config)

    def claim(self, participant: str, now: int, state: SaleState) -> int:
        """
        Обнуление баланса участника.

        Returns:
            Сумма к выдаче через disbursement коллаборатор

        Raises:
            AccessError: now <= close_time или нулевой баланс
        """
        enforce(self.gate03.evaluate(participant, now, state), AccessError)

        amount = state.balances.pop(participant)
        logger.info("Claim committed: participant=%s amount=%s", participant, amount)
        return amount
