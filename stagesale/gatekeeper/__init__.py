"""Gatekeeper - гейты допуска покупок и claim.

Gates не бросают исключений: они возвращают frozen результат с
entry_allowed/block_reason. enforce() превращает блокировку в именованную
ошибку нужного вида.
"""

import logging

from stagesale.core.errors import SaleError

from .gates import (
    Gate00Blocklist,
    Gate00Result,
    Gate01SaleWindow,
    Gate01Result,
    Gate02SupplyCap,
    Gate02Result,
    Gate03ClaimWindow,
    Gate03Result,
)

logger = logging.getLogger(__name__)


def enforce(result, error_type: type[SaleError]) -> None:
    """Бросает error_type, если gate заблокировал операцию."""
    if result.entry_allowed:
        return
    logger.warning("Gate blocked: %s (%s)", result.block_reason, result.details)
    raise error_type(result.details, reason=result.block_reason)


__all__ = [
    "enforce",
    "Gate00Blocklist",
    "Gate00Result",
    "Gate01SaleWindow",
    "Gate01Result",
    "Gate02SupplyCap",
    "Gate02Result",
    "Gate03ClaimWindow",
    "Gate03Result",
]
