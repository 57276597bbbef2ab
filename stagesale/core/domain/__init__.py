"""
Domain models and value objects.

Contains the sale configuration, phase table, mutable sale state and events.
"""

from stagesale.core.domain.events import (
    PhaseChanged,
    PurchaseCompleted,
    SaleEvent,
    TokensClaimed,
)
from stagesale.core.domain.phase import (
    LAST_PHASE_INDEX,
    PHASE_COUNT,
    Phase,
    phases_monotonic,
)
from stagesale.core.domain.sale_config import PaymentAsset, SaleConfig
from stagesale.core.domain.sale_state import SaleCheckpoint, SaleSnapshot, SaleState

__all__ = [
    # Phase table
    "PHASE_COUNT",
    "LAST_PHASE_INDEX",
    "Phase",
    "phases_monotonic",
    # Configuration
    "PaymentAsset",
    "SaleConfig",
    # State
    "SaleState",
    "SaleCheckpoint",
    "SaleSnapshot",
    # Events
    "PurchaseCompleted",
    "PhaseChanged",
    "TokensClaimed",
    "SaleEvent",
]
