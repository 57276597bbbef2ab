"""Gates - индивидуальные гейты покупки и claim.

Фиксированный порядок покупки:
- GATE 0: Blocklist
- GATE 1: Sale Window
- (ценообразование и оценка перехода фазы)
- GATE 2: Global Supply Cap

Claim:
- GATE 3: Claim Window + ненулевой баланс
"""

from .gate_00_blocklist import Gate00Blocklist, Gate00Result
from .gate_01_sale_window import Gate01SaleWindow, Gate01Result
from .gate_02_supply_cap import Gate02SupplyCap, Gate02Result
from .gate_03_claim_window import Gate03ClaimWindow, Gate03Result

__all__ = [
    "Gate00Blocklist",
    "Gate00Result",
    "Gate01SaleWindow",
    "Gate01Result",
    "Gate02SupplyCap",
    "Gate02Result",
    "Gate03ClaimWindow",
    "Gate03Result",
]
