"""Accounting - учёт покупок и claim."""

from .claims import ClaimLedger
from .purchase import PricingPath, PurchaseAccountant, PurchaseReceipt

__all__ = [
    "ClaimLedger",
    "PricingPath",
    "PurchaseAccountant",
    "PurchaseReceipt",
]
