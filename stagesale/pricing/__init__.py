"""Pricing - конверсия платежей в токены (fixed-rate и oracle пути)."""

from .engine import PricingEngine, TokenQuote

__all__ = [
    "PricingEngine",
    "TokenQuote",
]
