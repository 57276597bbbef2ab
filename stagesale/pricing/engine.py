"""
Pricing Engine - перевод платежа в токены продаваемого актива

Два независимых пути, оба используют price_denominator переданной фазы:

Fixed-rate (stablecoin, decimals <= 18):
    tokens = paid * 10^(24 - decimals) / price_denominator

External-price (нативный актив, цена от oracle):
    unit_price = answer * 10^(18 - oracle_decimals)    (USD, 18 decimals)
    usd_value  = paid * unit_price / 1e18              (USD, 18 decimals)
    tokens     = usd_value * 1e6 / price_denominator

Все деления - floor. Нулевой результат отклоняется PricingError: платёж,
который округляется в ноль токенов, не принимается.
"""

import logging
from dataclasses import dataclass

from stagesale.core.domain.phase import Phase
from stagesale.core.domain.sale_config import SaleConfig
from stagesale.core.errors import PricingError
from stagesale.core.math.fixed_point import (
    MAX_PAYMENT_DECIMALS,
    ONE_USD,
    PRICE_DECIMALS,
    PRICE_SCALE,
    fixed_rate_scale,
    mul_div_floor,
    normalize_to_decimals,
)
from stagesale.interfaces import PriceOracle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenQuote:
    """Результат конверсии платежа в токены."""

    tokens: int
    payment_asset: str
    paid_amount: int
    price_denominator: int

    # Только для oracle-пути
    unit_price: int | None = None
    usd_value: int | None = None


class PricingEngine:
    """
    Конвертер платежей в токены.

    Не хранит состояния: активная фаза передаётся явно в каждый вызов.
    """

    def __init__(self, config: SaleConfig, oracle: PriceOracle):
        self.config = config
        self.oracle = oracle

    # -------------------------------------------------------------------------
    # Fixed-rate path
    # -------------------------------------------------------------------------

    def quote_stable(self, asset_id: str, paid_amount: int, phase: Phase) -> TokenQuote:
        """
        Токены за оплату fixed-rate активом.

        Raises:
            PricingError: актив не принимается, decimals > 18,
                некорректная сумма или ноль токенов
        """
        asset = self.config.payment_asset(asset_id)
        if asset is None:
            raise PricingError(
                f"Payment asset {asset_id!r} is not accepted",
                reason="unsupported_payment_asset",
            )

        if asset.decimals > MAX_PAYMENT_DECIMALS:
            raise PricingError(
                f"Payment asset {asset_id!r} has {asset.decimals} decimals, "
                f"max supported is {MAX_PAYMENT_DECIMALS}",
                reason="payment_decimals_too_high",
            )

        _check_paid_amount(paid_amount)

        tokens = mul_div_floor(paid_amount, fixed_rate_scale(asset.decimals), phase.price_denominator)
        logger.debug(
            "Fixed-rate quote: asset=%s paid=%s decimals=%s denominator=%s tokens=%s",
            asset_id, paid_amount, asset.decimals, phase.price_denominator, tokens,
        )
        _check_tokens(tokens)

        return TokenQuote(
            tokens=tokens,
            payment_asset=asset_id,
            paid_amount=paid_amount,
            price_denominator=phase.price_denominator,
        )

    # -------------------------------------------------------------------------
    # External-price path
    # -------------------------------------------------------------------------

    def latest_price(self) -> int:
        """
        Цена нативного актива в USD, нормализованная к 18 decimals.

        Никогда не возвращает 0 и не использует закэшированное значение.

        Raises:
            PricingError: oracle недоступен, decimals feed вне [0, 18],
                цена не целое или не строго положительна
        """
        try:
            price_round = self.oracle.latest_price()
            feed_decimals = self.oracle.decimals
        except Exception as e:
            raise PricingError(f"Price oracle unavailable: {e}", reason="oracle_unavailable") from e

        answer = price_round.answer
        if not _is_int(answer) or answer <= 0:
            raise PricingError(
                f"Oracle reported invalid price {answer!r} (round {price_round.round_id})",
                reason="invalid_oracle_price",
            )

        if not _is_int(feed_decimals) or feed_decimals < 0:
            raise PricingError(
                f"Oracle decimals {feed_decimals!r} must be a non-negative integer",
                reason="oracle_decimals_invalid",
            )

        if feed_decimals > PRICE_DECIMALS:
            raise PricingError(
                f"Oracle decimals {feed_decimals} exceed {PRICE_DECIMALS}",
                reason="oracle_decimals_too_high",
            )

        return normalize_to_decimals(answer, feed_decimals, PRICE_DECIMALS)

    def quote_native(self, paid_amount: int, phase: Phase) -> TokenQuote:
        """
        Токены за оплату нативным активом (18 decimals) по цене oracle.

        Raises:
            PricingError: проблемы oracle, некорректная сумма или ноль токенов
        """
        _check_paid_amount(paid_amount)
        unit_price = self.latest_price()

        usd_value = mul_div_floor(paid_amount, unit_price, PRICE_SCALE)
        tokens = mul_div_floor(usd_value, ONE_USD, phase.price_denominator)
        logger.debug(
            "Oracle quote: paid=%s unit_price=%s usd_value=%s denominator=%s tokens=%s",
            paid_amount, unit_price, usd_value, phase.price_denominator, tokens,
        )
        _check_tokens(tokens)

        return TokenQuote(
            tokens=tokens,
            payment_asset=self.config.native_asset,
            paid_amount=paid_amount,
            price_denominator=phase.price_denominator,
            unit_price=unit_price,
            usd_value=usd_value,
        )


def _check_paid_amount(paid_amount: int) -> None:
    if not _is_int(paid_amount) or paid_amount < 0:
        raise PricingError(
            f"Paid amount must be a non-negative integer, got {paid_amount!r}",
            reason="invalid_payment_amount",
        )


def _check_tokens(tokens: int) -> None:
    if tokens == 0:
        raise PricingError("Payment converts to zero tokens", reason="zero_token_amount")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
