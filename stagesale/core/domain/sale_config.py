"""
SaleConfig - неизменяемые параметры продажи

Immutable Pydantic модель, фиксируемая при создании продажи:
- продаваемый актив, два fixed-rate платёжных актива, нативный актив
- ссылка на oracle, адрес получателя платежей
- global cap, таблица из трёх фаз, окно open/close

Инвариант: open_time строго раньше close_time. Нарушение делает продажу
неконструируемой (ConfigurationError).
"""

from pydantic import BaseModel, Field, model_validator

from stagesale.core.domain.phase import Phase, phases_monotonic
from stagesale.core.errors import ConfigurationError


class PaymentAsset(BaseModel):
    """Fixed-rate платёжный актив (stablecoin) с известной точностью."""

    asset_id: str = Field(..., min_length=1, description="Идентификатор актива")
    decimals: int = Field(..., ge=0, description="Точность актива (decimals)")

    model_config = {"frozen": True}


class SaleConfig(BaseModel):
    """
    Конфигурация продажи.

    decimals платёжного актива здесь не ограничивается сверху: актив с
    decimals > 18 конфигурируем, но любая покупка через него отклоняется
    PricingError.
    """

    sold_asset: str = Field(..., min_length=1, description="Продаваемый актив")
    payment_assets: tuple[PaymentAsset, PaymentAsset] = Field(
        ..., description="Ровно два fixed-rate платёжных актива"
    )
    native_asset: str = Field(
        default="native", min_length=1, description="Нативный актив (oracle-путь)"
    )
    oracle: str = Field(..., min_length=1, description="Ссылка на price feed нативного актива")
    destination: str = Field(..., min_length=1, description="Получатель собранных платежей")
    global_cap: int = Field(..., gt=0, description="Жёсткий потолок total_sold (единицы токена)")
    phases: tuple[Phase, Phase, Phase] = Field(..., description="Ровно три фазы")
    open_time: int = Field(..., ge=0, description="Unix timestamp открытия продажи")
    close_time: int = Field(..., ge=0, description="Unix timestamp закрытия продажи")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_window(self) -> "SaleConfig":
        if self.open_time >= self.close_time:
            raise ConfigurationError(
                f"open_time ({self.open_time}) must be strictly before "
                f"close_time ({self.close_time})",
                reason="invalid_sale_window",
            )
        if self.payment_assets[0].asset_id == self.payment_assets[1].asset_id:
            raise ConfigurationError(
                f"payment assets must be distinct, got {self.payment_assets[0].asset_id!r} twice",
                reason="duplicate_payment_asset",
            )
        return self

    def payment_asset(self, asset_id: str) -> PaymentAsset | None:
        """Платёжный актив по идентификатору (None если не принимается)."""
        for asset in self.payment_assets:
            if asset.asset_id == asset_id:
                return asset
        return None

    @property
    def phases_monotonic(self) -> bool:
        """True если лимиты и end_time фаз не убывают."""
        return phases_monotonic(self.phases)
