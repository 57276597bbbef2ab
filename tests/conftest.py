"""Общие fixtures: типовая конфигурация продажи и коллабораторы.

Таблица фаз (price_denominator - USD c 6 decimals):
- фаза 0: limit 100_000, $0.05, end 2000
- фаза 1: limit 300_000, $0.10, end 3000
- фаза 2: limit 1_000_000, $0.20, end 4000

Окно продажи [1000, 5000], global cap 1_000_000.
DAI (18 decimals): 1 единица DAI в фазе 0 = 20 токенов.
Oracle: $2000 (8 decimals); 1 единица нативного актива в фазе 0 = 40_000 токенов.
"""

import pytest

from stagesale.core.domain import PaymentAsset, Phase, SaleConfig, SaleState
from stagesale.interfaces import (
    EventLog,
    InMemoryTransfer,
    SingleOwnerAccessControl,
    StaticPriceOracle,
)
from stagesale.sale import StagedSale

OWNER = "owner"
OPEN_TIME = 1000
CLOSE_TIME = 5000


def config_data(**overrides) -> dict:
    data = {
        "sold_asset": "STG",
        "payment_assets": [
            {"asset_id": "USDC", "decimals": 6},
            {"asset_id": "DAI", "decimals": 18},
        ],
        "native_asset": "ETH",
        "oracle": "eth-usd-feed",
        "destination": "treasury",
        "global_cap": 1_000_000,
        "phases": [
            {"total_sold_limit": 100_000, "price_denominator": 50_000, "end_time": 2000},
            {"total_sold_limit": 300_000, "price_denominator": 100_000, "end_time": 3000},
            {"total_sold_limit": 1_000_000, "price_denominator": 200_000, "end_time": 4000},
        ],
        "open_time": OPEN_TIME,
        "close_time": CLOSE_TIME,
    }
    data.update(overrides)
    return data


def make_config(**overrides) -> SaleConfig:
    return SaleConfig.model_validate(config_data(**overrides))


@pytest.fixture
def config() -> SaleConfig:
    return make_config()


@pytest.fixture
def state() -> SaleState:
    return SaleState()


@pytest.fixture
def oracle() -> StaticPriceOracle:
    return StaticPriceOracle(answer=2000_00000000, decimals=8, updated_at=OPEN_TIME)


@pytest.fixture
def transfer() -> InMemoryTransfer:
    return InMemoryTransfer()


@pytest.fixture
def events() -> EventLog:
    return EventLog()


@pytest.fixture
def sale(config, oracle, transfer, events) -> StagedSale:
    return StagedSale(
        config=config,
        oracle=oracle,
        transfer=transfer,
        access_control=SingleOwnerAccessControl(OWNER),
        sink=events,
    )
