"""Тесты конфигурации продажи: pydantic модели и JSON Schema контракт.

Coverage:
- open_time < close_time (ConfigurationError)
- ровно три фазы и два платёжных актива
- immutability (frozen=True)
- load_sale_config из dict и из JSON файла
- нарушения sale_config контракта
- предупреждение о немонотонной таблице фаз
"""

import json
import logging

import pytest
from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError

from stagesale.core.contracts import SaleConfigValidator, load_sale_config, validate_sale_config
from stagesale.core.domain import Phase, SaleConfig
from stagesale.core.errors import ConfigurationError
from tests.conftest import config_data, make_config


class TestSaleConfigModel:
    """Тесты модели SaleConfig."""

    def test_valid_config(self, config):
        assert config.global_cap == 1_000_000
        assert len(config.phases) == 3
        assert config.phases[0] == Phase(total_sold_limit=100_000, price_denominator=50_000, end_time=2000)

    def test_open_equal_close_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            make_config(open_time=5000, close_time=5000)
        assert exc_info.value.reason == "invalid_sale_window"

    def test_open_after_close_rejected(self):
        with pytest.raises(ConfigurationError):
            make_config(open_time=6000, close_time=5000)

    def test_duplicate_payment_assets_rejected(self):
        with pytest.raises(ConfigurationError):
            make_config(payment_assets=[
                {"asset_id": "DAI", "decimals": 18},
                {"asset_id": "DAI", "decimals": 18},
            ])

    def test_two_phases_rejected(self):
        data = config_data()
        data["phases"] = data["phases"][:2]
        with pytest.raises(ValidationError):
            SaleConfig.model_validate(data)

    def test_zero_cap_rejected(self):
        with pytest.raises(ValidationError):
            make_config(global_cap=0)

    def test_zero_price_denominator_rejected(self):
        with pytest.raises(ValidationError):
            Phase(total_sold_limit=1, price_denominator=0, end_time=1)

    def test_frozen(self, config):
        with pytest.raises(ValidationError):
            config.global_cap = 5

    def test_payment_asset_lookup(self, config):
        assert config.payment_asset("USDC").decimals == 6
        assert config.payment_asset("WBTC") is None

    def test_native_asset_defaults(self):
        data = config_data()
        del data["native_asset"]
        assert SaleConfig.model_validate(data).native_asset == "native"

    def test_high_decimals_asset_is_configurable(self):
        config = make_config(payment_assets=[
            {"asset_id": "WEIRD", "decimals": 24},
            {"asset_id": "DAI", "decimals": 18},
        ])
        assert config.payment_asset("WEIRD").decimals == 24

    def test_phases_monotonic(self, config):
        assert config.phases_monotonic

    def test_inverted_limits_not_monotonic(self):
        data = config_data()
        data["phases"][1]["total_sold_limit"] = 50_000
        assert not SaleConfig.model_validate(data).phases_monotonic


class TestSaleConfigContract:
    """Тесты JSON Schema контракта sale_config."""

    def test_schema_accepts_valid_document(self):
        validate_sale_config(config_data())
        assert SaleConfigValidator().is_valid(config_data())

    def test_missing_required_field(self):
        data = config_data()
        del data["oracle"]
        with pytest.raises(SchemaValidationError):
            validate_sale_config(data)

    def test_unknown_field_rejected(self):
        with pytest.raises(SchemaValidationError):
            validate_sale_config(config_data(referral_bonus=5))

    def test_string_cap_rejected(self):
        with pytest.raises(SchemaValidationError):
            validate_sale_config(config_data(global_cap="1000000"))

    def test_four_phases_rejected(self):
        data = config_data()
        data["phases"].append(dict(data["phases"][-1]))
        errors = list(SaleConfigValidator().iter_errors(data))
        assert errors

    def test_load_from_dict(self):
        config = load_sale_config(config_data())
        assert isinstance(config, SaleConfig)
        assert config.destination == "treasury"

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "sale.json"
        path.write_text(json.dumps(config_data()), encoding="utf-8")

        config = load_sale_config(path)

        assert config.close_time == 5000
        assert config.payment_asset("DAI").decimals == 18

    def test_load_rejects_inverted_window(self):
        with pytest.raises(ConfigurationError):
            load_sale_config(config_data(open_time=5000, close_time=1000))

    def test_load_warns_on_non_monotonic_phases(self, caplog):
        data = config_data()
        data["phases"][2]["end_time"] = 1500

        with caplog.at_level(logging.WARNING, logger="stagesale.core.contracts.validators"):
            load_sale_config(data)

        assert "not monotonic" in caplog.text
