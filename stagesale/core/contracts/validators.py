"""
JSON Schema Contract Validators

Модуль для валидации конфигурационных документов продажи согласно
формальному JSON Schema контракту. Использует библиотеку jsonschema.

Схемы:
- sale_config.json (конфигурация продажи)

Порядок загрузки конфигурации:
1. JSON документ → валидация против schema (структура, типы, границы)
2. dict → SaleConfig (pydantic: инварианты модели, open_time < close_time)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from stagesale.core.domain.sale_config import SaleConfig

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются внутри пакета, в schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'sale_config')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class SaleConfigValidator(ContractValidator):
    """Валидатор для sale_config контракта."""

    def __init__(self):
        super().__init__("sale_config")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_sale_config(data: Dict[str, Any]) -> None:
    """
    Валидация sale_config документа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SaleConfigValidator().validate(data)


def load_sale_config(source: str | Path | Dict[str, Any]) -> SaleConfig:
    """
    Загрузка конфигурации продажи из JSON файла или dict.

    Args:
        source: Путь к JSON документу или уже разобранный dict

    Returns:
        Immutable SaleConfig

    Raises:
        ValidationError: Документ нарушает sale_config контракт
        ConfigurationError: open_time не раньше close_time
    """
    if isinstance(source, dict):
        data = source
    else:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)

    validate_sale_config(data)
    config = SaleConfig.model_validate(data)

    if not config.phases_monotonic:
        logger.warning(
            "Phase table is not monotonic (limits=%s, end_times=%s); "
            "some phases may be unreachable or skipped",
            [p.total_sold_limit for p in config.phases],
            [p.end_time for p in config.phases],
        )

    return config


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "SaleConfigValidator",
    "ValidationError",
    "validate_sale_config",
    "load_sale_config",
]
