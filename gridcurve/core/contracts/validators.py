"""
Curve Contracts — JSON Schema проверка конфигураций и snapshot кривых

Контракты (gridcurve/core/contracts/schema/):
- curve_config — декларативное описание кривой (стратегии + grid points)
- curve_snapshot — info output кривой (CurveSnapshot.model_dump(mode="json"))

Конфигурация из внешнего источника (dict/JSON) сначала проверяется
схемой, затем разбирается pydantic моделью CurveConfig.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from gridcurve.core.domain.snapshot import CurveSnapshot

log = logging.getLogger(__name__)

CURVE_CONFIG = "curve_config"
CURVE_SNAPSHOT = "curve_snapshot"
CONTRACT_NAMES: Tuple[str, ...] = (CURVE_CONFIG, CURVE_SNAPSHOT)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик схем контрактов кривых.

    Каждая схема проходит meta-validation (Draft 2020-12) один раз
    и затем отдаётся из кэша.

    Args:
        schema_dir: Каталог со схемами (default: schema/ рядом с модулем)

    Raises:
        RuntimeError: Если каталог не существует
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, contract: str) -> Dict[str, Any]:
        """
        Схема контракта по имени (без расширения .json).

        Raises:
            FileNotFoundError: Нет файла схемы
            ValueError: Файл не является валидной JSON Schema
        """
        cached = self._schemas.get(contract)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{contract}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"No schema for contract '{contract}': {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {contract}.json: {e.message}") from e

        log.debug(f"Loaded contract schema {contract} from {schema_path}")
        self._schemas[contract] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Проверка документа против схемы одного контракта.

    validate() поднимает первую ошибку jsonschema; error_report() собирает
    все нарушения в виде "<json path>: <message>" для диагностики конфигураций.
    """

    def __init__(self, contract: str, loader: SchemaLoader | None = None):
        self.contract = contract
        self.schema = (loader or _SCHEMA_LOADER).load_schema(contract)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Документ нарушает контракт
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)

    def error_report(self, data: Dict[str, Any]) -> List[str]:
        """Все нарушения контракта, упорядоченные по пути в документе."""
        errors = sorted(self.validator.iter_errors(data), key=lambda e: e.json_path)
        return [f"{error.json_path}: {error.message}" for error in errors]


class CurveConfigValidator(ContractValidator):
    """Контракт curve_config: стратегии, параметры сплайна, grid points."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__(CURVE_CONFIG, loader)


class CurveSnapshotValidator(ContractValidator):
    """Контракт curve_snapshot: info output кривой и её трёх Fitter."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__(CURVE_SNAPSHOT, loader)

    def validate_snapshot(self, snapshot: CurveSnapshot) -> None:
        self.validate(snapshot.model_dump(mode="json"))


_VALIDATORS: Dict[str, ContractValidator] = {}


def _validator(contract: str) -> ContractValidator:
    validator = _VALIDATORS.get(contract)
    if validator is None:
        validator = CurveConfigValidator() if contract == CURVE_CONFIG else CurveSnapshotValidator()
        _VALIDATORS[contract] = validator
    return validator


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_curve_config(data: Dict[str, Any]) -> None:
    """
    Проверка dict конфигурации кривой перед CurveConfig.model_validate().

    Raises:
        ValidationError: Конфигурация нарушает curve_config
    """
    _validator(CURVE_CONFIG).validate(data)


def validate_curve_snapshot(data: Union[CurveSnapshot, Dict[str, Any]]) -> None:
    """
    Проверка snapshot кривой (модель или её JSON dump).

    Raises:
        ValidationError: Snapshot нарушает curve_snapshot
    """
    if isinstance(data, CurveSnapshot):
        data = data.model_dump(mode="json")
    _validator(CURVE_SNAPSHOT).validate(data)
