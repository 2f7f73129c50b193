"""
Ledger Snapshot Contract

Проверка снапшотов ledger против JSON Schema (Draft 2020-12).

Схема читается и компилируется в Draft202012Validator один раз на процесс;
ReflectToken.snapshot() переиспользует скомпилированный валидатор.

Схемы (src/core/contracts/schema/):
- ledger_snapshot.json
"""

import json
from pathlib import Path
from typing import Any, Dict, Final

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"

LEDGER_SNAPSHOT_SCHEMA: Final[str] = "ledger_snapshot"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Компилирует схемы каталога в валидаторы, по одному на схему.

    Usage:
        loader = SchemaLoader()
        loader.validator("ledger_snapshot").validate(data)
    """

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        if not schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {schema_dir}")

        self._schema_dir = schema_dir
        self._validators: Dict[str, Draft202012Validator] = {}

    def validator(self, schema_name: str) -> Draft202012Validator:
        """
        Скомпилированный валидатор схемы (из кэша после первого вызова).

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        validator = self._validators.get(schema_name)
        if validator is None:
            validator = Draft202012Validator(self._read_schema(schema_name))
            self._validators[schema_name] = validator
        return validator

    def _read_schema(self, schema_name: str) -> Dict[str, Any]:
        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# LEDGER SNAPSHOT
# =============================================================================


def snapshot_validator() -> Draft202012Validator:
    """Общий валидатор ledger_snapshot контракта."""
    return _SCHEMA_LOADER.validator(LEDGER_SNAPSHOT_SCHEMA)


def validate_ledger_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация JSON-представления LedgerSnapshot.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    snapshot_validator().validate(data)
