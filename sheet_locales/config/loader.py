from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from sheet_locales.config.presets import get_preset
from sheet_locales.models.column_mapping import ColumnMapping
from sheet_locales.models.locale_document import DEFAULT_LOCALE_FIELD

"""Config loader.

Responsibilities:
- Load YAML config (default config/locales.yml)
- Validate against the bundled JSON schema (unknown keys rejected)
- Merge preset values with explicit keys (explicit keys win)
- Build the closed ColumnMapping and check the key column is not mapped
"""

__all__ = [
    "ConfigError",
    "PipelineConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "build_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/locales.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class PipelineConfig:
    """Per-deployment settings for one conversion run."""
    source_file: Path
    column_mapping: ColumnMapping
    key_column: int = 0
    skip_rows: int = 0
    output_directory: Path = Path("public/locales")
    delimiter: str = ","
    quotechar: str = '"'
    encoding: str = "utf-8-sig"  # BOM 付き CSV を許容
    sheet_name: str | int = 0  # xlsx 入力時のみ使用
    file_name: str = "translation.json"
    locale_field: str = DEFAULT_LOCALE_FIELD
    max_workers: int = 8
    logs_directory: Path = Path("logs")

    def __post_init__(self) -> None:
        if self.key_column < 0:
            raise ValueError(f"key_column must be >= 0: {self.key_column}")
        if self.skip_rows < 0:
            raise ValueError(f"skip_rows must be >= 0: {self.skip_rows}")
        if self.key_column in self.column_mapping:
            raise ValueError(
                f"key_column {self.key_column} is also mapped to locale "
                f"'{self.column_mapping.locale_for(self.key_column)}'"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1: {self.max_workers}")


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (missing required keys, wrong types,
            unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _parse_column_mapping(raw: dict[Any, str]) -> ColumnMapping:
    pairs: dict[int, str] = {}
    for key, locale in raw.items():
        # YAML では "1": en のように文字列キーになる場合もある
        try:
            position = int(key)
        except (TypeError, ValueError):
            raise ConfigError(f"column_mapping key is not a column number: {key!r}") from None
        if position in pairs:
            raise ConfigError(f"column_mapping declares column {position} twice")
        pairs[position] = locale
    try:
        return ColumnMapping(pairs)
    except ValueError as e:
        raise ConfigError(f"column_mapping: {e}") from e


def build_config(data: dict[str, Any]) -> PipelineConfig:
    """Build a PipelineConfig from already parsed config data."""
    _validate_config_schema(data)

    preset = None
    if "preset" in data:
        try:
            preset = get_preset(data["preset"])
        except KeyError as e:
            raise ConfigError(str(e.args[0])) from e

    if "column_mapping" in data:
        mapping = _parse_column_mapping(data["column_mapping"])
    elif preset is not None:
        mapping = preset.column_mapping
    else:
        raise ConfigError("either column_mapping or preset is required")

    skip_rows = data.get("skip_rows", preset.skip_rows if preset else 0)
    key_column = data.get("key_column", preset.key_column if preset else 0)

    optional: dict[str, Any] = {}
    for name in ("delimiter", "quotechar", "encoding", "sheet_name", "file_name", "locale_field", "max_workers"):
        if name in data:
            optional[name] = data[name]
    for name in ("output_directory", "logs_directory"):
        if name in data:
            optional[name] = Path(data[name])

    try:
        return PipelineConfig(
            source_file=Path(data["source_file"]),
            column_mapping=mapping,
            key_column=key_column,
            skip_rows=skip_rows,
            **optional,
        )
    except ValueError as e:
        raise ConfigError(str(e)) from e


def load_config(path: Path) -> PipelineConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return build_config(data)
