from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import FixedValues, ManifestConfig, SenderConfig

"""Config loader.

Responsibilities:
- Load YAML config (default: config/manifest.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every missing key
- Apply environment overrides (MANIFEST_SOURCE_DIR / MANIFEST_OUTPUT_DIR)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/manifest.yml")

ENV_SOURCE_DIR = "MANIFEST_SOURCE_DIR"
ENV_OUTPUT_DIR = "MANIFEST_OUTPUT_DIR"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or the config
            violates the schema (unknown keys, wrong types, ...)
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


def _apply_env_overrides(cfg: dict[str, Any]) -> None:
    source = os.getenv(ENV_SOURCE_DIR)
    if source:
        cfg["source_directory"] = source
    output = os.getenv(ENV_OUTPUT_DIR)
    if output:
        cfg["output_directory"] = output


def config_from_dict(data: dict[str, Any]) -> ManifestConfig:
    """Build a ManifestConfig from already validated data (missing keys -> defaults)."""
    defaults = ManifestConfig()
    sender_raw = data.get("sender") or {}
    fixed_raw = data.get("fixed_values") or {}
    return ManifestConfig(
        source_directory=data.get("source_directory", defaults.source_directory),
        output_directory=data.get("output_directory", defaults.output_directory),
        log_directory=data.get("log_directory", defaults.log_directory),
        filename_prefix=data.get("filename_prefix", defaults.filename_prefix),
        filename_extension=data.get("filename_extension", defaults.filename_extension),
        sender=SenderConfig(**sender_raw),
        fixed_values=FixedValues(**fixed_raw),
        product_column=data.get("product_column", defaults.product_column),
        quantity_column=data.get("quantity_column", defaults.quantity_column),
        header_scan_limit=data.get("header_scan_limit", defaults.header_scan_limit),
        min_phone_digits=data.get("min_phone_digits", defaults.min_phone_digits),
    )


def load_config(path: Path | None = None) -> ManifestConfig:
    """Load configuration.

    ``path=None`` means the default location; when that file does not exist
    built-in defaults are used. An explicitly given path must exist.
    """
    explicit = path is not None
    path = path if path is not None else DEFAULT_CONFIG_PATH

    data: dict[str, Any] = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid yaml: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"config root must be a mapping: {path}")
        _validate_config_schema(data)
    elif explicit:
        raise ConfigError(f"config file not found: {path}")

    _apply_env_overrides(data)
    return config_from_dict(data)
