from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the spreadsheet translator.

Responsibilities:
- Load the optional YAML config (config/translate.yml by convention)
- Validate it against config_schema.json (unknown keys rejected)
- Apply defaults for every key
- Pick backend credentials out of an explicit environment mapping
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/translate.yml")

GOOGLE_EMAIL_VAR = "BLOOM_GOOGLE_TRANSLATION_SERVICE_ACCOUNT_EMAIL"
GOOGLE_PRIVATE_KEY_VAR = "BLOOM_GOOGLE_TRANSLATION_SERVICE_PRIVATE_KEY"
ACTS2_KEY_VAR = "BLOOM_ACTS2_KEY"

DEFAULT_ROW_TYPES = ("[bookTitle]", "[page content]", "[page description]")


class ConfigurationError(Exception):
    """Fatal misconfiguration: missing source column, credentials, files."""


@dataclass(frozen=True)
class BackendCredentials:
    google_service_account_email: str | None = None
    google_private_key: str | None = None
    acts2_key: str | None = None


@dataclass(frozen=True)
class GoogleSettings:
    batch_size: int = 100


@dataclass(frozen=True)
class Acts2Settings:
    base_url: str = "https://acts2.multilingualai.com/api/v2/text_collections"
    poll_interval_seconds: float = 5.0
    max_poll_attempts: int = 30
    request_timeout_seconds: float = 60.0


@dataclass(frozen=True)
class TranslateConfig:
    source_language: str = "en"
    sheet_name: str = "BloomBook"
    row_type_column: str = "[row type]"
    translatable_row_types: tuple[str, ...] = DEFAULT_ROW_TYPES
    logs_directory: str = "./logs"
    google: GoogleSettings = field(default_factory=GoogleSettings)
    acts2: Acts2Settings = field(default_factory=Acts2Settings)
    credentials: BackendCredentials = field(default_factory=BackendCredentials)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigurationError: when the schema file is missing or unreadable, or when the
            data violates it (wrong types, unknown keys, out of range values).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigurationError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"config validation failed: {e.message}") from e


def credentials_from_env(environ: Mapping[str, str]) -> BackendCredentials:
    # 空文字は未設定扱い
    return BackendCredentials(
        google_service_account_email=environ.get(GOOGLE_EMAIL_VAR) or None,
        google_private_key=environ.get(GOOGLE_PRIVATE_KEY_VAR) or None,
        acts2_key=environ.get(ACTS2_KEY_VAR) or None,
    )


def load_config(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> TranslateConfig:
    """Build a TranslateConfig from an optional YAML file and an env mapping.

    path=None means built-in defaults. environ=None reads os.environ; tests pass
    a plain dict so nothing touches the real process environment.
    """
    data: dict[str, Any] = {}
    if path is not None:
        if not path.exists():
            raise ConfigurationError(f"config file not found: {path}")
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid yaml: {e}") from e
        _validate_config_schema(data)

    env = os.environ if environ is None else environ
    defaults = TranslateConfig()

    google_raw = data.get("google", {})
    acts2_raw = data.get("acts2", {})
    row_types = data.get("translatable_row_types")
    return TranslateConfig(
        source_language=data.get("source_language", defaults.source_language),
        sheet_name=data.get("sheet_name", defaults.sheet_name),
        row_type_column=data.get("row_type_column", defaults.row_type_column),
        translatable_row_types=(
            tuple(row_types) if row_types is not None else defaults.translatable_row_types
        ),
        logs_directory=data.get("logs_directory", defaults.logs_directory),
        google=GoogleSettings(
            batch_size=google_raw.get("batch_size", defaults.google.batch_size),
        ),
        acts2=Acts2Settings(
            base_url=acts2_raw.get("base_url", defaults.acts2.base_url).rstrip("/"),
            poll_interval_seconds=acts2_raw.get(
                "poll_interval_seconds", defaults.acts2.poll_interval_seconds
            ),
            max_poll_attempts=acts2_raw.get("max_poll_attempts", defaults.acts2.max_poll_attempts),
            request_timeout_seconds=acts2_raw.get(
                "request_timeout_seconds", defaults.acts2.request_timeout_seconds
            ),
        ),
        credentials=credentials_from_env(env),
    )
