from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError
from .model.adapter import DEFAULT_MODEL
from .session.state import DEFAULT_COPY_FEEDBACK_SECONDS

CONFIG_PATH_ENV = "CAPTIONCRAFT_CONFIG"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"


@dataclass
class ModelConfig:
    name: str = DEFAULT_MODEL
    api_key_env: str = DEFAULT_API_KEY_ENV


@dataclass
class UIConfig:
    copy_feedback_seconds: float = DEFAULT_COPY_FEEDBACK_SECONDS


@dataclass
class LoggingConfig:
    level: str = "INFO"
    logfile: Path | None = None


@dataclass
class AppConfig:
    model: ModelConfig = field(default_factory=ModelConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api_key: str | None = field(default=None, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppConfig":
        model_data = _nested_mapping(data, "model")
        ui_data = _nested_mapping(data, "ui")
        logging_data = _nested_mapping(data, "logging")

        model = ModelConfig(
            name=_optional_str(model_data.get("name")) or DEFAULT_MODEL,
            api_key_env=_optional_str(model_data.get("api_key_env")) or DEFAULT_API_KEY_ENV,
        )

        try:
            feedback = float(ui_data.get("copy_feedback_seconds", DEFAULT_COPY_FEEDBACK_SECONDS))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("ui.copy_feedback_seconds must be a number") from exc
        if feedback <= 0:
            raise ConfigurationError("ui.copy_feedback_seconds must be positive")

        logging_cfg = LoggingConfig(
            level=_optional_str(logging_data.get("level")) or "INFO",
            logfile=_optional_path(logging_data.get("logfile")),
        )
        return cls(model=model, ui=UIConfig(copy_feedback_seconds=feedback), logging=logging_cfg)

    def with_api_key(self, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Return a copy carrying the credential named by ``model.api_key_env``."""

        return replace(self, api_key=require_env(self.model.api_key_env, environ))


def require_env(var: str, environ: Optional[Mapping[str, str]] = None) -> str:
    source = os.environ if environ is None else environ
    value = (source.get(var) or "").strip()
    if not value:
        raise ConfigurationError(f"Environment variable {var} is required")
    return value


def load_config(path: Path) -> AppConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration file {path}") from exc
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid configuration file {path}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must contain a mapping at the top level")
    return AppConfig.from_dict(data)


def load_settings(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    dotenv: bool = True,
) -> AppConfig:
    """Load configuration and resolve the API credential, failing fast when absent."""

    if dotenv:
        load_dotenv(override=False)
    source = os.environ if environ is None else environ
    if path is None:
        configured = _optional_str(source.get(CONFIG_PATH_ENV))
        path = Path(configured) if configured else None
    config = load_config(path) if path is not None else AppConfig()
    return config.with_api_key(source)


def _nested_mapping(source: Any, key: str) -> Dict[str, Any]:
    if not isinstance(source, Mapping):
        return {}
    value = source.get(key, {})
    return dict(value) if isinstance(value, Mapping) else {}


def _optional_path(value: Any) -> Path | None:
    if value in (None, "", False):
        return None
    return Path(str(value))


def _optional_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


__all__ = [
    "AppConfig",
    "LoggingConfig",
    "ModelConfig",
    "UIConfig",
    "load_config",
    "load_settings",
    "require_env",
]
