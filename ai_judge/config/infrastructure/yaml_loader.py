"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ai_judge.config.domain.config import AppConfig
from ai_judge.config.domain.observer import ConfigObserver
from ai_judge.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from ai_judge.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns an AppConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path | None = None) -> AppConfig:
        """
        Load an AppConfig from path, or return the defaults when path is None.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the document violates the config schema.
        """
        if path is None:
            cfg = AppConfig()
            source = "defaults"
        else:
            document = load_yaml_document(path=path)
            cfg = _build_config(resolved=document)
            source = str(path)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(name=cfg.name, source=source)
        return cfg


def load_yaml_document(path: Path) -> Any:
    """Read a YAML file and return its env-interpolated contents.

    An empty document is returned as an empty mapping.

    Raises:
        ConfigLoadError: if the file is missing or is not valid YAML.
        MissingEnvVarsError: if any ${ENV_VAR} references are unset.
    """
    raw = _parse_yaml(path=path)
    if raw is None:
        return {}
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)
    return interpolate(raw)


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc


def _build_config(resolved: Any) -> AppConfig:
    if not isinstance(resolved, dict):
        raise ConfigValidationError("top-level document must be a mapping")
    try:
        return AppConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(cfg: AppConfig, observer: ConfigObserver) -> None:
    if cfg.oracle.temperature > 0.0:
        observer.config_oracle_temperature_warning(cfg.oracle.temperature)
