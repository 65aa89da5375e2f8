# uiauto_elements/config.py
"""
@file config.py
@brief Centralized wait timeout configuration for matcher polling.
"""

from __future__ import annotations

import json
import os
import threading
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, Generator, Optional

import yaml
from jsonschema import Draft202012Validator

from .exceptions import ConfigError
from .timings import TIMEOUT_FIELDS, build_preset_values, list_presets

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schemas", "timings.schema.json")


@dataclass
class TimeoutSettings:
    """Timeout and polling interval for one kind of wait."""
    timeout: float
    interval: float

    def with_overrides(
        self,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
    ) -> TimeoutSettings:
        """Create a new settings instance with overrides applied."""
        return TimeoutSettings(
            timeout=float(timeout) if timeout is not None else self.timeout,
            interval=float(interval) if interval is not None else self.interval,
        )


class TimeConfig:
    """
    Wait configuration for the framework.

    Deterministic precedence is applied per run:
      base defaults -> preset -> overrides (code or YAML file)
    """

    _default_instance: Optional[TimeConfig] = None
    _default_preset: str = "default"
    _local = threading.local()
    _lock = threading.Lock()

    element_wait: TimeoutSettings
    collection_wait: TimeoutSettings

    def __init__(self, preset: Optional[str] = None):
        preset_name = preset or self._default_preset
        self._apply_values(build_preset_values(preset_name))

    @classmethod
    def _timeout_fields(cls) -> Dict[str, Dict[str, Any]]:
        return TIMEOUT_FIELDS

    def _apply_values(self, values: Dict[str, Any]) -> None:
        for name in self._timeout_fields():
            val = values.get(name)
            if isinstance(val, TimeoutSettings):
                setting = deepcopy(val)
            elif isinstance(val, dict):
                setting = TimeoutSettings(
                    timeout=float(val["timeout"]),
                    interval=float(val["interval"]),
                )
            else:
                raise ValueError(f"Invalid timeout setting for {name}: {val}")
            _check_setting(name, setting)
            setattr(self, name, setting)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for name in self._timeout_fields():
            setting: TimeoutSettings = getattr(self, name)
            data[name] = {"timeout": setting.timeout, "interval": setting.interval}
        return data

    def clone(self) -> TimeConfig:
        """Return a deep clone of this config."""
        clone = TimeConfig()
        clone._apply_values(self.to_dict())
        return clone

    def settings_for(self, name: str) -> TimeoutSettings:
        """Get settings for a wait kind ("element_wait", "collection_wait")."""
        if name not in self._timeout_fields():
            raise ValueError(f"Unknown TimeConfig field: {name}")
        return getattr(self, name)

    @classmethod
    def build_from(
        cls,
        *,
        preset: str = "default",
        overrides: Optional[Dict[str, Any]] = None,
    ) -> TimeConfig:
        """Build a deterministic run-scope config snapshot."""
        cfg = cls(preset)
        if overrides:
            _apply_overrides(cfg, overrides)
        return cfg

    @classmethod
    def from_yaml(cls, path: str) -> TimeConfig:
        """
        Build a config from a YAML file.

        The file is a mapping with an optional 'preset' name and optional
        'overrides' of per-wait settings:

            preset: ci
            overrides:
              element_wait: {timeout: 3, interval: 0.05}

        @param path Path to the YAML file
        @return New TimeConfig (not installed)
        @throws ConfigError if the file is missing, malformed or invalid
        """
        path = os.path.abspath(path)
        if not os.path.exists(path):
            raise ConfigError(f"Timing config YAML not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Timing config YAML must be a mapping at root.")

        errors = sorted(_validator().iter_errors(data), key=lambda e: list(e.path))
        if errors:
            lines = [f"  - {'/'.join(str(p) for p in e.path) or '<root>'}: {e.message}" for e in errors]
            raise ConfigError(f"Timing config {path} is invalid:\n" + "\n".join(lines))

        try:
            return cls.build_from(
                preset=data.get("preset", "default"),
                overrides=data.get("overrides"),
            )
        except ValueError as e:
            raise ConfigError(f"Timing config {path} is invalid: {e}") from e

    @classmethod
    def load(cls, path: str) -> TimeConfig:
        """Load a YAML config and install it as the current run config."""
        config = cls.from_yaml(path)
        cls.install_run_config(config)
        return config

    @classmethod
    def default(cls) -> TimeConfig:
        """Get the immutable process default configuration (singleton)."""
        if cls._default_instance is None:
            with cls._lock:
                if cls._default_instance is None:
                    cls._default_instance = cls(cls._default_preset)
        return cls._default_instance

    @classmethod
    def install_run_config(cls, config: TimeConfig) -> None:
        """Install per-thread run configuration snapshot."""
        cls._local.run_config = config

    @classmethod
    def clear_run_config(cls) -> None:
        """Clear per-thread run configuration snapshot."""
        cls._local.run_config = None

    @classmethod
    def current(cls) -> TimeConfig:
        """Get the current effective configuration."""
        override = getattr(cls._local, "override", None)
        if override is not None:
            return override

        run_cfg = getattr(cls._local, "run_config", None)
        if run_cfg is not None:
            return run_cfg

        return cls.default()

    @classmethod
    def apply_preset(cls, preset: str) -> None:
        """Apply a preset to the current run-scope config."""
        config = cls.current().clone()
        config._apply_values(build_preset_values(preset))
        cls.install_run_config(config)

    @classmethod
    def apply_overrides(cls, overrides: Dict[str, Any]) -> None:
        """Apply overrides to the current run-scope config."""
        config = cls.current().clone()
        _apply_overrides(config, overrides)
        cls.install_run_config(config)

    @classmethod
    @contextmanager
    def override(cls, **kwargs: Any) -> Generator[TimeConfig, None, None]:
        """Context manager for temporary configuration overrides."""
        previous = getattr(cls._local, "override", None)
        new_config = cls.current().clone()
        _apply_overrides(new_config, kwargs)

        cls._local.override = new_config
        try:
            yield new_config
        finally:
            cls._local.override = previous

    @classmethod
    def reset_to_defaults(cls) -> None:
        """Reset default and clear all thread-local config state."""
        with cls._lock:
            cls._default_preset = "default"
            cls._default_instance = cls(cls._default_preset)
        cls._local.override = None
        cls._local.run_config = None


def _check_setting(name: str, setting: TimeoutSettings) -> None:
    if setting.timeout < 0:
        raise ValueError(f"{name}.timeout must be >= 0, got {setting.timeout}")
    if setting.interval <= 0:
        raise ValueError(f"{name}.interval must be > 0, got {setting.interval}")


def _apply_overrides(config: TimeConfig, overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if key not in config._timeout_fields():
            raise ValueError(f"Unknown TimeConfig field: {key}")
        base_setting: TimeoutSettings = getattr(config, key)
        if isinstance(value, TimeoutSettings):
            new_setting = deepcopy(value)
        elif isinstance(value, dict):
            new_setting = base_setting.with_overrides(
                timeout=value.get("timeout"),
                interval=value.get("interval"),
            )
        elif isinstance(value, (int, float)):
            new_setting = base_setting.with_overrides(timeout=value)
        else:
            raise ValueError(f"Invalid override for {key}: {value}")
        _check_setting(key, new_setting)
        setattr(config, key, new_setting)


_VALIDATOR: Optional[Draft202012Validator] = None


def _validator() -> Draft202012Validator:
    global _VALIDATOR
    if _VALIDATOR is None:
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            _VALIDATOR = Draft202012Validator(json.load(f))
    return _VALIDATOR


def configure_for_ci() -> None:
    """Configure waits for CI/CD environments (run scope)."""
    TimeConfig.apply_preset("ci")


def configure_for_local_dev() -> None:
    """Configure waits for local development (run scope)."""
    TimeConfig.apply_preset("fast")


def configure_for_slow() -> None:
    """Configure waits for slow environments (run scope)."""
    TimeConfig.apply_preset("slow")


def available_presets() -> Dict[str, Dict[str, Any]]:
    return list_presets()
