"""Configuration management for readsieve."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional, Any

import yaml

from readsieve.constants import (
    DEFAULT_ALIGNER_THREADS,
    DEFAULT_HEADCROP,
    DEFAULT_MAX_LENGTH,
    DEFAULT_MIN_LENGTH,
    DEFAULT_MIN_QUALITY,
    DEFAULT_TAILCROP,
    DEFAULT_THREADS,
    PHRED_OFFSET,
)
from readsieve.exceptions import ConfigurationError

_INT_FIELDS = (
    "minlength",
    "maxlength",
    "headcrop",
    "tailcrop",
    "threads",
    "aligner_threads",
    "phred_offset",
)
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class FilterConfig:
    """Filter settings, created once at startup and shared read-only."""

    minqual: float = DEFAULT_MIN_QUALITY
    minlength: int = DEFAULT_MIN_LENGTH
    maxlength: int = DEFAULT_MAX_LENGTH
    headcrop: int = DEFAULT_HEADCROP
    tailcrop: int = DEFAULT_TAILCROP
    threads: int = DEFAULT_THREADS
    contam: Optional[Path] = None
    phred_offset: int = PHRED_OFFSET
    aligner_threads: int = DEFAULT_ALIGNER_THREADS

    @property
    def screening(self) -> bool:
        """True when a contamination reference is configured."""
        return self.contam is not None

    def with_overrides(self, **overrides: Any) -> "FilterConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "contam" in changes:
            changes["contam"] = Path(changes["contam"])
        return replace(self, **changes)

    def validate(self) -> None:
        """Validate configuration."""
        if isinstance(self.minqual, bool) or not isinstance(self.minqual, (int, float)):
            raise ConfigurationError(f"minqual must be a number, got {self.minqual!r}")
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.minlength < 1:
            raise ConfigurationError("minlength must be >= 1")
        if self.maxlength < self.minlength:
            raise ConfigurationError(
                f"maxlength ({self.maxlength}) must be >= minlength ({self.minlength})"
            )
        if self.headcrop < 0 or self.tailcrop < 0:
            raise ConfigurationError("headcrop and tailcrop must be >= 0")
        if self.threads < 1:
            raise ConfigurationError("Threads must be >= 1")
        if self.aligner_threads < 1:
            raise ConfigurationError("aligner_threads must be >= 1")
        if self.phred_offset < 0:
            raise ConfigurationError("phred_offset must be >= 0")
        if self.contam is not None and not Path(self.contam).is_file():
            raise ConfigurationError(f"Input file {self.contam} is invalid")


@dataclass
class RuntimeConfig:
    """Runtime configuration."""

    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    def validate(self) -> None:
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")


@dataclass
class Config:
    """Main configuration class."""

    filter: FilterConfig = field(default_factory=FilterConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    def validate(self) -> None:
        self.filter.validate()
        self.runtime.validate()


_FILTER_KEYS = {f.name for f in fields(FilterConfig)}
_RUNTIME_KEYS = {f.name for f in fields(RuntimeConfig)}


def load_config(path: Path) -> Config:
    """Load configuration from YAML file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    unknown = set(data) - {"filter", "runtime"}
    if unknown:
        raise ConfigurationError(
            "Unsupported config option(s): " + ", ".join(sorted(unknown))
        )

    filter_data = data.get("filter") or {}
    runtime_data = data.get("runtime") or {}
    for section, values in (("filter", filter_data), ("runtime", runtime_data)):
        if not isinstance(values, dict):
            raise ConfigurationError(f"Config section '{section}' in {path} must be a mapping")

    bad_filter = set(filter_data) - _FILTER_KEYS
    bad_runtime = set(runtime_data) - _RUNTIME_KEYS
    if bad_filter or bad_runtime:
        bad = [f"filter.{k}" for k in bad_filter] + [f"runtime.{k}" for k in bad_runtime]
        raise ConfigurationError("Unsupported config option(s): " + ", ".join(sorted(bad)))

    filter_data = _as_path(filter_data, "filter", "contam")
    runtime_data = _as_path(runtime_data, "runtime", "log_file")

    cfg = Config(filter=FilterConfig(**filter_data), runtime=RuntimeConfig(**runtime_data))
    # Filter values are checked once CLI overrides are applied
    cfg.runtime.validate()
    return cfg


def _as_path(section: dict, section_name: str, key: str) -> dict:
    value = section.get(key)
    if value is None:
        return section
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"{section_name}.{key} must be a path, got {value!r}")
    return {**section, key: Path(value)}
