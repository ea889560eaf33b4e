"""
Configuration for the last-touch attribution pipeline.

Defaults match the file names the pipeline has always read and written in
the working directory. Environment variables override the defaults, and CLI
flags override both.
"""

import os
from dataclasses import dataclass, fields
from typing import Optional

from .schema import TIMESTAMP_FORMAT


ENV_OVERRIDES = {
    "exposures_path": "ATTRIBUTION_EXPOSURES_PATH",
    "sales_path": "ATTRIBUTION_SALES_PATH",
    "output_path": "ATTRIBUTION_OUTPUT_PATH",
    "sort_dimensions": "ATTRIBUTION_SORT_DIMENSIONS",
    "include_unattributed": "ATTRIBUTION_INCLUDE_UNATTRIBUTED",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _to_level(value: str) -> str:
    level = value.strip().upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"not a log level: {value!r}")
    return level


def _to_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass
class PipelineConfig:
    """Main configuration for the attribution pipeline."""

    # === Inputs ===
    exposures_path: str = "ad_exposures.csv"
    sales_path: str = "sales_data.csv"
    timestamp_format: str = TIMESTAMP_FORMAT

    # === Output ===
    output_path: str = "summary.csv"
    sort_dimensions: bool = True        # False keeps first-attribution order
    include_unattributed: bool = False  # Append an "unattributed" row

    # === Logging ===
    log_level: str = "INFO"
    log_file: Optional[str] = None      # Also log to this file when set

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            k: v for k, v in self.__dict__.items()
            if not k.startswith('_')
        }

    @classmethod
    def from_env(cls, environ=None) -> "PipelineConfig":
        """
        Build a config from defaults overridden by environment variables.

        Values that fail to convert keep the default.
        """
        environ = os.environ if environ is None else environ
        config = cls()
        types = {f.name: f.type for f in fields(cls)}

        for attr, env_var in ENV_OVERRIDES.items():
            value = environ.get(env_var)
            if value is None:
                continue
            if attr == "log_level":
                converter = _to_level
            elif types[attr] is bool:
                converter = _to_bool
            else:
                converter = str
            try:
                setattr(config, attr, converter(value))
            except ValueError:
                pass

        return config


def default_config() -> PipelineConfig:
    """Get default configuration."""
    return PipelineConfig()
