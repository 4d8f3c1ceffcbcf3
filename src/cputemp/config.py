"""
Configuration Module

This module loads the session configuration from a YAML file and applies
command-line overrides.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/cputemp/config.yaml"

DEFAULT_CONFIG = {
    "monitoring": {
        "duration_minutes": 10,
        "interval_seconds": 20
    },
    "source": {
        "type": "psutil",
        "ipmi": {
            "host": "localhost",
            "username": "ADMIN",
            "password": "ADMIN",
            "interface": "lanplus"
        }
    },
    "output": {
        "path": None,
        "prompt": True
    }
}


@dataclass
class SessionConfig:
    """Fixed parameters of one monitoring session"""
    monitoring_duration_minutes: float = 10
    sampling_interval_seconds: float = 20
    source: str = "psutil"
    source_options: Dict[str, Any] = field(default_factory=dict)
    output_path: Optional[str] = None
    prompt_for_output: bool = True

    def __post_init__(self):
        for name in ("monitoring_duration_minutes", "sampling_interval_seconds"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError(f"Invalid {name}: {value!r} (must be a positive number)")

    @property
    def total_seconds(self) -> float:
        return self.monitoring_duration_minutes * 60

    @property
    def total_ticks(self) -> int:
        return int(self.total_seconds // self.sampling_interval_seconds)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "SessionConfig":
        """Build a session config from a parsed config file

        Missing sections and keys fall back to DEFAULT_CONFIG.
        """
        if not isinstance(config, dict):
            raise ConfigError("Configuration must be a mapping")

        def section(name: str) -> Dict[str, Any]:
            value = config.get(name) or {}
            if not isinstance(value, dict):
                raise ConfigError(f"Configuration section '{name}' must be a mapping")
            return {**DEFAULT_CONFIG[name], **value}

        monitoring = section("monitoring")
        source = section("source")
        output = section("output")

        return cls(
            monitoring_duration_minutes=monitoring["duration_minutes"],
            sampling_interval_seconds=monitoring["interval_seconds"],
            source=source["type"],
            source_options=source.get("ipmi") or {},
            output_path=output["path"],
            prompt_for_output=bool(output["prompt"])
        )


def load_config(config_path: Optional[str] = None) -> SessionConfig:
    """Load configuration from a YAML file

    Args:
        config_path: Path to configuration file (None for DEFAULT_CONFIG_PATH)

    Returns:
        SessionConfig: Loaded configuration; defaults if the file does not exist

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    path = os.path.expanduser(config_path or DEFAULT_CONFIG_PATH)
    if not os.path.exists(path):
        logger.debug(f"No configuration at {path}, using defaults")
        return SessionConfig.from_dict({})

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load configuration {path}: {e}")

    logger.info(f"Loaded configuration from {path}")
    return SessionConfig.from_dict(data)
