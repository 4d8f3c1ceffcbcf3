"""
Hardware Access Package for cputemp

This package provides the temperature sources the monitor reads from.

Key Components:
- TemperatureSource: open / refresh / list / close contract
- PsutilTemperatureSource: kernel hwmon drivers via psutil
- IPMITemperatureSource: BMC sensors via ipmitool

Example Usage:
    >>> from cputemp.hardware import create_source
    >>>
    >>> with create_source("psutil") as source:
    ...     source.refresh()
    ...     for sensor in source.list_cpu_temperature_sensors():
    ...         print(sensor.describe())
"""

from typing import Any, Dict, Optional

from ..errors import ConfigError
from .source import Sensor, TemperatureSource
from .psutil_source import PsutilTemperatureSource
from .ipmi_source import IPMITemperatureSource

SOURCE_TYPES = ("psutil", "ipmi")


def create_source(source_type: str, options: Optional[Dict[str, Any]] = None) -> TemperatureSource:
    """Create a temperature source by type name

    Args:
        source_type: "psutil" or "ipmi"
        options: Source specific options (the `source.ipmi` config section)

    Raises:
        ConfigError: If the source type is unknown
    """
    if source_type == "psutil":
        return PsutilTemperatureSource()
    if source_type == "ipmi":
        return IPMITemperatureSource.from_config(options)
    raise ConfigError(f"Unknown source type: {source_type} (expected one of: {', '.join(SOURCE_TYPES)})")


__all__ = [
    'Sensor',
    'TemperatureSource',
    'PsutilTemperatureSource',
    'IPMITemperatureSource',
    'SOURCE_TYPES',
    'create_source'
]
