"""
psutil Temperature Source Module

This module reads CPU temperature sensors through psutil, which exposes the
kernel's hwmon drivers (coretemp on Intel, k10temp/zenpower on AMD, the
thermal zones on ARM boards).
"""

import logging
import math
from typing import Dict, List, Optional

import psutil

from ..errors import SourceInitializationError, SourceReadError
from .source import Sensor, TemperatureSource

logger = logging.getLogger(__name__)

# Known CPU thermal driver names, in the order they are enumerated
CPU_DRIVERS = ("coretemp", "k10temp", "zenpower", "cpu_thermal", "cpu-thermal", "acpitz")


def _to_value(current) -> Optional[float]:
    """Convert a psutil reading to a float, or None if unusable"""
    if current is None:
        return None
    try:
        value = float(current)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


class PsutilTemperatureSource(TemperatureSource):
    """CPU temperature sensors via psutil.sensors_temperatures()"""

    name = "psutil"

    def __init__(self, drivers: Optional[List[str]] = None):
        """Initialize psutil source

        Args:
            drivers: Driver names to treat as CPU sensors (None for CPU_DRIVERS)
        """
        super().__init__()
        self.drivers = tuple(drivers) if drivers else CPU_DRIVERS

    def _query(self) -> Dict[str, list]:
        try:
            return psutil.sensors_temperatures() or {}
        except (OSError, RuntimeError) as e:
            raise SourceReadError(f"Failed to read temperature sensors: {e}")

    def _open(self) -> None:
        if not hasattr(psutil, "sensors_temperatures"):
            raise SourceInitializationError(
                "psutil does not support temperature sensors on this platform"
            )
        try:
            groups = self._query()
        except SourceReadError as e:
            raise SourceInitializationError(str(e))

        found = [d for d in self.drivers if d in groups]
        if not found:
            raise SourceInitializationError(
                f"No CPU temperature driver found (looked for: {', '.join(self.drivers)}; "
                f"available: {', '.join(groups) or 'none'})"
            )
        logger.info(f"Found CPU temperature drivers: {', '.join(found)}")

    def _read_sensors(self) -> List[Sensor]:
        groups = self._query()
        sensors = []
        for driver in self.drivers:
            for index, entry in enumerate(groups.get(driver, [])):
                label = (getattr(entry, "label", "") or "").strip()
                name = label or f"{driver} #{index}"
                sensors.append(Sensor(
                    name=name,
                    value=_to_value(getattr(entry, "current", None)),
                    hardware=driver
                ))
        return sensors
