"""
Temperature Source Contract Module

This module defines the narrow contract the monitor uses to talk to the
hardware-access layer: open it, refresh it, list the CPU temperature sensors
it currently sees, and close it.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from ..errors import HardwareError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sensor:
    """A CPU temperature sensor as seen in one refresh of a source.

    Sensors are snapshots: a new list is produced on every refresh, so the
    monitor only keeps the sensor name and looks it up again each tick.

    Attributes:
        name: Sensor identifier (e.g., "Package id 0", "Tdie", "CPU1 Temp")
        value: Current reading in °C, or None if no value is available
        hardware: Device or driver that reported the sensor

    Examples:
        >>> sensor = Sensor("Package id 0", 48.5, "coretemp")
        >>> print(f"{sensor.name}: {sensor.value:.2f}°C")
        Package id 0: 48.50°C
    """
    name: str
    value: Optional[float]
    hardware: str = ""

    @property
    def has_value(self) -> bool:
        """Check if the sensor reported a value in this snapshot"""
        return self.value is not None

    def describe(self) -> str:
        """Format the sensor as a diagnostic line"""
        reading = f"{self.value:.2f}°C" if self.has_value else "n/a"
        suffix = f" (Hardware: {self.hardware})" if self.hardware else ""
        return f"- {self.name}: {reading}{suffix}"


class TemperatureSource:
    """Base class for CPU temperature sources.

    A source is a scoped resource: it must be opened before the first
    refresh and closed when no longer needed. Sources can be used as context
    managers, which guarantees the close on every exit path.

    Subclasses implement _open(), _close() and _read_sensors().
    """

    name = "base"

    def __init__(self):
        self._opened = False
        self._sensors: List[Sensor] = []

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self) -> None:
        """Open the source.

        Raises:
            SourceInitializationError: If the hardware cannot be accessed
        """
        if self._opened:
            return
        self._open()
        self._opened = True
        logger.debug(f"Opened {self.name} temperature source")

    def close(self) -> None:
        """Close the source. Closing twice is a no-op."""
        if not self._opened:
            return
        try:
            self._close()
        finally:
            self._opened = False
            self._sensors = []
            logger.debug(f"Closed {self.name} temperature source")

    def refresh(self) -> None:
        """Re-read the current hardware state.

        Raises:
            HardwareError: If the source is not open
            SourceReadError: If the hardware could not be read
        """
        if not self._opened:
            raise HardwareError(f"{self.name} temperature source is not open")
        self._sensors = unique_names(self._read_sensors())
        logger.debug(f"Refreshed {self.name} source: {len(self._sensors)} CPU temperature sensors")

    def list_cpu_temperature_sensors(self) -> List[Sensor]:
        """Get the CPU temperature sensors seen by the last refresh.

        Returns:
            List[Sensor]: Sensors in enumeration order (may be empty)
        """
        return list(self._sensors)

    def _open(self) -> None:
        raise NotImplementedError

    def _close(self) -> None:
        pass

    def _read_sensors(self) -> List[Sensor]:
        raise NotImplementedError

    def __enter__(self) -> "TemperatureSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def unique_names(sensors: Sequence[Sensor]) -> List[Sensor]:
    """Suffix repeated sensor names so each name identifies one sensor.

    Multi-socket machines report the same label once per package (two
    "Tctl", a "Core 0" per socket). The first keeps its name, later ones
    become "Tctl #1", "Tctl #2", ... in enumeration order, so the same
    physical sensor gets the same name on every refresh.
    """
    seen = set()
    result = []
    for sensor in sensors:
        name = sensor.name
        count = 0
        while name in seen:
            count += 1
            name = f"{sensor.name} #{count}"
        seen.add(name)
        result.append(sensor if name == sensor.name else replace(sensor, name=name))
    return result
