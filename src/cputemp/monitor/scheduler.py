"""
Sampling Scheduler Module

This module provides the fixed-cadence sampling loop: a fixed number of
evenly spaced reads of one sensor over a bounded duration.
"""

import logging
import time
from typing import Callable, Iterator, List, Optional, Tuple

from ..errors import SourceReadError
from ..hardware.source import TemperatureSource

logger = logging.getLogger(__name__)

# Readings at or below this value (°C) are sensor noise, not samples
NOISE_FLOOR = 10.0


class SampleSeries:
    """Accepted readings in chronological order.

    The series is appended to by the sampling loop only, then sealed. Once
    sealed it is read-only.
    """

    def __init__(self):
        self._values: List[float] = []
        self._sealed = False

    def append(self, value: float) -> None:
        if self._sealed:
            raise RuntimeError("Cannot append to a sealed sample series")
        self._values.append(value)

    def seal(self) -> None:
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    @property
    def values(self) -> Tuple[float, ...]:
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"SampleSeries({self._values!r}, {state})"


def accept_reading(value: Optional[float]) -> Optional[float]:
    """Apply the validity filter to a raw reading.

    Returns:
        The reading rounded to 2 decimals if it is above NOISE_FLOOR,
        otherwise None
    """
    if value is None:
        return None
    rounded = round(value, 2)
    if rounded > NOISE_FLOOR:
        return rounded
    return None


class SamplingScheduler:
    """Drives a fixed number of evenly spaced reads of one sensor.

    Each tick refreshes the source, looks the sensor up again by name and
    records its value. A missing value skips the tick; it never aborts the
    run. There is no drift correction: the loop sleeps exactly
    `interval_seconds` between ticks and not after the last one.
    """

    def __init__(self, source: TemperatureSource, sensor_name: str,
                 total_seconds: float, interval_seconds: float,
                 sleep: Callable[[float], None] = time.sleep,
                 on_tick: Optional[Callable[[int, int, Optional[float]], None]] = None):
        """Initialize scheduler

        Args:
            source: Opened temperature source
            sensor_name: Name of the selected sensor
            total_seconds: Monitoring duration in seconds
            interval_seconds: Time between ticks in seconds
            sleep: Sleep function used between ticks
            on_tick: Called after each tick with (tick, total_ticks, accepted value or None)
        """
        if interval_seconds <= 0:
            raise ValueError(f"Invalid interval: {interval_seconds}")
        if total_seconds < 0:
            raise ValueError(f"Invalid duration: {total_seconds}")

        self.source = source
        self.sensor_name = sensor_name
        self.total_seconds = total_seconds
        self.interval_seconds = interval_seconds
        self._sleep = sleep
        self._on_tick = on_tick

        self.samples = SampleSeries()
        self.skipped = 0
        self.discarded = 0

    @property
    def total_ticks(self) -> int:
        return int(self.total_seconds // self.interval_seconds)

    def _read_value(self) -> Optional[float]:
        """Refresh the source and read the selected sensor's current value"""
        try:
            self.source.refresh()
            sensors = self.source.list_cpu_temperature_sensors()
        except SourceReadError as e:
            logger.warning(f"Failed to refresh sensors: {e}")
            return None

        for sensor in sensors:
            if sensor.name == self.sensor_name:
                return sensor.value

        logger.debug(f"Sensor {self.sensor_name} not present in this refresh")
        return None

    def _tick(self, index: int, total: int) -> Optional[float]:
        value = self._read_value()

        if value is None:
            self.skipped += 1
            logger.warning(f"[Sample {index + 1}/{total}] Sensor value not available. Skipping this sample.")
            return None

        accepted = accept_reading(value)
        if accepted is None:
            self.discarded += 1
            logger.debug(f"[Sample {index + 1}/{total}] Discarded noise reading: {value}°C")
            return None

        self.samples.append(accepted)
        logger.debug(f"[Sample {index + 1}/{total}] Current Temp: {accepted:.2f}°C (Sensor: {self.sensor_name})")
        return accepted

    def run(self) -> SampleSeries:
        """Run the sampling loop to completion

        Returns:
            SampleSeries: The sealed series of accepted readings
        """
        total = self.total_ticks
        logger.info(f"Sampling {self.sensor_name}: {total} ticks every {self.interval_seconds}s")

        for index in range(total):
            accepted = self._tick(index, total)
            if self._on_tick:
                self._on_tick(index, total, accepted)

            if index < total - 1:
                self._sleep(self.interval_seconds)

        self.samples.seal()
        logger.info(
            f"Sampling complete: {len(self.samples)} accepted, "
            f"{self.skipped} skipped, {self.discarded} discarded"
        )
        return self.samples
