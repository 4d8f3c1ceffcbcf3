"""
Monitoring Session Module

This module runs one complete session: open the source, pick a sensor,
sample it for the configured duration, release the source and summarize.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..config import SessionConfig
from ..hardware import create_source
from ..hardware.source import Sensor, TemperatureSource
from .report import build_summary_report
from .scheduler import SampleSeries, SamplingScheduler
from .selector import select_sensor
from .stats import SummaryStatistics, compute_statistics

logger = logging.getLogger(__name__)


@dataclass
class SessionResult:
    """Outcome of a finished session"""
    sensor_name: str
    samples: SampleSeries
    skipped: int = 0
    discarded: int = 0
    statistics: Optional[SummaryStatistics] = None
    summary: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return self.statistics is not None


class MonitorSession:
    """Runs one monitoring session"""

    def __init__(self, config: SessionConfig, source: Optional[TemperatureSource] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 on_selected: Optional[Callable[[List[Sensor], Sensor], None]] = None,
                 on_tick: Optional[Callable[[int, int, Optional[float]], None]] = None):
        """Initialize session

        Args:
            config: Session configuration
            source: Temperature source (None to create one from config.source)
            sleep: Sleep function used between ticks
            on_selected: Called with (all sensors, selected sensor) before sampling
            on_tick: Progress callback passed on to the scheduler
        """
        self.config = config
        self.source = source or create_source(config.source, config.source_options)
        self._sleep = sleep
        self._on_selected = on_selected
        self._on_tick = on_tick

    def discover(self) -> List[Sensor]:
        """Refresh the source and log the CPU temperature sensors it sees"""
        self.source.refresh()
        sensors = self.source.list_cpu_temperature_sensors()
        logger.info(f"Found {len(sensors)} CPU temperature sensors")
        for sensor in sensors:
            logger.info(sensor.describe())
        return sensors

    def select(self) -> Sensor:
        """Open the source just long enough to pick a sensor

        Raises:
            SourceInitializationError: If the source cannot be opened
            SensorSelectionError: If there is no candidate sensor
        """
        with self.source:
            sensors = self.discover()
            selected = select_sensor(sensors)
            if self._on_selected:
                self._on_selected(sensors, selected)
            return selected

    def run(self) -> SessionResult:
        """Run the session to completion

        Returns:
            SessionResult: Samples, statistics and the rendered summary
                (statistics and summary are None if nothing was recorded)

        Raises:
            SourceInitializationError: If the source cannot be opened
            SensorSelectionError: If there is no candidate sensor
        """
        self.source.open()
        try:
            sensors = self.discover()
            selected = select_sensor(sensors)
            value = f"{selected.value:.2f}°C" if selected.has_value else "n/a"
            logger.info(f"Monitoring will use sensor: {selected.name} (Current Reading: {value})")
            if self._on_selected:
                self._on_selected(sensors, selected)

            scheduler = SamplingScheduler(
                source=self.source,
                sensor_name=selected.name,
                total_seconds=self.config.total_seconds,
                interval_seconds=self.config.sampling_interval_seconds,
                sleep=self._sleep,
                on_tick=self._on_tick
            )
            samples = scheduler.run()
        finally:
            self.source.close()

        result = SessionResult(
            sensor_name=selected.name,
            samples=samples,
            skipped=scheduler.skipped,
            discarded=scheduler.discarded
        )

        result.statistics = compute_statistics(samples)
        if result.statistics is None:
            logger.warning("No valid temperatures were recorded")
            return result

        result.summary = build_summary_report(result.statistics)
        return result
