"""
Sensor Selection Module

This module picks the one sensor a session monitors out of the CPU
temperature sensors a source reports.
"""

import logging
from typing import Optional, Sequence

from ..errors import SensorSelectionError
from ..hardware.source import Sensor

logger = logging.getLogger(__name__)

# Name fragments of sensors that report the whole package / die temperature
PREFERRED_NAME_PARTS = ("Package", "Average", "Tdie")


def _has_positive_value(sensor: Sensor) -> bool:
    return sensor.value is not None and sensor.value > 0


def select_sensor(sensors: Sequence[Sensor]) -> Sensor:
    """Select the most representative CPU temperature sensor.

    Rules, first match wins:
    1. First sensor whose name contains "Package", "Average" or "Tdie"
       (case-sensitive) and that has a value > 0
    2. Sensor with the largest value > 0 (ties go to the earliest)
    3. First sensor in the list, whatever its value

    Args:
        sensors: Sensors in enumeration order

    Returns:
        Sensor: The selected sensor

    Raises:
        SensorSelectionError: If the list is empty
    """
    if not sensors:
        raise SensorSelectionError("Could not find a suitable CPU temperature sensor.")

    for sensor in sensors:
        if any(part in sensor.name for part in PREFERRED_NAME_PARTS) and _has_positive_value(sensor):
            logger.debug(f"Selected {sensor.name}: package/average/die sensor")
            return sensor

    hottest: Optional[Sensor] = None
    for sensor in sensors:
        # Strict comparison keeps the earliest on ties
        if _has_positive_value(sensor) and (hottest is None or sensor.value > hottest.value):
            hottest = sensor
    if hottest is not None:
        logger.debug(f"Selected {hottest.name}: highest reading ({hottest.value}°C)")
        return hottest

    logger.debug(f"Selected {sensors[0].name}: no sensor has a positive reading")
    return sensors[0]
