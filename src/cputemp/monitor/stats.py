"""
Sample Statistics Module
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummaryStatistics:
    """Summary of a finished sample series.

    Values are kept at full precision; rounding is left to the report.
    """
    minimum: float
    maximum: float
    median: float
    sample_count: int


def calculate_median(values: Iterable[float]) -> float:
    """Median of the values: middle element, or mean of the two middle ones

    Raises:
        ValueError: If there are no values
    """
    ordered = sorted(values)
    count = len(ordered)
    if count == 0:
        raise ValueError("Cannot calculate median of an empty series")

    middle = count // 2
    if count % 2 == 1:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2.0


def compute_statistics(samples: Iterable[float]) -> Optional[SummaryStatistics]:
    """Compute min, max and median of a sample series

    Args:
        samples: Accepted readings (a sealed SampleSeries or any iterable)

    Returns:
        SummaryStatistics, or None if there are no samples
    """
    values = list(samples)
    if not values:
        logger.info("No data: statistics not computed")
        return None

    minimum = maximum = values[0]
    for value in values[1:]:
        if value < minimum:
            minimum = value
        if value > maximum:
            maximum = value

    stats = SummaryStatistics(
        minimum=minimum,
        maximum=maximum,
        median=calculate_median(values),
        sample_count=len(values)
    )
    logger.debug(f"Computed statistics: {stats}")
    return stats
