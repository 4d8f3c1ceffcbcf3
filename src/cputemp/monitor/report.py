"""
Report Rendering Module

This module renders summary statistics and raw samples as the plain-text
report shown on the console and written to the results file.
"""

import re
from typing import Dict, Iterable, Union

from .stats import SummaryStatistics

RAW_DATA_HEADER = "--- Raw Temperature Data (Sequential) ---"

SUMMARY_TEMPLATE = """
--- Final Results ---
Total Successful Samples: {count}
---------------------
Minimum Temperature: {minimum:.2f}°C
Maximum Temperature: {maximum:.2f}°C
Median Temperature: {median:.2f}°C
---------------------"""

_FIELD_PATTERNS = {
    "sample_count": re.compile(r"^Total Successful Samples: (\d+)$", re.MULTILINE),
    "minimum": re.compile(r"^Minimum Temperature: (-?\d+\.\d+)°C$", re.MULTILINE),
    "maximum": re.compile(r"^Maximum Temperature: (-?\d+\.\d+)°C$", re.MULTILINE),
    "median": re.compile(r"^Median Temperature: (-?\d+\.\d+)°C$", re.MULTILINE),
}


def build_summary_report(stats: SummaryStatistics) -> str:
    """Render the fixed-layout summary block

    Example:
        >>> stats = SummaryStatistics(41.5, 63.25, 52.0, 30)
        >>> print(build_summary_report(stats))
        <BLANKLINE>
        --- Final Results ---
        Total Successful Samples: 30
        ---------------------
        Minimum Temperature: 41.50°C
        Maximum Temperature: 63.25°C
        Median Temperature: 52.00°C
        ---------------------
    """
    return SUMMARY_TEMPLATE.format(
        count=stats.sample_count,
        minimum=stats.minimum,
        maximum=stats.maximum,
        median=stats.median
    )


def build_raw_data_block(samples: Iterable[float]) -> str:
    """Render every accepted sample in order, comma-separated"""
    return RAW_DATA_HEADER + "\n" + ", ".join(f"{t:.2f}" for t in samples)


def build_file_content(summary: str, samples: Iterable[float]) -> str:
    """Summary block, a blank line, then the raw data block"""
    return summary + "\n\n" + build_raw_data_block(samples)


def parse_summary_report(text: str) -> Dict[str, Union[int, float]]:
    """Read the fields back from a rendered summary

    Returns:
        Dict with "sample_count" (int), "minimum", "maximum" and "median"

    Raises:
        ValueError: If a field is missing
    """
    fields: Dict[str, Union[int, float]] = {}
    for key, pattern in _FIELD_PATTERNS.items():
        match = pattern.search(text)
        if match is None:
            raise ValueError(f"Summary report has no {key} field")
        fields[key] = int(match.group(1)) if key == "sample_count" else float(match.group(1))
    return fields
