"""
Monitor package for cputemp

This package provides sensor selection, the sampling loop, statistics,
report rendering and result persistence.
"""

from .selector import select_sensor
from .scheduler import NOISE_FLOOR, SampleSeries, SamplingScheduler
from .stats import SummaryStatistics, calculate_median, compute_statistics
from .report import build_summary_report, build_raw_data_block, build_file_content, parse_summary_report
from .sink import save_results
from .session import MonitorSession, SessionResult

__all__ = [
    'select_sensor',
    'NOISE_FLOOR',
    'SampleSeries',
    'SamplingScheduler',
    'SummaryStatistics',
    'calculate_median',
    'compute_statistics',
    'build_summary_report',
    'build_raw_data_block',
    'build_file_content',
    'parse_summary_report',
    'save_results',
    'MonitorSession',
    'SessionResult'
]
