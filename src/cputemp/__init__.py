"""
cputemp - fixed-duration CPU temperature sampling

Picks the most representative CPU temperature sensor, samples it at a fixed
cadence for a bounded duration and reports min/max/median.
"""

import logging

__version__ = "1.0.0"

# Library code never configures handlers; the CLI does
logging.getLogger(__name__).addHandler(logging.NullHandler())
