"""
Exception hierarchy for cputemp
"""


class CpuTempError(Exception):
    """Base exception for cputemp errors"""
    pass


class ConfigError(CpuTempError):
    """Raised when the configuration is invalid"""
    pass


class HardwareError(CpuTempError):
    """Base exception for temperature source errors"""
    pass


class SourceInitializationError(HardwareError):
    """Raised when a temperature source cannot be opened"""
    pass


class SourceReadError(HardwareError):
    """Raised when refreshing a temperature source fails"""
    pass


class SensorSelectionError(CpuTempError):
    """Raised when no candidate sensor exists at all"""
    pass


class PersistenceError(CpuTempError):
    """Raised when results cannot be written to the destination"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to save results to {path}: {reason}")
        self.path = path
        self.reason = reason
