"""
IPMI Temperature Source Module

This module provides a wrapper around ipmitool for reading CPU temperature
sensors from a server's BMC.
"""

import subprocess
import logging
import time
from typing import Any, Dict, List, Optional

from ..errors import HardwareError, SourceInitializationError, SourceReadError
from .source import Sensor, TemperatureSource

logger = logging.getLogger(__name__)


class IPMITemperatureSource(TemperatureSource):
    """CPU temperature sensors via `ipmitool sdr list`"""

    name = "ipmi"

    def __init__(self, host: str = "localhost", username: str = "ADMIN",
                 password: str = "ADMIN", interface: str = "lanplus",
                 retries: int = 3, retry_delay: float = 1.0):
        """Initialize IPMI source with connection details

        Args:
            host: IPMI host address ("localhost" for the local BMC)
            username: IPMI username
            password: IPMI password
            interface: IPMI interface type
            retries: Number of attempts per command
            retry_delay: Delay between attempts in seconds
        """
        super().__init__()
        self.host = host
        self.username = username
        self.password = password
        self.interface = interface
        self.retries = retries
        self.retry_delay = retry_delay

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "IPMITemperatureSource":
        """Create a source from the `source.ipmi` config section"""
        config = config or {}
        return cls(
            host=config.get("host", "localhost"),
            username=config.get("username", "ADMIN"),
            password=config.get("password", "ADMIN"),
            interface=config.get("interface", "lanplus")
        )

    def _base_command(self) -> List[str]:
        # For local access, just use ipmitool
        if self.host == "localhost":
            return ["sudo", "ipmitool"]
        # For remote access, include connection parameters
        return [
            "ipmitool", "-I", self.interface,
            "-H", self.host,
            "-U", self.username,
            "-P", self.password
        ]

    def _execute_ipmi_command(self, command: str) -> str:
        """Execute an IPMI command and return its output

        Args:
            command: IPMI command to execute (e.g., "sdr list")

        Returns:
            Command output as string

        Raises:
            SourceReadError: If the command fails after all retries
        """
        last_error = None
        for attempt in range(self.retries):
            if attempt > 0:
                time.sleep(self.retry_delay)
                logger.debug(f"Retrying IPMI command (attempt {attempt + 1}/{self.retries})")

            full_cmd = self._base_command() + command.split()
            try:
                result = subprocess.run(
                    full_cmd,
                    capture_output=True,
                    text=True,
                    check=True
                )
                return result.stdout.strip()
            except subprocess.CalledProcessError as e:
                last_error = e.stderr or str(e)
                if "Device or resource busy" in last_error:
                    logger.debug(f"IPMI device busy, retrying... ({attempt + 1}/{self.retries})")
                    continue
                if "Error in open session" in last_error:
                    raise SourceReadError(f"Failed to connect to IPMI: {last_error}")
            except OSError as e:
                # ipmitool (or sudo) missing
                raise SourceReadError(f"Failed to run ipmitool: {e}")

        raise SourceReadError(f"Command failed after {self.retries} attempts: {last_error}")

    def _open(self) -> None:
        try:
            info = self._execute_ipmi_command("mc info")
        except HardwareError as e:
            raise SourceInitializationError(f"Failed to open IPMI connection: {e}")
        logger.debug(f"BMC info: {info}")

    def _read_sensors(self) -> List[Sensor]:
        output = self._execute_ipmi_command("sdr list")
        return [
            Sensor(name=r["name"], value=r["value"], hardware="bmc")
            for r in parse_sdr_output(output)
            if "CPU" in r["name"] and "Temp" in r["name"]
        ]


def parse_sdr_output(output: str) -> List[Dict[str, Any]]:
    """Parse `ipmitool sdr list` output into readings.

    Handles rows like:
        CPU1 Temp        | 45 degrees C      | ok
        CPU2 Temp        | no reading        | ns

    Returns:
        List of dicts with "name", "value" (float or None) and "state"
    """
    readings = []
    for line in output.splitlines():
        parts = line.split('|')
        if len(parts) < 3:
            continue

        name = parts[0].strip()
        value_str = parts[1].strip()
        state = parts[2].strip().lower()
        if not name:
            continue

        value = None
        if state != 'ns' and value_str:
            # "45.000 degrees C", "45°C"
            num_str = value_str.split()[0].replace('°', '').rstrip('C')
            try:
                value = float(num_str)
            except ValueError:
                logger.debug(f"Could not parse value from: {value_str}")
                state = 'ns'

        readings.append({"name": name, "value": value, "state": state})

    return readings
