"""
Command Line Interface Module

This module provides the command-line interface for running a
CPU temperature sampling session.
"""

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

from ..config import DEFAULT_CONFIG_PATH, SessionConfig, load_config
from ..errors import (
    ConfigError,
    HardwareError,
    PersistenceError,
    SensorSelectionError,
    SourceInitializationError
)
from ..hardware import SOURCE_TYPES
from ..hardware.source import Sensor
from ..monitor import MonitorSession, SessionResult, save_results

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


class CLI:
    """Command-line interface handler"""

    def __init__(self):
        """Initialize CLI handler"""
        self.parser = self._create_parser()
        self.config: Optional[SessionConfig] = None
        self.session: Optional[MonitorSession] = None
        self.result: Optional[SessionResult] = None

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create command-line argument parser

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            description="cputemp - sample CPU temperature for a fixed duration and report min/max/median"
        )

        parser.add_argument(
            "-c", "--config",
            help="Path to configuration file",
            default=DEFAULT_CONFIG_PATH
        )

        parser.add_argument(
            "--duration",
            type=float,
            metavar="MINUTES",
            help="Monitoring duration in minutes (default: 10)"
        )

        parser.add_argument(
            "--interval",
            type=float,
            metavar="SECONDS",
            help="Sampling interval in seconds (default: 20)"
        )

        parser.add_argument(
            "--source",
            choices=SOURCE_TYPES,
            help="Temperature source (default: psutil)"
        )

        parser.add_argument(
            "-o", "--output",
            metavar="PATH",
            help="Save results to this file instead of asking at the end"
        )

        parser.add_argument(
            "--no-prompt",
            action="store_true",
            help="Do not ask for a results file at the end"
        )

        parser.add_argument(
            "--list-sensors",
            action="store_true",
            help="List CPU temperature sensors and the one that would be monitored, then exit"
        )

        parser.add_argument(
            "--progress",
            action="store_true",
            help="Print every accepted sample"
        )

        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug logging"
        )

        return parser

    def _build_config(self, args: argparse.Namespace) -> SessionConfig:
        """Load the config file and apply command-line overrides"""
        config = load_config(args.config)
        overrides = {}
        if args.duration is not None:
            overrides["monitoring_duration_minutes"] = args.duration
        if args.interval is not None:
            overrides["sampling_interval_seconds"] = args.interval
        if args.source is not None:
            overrides["source"] = args.source
        if args.output is not None:
            overrides["output_path"] = args.output
        if args.no_prompt:
            overrides["prompt_for_output"] = False
        return dataclasses.replace(config, **overrides) if overrides else config

    def _print_banner(self, config: SessionConfig) -> None:
        print("--- CPU Temperature Logger ---")
        print(f"Monitoring for {config.monitoring_duration_minutes:g} minutes, "
              f"sampling every {config.sampling_interval_seconds:g} seconds...")
        print(f"Keep this running for {config.monitoring_duration_minutes:g} minutes! "
              "You will be asked where to save the results at the end.")
        print("-" * 70)

    def _print_sensors(self, sensors: List[Sensor], selected: Sensor) -> None:
        print("\n--- Diagnosing Available Sensors ---")
        print(f"Found {len(sensors)} CPU temperature sensors:")
        for sensor in sensors:
            print(sensor.describe())
        value = f"{selected.value:.2f}°C" if selected.has_value else "n/a"
        print(f"\nSUCCESS: Monitoring will use sensor: {selected.name} (Current Reading: {value})")

    def _announce_start(self, sensors: List[Sensor], selected: Sensor) -> None:
        self._print_sensors(sensors, selected)
        print(f"Starting monitoring. Target Samples: {self.config.total_ticks} "
              f"over {self.config.monitoring_duration_minutes:g} minutes.")

    def _print_tick(self, index: int, total: int, value: Optional[float]) -> None:
        if value is not None:
            print(f"[Sample {index + 1}/{total}] Current Temp: {value:.2f}°C")

    def _prompt_output_path(self) -> str:
        """Ask the operator where to save the results

        Returns:
            Entered path, or "" if none was given
        """
        print("\n--- File Output ---")
        print("Please specify the full path and file name where to save:")
        try:
            return input().strip()
        except EOFError:
            return ""

    def _save(self, config: SessionConfig, result: SessionResult) -> None:
        """Save results to the configured or prompted destination"""
        path = config.output_path
        if not path and config.prompt_for_output:
            path = self._prompt_output_path()

        if not path or not path.strip():
            print("File path not provided. Results will not be saved to a file.")
            return

        try:
            written = save_results(path, result.summary, result.samples)
        except PersistenceError as e:
            print("\nERROR: Failed to write file due to a path or access issue.")
            print(f"Ensure the directory exists and you have write permissions. Details: {e.reason}")
            return
        print(f"\nSuccessfully saved results to: {written}")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI interface

        Returns:
            Exit code: 0 if the session completed, 1 on fatal errors
        """
        args = self.parser.parse_args(argv)

        if args.debug:
            logging.getLogger("cputemp").setLevel(logging.DEBUG)

        try:
            config = self._build_config(args)
            if args.list_sensors:
                self.session = MonitorSession(config, on_selected=self._print_sensors)
                self.session.select()
                return 0

            self.config = config
            self._print_banner(config)
            self.session = MonitorSession(
                config,
                on_selected=self._announce_start,
                on_tick=self._print_tick if args.progress else None
            )
            self.result = self.session.run()

        except ConfigError as e:
            print(f"\nERROR: Invalid configuration. Details: {e}")
            return 1

        except SourceInitializationError as e:
            logger.debug("Hardware access failed", exc_info=True)
            print(f"\nERROR: Failed to open hardware monitor. Details: {e}")
            print("Exiting application.")
            return 1

        except HardwareError as e:
            logger.debug("Hardware read failed", exc_info=True)
            print(f"\nERROR: Failed to read temperature sensors. Details: {e}")
            print("Exiting application.")
            return 1

        except SensorSelectionError as e:
            logger.debug("Sensor selection failed", exc_info=True)
            print(f"\nERROR: {e}")
            return 1

        except KeyboardInterrupt:
            print("\nExiting...")
            return 1

        print("\n--- Monitoring Complete ---")
        if not self.result.has_data:
            print("No valid temperatures were recorded (or all were 10°C or below).")
            return 0

        print(self.result.summary)
        self._save(config, self.result)
        return 0


def main() -> None:
    """Main entry point"""
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
