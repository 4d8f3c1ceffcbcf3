"""
Tests for the Monitoring Session module
"""

import pytest
from unittest.mock import Mock, patch

from cputemp.config import SessionConfig
from cputemp.errors import SensorSelectionError, SourceInitializationError
from cputemp.hardware.source import Sensor, TemperatureSource
from cputemp.monitor.report import parse_summary_report
from cputemp.monitor.session import MonitorSession


class FakeSource(TemperatureSource):
    """Source replaying a fixed list of snapshots"""

    name = "fake"

    def __init__(self, snapshots, fail_open=False):
        super().__init__()
        self.snapshots = list(snapshots)
        self.fail_open = fail_open
        self.open_calls = 0
        self.close_calls = 0

    def _open(self):
        self.open_calls += 1
        if self.fail_open:
            raise SourceInitializationError("no driver")

    def _close(self):
        self.close_calls += 1

    def _read_sensors(self):
        return self.snapshots.pop(0) if self.snapshots else []


def snapshot(package, core=70.0):
    return [Sensor("Core 0", core, "coretemp"), Sensor("Package id 0", package, "coretemp")]


@pytest.fixture
def config():
    """One minute at 20 seconds: 3 ticks"""
    return SessionConfig(monitoring_duration_minutes=1, sampling_interval_seconds=20)


def test_run(config):
    """Test a complete session"""
    source = FakeSource([snapshot(45.0), snapshot(46.0), snapshot(50.5), snapshot(48.25)])
    sleep = Mock()

    result = MonitorSession(config, source=source, sleep=sleep).run()

    assert result.sensor_name == "Package id 0"
    assert result.samples.values == (46.0, 50.5, 48.25)
    assert result.samples.is_sealed
    assert result.has_data
    assert result.statistics.minimum == 46.0
    assert result.statistics.maximum == 50.5
    assert result.statistics.median == 48.25
    assert parse_summary_report(result.summary)["sample_count"] == 3
    assert sleep.call_count == 2
    assert source.close_calls == 1
    assert not source.is_open


def test_run_no_data(config):
    """Test an all-missing run reports no data"""
    source = FakeSource([snapshot(45.0), snapshot(None), snapshot(None), snapshot(9.0)])

    result = MonitorSession(config, source=source, sleep=Mock()).run()

    assert not result.has_data
    assert result.statistics is None
    assert result.summary is None
    assert len(result.samples) == 0
    assert result.skipped == 2
    assert result.discarded == 1
    assert source.close_calls == 1


def test_selection_failure_closes_source(config):
    """Test no sampling happens and the source is closed without sensors"""
    source = FakeSource([[]])
    sleep = Mock()

    with pytest.raises(SensorSelectionError):
        MonitorSession(config, source=source, sleep=sleep).run()

    sleep.assert_not_called()
    assert source.close_calls == 1
    assert not source.is_open


def test_open_failure(config):
    """Test an unopenable source aborts before sampling"""
    source = FakeSource([snapshot(45.0)], fail_open=True)

    with pytest.raises(SourceInitializationError):
        MonitorSession(config, source=source, sleep=Mock()).run()

    assert len(source.snapshots) == 1
    assert not source.is_open


def test_sampling_error_closes_source(config):
    """Test the source is released if the loop raises"""
    source = FakeSource([snapshot(45.0)])
    sleep = Mock(side_effect=KeyboardInterrupt)

    with pytest.raises(KeyboardInterrupt):
        MonitorSession(config, source=source, sleep=sleep).run()

    assert source.close_calls == 1


def test_callbacks(config):
    source = FakeSource([snapshot(45.0), snapshot(46.0), snapshot(47.0), snapshot(48.0)])
    on_selected = Mock()
    on_tick = Mock()

    MonitorSession(config, source=source, sleep=Mock(), on_selected=on_selected, on_tick=on_tick).run()

    sensors, selected = on_selected.call_args[0]
    assert len(sensors) == 2
    assert selected.name == "Package id 0"
    assert on_tick.call_count == 3


def test_select_only(config):
    """Test selection without sampling"""
    source = FakeSource([snapshot(None, core=52.0)])

    selected = MonitorSession(config, source=source).select()

    assert selected.name == "Core 0"
    assert source.close_calls == 1


def test_source_from_config():
    config = SessionConfig(source="ipmi", source_options={"host": "bmc"})
    with patch("cputemp.monitor.session.create_source") as mock_create:
        session = MonitorSession(config)
    mock_create.assert_called_once_with("ipmi", {"host": "bmc"})
    assert session.source is mock_create.return_value
