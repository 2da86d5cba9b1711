import csv

import pytest

from lunarlab.core.solver import MissionPhase
from lunarlab.dynamics.burn import LUNAR_CONSTANTS
from lunarlab.dynamics.state import SimulationState
from lunarlab.logger import CSVLogger


# --- Mock Objects for Isolation ---
class MockMission:
    def __init__(self):
        self.state = SimulationState(distance=120.0, velocity=1.0, mass=33_000.0)
        self.constants = LUNAR_CONSTANTS
        self.burn_rate = 0.0
        self.phase = MissionPhase.AWAITING_COMMAND


# --- Tests ---

def test_logger_basic_io(tmp_path):
    """Test that logger creates file and writes header + data correctly."""
    log_path = tmp_path / "test_basic.csv"

    # Use context manager to ensure close/flush
    with CSVLogger(str(log_path), buffer_size=1) as logger:
        logger.log(MockMission())

    assert log_path.exists()

    with open(log_path, "r", newline="") as f:
        rows = list(csv.reader(f))

    # Header + 1 data row
    assert len(rows) == 2
    assert rows[0] == ["t", "distance", "velocity", "mass", "fuel", "burn_rate", "phase"]
    assert float(rows[1][0]) == 0.0
    assert float(rows[1][1]) == 120.0
    assert float(rows[1][4]) == 16_500.0
    assert rows[1][-1] == "AWAITING_COMMAND"


def test_logger_buffering(tmp_path):
    """Test that data is buffered and only written when buffer fills or flush is called."""
    log_path = tmp_path / "test_buffer.csv"
    buffer_size = 5

    logger = CSVLogger(str(log_path), buffer_size=buffer_size)
    mission = MockMission()

    # 1. Log fewer items than buffer size
    for i in range(buffer_size - 1):
        mission.state.elapsed_seconds = float(i)
        logger.log(mission)

    # File should exist but contain only header
    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1  # Header only

    # 2. Log one more to trigger flush
    mission.state.elapsed_seconds = float(buffer_size)
    logger.log(mission)

    with open(log_path, "r") as f:
        lines = f.readlines()
    assert len(lines) == 1 + buffer_size  # Header + buffered rows

    logger.close()


def test_logger_custom_fields(tmp_path):
    """Test logging with a restricted set of fields."""
    log_path = tmp_path / "test_custom.csv"

    with CSVLogger(str(log_path), fields=["distance", "velocity"]) as logger:
        logger.log(MockMission())

    with open(log_path, "r", newline="") as f:
        rows = list(csv.reader(f))

    assert rows[0] == ["t", "distance", "velocity"]
    assert len(rows[1]) == 3


def test_logger_rejects_unknown_fields(tmp_path):
    with pytest.raises(ValueError, match="Invalid fields"):
        CSVLogger(str(tmp_path / "bad.csv"), fields=["distance", "altitude"])


def test_logger_creates_parent_directory(tmp_path):
    log_path = tmp_path / "nested" / "deeper" / "log.csv"
    with CSVLogger(log_path) as logger:
        logger.log(MockMission())
    assert log_path.exists()
