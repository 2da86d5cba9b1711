"""
Tests for the Mission orchestrator.
"""
import csv
import math
import shutil
from pathlib import Path

import pytest

from lunarlab.api.scenario import ScriptedPilot
from lunarlab.core.simulation import Mission
from lunarlab.core.solver import MissionPhase
from lunarlab.models.outcome import LandingOutcome, classify_impact

FREE_FALL_CONTACT_TIME = (-1.0 + math.sqrt(1.24)) / 0.001  # 120 mi at 1 mi/s


@pytest.fixture
def mission(constants):
    return Mission(constants=constants, verbose=False)


@pytest.fixture
def cleanup_output():
    """Clean up output directory after tests."""
    yield
    output_dir = Path("output")
    if output_dir.exists():
        shutil.rmtree(output_dir)


def test_mission_creation(mission):
    assert mission.state.distance == 120.0
    assert mission.state.velocity == 1.0
    assert mission.state.mass == 33_000.0
    assert mission.state.elapsed_seconds == 0.0
    assert mission.phase is MissionPhase.AWAITING_COMMAND
    assert mission.logger is None
    assert len(mission.history) == 1


def test_mission_rejects_mass_below_dry_mass(constants):
    with pytest.raises(ValueError, match="below the dry mass"):
        Mission(constants=constants, mass=10_000.0)


def test_one_interval_at_fifty(mission):
    stopped = mission.step(50.0)

    assert not stopped
    assert mission.state.mass == 33_000.0 - 500.0
    assert mission.state.elapsed_seconds == 10.0
    assert mission.phase is MissionPhase.AWAITING_COMMAND
    assert mission.intervals == 1


def test_step_validates_burn_rate(mission):
    with pytest.raises(ValueError, match="non-negative"):
        mission.step(-5.0)
    with pytest.warns(RuntimeWarning, match="exceeds the engine maximum"):
        mission.step(250.0)


def test_free_fall_crash(mission):
    pilot = ScriptedPilot([0.0])
    result = mission.run(pilot)

    assert mission.phase is MissionPhase.CONTACT
    assert pilot.calls == 12
    assert result.elapsed_seconds == pytest.approx(FREE_FALL_CONTACT_TIME, rel=1e-6)
    assert result.impact_velocity_mph == pytest.approx(3600.0 * math.sqrt(1.24), rel=1e-6)
    assert result.outcome is LandingOutcome.CRASHED
    assert result.crater_depth_ft == pytest.approx(result.impact_velocity_mph * 0.227)
    assert not result.fuel_out
    assert abs(mission.state.distance) < 1e-6


def test_full_burn_runs_out_of_fuel(mission):
    pilot = ScriptedPilot([200.0])
    result = mission.run(pilot)

    # 16500 lb of fuel at 200 lb/s lasts 82.5 s: nine intervals
    assert pilot.calls == 9
    assert mission.phase is MissionPhase.FUEL_OUT
    assert result.fuel_out
    assert result.fuel_out_seconds == pytest.approx(82.5)
    assert mission.state.fuel_remaining(mission.constants) < 0.001
    assert result.outcome is classify_impact(result.impact_velocity_mph)


def test_fuel_out_applies_one_free_fall_increment(mission):
    mission.run(ScriptedPilot([200.0]))

    before, after = mission.history[-2], mission.history[-1]
    assert mission.last_step == pytest.approx(2.5)
    assert after["velocity"] == pytest.approx(before["velocity"] + 0.001 * mission.last_step)
    assert after["t"] == pytest.approx(before["t"] + mission.last_step)
    assert after["distance"] == before["distance"]
    assert after["mass"] == before["mass"]


def test_no_interval_after_termination(mission):
    mission.run(ScriptedPilot([200.0]))
    with pytest.raises(RuntimeError, match="already terminated"):
        mission.step(0.0)


def test_state_invariants_hold_throughout(mission, constants):
    schedule = [0, 0, 0, 0, 0, 0, 0, 170, 200, 200, 150, 100, 50, 20, 10]
    mission.run(ScriptedPilot(schedule))

    times = [row["t"] for row in mission.history]
    assert times == sorted(times)
    assert min(row["mass"] for row in mission.history) >= constants.dry_mass - 1e-6
    assert all(row["distance"] > 0.0 for row in mission.history[:-1])


def test_status_prompt_reaches_pilot(mission):
    pilot = ScriptedPilot([50.0, 0.0], repeat_last=True)
    mission.step(pilot(mission.status().format()))
    mission.step(pilot(mission.status().format()))

    assert pilot.prompts[0].startswith("0.00")
    assert pilot.prompts[1].startswith("10.00")


def test_history_frame(mission):
    mission.step(50.0)
    df = mission.history_frame()
    assert list(df.columns) == ["t", "distance", "velocity", "mass", "fuel", "burn_rate", "phase"]
    assert len(df) == 2
    assert df["mass"].iloc[-1] == 32_500.0


def test_save_history(mission, tmp_path):
    mission.step(50.0)
    path = mission.save_history(tmp_path / "runs" / "history.csv")
    assert path.exists()


def test_logging_output(constants, tmp_path):
    mission = Mission(
        constants=constants,
        simulation_name="log_test",
        output_dir=tmp_path,
        auto_timestamp=False,
        verbose=False,
    )
    mission.run(ScriptedPilot([0.0]))

    csv_file = tmp_path / "log_test" / "logs" / "simulation.csv"
    assert csv_file.exists()
    with open(csv_file, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["t", "distance", "velocity", "mass", "fuel", "burn_rate", "phase"]
    assert len(rows) == len(mission.history) + 1
    assert rows[-1][-1] == "CONVERGING"


def test_with_logging_factory(cleanup_output):
    mission = Mission.with_logging("factory_test", auto_save_plots=False, verbose=False)
    assert mission.output_path is not None
    assert (mission.output_path / "logs").exists()
    assert (mission.output_path / "plots").exists()
    assert mission.logger is not None


def test_enable_logging_requires_name(mission):
    with pytest.raises(ValueError, match="Simulation name required"):
        mission.enable_logging()


def test_disable_logging(cleanup_output):
    mission = Mission.with_logging("disable_test", verbose=False)
    mission.disable_logging()
    assert mission.logger is None


def test_auto_save_plots(constants, tmp_path):
    mission = Mission(
        constants=constants,
        simulation_name="plot_test",
        output_dir=tmp_path,
        auto_timestamp=False,
        auto_save_plots=True,
        verbose=False,
    )
    mission.run(ScriptedPilot([0.0]))

    plots_dir = tmp_path / "plot_test" / "plots"
    assert (plots_dir / "descent.png").exists()
    assert (plots_dir / "phase_portrait.png").exists()


def test_save_plots_requires_logging(mission):
    with pytest.raises(RuntimeError, match="Logging must be enabled"):
        mission.save_plots()


def test_run_without_result_raises(constants):
    class SilentMission(Mission):
        def _finish(self, fuel_out_seconds=None):
            pass

    mission = SilentMission(constants=constants, verbose=False)
    with pytest.raises(RuntimeError, match="without a result"):
        mission.run(ScriptedPilot([0.0]))
