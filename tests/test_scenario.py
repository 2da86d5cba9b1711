"""
Tests for the Scenario API and scripted pilots.
"""
import pytest

from lunarlab.api.scenario import CONSTANT_PRESETS, Scenario, ScriptedPilot
from lunarlab.core.solver import MissionPhase
from lunarlab.models.outcome import LandingOutcome


def test_scripted_pilot_plays_schedule():
    pilot = ScriptedPilot([10, 20])
    assert pilot("a") == 10.0
    assert pilot("b") == 20.0
    assert pilot("c") == 20.0  # repeats last
    assert pilot.calls == 3
    assert pilot.prompts == ["a", "b", "c"]


def test_scripted_pilot_without_repeat():
    pilot = ScriptedPilot([10], repeat_last=False)
    pilot("a")
    with pytest.raises(RuntimeError, match="Burn schedule exhausted"):
        pilot("b")


def test_scripted_pilot_rejects_empty_schedule():
    with pytest.raises(ValueError):
        ScriptedPilot([])


def test_presets_build_constants():
    scenario = Scenario("presets").configure_constants("heavy_lander")
    assert scenario.constants.dry_mass == CONSTANT_PRESETS["heavy_lander"]["dry_mass"]

    scenario.configure_constants("apollo", gravity=0.002)
    assert scenario.constants.gravity == 0.002
    assert scenario.constants.exhaust_coefficient == 1.8


def test_unknown_preset():
    with pytest.raises(ValueError, match="Unknown preset"):
        Scenario("bad").configure_constants("mars")


def test_run_requires_pilot():
    with pytest.raises(RuntimeError, match="No pilot configured"):
        Scenario("no_pilot").run()


def test_free_fall_scenario():
    result = (
        Scenario("free_fall")
        .set_burn_schedule([0.0])
        .run()
    )
    assert result.outcome is LandingOutcome.CRASHED
    assert result.intervals == 12


def test_custom_initial_state_and_solver():
    scenario = (
        Scenario("short_hop")
        .set_initial_state(distance=2.0, velocity=0.01, mass=20_000.0)
        .configure_solver(interval_length=5.0)
        .set_burn_schedule([0.0])
    )
    result = scenario.run()

    assert scenario.mission is not None
    assert scenario.mission.phase is MissionPhase.CONTACT
    assert scenario.mission.solver.interval_length == 5.0
    assert result.elapsed_seconds > 0.0


def test_scenario_accepts_callable_pilot():
    calls = []

    def pilot(prompt):
        calls.append(prompt)
        return 200.0

    result = Scenario("callable").set_pilot(pilot).run()
    assert result.fuel_out
    assert len(calls) == 9


def test_enable_plotting_turns_on_logging(tmp_path):
    scenario = (
        Scenario("plotted", output_dir=str(tmp_path))
        .set_burn_schedule([0.0])
        .enable_plotting()
    )
    scenario.run()

    output_path = scenario.mission.output_path
    assert output_path is not None
    assert (output_path / "plots" / "descent.png").exists()
