"""
Example 03: Scenario Options
Constant presets, custom initial state and solver settings.
"""

from lunarlab import Scenario


def run_demo():
    print("\n--- Running Scenario with Custom Options ---")

    scenario = (
        Scenario(name="03_scenario_options")
        # Heavier capsule, same engine
        .configure_constants(preset="heavy_lander")
        # Start lower and slower with a half-full tank
        .set_initial_state(distance=30.0, velocity=0.3, mass=26_000.0)
        # Decide every 5 seconds instead of 10
        .configure_solver(interval_length=5.0)
        .set_burn_schedule([0, 0, 0, 120, 160, 160, 140, 100, 60])
        .enable_plotting(show=False)
    )

    result = scenario.run()
    print(f"{result.outcome.name}: {result.impact_velocity_mph:.2f} mph after "
          f"{result.intervals} intervals")
    print(f"Results saved to: {scenario.mission.output_path}")


if __name__ == "__main__":
    run_demo()
