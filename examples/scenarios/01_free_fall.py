"""
Example 01: Free fall using the Scenario API.

The engine is never fired, so the capsule falls 120 miles onto the surface.
Shows the minimal code to fly a mission and save the standard plots.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lunarlab.api.scenario import Scenario


def run_example():
    # A single burn rate of 0 lb/s is repeated for every decision interval
    scenario = (
        Scenario(name="01_free_fall")
        .set_burn_schedule([0.0])
        .enable_plotting(show=False)
    )
    result = scenario.run()

    print(f"Impact at {result.impact_velocity_mph:.1f} mph ({result.outcome.name})")
    print(f"Results saved to {scenario.mission.output_path}")


if __name__ == "__main__":
    run_example()
