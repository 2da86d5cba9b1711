"""
Example 02: Scripted burn schedule.

Falls freely for 70 seconds, then brakes hard and eases off near the surface.
Prints the status line the pilot sees at every decision interval.
"""
from lunarlab import Mission, ScriptedPilot
from lunarlab.api.console import STATUS_HEADER, outcome_lines

SCHEDULE = [0, 0, 0, 0, 0, 0, 0, 170, 200, 200, 150, 100, 50, 20, 10]


def run_demo():
    pilot = ScriptedPilot(SCHEDULE)
    mission = Mission.with_logging("02_burn_schedule", auto_save_plots=True, verbose=False)
    result = mission.run(pilot)

    print(STATUS_HEADER)
    for i, prompt in enumerate(pilot.prompts):
        burn_rate = SCHEDULE[min(i, len(SCHEDULE) - 1)]
        print(f"{prompt}{burn_rate:g}")
    print()
    for line in outcome_lines(result):
        print(line)

    df = mission.history_frame()
    print(f"\n{len(df)} committed steps, minimum fuel {df['fuel'].min():.2f} lb")
    print(f"Results saved to: {mission.output_path}")


if __name__ == "__main__":
    run_demo()
