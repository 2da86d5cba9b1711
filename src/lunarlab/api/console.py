"""
Interactive console front end: the classic LUNAR game.

The mission core only sees a pilot callable. ConsolePilot is that callable
for a human at a terminal; it re-prompts until the input parses as a number.
"""
from __future__ import annotations

from collections.abc import Callable

from lunarlab.core.simulation import Mission
from lunarlab.models.outcome import LandingOutcome, MissionResult
from lunarlab.utils.validation import MAX_BURN_RATE, MIN_BURN_RATE, validate_finite, validate_non_negative

BANNER = f"""{'LUNAR':>38}
{'CREATIVE COMPUTING  MORRISTOWN, NEW JERSEY':>57}



This is a computer simulation of an Apollo lunar
landing capsule.


The on-board computer has failed (it was made by
Xerox) so you have to land the capsule manually.

Set burn rate of retro rockets to any value between
{MIN_BURN_RATE:.0f} (free fall) and {MAX_BURN_RATE:.0f} (maximum burn) pounds per second.
Set new burn rate every 10 seconds.

Capsule weight 32,500 LBS; Fuel weight 16,000 LBS.



Good luck
"""

STATUS_HEADER = f"{'SEC':<9} {'MI + FT':<8} {'MPH':<10} {'LB FUEL':<8} BURN RATE"
REENTER = "?Re-enter"


class ConsolePilot:
    """
    Reads burn rates from a terminal.

    Parameters
    ----------
    input_fn : Callable[[str], str]
        Reads one line after printing the prompt. Default: builtin input
    output_fn : Callable[[str], None]
        Writes one line. Default: builtin print

    Notes
    -----
    Malformed input, negative and non-finite values are answered with
    "?Re-enter" and the prompt is repeated without limit. Values above the
    engine maximum are passed on unclamped.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.input_fn = input_fn
        self.output_fn = output_fn

    def __call__(self, prompt: str) -> float:
        while True:
            text = self.input_fn(f"{prompt}? ")
            try:
                burn_rate = float(text.strip())
                validate_finite(burn_rate, "burn_rate")
                validate_non_negative(burn_rate, "burn_rate")
            except ValueError:
                self.output_fn(REENTER)
                continue
            return burn_rate


def outcome_lines(result: MissionResult) -> list[str]:
    """Final report text."""
    lines = []
    if result.fuel_out:
        lines.append(f"Fuel out at {result.fuel_out_seconds} seconds.")
    lines.append(
        f"On moon at {result.elapsed_seconds} seconds - "
        f"Impact velocity {result.impact_velocity_mph} mph"
    )
    if result.outcome is LandingOutcome.PERFECT:
        lines.append("Perfect landing!")
    elif result.outcome is LandingOutcome.GOOD:
        lines.append("Good landing (could be better)")
    elif result.outcome is LandingOutcome.CRASHED:
        lines.append("Sorry there were no survivors. You blew it!")
        lines.append(
            f"In fact, you blasted a new lunar crater {result.crater_depth_ft} feet deep!"
        )
    else:
        lines.append("Craft damage... you're stranded here until a rescue")
        lines.append("party arrives. Hope you have enough oxygen!")
    return lines


def play(
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> MissionResult:
    """Fly one mission against a human pilot and print the outcome."""
    output_fn(BANNER)
    output_fn(STATUS_HEADER)
    mission = Mission(verbose=False)
    result = mission.run(ConsolePilot(input_fn=input_fn, output_fn=output_fn))
    for line in outcome_lines(result):
        output_fn(line)
    return result


def main() -> None:
    try:
        play()
    except (KeyboardInterrupt, EOFError):
        print()
