"""
CSV logging for mission trajectories.

Buffers data in memory and writes in batches to minimize I/O overhead.
Implements context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, TextIO

DEFAULT_FIELDS = ["distance", "velocity", "mass", "fuel", "burn_rate", "phase"]
VALID_FIELDS = set(DEFAULT_FIELDS)


class CSVLogger:
    """
    Buffered CSV logger for mission trajectories.

    One row is written per committed integration step, so sign-flip
    sub-steps and contact iterations all show up in the log.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing. A mission rarely produces
        more than a few hundred rows.
    fields : List[str] | None
        Columns to log after time. Default: all of
        ["distance", "velocity", "mass", "fuel", "burn_rate", "phase"]

    Notes
    -----
    **Usage Patterns:**

    1. Context manager (recommended):
    >>> with CSVLogger("output.csv") as logger:
    ...     mission.logger = logger
    ...     mission.run(pilot)

    2. Auto-managed (via Mission):
    >>> mission = Mission.with_logging("apollo_11")
    >>> mission.run(pilot)
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 100,
        fields: list[str] | None = None
    ) -> None:
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = fields if fields is not None else list(DEFAULT_FIELDS)

        invalid = set(self.fields) - VALID_FIELDS
        if invalid:
            raise ValueError(
                f"Invalid fields: {invalid}. Valid options: {VALID_FIELDS}"
            )

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None  # csv.writer is a function, not a type
        self._header_written = False

        # Ensure parent directory exists
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> CSVLogger:
        """Open file for writing."""
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close file, flushing any remaining data."""
        self.close()

    def _format(self, mission: Any, field: str) -> str:
        state = mission.state
        if field == "distance":
            return f"{state.distance:.10e}"
        if field == "velocity":
            return f"{state.velocity:.10e}"
        if field == "mass":
            return f"{state.mass:.10e}"
        if field == "fuel":
            return f"{state.fuel_remaining(mission.constants):.10e}"
        if field == "burn_rate":
            return f"{mission.burn_rate:.6f}"
        # phase
        return mission.phase.name

    def _write_header(self) -> None:
        if self._writer:
            self._writer.writerow(["t", *self.fields])
            if self._file:
                self._file.flush()  # Ensure header written immediately
        self._header_written = True

    def log(self, mission: Any) -> None:
        """
        Log current mission state to buffer.

        Parameters
        ----------
        mission : Mission
            Object exposing state, constants, burn_rate and phase

        Notes
        -----
        Automatically opens file on first call if not using context manager.
        Writes to disk when buffer is full.
        """
        if self._file is None:
            self.__enter__()

        if not self._header_written:
            self._write_header()

        row = [f"{mission.state.elapsed_seconds:.10f}"]
        row.extend(self._format(mission, field) for field in self.fields)
        self._buffer.append(row)

        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered data to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
