from __future__ import annotations
import os
import csv
from typing import Dict, Tuple, List
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from lunarlab.utils.units import SECONDS_PER_HOUR

NUMERIC_COLUMNS = ("distance", "velocity", "mass", "fuel", "burn_rate")


def _load_csv(filepath: str) -> Tuple[np.ndarray, Dict[str, np.ndarray], List[str]]:
    """
    Load a CSV produced by CSVLogger.

    Returns
    -------
    t : (N,) array
        Time vector.
    cols : dict[str, np.ndarray]
        Mapping column_name -> (N,) array for the numeric columns.
    headers : list[str]
        Column headers in order (first one should be 't').

    Notes
    -----
    The 'phase' column is text and is skipped.
    """
    with open(filepath, "r", newline="") as f:
        reader = csv.reader(f)
        headers = next(reader)
    if headers[0] != "t":
        raise ValueError("First column must be time 't'.")

    usecols = [j for j, name in enumerate(headers) if name == "t" or name in NUMERIC_COLUMNS]
    data = np.loadtxt(filepath, delimiter=",", skiprows=1, dtype=float, usecols=usecols)
    if data.ndim == 1:  # single row edge case
        data = data[None, :]
    cols: Dict[str, np.ndarray] = {}
    for k, j in enumerate(usecols):
        cols[headers[j]] = data[:, k]
    return cols["t"], cols, headers


def _require(cols: Dict[str, np.ndarray], name: str) -> np.ndarray:
    if name not in cols:
        raise KeyError(f"Column '{name}' not found in CSV.")
    return cols[name]


def _finish(fig: Figure, save_path: str | None, show: bool) -> Figure:
    fig.tight_layout()
    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        fig.savefig(save_path, dpi=180, bbox_inches="tight")
    if show:
        plt.show()
    return fig


def plot_descent(
    csv_path: str,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot distance, descent rate and fuel against mission time.

    Parameters
    ----------
    csv_path : str
        Path to logger CSV.
    save_path : str | None
        If given, save the figure to this path (png/svg).
    show : bool
        Whether to call plt.show().

    Returns
    -------
    fig : Figure
    """
    t, cols, _ = _load_csv(csv_path)
    distance = _require(cols, "distance")
    mph = _require(cols, "velocity") * SECONDS_PER_HOUR
    fuel = _require(cols, "fuel")

    fig, axes = plt.subplots(3, 1, figsize=(10, 8), sharex=True)

    axes[0].plot(t, distance, color="#1a73e8", lw=2)
    axes[0].axhline(0.0, color="#5f6368", lw=1, ls="--")
    axes[0].set_ylabel("distance [mi]")
    axes[0].grid(True, alpha=0.3)
    axes[0].set_title("Descent profile")

    axes[1].plot(t, mph, color="#ea4335", lw=2)
    axes[1].axhline(0.0, color="#5f6368", lw=1, ls="--")
    axes[1].set_ylabel("descent rate [mph]")
    axes[1].grid(True, alpha=0.3)

    axes[2].plot(t, fuel, color="#34a853", lw=2, label="fuel")
    if "burn_rate" in cols:
        ax_burn = axes[2].twinx()
        ax_burn.step(t, cols["burn_rate"], where="post", color="#fbbc05", label="burn rate")
        ax_burn.set_ylabel("burn rate [lb/s]")
    axes[2].set_xlabel("t [s]"); axes[2].set_ylabel("fuel [lb]")
    axes[2].grid(True, alpha=0.3)

    return _finish(fig, save_path, show)


def plot_phase_portrait(
    csv_path: str,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot descent rate against distance (the landing "glide path").

    Returns
    -------
    fig : Figure
    """
    _, cols, _ = _load_csv(csv_path)
    distance = _require(cols, "distance")
    mph = _require(cols, "velocity") * SECONDS_PER_HOUR

    fig, ax = plt.subplots(1, 1, figsize=(8, 6))
    ax.plot(distance, mph, color="#1a73e8", lw=2)
    ax.scatter(distance[0], mph[0], color="#34a853", s=40, label="start")
    ax.scatter(distance[-1], mph[-1], color="#ea4335", s=40, label="end")
    ax.set_xlabel("distance [mi]"); ax.set_ylabel("descent rate [mph]")
    ax.invert_xaxis()
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    ax.set_title("Phase portrait")

    return _finish(fig, save_path, show)
