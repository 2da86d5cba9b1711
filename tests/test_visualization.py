"""
Tests for the visualization module.
"""
import numpy as np
import pandas as pd
import pytest
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for testing
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from lunarlab.visualization import plotting


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def dummy_csv(tmp_path):
    """Create a valid mission CSV for testing."""
    fn = tmp_path / "simulation.csv"
    t = np.linspace(0, 100, 50)
    data = {
        "t": t,
        "distance": 120.0 - t,
        "velocity": np.linspace(1.0, 0.0, 50),
        "mass": 33_000.0 - 100.0 * t,
        "fuel": 16_500.0 - 100.0 * t,
        "burn_rate": np.full_like(t, 100.0),
        "phase": ["INTEGRATING"] * 50,
    }
    pd.DataFrame(data).to_csv(fn, index=False)
    return fn


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


# =============================================================================
# Tests
# =============================================================================

def test_load_csv_skips_phase_column(dummy_csv):
    t, cols, headers = plotting._load_csv(str(dummy_csv))
    assert headers[-1] == "phase"
    assert "phase" not in cols
    assert len(t) == 50
    assert cols["fuel"][0] == pytest.approx(16_500.0)


def test_load_csv_requires_time_column(tmp_path):
    fn = tmp_path / "bad.csv"
    pd.DataFrame({"distance": [1.0, 2.0]}).to_csv(fn, index=False)
    with pytest.raises(ValueError, match="First column must be time"):
        plotting._load_csv(str(fn))


def test_plot_descent(dummy_csv, tmp_path):
    save_path = tmp_path / "plots" / "descent.png"
    fig = plotting.plot_descent(str(dummy_csv), save_path=str(save_path), show=False)
    assert isinstance(fig, Figure)
    assert save_path.exists()


def test_plot_phase_portrait(dummy_csv):
    fig = plotting.plot_phase_portrait(str(dummy_csv), show=False)
    ax = fig.axes[0]
    assert ax.get_xlabel() == "distance [mi]"
    assert ax.xaxis_inverted()


def test_missing_column(tmp_path):
    fn = tmp_path / "partial.csv"
    pd.DataFrame({"t": [0.0, 1.0], "distance": [2.0, 1.0]}).to_csv(fn, index=False)
    with pytest.raises(KeyError, match="velocity"):
        plotting.plot_descent(str(fn), show=False)
