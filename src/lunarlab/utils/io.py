# src/lunarlab/utils/io.py
import pandas as pd
from pathlib import Path
from typing import List, Dict, Any


def history_to_frame(history: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Build a DataFrame from a list of state dictionaries.

    Args:
        history: List of dicts, e.g., [{'t': 0.0, 'distance': 120.0}, ...]
    """
    if not history:
        raise ValueError("Simulation history is empty. Nothing to convert.")
    return pd.DataFrame(history)


def save_simulation_history(history: List[Dict[str, Any]], filepath: str) -> Path:
    """
    Saves a list of state dictionaries to a CSV file.

    Args:
        history: List of dicts, e.g., [{'t': 0.0, 'distance': 120.0}, ...]
        filepath: Destination path (e.g., 'results/run1.csv')
    """
    if not history:
        raise ValueError("Simulation history is empty. Nothing to save.")

    path = Path(filepath)
    # Ensure the directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    df = history_to_frame(history)
    df.to_csv(path, index=False)
    print(f"Simulation results saved to {path.absolute()}")
    return path
