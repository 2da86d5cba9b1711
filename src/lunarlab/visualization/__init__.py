"""Trajectory plots for logged missions."""
