"""Numerical helpers (numpy/pandas) shared by the engine components."""
