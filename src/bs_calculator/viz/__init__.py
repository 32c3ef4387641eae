"""Plotting helpers (require matplotlib)."""
