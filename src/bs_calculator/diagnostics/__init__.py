"""Accuracy diagnostics."""
