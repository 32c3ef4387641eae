"""Closed-form model formulas."""
