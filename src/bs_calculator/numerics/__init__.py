# src/bs_calculator/numerics/__init__.py
"""
Numerical building blocks.

Top-level package `bs_calculator` exposes the everyday pricing API.
This subpackage exposes the normal CDF approximation it is built on.
"""

from .normal import ERF_MAX_ABS_ERROR, erf_approx, norm_cdf

__all__ = [
    "ERF_MAX_ABS_ERROR",
    "erf_approx",
    "norm_cdf",
]
