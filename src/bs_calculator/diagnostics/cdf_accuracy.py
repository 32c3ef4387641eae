from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import pandas as pd
from scipy.stats import norm

from bs_calculator.numerics.normal import norm_cdf


def _grid(xs: Iterable[float] | np.ndarray | None) -> np.ndarray:
    if xs is None:
        return np.linspace(-8.0, 8.0, 1601)
    return np.asarray(list(xs) if not isinstance(xs, np.ndarray) else xs, dtype=float)


def cdf_error_table(xs: Iterable[float] | np.ndarray | None = None) -> pd.DataFrame:
    """
    Compare the Abramowitz-Stegun normal CDF with scipy's reference.

    Columns: x, approx, exact, abs_err. Defaults to 1601 points on [-8, 8].
    """
    x = _grid(xs)
    approx = norm_cdf(x)
    exact = norm.cdf(x)
    return pd.DataFrame(
        {
            "x": x,
            "approx": approx,
            "exact": exact,
            "abs_err": np.abs(approx - exact),
        }
    )


def max_cdf_error(xs: Iterable[float] | np.ndarray | None = None) -> float:
    return float(cdf_error_table(xs)["abs_err"].max())
