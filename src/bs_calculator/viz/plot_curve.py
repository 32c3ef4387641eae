from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Literal

import numpy as np

from ..types import OptionType, PricePoint

Style = Literal["pretty", "minimal"]


def _mpl_context(style: Style):
    import matplotlib as mpl

    if style == "minimal":
        return mpl.rc_context({})

    return mpl.rc_context(
        {
            "axes.grid": True,
            "axes.axisbelow": True,
            "grid.alpha": 0.18,
            "grid.linestyle": "--",
            "axes.spines.top": False,
            "axes.spines.right": False,
            "axes.titlesize": 11,
            "axes.titleweight": "semibold",
            "axes.labelsize": 10,
            "xtick.labelsize": 9,
            "ytick.labelsize": 9,
            "lines.linewidth": 2.0,
            "figure.dpi": 120,
        }
    )


def plot_curve(
    points: Sequence[PricePoint],
    *,
    spot: float | None = None,
    kind: OptionType | None = None,
    ax=None,
    style: Style = "pretty",
    figsize: tuple[float, float] = (8, 4.5),
    show: bool = False,
    savepath: str | Path | None = None,
    dpi: int = 150,
):
    """Line chart of option value against underlying price.

    Parameters
    ----------
    points : sequence of PricePoint
        Output of :func:`bs_calculator.curves.sample_curve`.
    spot : float, optional
        Live underlying price; drawn as a dashed vertical line labelled ``S = ...``.
    kind : OptionType, optional
        Used for the title and y-axis label.
    ax : matplotlib Axes, optional
        Draw into an existing axes instead of a new figure.

    Returns
    -------
    (Figure, Axes)
    """
    try:
        import matplotlib.pyplot as plt
    except ModuleNotFoundError as e:
        raise ModuleNotFoundError(
            "plot_curve requires matplotlib. Install it with: pip install matplotlib"
        ) from e

    x = np.asarray([p.spot for p in points], dtype=float)
    y = np.asarray([p.value for p in points], dtype=float)
    label = kind.label if kind is not None else "Option"

    with _mpl_context(style):
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
        else:
            fig = ax.figure

        ax.plot(x, y, color="#4f46e5")
        ax.set_title(f"{label} vs underlying price", loc="left")
        ax.set_xlabel("Underlying price (S)")
        ax.set_ylabel(f"{label} price")

        if spot is not None:
            ax.axvline(spot, color="#22d3ee", linestyle=(0, (4, 4)), linewidth=1.2)
            ax.annotate(
                f"S = {spot:g}",
                xy=(spot, 1.0),
                xycoords=("data", "axes fraction"),
                ha="center",
                va="bottom",
                color="#22d3ee",
                fontsize=9,
            )

        if savepath is not None:
            fig.savefig(savepath, dpi=dpi, bbox_inches="tight")
        if show:
            plt.show()

    return fig, ax
