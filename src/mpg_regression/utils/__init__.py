"""Utility helpers for the horsepower/MPG regression."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from .visualization import (
        LiveMetricsPlot,
        plot_predictions,
        plot_scatter,
        plot_training_history,
    )

__all__ = [
    "LiveMetricsPlot",
    "plot_predictions",
    "plot_scatter",
    "plot_training_history",
]


def __getattr__(name: str):  # pragma: no cover - small wrapper
    if name in __all__:
        return getattr(import_module("mpg_regression.utils.visualization"), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
