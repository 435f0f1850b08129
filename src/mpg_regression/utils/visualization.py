"""Plotting utilities for the cars data and training curves."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from ..data.cars import CleanRecord
from ..training.trainer import EpochMetrics, TrainingCallback, TrainingConfig, TrainingHistory


def plot_scatter(records: Sequence[CleanRecord], ax: Optional[Axes] = None) -> Axes:
    """Scatter horsepower against MPG."""

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))
    ax.scatter([r.horsepower for r in records], [r.mpg for r in records], s=12, alpha=0.7)
    ax.set_xlabel("Horsepower")
    ax.set_ylabel("MPG")
    ax.set_title("Horsepower v MPG")
    return ax


def plot_predictions(
    records: Sequence[CleanRecord],
    horsepower: Sequence[float],
    predicted_mpg: Sequence[float],
    ax: Optional[Axes] = None,
) -> Axes:
    """Overlay the learned regression curve on the original data."""

    ax = plot_scatter(records, ax=ax)
    ax.plot(list(horsepower), list(predicted_mpg), color="tab:red", label="Predicted")
    ax.set_title("Model Predictions vs Original Data")
    ax.legend()
    return ax


def plot_training_history(history: TrainingHistory, metrics: Sequence[str] = ("loss", "mse")) -> Figure:
    """Plot each metric of a finished run against the epoch index."""

    fig, axes = plt.subplots(1, len(metrics), figsize=(5 * len(metrics), 3), squeeze=False)
    for ax, name in zip(axes[0], metrics):
        ax.plot(history.epochs, getattr(history, name))
        ax.set_xlabel("Epoch")
        ax.set_ylabel(name)
    fig.suptitle("Training Performance")
    fig.tight_layout()
    return fig


class LiveMetricsPlot(TrainingCallback):
    """Redraw the training curves after every epoch.

    ``pause`` gives an interactive backend time to repaint; leave it as
    ``None`` when rendering off-screen.
    """

    def __init__(self, metrics: Sequence[str] = ("loss", "mse"), *, pause: Optional[float] = None) -> None:
        for name in metrics:
            if name not in ("loss", "mse"):
                raise ValueError(f"unknown metric {name!r}")
        self.metrics = tuple(metrics)
        self.pause = pause
        self.figure: Optional[Figure] = None
        self.epochs: List[int] = []
        self.values: Dict[str, List[float]] = {name: [] for name in self.metrics}
        self._lines: Dict[str, Line2D] = {}

    def on_train_begin(self, config: TrainingConfig) -> None:
        self.epochs = []
        self.values = {name: [] for name in self.metrics}
        self._lines = {}
        self.figure, axes = plt.subplots(1, len(self.metrics), figsize=(5 * len(self.metrics), 3), squeeze=False)
        self.figure.suptitle("Training Performance")
        for ax, name in zip(axes[0], self.metrics):
            ax.set_xlim(0, max(config.epochs - 1, 1))
            ax.set_xlabel("Epoch")
            ax.set_ylabel(name)
            (self._lines[name],) = ax.plot([], [])

    def on_epoch_end(self, metrics: EpochMetrics) -> None:
        if self.figure is None:
            return
        self.epochs.append(metrics.epoch)
        for name in self.metrics:
            self.values[name].append(getattr(metrics, name))
            line = self._lines[name]
            line.set_data(self.epochs, self.values[name])
            line.axes.relim()
            line.axes.autoscale_view(scalex=False)
        self.figure.canvas.draw_idle()
        if self.pause is not None:
            plt.pause(self.pause)


__all__ = ["LiveMetricsPlot", "plot_predictions", "plot_scatter", "plot_training_history"]
