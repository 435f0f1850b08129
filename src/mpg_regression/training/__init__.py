"""Training utilities for the horsepower/MPG regression."""

from .inference import predict, regression_line
from .trainer import (
    EpochMetrics,
    RegressionTrainer,
    TrainingCallback,
    TrainingConfig,
    TrainingHistory,
    train,
)

__all__ = [
    "EpochMetrics",
    "RegressionTrainer",
    "TrainingCallback",
    "TrainingConfig",
    "TrainingHistory",
    "predict",
    "regression_line",
    "train",
]
