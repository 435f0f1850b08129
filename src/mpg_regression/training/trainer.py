"""Mini-batch training loop for the regression network."""
from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import torch
from torch import Tensor, nn
from torch.nn import functional as F
from torch.utils.data import DataLoader, TensorDataset
from tqdm.auto import tqdm

from ..errors import ConvergenceWarning, FrameworkError

OPTIMIZERS = ("adam", "sgd")
LOSSES = {"mse": F.mse_loss, "mae": F.l1_loss}


@dataclass(slots=True)
class TrainingConfig:
    """Optimisation settings for :func:`train`."""

    optimizer: str = "adam"
    learning_rate: float = 1e-3
    loss: str = "mse"
    batch_size: int = 32
    epochs: int = 50
    shuffle: bool = True
    seed: Optional[int] = None
    device: Optional[str] = None
    progress: bool = True

    def __post_init__(self) -> None:
        if self.optimizer not in OPTIMIZERS:
            raise ValueError(f"optimizer must be one of {OPTIMIZERS}")
        if self.loss not in LOSSES:
            raise ValueError(f"loss must be one of {tuple(LOSSES)}")
        if self.learning_rate <= 0:
            raise ValueError("learning_rate must be positive")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.epochs <= 0:
            raise ValueError("epochs must be positive")


@dataclass(frozen=True, slots=True)
class EpochMetrics:
    """Sample-weighted means over one epoch. ``epoch`` counts from zero."""

    epoch: int
    loss: float
    mse: float

    def as_dict(self) -> Dict[str, float]:
        return {"loss": self.loss, "mse": self.mse}


@dataclass
class TrainingHistory:
    """Per-epoch metrics collected by :func:`train`."""

    epochs: List[int] = field(default_factory=list)
    loss: List[float] = field(default_factory=list)
    mse: List[float] = field(default_factory=list)

    def append(self, metrics: EpochMetrics) -> None:
        self.epochs.append(metrics.epoch)
        self.loss.append(metrics.loss)
        self.mse.append(metrics.mse)

    @property
    def records(self) -> List[EpochMetrics]:
        return [EpochMetrics(*row) for row in zip(self.epochs, self.loss, self.mse)]

    def __len__(self) -> int:
        return len(self.epochs)


class TrainingCallback:
    """Observer notified while :func:`train` runs. All hooks are optional."""

    def on_train_begin(self, config: TrainingConfig) -> None:
        pass

    def on_epoch_end(self, metrics: EpochMetrics) -> None:
        pass

    def on_train_end(self, history: TrainingHistory) -> None:
        pass


def _make_optimizer(model: nn.Module, config: TrainingConfig) -> torch.optim.Optimizer:
    if config.optimizer == "sgd":
        return torch.optim.SGD(model.parameters(), lr=config.learning_rate)
    return torch.optim.Adam(model.parameters(), lr=config.learning_rate)


class RegressionTrainer:
    """Fit a regression model on in-memory ``(inputs, labels)`` tensors."""

    def __init__(
        self,
        model: nn.Module,
        inputs: Tensor,
        labels: Tensor,
        config: Optional[TrainingConfig] = None,
        *,
        callbacks: Sequence[TrainingCallback] = (),
    ) -> None:
        if inputs.ndim != 2 or labels.ndim != 2:
            raise ValueError("inputs and labels must have shape (n, features)")
        if inputs.size(0) != labels.size(0):
            raise ValueError("inputs and labels must hold the same number of examples")
        if inputs.size(0) == 0:
            raise ValueError("cannot train on an empty dataset")
        self.config = config or TrainingConfig()
        self.device = torch.device(
            self.config.device or ("cuda" if torch.cuda.is_available() else "cpu")
        )
        self.model = model.to(self.device)
        self.optimizer = _make_optimizer(self.model, self.config)
        self.loss_fn = LOSSES[self.config.loss]
        self.callbacks = list(callbacks)
        generator = None
        if self.config.seed is not None:
            generator = torch.Generator().manual_seed(self.config.seed)
        self.train_loader = DataLoader(
            TensorDataset(inputs.detach(), labels.detach()),
            batch_size=self.config.batch_size,
            shuffle=self.config.shuffle,
            generator=generator,
        )
        self.history = TrainingHistory()
        self.step = 0

    def train_step(self, batch: Tuple[Tensor, Tensor]) -> Tuple[float, float]:
        """Run one optimiser update and return the batch ``(loss, mse)``."""

        self.model.train()
        inputs, labels = (tensor.to(self.device) for tensor in batch)
        try:
            predictions = self.model(inputs)
            loss = self.loss_fn(predictions, labels)
            self.optimizer.zero_grad()
            loss.backward()
            self.optimizer.step()
        except RuntimeError as exc:
            raise FrameworkError(f"optimisation step {self.step} failed: {exc}") from exc
        self.step += 1
        mse = F.mse_loss(predictions.detach(), labels)
        return float(loss.detach()), float(mse)

    def train_epoch(self, epoch: int) -> EpochMetrics:
        """Iterate once over the shuffled mini-batches."""

        total_loss = 0.0
        total_mse = 0.0
        seen = 0
        for batch in self.train_loader:
            size = batch[0].size(0)
            loss, mse = self.train_step(batch)
            total_loss += loss * size
            total_mse += mse * size
            seen += size
        metrics = EpochMetrics(epoch=epoch, loss=total_loss / seen, mse=total_mse / seen)
        if not (math.isfinite(metrics.loss) and math.isfinite(metrics.mse)):
            warnings.warn(
                f"non-finite loss at epoch {epoch}: {metrics.loss}",
                ConvergenceWarning,
                stacklevel=2,
            )
        return metrics

    def train(self) -> TrainingHistory:
        """Run ``config.epochs`` epochs, notifying callbacks after each one."""

        self._notify("on_train_begin", self.config)
        iterator = tqdm(
            range(self.config.epochs),
            desc="Training",
            unit="epoch",
            disable=not self.config.progress,
        )
        for epoch in iterator:
            metrics = self.train_epoch(epoch)
            self.history.append(metrics)
            iterator.set_postfix(loss=f"{metrics.loss:.4f}")
            self._notify("on_epoch_end", metrics)
        self._notify("on_train_end", self.history)
        return self.history

    def _notify(self, hook: str, *args: object) -> None:
        for callback in self.callbacks:
            method = getattr(callback, hook, None)
            if method is None:
                continue
            try:
                method(*args)
            except Exception as exc:
                warnings.warn(
                    f"{type(callback).__name__}.{hook} raised {exc!r}; continuing",
                    RuntimeWarning,
                    stacklevel=3,
                )


def train(
    model: nn.Module,
    inputs: Tensor,
    labels: Tensor,
    config: Optional[TrainingConfig] = None,
    *,
    callbacks: Sequence[TrainingCallback] = (),
) -> TrainingHistory:
    """Train ``model`` and return its per-epoch metric history."""

    trainer = RegressionTrainer(model, inputs, labels, config, callbacks=callbacks)
    return trainer.train()


__all__ = [
    "EpochMetrics",
    "RegressionTrainer",
    "TrainingCallback",
    "TrainingConfig",
    "TrainingHistory",
    "train",
]
