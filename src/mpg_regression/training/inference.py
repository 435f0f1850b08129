"""Predictions in original units from a model trained on normalised data."""
from __future__ import annotations

from typing import Sequence

import torch
from torch import Tensor, nn

from ..data.preprocessing import NormalizationBounds, denormalize, normalize


@torch.no_grad()
def predict(
    model: nn.Module,
    horsepower: Sequence[float] | Tensor,
    input_bounds: NormalizationBounds,
    label_bounds: NormalizationBounds,
) -> Tensor:
    """Return predicted MPG for raw ``horsepower`` values as a 1-D tensor."""

    parameter = next(model.parameters())
    values = torch.as_tensor(horsepower, dtype=parameter.dtype, device=parameter.device)
    model.eval()
    outputs = model(normalize(values.reshape(-1, 1), input_bounds))
    return denormalize(outputs, label_bounds).reshape(-1).cpu()


def regression_line(
    model: nn.Module,
    input_bounds: NormalizationBounds,
    label_bounds: NormalizationBounds,
    *,
    num_points: int = 100,
) -> tuple[Tensor, Tensor]:
    """Sample the learned curve evenly across the observed horsepower range."""

    if num_points <= 0:
        raise ValueError("num_points must be positive")
    horsepower = torch.linspace(input_bounds.min, input_bounds.max, num_points)
    return horsepower, predict(model, horsepower, input_bounds, label_bounds)


__all__ = ["predict", "regression_line"]
