"""Two-layer linear regression network."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Optional

from torch import nn


@dataclass(slots=True)
class LinearRegressionConfig:
    """Configuration for :func:`build_model`.

    Parameters
    ----------
    input_dim:
        Number of input features. The cars regression feeds horsepower only.
    hidden_units:
        Width of the first affine layer. There is no activation after it, so
        the stacked layers remain an affine map of the input.
    output_dim:
        Number of predicted values.
    bias:
        Whether both layers learn a bias term.
    """

    input_dim: int = 1
    hidden_units: int = 1
    output_dim: int = 1
    bias: bool = True

    def __post_init__(self) -> None:
        if self.input_dim <= 0:
            raise ValueError("input_dim must be positive")
        if self.hidden_units <= 0:
            raise ValueError("hidden_units must be positive")
        if self.output_dim <= 0:
            raise ValueError("output_dim must be positive")


def build_model(config: Optional[LinearRegressionConfig] = None) -> nn.Sequential:
    """Return ``dense_1 -> dense_2`` with PyTorch's default initialisation."""

    config = config or LinearRegressionConfig()
    return nn.Sequential(
        OrderedDict(
            [
                ("dense_1", nn.Linear(config.input_dim, config.hidden_units, bias=config.bias)),
                ("dense_2", nn.Linear(config.hidden_units, config.output_dim, bias=config.bias)),
            ]
        )
    )


def model_summary(model: nn.Module) -> str:
    """Render a layer table with output shapes and parameter counts."""

    rows: List[tuple[str, str, str]] = [("Layer (type)", "Output shape", "Param #")]
    for name, layer in model.named_children():
        out_features = getattr(layer, "out_features", None)
        shape = f"[batch, {out_features}]" if out_features is not None else "?"
        count = sum(p.numel() for p in layer.parameters())
        rows.append((f"{name} ({type(layer).__name__})", shape, str(count)))

    widths = [max(len(row[col]) for row in rows) for col in range(3)]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows]
    separator = "-" * len(lines[0])
    total = sum(p.numel() for p in model.parameters())
    trainable = sum(p.numel() for p in model.parameters() if p.requires_grad)
    return "\n".join(
        [lines[0], separator, *lines[1:], separator]
        + [f"Total params: {total}", f"Trainable params: {trainable}"]
    )


__all__ = ["LinearRegressionConfig", "build_model", "model_summary"]
