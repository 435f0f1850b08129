"""Predict MPG for horsepower values with a trained checkpoint."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

import torch
from torch import nn

from mpg_regression.data import NormalizationBounds
from mpg_regression.models import LinearRegressionConfig, build_model
from mpg_regression.training import predict


@dataclass
class LoadedModel:
    model: nn.Module
    input_bounds: NormalizationBounds
    label_bounds: NormalizationBounds


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Predict MPG from horsepower")
    parser.add_argument("--checkpoint", type=str, required=True, help="Path to .pt checkpoint")
    parser.add_argument(
        "--horsepower",
        type=float,
        nargs="+",
        required=True,
        help="Horsepower values to predict for",
    )
    parser.add_argument("--device", type=str, default=None)
    return parser.parse_args()


def load_checkpoint(path: str, device: str | None = None) -> LoadedModel:
    raw = torch.load(path, map_location=device or "cpu")
    model = build_model(LinearRegressionConfig(**raw["config"]))
    model.load_state_dict(raw["state_dict"])
    model.eval()
    return LoadedModel(
        model=model.to(device or "cpu"),
        input_bounds=NormalizationBounds(**raw["input_bounds"]),
        label_bounds=NormalizationBounds(**raw["label_bounds"]),
    )


def main() -> None:
    args = parse_args()
    loaded = load_checkpoint(args.checkpoint, device=args.device)
    predictions = predict(loaded.model, args.horsepower, loaded.input_bounds, loaded.label_bounds)
    for horsepower, mpg in zip(args.horsepower, predictions.tolist()):
        print(f"{horsepower:g} hp -> {mpg:.2f} mpg")


if __name__ == "__main__":
    main()
