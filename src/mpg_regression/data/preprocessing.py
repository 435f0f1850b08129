"""Shuffling and min-max normalisation of cleaned car records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import torch
from torch import Tensor

from ..errors import EmptyDatasetError
from .cars import CleanRecord


@dataclass(frozen=True, slots=True)
class NormalizationBounds:
    """Observed range of one feature, kept to invert predictions later."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError("min must not exceed max")

    @property
    def span(self) -> float:
        return self.max - self.min

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "NormalizationBounds":
        """Bounds of the raw values, before any cast to a narrower dtype."""

        if len(values) == 0:
            raise EmptyDatasetError("cannot compute bounds of no values")
        return cls(min=float(min(values)), max=float(max(values)))

    def normalize(self, values: Tensor) -> Tensor:
        return normalize(values, self)

    def denormalize(self, values: Tensor) -> Tensor:
        return denormalize(values, self)


def normalize(values: Tensor, bounds: NormalizationBounds) -> Tensor:
    """Rescale ``values`` to ``[0, 1]``; a constant feature maps to ``0.0``."""

    if bounds.span == 0.0:
        return torch.zeros_like(values)
    return (values - bounds.min) / bounds.span


def denormalize(values: Tensor, bounds: NormalizationBounds) -> Tensor:
    """Inverse of :func:`normalize`; a constant feature maps back to ``min``."""

    return values * bounds.span + bounds.min


@dataclass(frozen=True, slots=True)
class PreparedData:
    """Normalised ``(n, 1)`` training tensors together with their bounds."""

    inputs: Tensor
    labels: Tensor
    input_bounds: NormalizationBounds
    label_bounds: NormalizationBounds

    def __len__(self) -> int:
        return int(self.inputs.size(0))


def shuffle_records(
    records: Sequence[CleanRecord],
    *,
    generator: Optional[torch.Generator] = None,
) -> List[CleanRecord]:
    """Return a uniformly shuffled copy of ``records``."""

    order = torch.randperm(len(records), generator=generator).tolist()
    return [records[index] for index in order]


def prepare(
    records: Sequence[CleanRecord],
    *,
    generator: Optional[torch.Generator] = None,
    dtype: torch.dtype = torch.float32,
) -> PreparedData:
    """Shuffle, tensorise and normalise ``records`` for training.

    Horsepower becomes the input column and MPG the label column. The
    caller's sequence is left untouched; the shuffle keeps each record's
    pair together.
    """

    if len(records) == 0:
        raise EmptyDatasetError("no records to prepare")

    with torch.no_grad():
        shuffled = shuffle_records(records, generator=generator)
        horsepower = [record.horsepower for record in shuffled]
        mpg = [record.mpg for record in shuffled]
        input_bounds = NormalizationBounds.from_values(horsepower)
        label_bounds = NormalizationBounds.from_values(mpg)

        # normalise in float64, cast only the 0..1 outputs
        inputs = torch.tensor(horsepower, dtype=torch.float64).reshape(-1, 1)
        labels = torch.tensor(mpg, dtype=torch.float64).reshape(-1, 1)

        return PreparedData(
            inputs=normalize(inputs, input_bounds).to(dtype),
            labels=normalize(labels, label_bounds).to(dtype),
            input_bounds=input_bounds,
            label_bounds=label_bounds,
        )


__all__ = [
    "NormalizationBounds",
    "PreparedData",
    "denormalize",
    "normalize",
    "prepare",
    "shuffle_records",
]
