"""End-to-end run: fetch, prepare, build and train."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import torch
from torch import nn

from .data.cars import CARS_DATA_URL, CleanRecord, fetch_clean_records, load_clean_records
from .data.preprocessing import PreparedData, prepare
from .models.linear import LinearRegressionConfig, build_model
from .training.trainer import TrainingCallback, TrainingConfig, TrainingHistory, train


@dataclass(slots=True)
class PipelineConfig:
    """Where the data comes from and how the model is built and trained.

    ``data_path`` takes precedence over ``url`` when set.
    """

    url: str = CARS_DATA_URL
    data_path: Optional[str | Path] = None
    timeout: Optional[float] = 30.0
    model: LinearRegressionConfig = field(default_factory=LinearRegressionConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")


@dataclass
class PipelineResult:
    records: List[CleanRecord]
    prepared: PreparedData
    model: nn.Module
    history: TrainingHistory


def load_records(config: PipelineConfig) -> List[CleanRecord]:
    if config.data_path is not None:
        return load_clean_records(config.data_path)
    return fetch_clean_records(config.url, timeout=config.timeout)


def run_pipeline(
    config: Optional[PipelineConfig] = None,
    *,
    callbacks: Sequence[TrainingCallback] = (),
    on_records: Optional[Callable[[List[CleanRecord]], None]] = None,
) -> PipelineResult:
    """Run the whole pipeline once and return every intermediate artefact.

    ``training.seed``, when set, seeds the data shuffle, the weight
    initialisation and the per-epoch batch order.
    """

    config = config or PipelineConfig()
    records = load_records(config)
    if on_records is not None:
        on_records(records)

    generator = None
    seed = config.training.seed
    if seed is not None:
        torch.manual_seed(seed)
        generator = torch.Generator().manual_seed(seed)
    prepared = prepare(records, generator=generator)

    model = build_model(config.model)
    history = train(
        model,
        prepared.inputs,
        prepared.labels,
        config.training,
        callbacks=callbacks,
    )
    return PipelineResult(records=records, prepared=prepared, model=model, history=history)


__all__ = ["PipelineConfig", "PipelineResult", "load_records", "run_pipeline"]
