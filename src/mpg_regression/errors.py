"""Exception hierarchy for the horsepower/MPG regression pipeline."""
from __future__ import annotations


class PipelineError(Exception):
    """Base class for fatal pipeline failures."""


class NetworkError(PipelineError):
    """The dataset could not be retrieved."""


class ParseError(PipelineError):
    """The dataset payload or one of its records is malformed."""


class EmptyDatasetError(PipelineError, ValueError):
    """No records are left to derive normalisation bounds from."""


class FrameworkError(PipelineError):
    """PyTorch failed while optimising the model."""


class ConvergenceWarning(UserWarning):
    """Training produced a non-finite loss but was allowed to continue."""


__all__ = [
    "ConvergenceWarning",
    "EmptyDatasetError",
    "FrameworkError",
    "NetworkError",
    "ParseError",
    "PipelineError",
]
