"""Model definitions for the horsepower/MPG regression."""

from .linear import LinearRegressionConfig, build_model, model_summary

__all__ = ["LinearRegressionConfig", "build_model", "model_summary"]
