"""Dataset retrieval and preprocessing for the horsepower/MPG regression."""

from .cars import (
    CARS_DATA_URL,
    CleanRecord,
    clean_records,
    download_dataset,
    fetch_clean_records,
    load_clean_records,
)
from .preprocessing import NormalizationBounds, PreparedData, denormalize, normalize, prepare

__all__ = [
    "CARS_DATA_URL",
    "CleanRecord",
    "NormalizationBounds",
    "PreparedData",
    "clean_records",
    "denormalize",
    "download_dataset",
    "fetch_clean_records",
    "load_clean_records",
    "normalize",
    "prepare",
]
