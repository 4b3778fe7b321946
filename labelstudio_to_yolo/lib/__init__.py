"""
Utility library for the Label Studio to YOLO converter.

This module provides the models, errors and logging helpers shared by the
converter components.
"""

from .logger import setup_logger, set_log_level
from .errors import (
    ConversionError,
    EmptyDataset,
    InvalidConfiguration,
    IOFailure,
    MissingInput,
)
from .models import (
    DatasetSplit,
    ImageFormat,
    LabelPair,
    NotesInfo,
    ValidationStats,
    YoloDatasetConfig,
)

__all__ = [
    "setup_logger",
    "set_log_level",
    "ConversionError",
    "EmptyDataset",
    "InvalidConfiguration",
    "IOFailure",
    "MissingInput",
    "DatasetSplit",
    "ImageFormat",
    "LabelPair",
    "NotesInfo",
    "ValidationStats",
    "YoloDatasetConfig",
]
