"""
Label Studio to YOLO Conversion Component.

This module provides functionality for:
- Checking the structure of a Label Studio export and loading its classes
- Pairing images with their label files and validating label lines
- Splitting the pairs into reproducible train and validation sets
- Writing the YOLO directory layout and data.yaml
"""

from .config import ConversionConfig, load_config_file
from .converter import ConversionResult, Converter
from .layout import copy_files, create_yolo_structure, write_dataset_yaml
from .source import find_label_pairs, load_classes, load_notes, validate_source_structure
from .splitter import make_rng, split_dataset
from .validation import LabelValidator, check_label_line, validate_labels

__all__ = [
    "ConversionConfig",
    "load_config_file",
    "ConversionResult",
    "Converter",
    "copy_files",
    "create_yolo_structure",
    "write_dataset_yaml",
    "find_label_pairs",
    "load_classes",
    "load_notes",
    "validate_source_structure",
    "make_rng",
    "split_dataset",
    "LabelValidator",
    "check_label_line",
    "validate_labels",
]
