import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from pydantic import BaseModel, Field

from labelstudio_to_yolo.lib.errors import InvalidConfiguration

DEFAULT_SOURCE_DIR = "."
DEFAULT_OUTPUT_DIR = "./yolo_dataset"
DEFAULT_TRAIN_SPLIT = 0.8
DEFAULT_SEED = 42

IMAGES_DIR = "images"
LABELS_DIR = "labels"
CLASSES_FILE = "classes.txt"
NOTES_FILE = "notes.json"
DATASET_YAML = "data.yaml"

TRAIN_SPLIT = "train"
VAL_SPLIT = "val"
SPLITS = (TRAIN_SPLIT, VAL_SPLIT)


class ConversionConfig(BaseModel):
    """Configuration for converting a Label Studio export into a YOLO dataset."""

    source_dir: Path = Field(
        Path(DEFAULT_SOURCE_DIR),
        description="Path to the Label Studio export directory",
    )
    output_dir: Path = Field(
        Path(DEFAULT_OUTPUT_DIR),
        description="Path where the YOLO dataset will be created",
    )
    train_split: float = Field(
        DEFAULT_TRAIN_SPLIT,
        description="Fraction of the image-label pairs used for training",
        ge=0,
        le=1,
    )
    seed: int = Field(
        DEFAULT_SEED, description="Random seed for reproducible splits"
    )
    clean_output: bool = Field(
        True,
        description="Remove files left in the split directories by a previous run",
    )
    check_class_ids: bool = Field(
        True,
        description="Warn about label class ids that have no entry in classes.txt",
    )

    @property
    def images_dir(self) -> Path:
        return self.source_dir / IMAGES_DIR

    @property
    def labels_dir(self) -> Path:
        return self.source_dir / LABELS_DIR


def load_config_file(config_file: Union[str, Path]) -> Dict[str, Any]:
    """Read raw conversion options from a YAML or JSON file."""
    config_path = Path(config_file)
    suffix = config_path.suffix.lower()
    if suffix not in [".yaml", ".yml", ".json"]:
        raise InvalidConfiguration(f"Unsupported config file format: {suffix}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                config_data = json.load(f)
            else:
                config_data = yaml.safe_load(f)
    except OSError as e:
        raise InvalidConfiguration(f"Cannot read config file {config_path}: {e}")
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidConfiguration(f"Cannot parse config file {config_path}: {e}")

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        raise InvalidConfiguration(
            f"Config file {config_path} must contain a mapping of options"
        )
    return config_data
