from pathlib import Path
from typing import Any, List

from pydantic import BaseModel, ValidationError

from labelstudio_to_yolo.lib import (
    setup_logger,
    EmptyDataset,
    InvalidConfiguration,
    ValidationStats,
)

from .config import ConversionConfig, TRAIN_SPLIT, VAL_SPLIT
from .layout import copy_files, create_yolo_structure, split_dirs, write_dataset_yaml
from .source import find_label_pairs, load_classes, load_notes, validate_source_structure
from .splitter import make_rng, split_dataset
from .validation import validate_labels

logger = setup_logger(__name__)


def _overlaps(first: Path, second: Path) -> bool:
    return first == second or first in second.parents or second in first.parents


class ConversionResult(BaseModel):
    """Summary of a finished conversion run."""

    output_dir: Path
    yaml_path: Path
    classes: List[str]
    stats: ValidationStats
    train_count: int
    val_count: int


class Converter:
    """Converts a Label Studio YOLO export into a YOLO training dataset."""

    def __init__(self, config: ConversionConfig):
        self.config = config

    @classmethod
    def from_options(cls, **options: Any) -> "Converter":
        """Build a converter from raw options, rejecting invalid values up front."""
        try:
            config = ConversionConfig.model_validate(options)
        except ValidationError as e:
            raise InvalidConfiguration(f"Invalid conversion options: {e}")
        return cls(config)

    def _check_output_location(self) -> None:
        """Refuse an output layout whose split directories overlap the export."""
        sources = [self.config.images_dir.resolve(), self.config.labels_dir.resolve()]
        for directory in split_dirs(self.config.output_dir):
            directory = directory.resolve()
            for source in sources:
                if _overlaps(directory, source):
                    raise InvalidConfiguration(
                        f"Output directory {directory} overlaps source directory {source}"
                    )

    def _check_notes(self, classes: List[str]) -> None:
        notes = load_notes(self.config.source_dir)
        if notes is None or not notes.categories:
            return
        if notes.class_names() != classes:
            logger.warning(
                f"Categories in notes.json {notes.class_names()} do not match "
                f"classes.txt {classes}; using classes.txt"
            )

    def convert(self) -> ConversionResult:
        """
        Run the full conversion.

        Raises:
            InvalidConfiguration: the output split directories overlap the export
            MissingInput: the export lacks images/, labels/ or classes.txt
            EmptyDataset: no image has a matching label file
            IOFailure: reading the export or writing the dataset failed
        """
        config = self.config
        logger.info("Starting Label Studio to YOLO conversion...")
        logger.info(f"Source: {config.source_dir}")
        logger.info(f"Output: {config.output_dir}")
        logger.info(f"Train split: {config.train_split * 100:.1f}%")

        self._check_output_location()
        validate_source_structure(config.source_dir)
        classes = load_classes(config.source_dir)
        self._check_notes(classes)

        pairs = find_label_pairs(config.source_dir)
        if not pairs:
            raise EmptyDataset(f"No valid image-label pairs found in {config.images_dir}")

        logger.info("Validating labels...")
        stats = validate_labels(
            pairs, num_classes=len(classes) if config.check_class_ids else None
        )
        logger.info(f"Validation stats: {stats.model_dump()}")

        split = split_dataset(pairs, config.train_split, make_rng(config.seed))

        create_yolo_structure(config.output_dir, clean=config.clean_output)
        copy_files(split.train, config.output_dir, TRAIN_SPLIT)
        copy_files(split.val, config.output_dir, VAL_SPLIT)
        yaml_path = write_dataset_yaml(config.output_dir, classes)

        logger.info("Conversion completed successfully!")
        return ConversionResult(
            output_dir=config.output_dir,
            yaml_path=yaml_path,
            classes=classes,
            stats=stats,
            train_count=len(split.train),
            val_count=len(split.val),
        )
