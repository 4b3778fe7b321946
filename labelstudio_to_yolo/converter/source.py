"""Reading the Label Studio export: structure checks, classes and image-label pairs."""

import json
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from labelstudio_to_yolo.lib import (
    setup_logger,
    ImageFormat,
    IOFailure,
    LabelPair,
    MissingInput,
    NotesInfo,
)

from .config import CLASSES_FILE, IMAGES_DIR, LABELS_DIR, NOTES_FILE

logger = setup_logger(__name__)


def validate_source_structure(source_dir: Union[str, Path]) -> None:
    """Check that the export contains images/, labels/ and classes.txt."""
    source_dir = Path(source_dir)

    for required_dir in [source_dir / IMAGES_DIR, source_dir / LABELS_DIR]:
        if not required_dir.exists():
            raise MissingInput(
                f"Required directory not found: {required_dir}", required_dir
            )

    classes_path = source_dir / CLASSES_FILE
    if not classes_path.exists():
        raise MissingInput(f"Required file not found: {classes_path}", classes_path)


def load_classes(source_dir: Union[str, Path]) -> List[str]:
    """
    Load class names from classes.txt.

    Lines are stripped and blank lines are dropped. The position of a name in
    the returned list is its YOLO class id.
    """
    classes_path = Path(source_dir) / CLASSES_FILE

    try:
        with open(classes_path, "r", encoding="utf-8") as f:
            classes = [line.strip() for line in f if line.strip()]
    except FileNotFoundError:
        raise MissingInput(f"Failed to open {CLASSES_FILE}: {classes_path}", classes_path)
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(f"Error reading {classes_path}: {e}", classes_path)

    logger.info(f"Found {len(classes)} classes: {classes}")
    return classes


def load_notes(source_dir: Union[str, Path]) -> Optional[NotesInfo]:
    """Load notes.json if the export has one; it is informational only."""
    notes_path = Path(source_dir) / NOTES_FILE
    if not notes_path.is_file():
        return None

    try:
        with open(notes_path, "r", encoding="utf-8") as f:
            notes = NotesInfo.model_validate(json.load(f))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable {NOTES_FILE}: {e}")
        return None

    logger.debug(f"Loaded {len(notes.categories)} categories from {notes_path}")
    return notes


def _raise_walk_error(error: OSError) -> None:
    raise IOFailure(
        f"Error scanning images directory: {error}", error.filename or IMAGES_DIR
    )


def find_label_pairs(source_dir: Union[str, Path]) -> List[LabelPair]:
    """
    Find every image under images/ that has a matching labels/<stem>.txt.

    Images are discovered recursively, but labels are always looked up
    directly under labels/. Images without a label are skipped with a
    warning.
    """
    source_dir = Path(source_dir)
    images_dir = source_dir / IMAGES_DIR
    labels_dir = source_dir / LABELS_DIR

    if not images_dir.is_dir():
        raise IOFailure(f"Images directory not found: {images_dir}", images_dir)

    pairs: List[LabelPair] = []
    for root, dirnames, filenames in os.walk(images_dir, onerror=_raise_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            image_path = Path(root) / filename
            if not ImageFormat.is_image(image_path):
                continue

            label_path = labels_dir / f"{image_path.stem}.txt"
            if label_path.is_file():
                pairs.append(LabelPair(image_path=image_path, label_path=label_path))
            else:
                logger.warning(f"No label file found for {filename}")

    logger.info(f"Found {len(pairs)} image-label pairs")
    return pairs
