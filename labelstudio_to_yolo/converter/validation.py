"""
Validation of YOLO label files.

Every non-blank line of a label file must read

    <class_id> <x_center> <y_center> <width> <height>

with an integer class id and four coordinates normalised to [0, 1]. Lines
that break the format are counted and logged, never fixed and never fatal.
"""

import math
import re
from typing import Iterable, Optional

from labelstudio_to_yolo.lib import setup_logger, LabelPair, ValidationStats

logger = setup_logger(__name__)

FIELDS_PER_LINE = 5

_CLASS_ID_RE = re.compile(r"[+-]?[0-9]+")
_COORDINATE_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _parse_coordinate(token: str) -> Optional[float]:
    if not _COORDINATE_RE.fullmatch(token):
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def check_label_line(line: str) -> Optional[str]:
    """
    Check one annotation line.

    Returns None when the line is valid, otherwise a short description of
    the first rule it breaks.
    """
    parts = line.split()
    if len(parts) != FIELDS_PER_LINE:
        return "Wrong number of values"

    if not _CLASS_ID_RE.fullmatch(parts[0]):
        return "Invalid class_id"

    for token in parts[1:]:
        coord = _parse_coordinate(token)
        if coord is None:
            return "Invalid coordinate"
        if coord < 0 or coord > 1:
            return "Non-normalized coordinates"

    return None


class LabelValidator:
    """Accumulates validation statistics over a set of label files."""

    def __init__(self, num_classes: Optional[int] = None):
        # When set, class ids outside [0, num_classes) are reported
        self.num_classes = num_classes

        self.total_files = 0
        self.total_annotations = 0
        self.files_with_annotations = 0
        self.empty_files = 0
        self.invalid_lines = 0
        self.files_unreadable = 0
        self.unknown_class_ids = 0

    def _check_class_id(self, line: str, location: str) -> None:
        if self.num_classes is None:
            return
        class_id = int(line.split()[0])
        if not 0 <= class_id < self.num_classes:
            logger.warning(
                f"Class id {class_id} has no entry in the class list in {location}"
            )
            self.unknown_class_ids += 1

    def add_file(self, pair: LabelPair) -> None:
        self.total_files += 1
        label_name = pair.label_path.name

        valid_lines = 0
        try:
            with open(pair.label_path, "r", encoding="utf-8", errors="replace") as f:
                for line_num, line in enumerate(f, start=1):
                    if not line.strip():
                        continue

                    location = f"{label_name}:{line_num}"
                    problem = check_label_line(line)
                    if problem is not None:
                        logger.warning(f"{problem} in {location}")
                        self.invalid_lines += 1
                        continue

                    self._check_class_id(line, location)
                    valid_lines += 1
        except OSError as e:
            logger.warning(f"Error reading {pair.label_path}: {e}")
            self.invalid_lines += 1
            self.files_unreadable += 1
            return

        self.total_annotations += valid_lines
        if valid_lines > 0:
            self.files_with_annotations += 1
        else:
            self.empty_files += 1

    def stats(self) -> ValidationStats:
        return ValidationStats(
            total_files=self.total_files,
            total_annotations=self.total_annotations,
            files_with_annotations=self.files_with_annotations,
            empty_files=self.empty_files,
            invalid_lines=self.invalid_lines,
            files_unreadable=self.files_unreadable,
            unknown_class_ids=self.unknown_class_ids,
        )


def validate_labels(
    pairs: Iterable[LabelPair], num_classes: Optional[int] = None
) -> ValidationStats:
    """Validate the label file of every pair and return aggregate statistics."""
    validator = LabelValidator(num_classes=num_classes)
    for pair in pairs:
        validator.add_file(pair)
    return validator.stats()
