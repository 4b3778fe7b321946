from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ImageFormat(str, Enum):
    """Image file extensions recognised when pairing images with labels."""

    JPG = ".jpg"
    JPEG = ".jpeg"
    PNG = ".png"
    BMP = ".bmp"
    TIFF = ".tiff"
    WEBP = ".webp"

    @classmethod
    def is_image(cls, path: Path) -> bool:
        return path.suffix.lower() in {fmt.value for fmt in cls}


class LabelPair(BaseModel):
    """An image file and the label file sharing its base name."""

    model_config = ConfigDict(frozen=True)

    image_path: Path
    label_path: Path

    @property
    def name(self) -> str:
        return self.image_path.stem


class ValidationStats(BaseModel):
    """Aggregate counters produced by label validation."""

    model_config = ConfigDict(frozen=True)

    total_files: int = 0
    total_annotations: int = 0
    files_with_annotations: int = 0
    empty_files: int = 0
    invalid_lines: int = 0

    # Label files that could not be opened or read. Each one is also
    # counted once in invalid_lines.
    files_unreadable: int = 0

    # Valid lines whose class id has no entry in the class list
    unknown_class_ids: int = 0


class DatasetSplit(BaseModel):
    """Train and validation partitions of the matched pairs."""

    model_config = ConfigDict(frozen=True)

    train: List[LabelPair]
    val: List[LabelPair]


class YoloDatasetConfig(BaseModel):
    """Contents of the data.yaml file read by YOLO training tools."""

    path: str = Field(..., description="Absolute path to the dataset root")
    train: str = Field(..., description="Training images, relative to path")
    val: str = Field(..., description="Validation images, relative to path")
    nc: int = Field(..., description="Number of classes")
    names: List[str] = Field(..., description="Class names ordered by class id")


class NotesCategory(BaseModel):
    id: int
    name: str


class NotesMetadata(BaseModel):
    year: Optional[int] = None
    version: Optional[str] = None
    contributor: Optional[str] = None


class NotesInfo(BaseModel):
    """The optional notes.json written by Label Studio next to classes.txt."""

    categories: List[NotesCategory] = Field(default_factory=list)
    info: NotesMetadata = Field(default_factory=NotesMetadata)

    def class_names(self) -> List[str]:
        """Category names ordered by category id."""
        return [c.name for c in sorted(self.categories, key=lambda c: c.id)]
