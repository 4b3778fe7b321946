"""Shared fixtures: a small Label Studio export on disk."""

from pathlib import Path
from typing import Callable, Dict

import pytest

LABELS: Dict[str, str] = {
    "image1.txt": "0 0.5 0.5 0.3 0.3\n1 0.2 0.8 0.1 0.1\n",
    "image2.txt": "0 0.4 0.6 0.2 0.4\n",
    "image3.txt": "1 0.7 0.3 0.3 0.2\n0 0.1 0.9 0.1 0.1\n",
}

IMAGES = ["image1.jpg", "image2.png", "image3.jpeg"]

NOTES_JSON = """{
    "categories": [
        {"id": 0, "name": "book"},
        {"id": 1, "name": "person"}
    ],
    "info": {
        "year": 2025,
        "version": "1.0",
        "contributor": "Label Studio"
    }
}
"""


def write_export(base_dir: Path, with_notes: bool = True) -> Path:
    """Write a three-pair export with two classes into base_dir."""
    images_dir = base_dir / "images"
    labels_dir = base_dir / "labels"
    images_dir.mkdir(parents=True, exist_ok=True)
    labels_dir.mkdir(parents=True, exist_ok=True)

    for name in IMAGES:
        (images_dir / name).write_bytes(f"fake image data {name}".encode())

    for name, content in LABELS.items():
        (labels_dir / name).write_text(content)

    (base_dir / "classes.txt").write_text("book\nperson\n")

    if with_notes:
        (base_dir / "notes.json").write_text(NOTES_JSON)

    return base_dir


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    return write_export(tmp_path / "export")


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "yolo_dataset"


@pytest.fixture
def make_export() -> Callable[[Path], Path]:
    return write_export
