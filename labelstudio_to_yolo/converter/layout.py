"""Writing the YOLO dataset: split directories, copied files and data.yaml."""

import shutil
from pathlib import Path
from typing import List, Sequence, Union

import yaml
from tqdm import tqdm

from labelstudio_to_yolo.lib import (
    setup_logger,
    IOFailure,
    LabelPair,
    YoloDatasetConfig,
)

from .config import DATASET_YAML, IMAGES_DIR, LABELS_DIR, SPLITS

logger = setup_logger(__name__)

YAML_HEADER = "# YOLO Dataset Configuration\n# Generated from Label Studio export\n\n"


def split_dirs(output_dir: Union[str, Path]) -> List[Path]:
    """The four leaf directories of the dataset layout."""
    output_dir = Path(output_dir)
    return [
        output_dir / kind / split for kind in (IMAGES_DIR, LABELS_DIR) for split in SPLITS
    ]


def create_yolo_structure(output_dir: Union[str, Path], clean: bool = True) -> None:
    """
    Create images/{train,val} and labels/{train,val} under output_dir.

    With clean set, split directories left over from an earlier run are
    emptied first so the output only holds files from this run.
    """
    for directory in split_dirs(output_dir):
        try:
            if clean and directory.is_dir():
                logger.debug(f"Removing previous contents of {directory}")
                shutil.rmtree(directory)
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure(f"Failed to create directory {directory}: {e}", directory)

    logger.info(f"Created YOLO directory structure in: {output_dir}")


def _copy(source: Path, destination: Path, kind: str) -> None:
    try:
        shutil.copyfile(source, destination)
    except OSError as e:
        raise IOFailure(f"Failed to copy {kind} {source}: {e}", source)


def copy_files(
    pairs: Sequence[LabelPair], output_dir: Union[str, Path], split: str
) -> None:
    """Copy each pair's image and label into the split's directories."""
    if split not in SPLITS:
        raise ValueError(f"Unknown split '{split}', expected one of {SPLITS}")

    output_dir = Path(output_dir)
    images_dest = output_dir / IMAGES_DIR / split
    labels_dest = output_dir / LABELS_DIR / split

    for pair in tqdm(pairs, desc=f"Copying {split} files", unit="pair"):
        _copy(pair.image_path, images_dest / pair.image_path.name, "image")
        _copy(pair.label_path, labels_dest / pair.label_path.name, "label")

    logger.info(f"Copied {len(pairs)} {split} files")


def write_dataset_yaml(output_dir: Union[str, Path], classes: List[str]) -> Path:
    """Write data.yaml describing the dataset and return its path."""
    output_dir = Path(output_dir)
    config = YoloDatasetConfig(
        path=str(output_dir.resolve()),
        train=f"{IMAGES_DIR}/train",
        val=f"{IMAGES_DIR}/val",
        nc=len(classes),
        names=list(classes),
    )

    yaml_path = output_dir / DATASET_YAML
    try:
        with open(yaml_path, "w", encoding="utf-8") as f:
            f.write(YAML_HEADER)
            yaml.safe_dump(
                config.model_dump(),
                f,
                sort_keys=False,
                indent=2,
                allow_unicode=True,
                default_flow_style=False,
            )
    except OSError as e:
        raise IOFailure(f"Failed to write {yaml_path}: {e}", yaml_path)

    logger.info(f"Created YAML config: {yaml_path}")
    return yaml_path
