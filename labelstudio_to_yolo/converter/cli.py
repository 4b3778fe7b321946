import logging
import platform
from typing import Any, Dict, Optional

import typer

from labelstudio_to_yolo import __version__
from labelstudio_to_yolo.lib import setup_logger, set_log_level, ConversionError

from .config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SEED,
    DEFAULT_SOURCE_DIR,
    DEFAULT_TRAIN_SPLIT,
    load_config_file,
)
from .converter import Converter

app = typer.Typer(
    help="Converts a Label Studio export to YOLO training data format.",
    add_completion=False,
)

logger = setup_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"labelstudio-to-yolo version {__version__}")
        typer.echo(f"Python version: {platform.python_version()}")
        raise typer.Exit()


@app.command()
def convert(
    source: Optional[str] = typer.Option(
        None,
        help=f"Path to Label Studio export directory [default: {DEFAULT_SOURCE_DIR}]",
    ),
    output: Optional[str] = typer.Option(
        None,
        help=f"Path where YOLO dataset will be created [default: {DEFAULT_OUTPUT_DIR}]",
    ),
    train_split: Optional[float] = typer.Option(
        None,
        help=f"Fraction of data for training [default: {DEFAULT_TRAIN_SPLIT}]",
    ),
    seed: Optional[int] = typer.Option(
        None, help=f"Random seed for reproducible splits [default: {DEFAULT_SEED}]"
    ),
    config_file: Optional[str] = typer.Option(
        None,
        "--config-file",
        "-c",
        help="YAML/JSON file with conversion options; command line options take precedence",
    ),
    keep_existing: bool = typer.Option(
        False,
        "--keep-existing",
        help="Keep files already present in the output split directories",
    ),
    no_class_check: bool = typer.Option(
        False,
        "--no-class-check",
        help="Do not warn about class ids missing from classes.txt",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version information",
    ),
):
    """
    Convert a Label Studio YOLO export into a YOLO dataset with a train/val split and data.yaml.
    """
    if verbose:
        set_log_level(logging.DEBUG)

    try:
        options: Dict[str, Any] = load_config_file(config_file) if config_file else {}

        overrides = {
            "source_dir": source,
            "output_dir": output,
            "train_split": train_split,
            "seed": seed,
        }
        options.update({k: v for k, v in overrides.items() if v is not None})
        if keep_existing:
            options["clean_output"] = False
        if no_class_check:
            options["check_class_ids"] = False

        converter = Converter.from_options(**options)
        result = converter.convert()
    except ConversionError as e:
        logger.critical(f"Error: {e}")
        raise typer.Exit(code=1)

    typer.echo(f"Dataset ready for YOLO training at: {result.output_dir}")
    typer.echo(f"  - Training images: {result.train_count}")
    typer.echo(f"  - Validation images: {result.val_count}")
    typer.echo(f"  - Total annotations: {result.stats.total_annotations}")
    if result.stats.invalid_lines:
        typer.echo(f"  - Invalid label lines: {result.stats.invalid_lines}")


if __name__ == "__main__":
    app()
