"""Tests for reading the export: structure checks, classes, notes and pairing."""

import os
from pathlib import Path

import pytest

from labelstudio_to_yolo.converter.source import (
    find_label_pairs,
    load_classes,
    load_notes,
    validate_source_structure,
)
from labelstudio_to_yolo.lib import IOFailure, MissingInput


def test_validate_source_structure(export_dir: Path):
    validate_source_structure(export_dir)


@pytest.mark.parametrize("missing", ["images", "labels", "classes.txt"])
def test_validate_source_structure_names_missing_entry(tmp_path: Path, missing: str):
    (tmp_path / "images").mkdir()
    (tmp_path / "labels").mkdir()
    (tmp_path / "classes.txt").write_text("a\n")

    target = tmp_path / missing
    if target.is_dir():
        target.rmdir()
    else:
        target.unlink()

    with pytest.raises(MissingInput) as excinfo:
        validate_source_structure(tmp_path)

    assert missing in str(excinfo.value)
    assert excinfo.value.path == target


def test_validate_source_structure_reports_first_missing(tmp_path: Path):
    with pytest.raises(MissingInput) as excinfo:
        validate_source_structure(tmp_path)
    assert excinfo.value.path == tmp_path / "images"


def test_load_classes(export_dir: Path):
    assert load_classes(export_dir) == ["book", "person"]


def test_load_classes_strips_and_skips_blank_lines(tmp_path: Path):
    (tmp_path / "classes.txt").write_text("\n  cat  \n\n\tdog\n   \nbird")
    assert load_classes(tmp_path) == ["cat", "dog", "bird"]


def test_load_classes_empty_file(tmp_path: Path):
    (tmp_path / "classes.txt").write_text("")
    assert load_classes(tmp_path) == []


def test_load_classes_file_not_found(tmp_path: Path):
    with pytest.raises(MissingInput) as excinfo:
        load_classes(tmp_path)
    assert "classes.txt" in str(excinfo.value)


def test_load_classes_read_error(tmp_path: Path):
    # A directory in place of the file fails with something other than
    # "not found"
    (tmp_path / "classes.txt").mkdir()
    with pytest.raises(IOFailure) as excinfo:
        load_classes(tmp_path)
    assert excinfo.value.path == tmp_path / "classes.txt"


def test_load_notes(export_dir: Path):
    notes = load_notes(export_dir)
    assert notes is not None
    assert notes.class_names() == ["book", "person"]
    assert notes.info.contributor == "Label Studio"


def test_load_notes_absent_or_malformed(tmp_path: Path):
    assert load_notes(tmp_path) is None
    (tmp_path / "notes.json").write_text("{not json")
    assert load_notes(tmp_path) is None


def test_find_label_pairs(export_dir: Path):
    pairs = find_label_pairs(export_dir)

    assert len(pairs) == 3
    for pair in pairs:
        assert pair.image_path.is_file()
        assert pair.label_path.is_file()
        assert pair.image_path.stem == pair.label_path.stem


def test_find_label_pairs_skips_orphan_images_and_other_files(export_dir: Path):
    (export_dir / "images" / "orphan.jpg").write_bytes(b"no label")
    (export_dir / "images" / "readme.md").write_text("not an image")
    (export_dir / "labels" / "readme.txt").write_text("0 0.5 0.5 0.5 0.5\n")

    names = {pair.name for pair in find_label_pairs(export_dir)}

    assert names == {"image1", "image2", "image3"}


def test_find_label_pairs_extension_is_case_insensitive(export_dir: Path):
    (export_dir / "images" / "upper.JPG").write_bytes(b"data")
    (export_dir / "images" / "scan.TiFf").write_bytes(b"data")
    (export_dir / "labels" / "upper.txt").write_text("0 0.5 0.5 0.5 0.5\n")
    (export_dir / "labels" / "scan.txt").write_text("0 0.5 0.5 0.5 0.5\n")

    names = {pair.name for pair in find_label_pairs(export_dir)}

    assert {"upper", "scan"} <= names


def test_find_label_pairs_recurses_into_subdirectories(export_dir: Path):
    nested = export_dir / "images" / "batch" / "deep"
    nested.mkdir(parents=True)
    (nested / "nested.webp").write_bytes(b"data")
    (export_dir / "labels" / "nested.txt").write_text("0 0.5 0.5 0.5 0.5\n")

    pairs = {pair.name: pair for pair in find_label_pairs(export_dir)}

    assert pairs["nested"].image_path == nested / "nested.webp"
    assert pairs["nested"].label_path == export_dir / "labels" / "nested.txt"


def test_find_label_pairs_order_is_stable(export_dir: Path):
    assert find_label_pairs(export_dir) == find_label_pairs(export_dir)


def test_find_label_pairs_missing_images_dir(tmp_path: Path):
    with pytest.raises(IOFailure):
        find_label_pairs(tmp_path)


def test_validate_source_structure_only_checks_existence(export_dir: Path):
    # A classes.txt of the wrong type is reported when it is read
    (export_dir / "classes.txt").unlink()
    (export_dir / "classes.txt").mkdir()

    validate_source_structure(export_dir)
    with pytest.raises(IOFailure):
        load_classes(export_dir)


def test_find_label_pairs_walk_error(export_dir: Path, monkeypatch):
    blocked = export_dir / "images" / "blocked"
    blocked.mkdir()
    real_scandir = os.scandir

    def scandir(*args):
        if args and args[0] == str(blocked):
            raise PermissionError(13, "Permission denied", args[0])
        return real_scandir(*args)

    monkeypatch.setattr(os, "scandir", scandir)

    with pytest.raises(IOFailure) as excinfo:
        find_label_pairs(export_dir)

    assert excinfo.value.path == blocked
