import os

import pytest

from merge_pdfs.config import MergeConfiguration
from merge_pdfs.directories import prepare_directories
from merge_pdfs.errors import DirectoryNotFoundError, DirectoryConflictError, DirectoryCreationError


def test_output_defaults_to_input(tmp_path):
    directories = prepare_directories(MergeConfiguration(input_directory=str(tmp_path)))
    assert directories.input_directory == os.path.normpath(str(tmp_path))
    assert directories.output_directory == directories.input_directory
    assert directories.same_directory is True


def test_relative_paths_resolve_against_working_directory(tmp_path, monkeypatch):
    (tmp_path / "in").mkdir()
    monkeypatch.chdir(tmp_path)
    directories = prepare_directories(MergeConfiguration(input_directory="in", output_directory="out/merged"))
    assert directories.input_directory == os.path.join(os.getcwd(), "in")
    assert directories.output_directory == os.path.join(os.getcwd(), "out", "merged")
    assert os.path.isdir(directories.output_directory)
    assert directories.same_directory is False


def test_same_directory_ignores_trailing_separator(tmp_path):
    directories = prepare_directories(MergeConfiguration(
        input_directory=str(tmp_path),
        output_directory=str(tmp_path) + os.sep,
    ))
    assert directories.same_directory is True


def test_missing_input_directory(tmp_path):
    with pytest.raises(DirectoryNotFoundError):
        prepare_directories(MergeConfiguration(input_directory=str(tmp_path / "missing")))


def test_input_is_a_file(tmp_path):
    path = tmp_path / "file.pdf"
    path.write_bytes(b"x")
    with pytest.raises(DirectoryNotFoundError):
        prepare_directories(MergeConfiguration(input_directory=str(path)))


def test_output_is_a_file(tmp_path):
    out = tmp_path / "out"
    out.write_text("not a directory")
    with pytest.raises(DirectoryConflictError):
        prepare_directories(MergeConfiguration(input_directory=str(tmp_path), output_directory=str(out)))


def test_output_cannot_be_created(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file")
    with pytest.raises(DirectoryCreationError):
        prepare_directories(MergeConfiguration(
            input_directory=str(tmp_path),
            output_directory=str(blocker / "child"),
        ))
