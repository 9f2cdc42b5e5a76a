import os

import pytest

from merge_pdfs.cli import build_parser
from merge_pdfs.config import (
    ExplicitName, ExtractName, SplitName, DerivedFromInput,
    build_configuration, load_properties, select_naming_strategy, find_properties_file,
)
from merge_pdfs.errors import ConfigurationError


def write_properties(tmp_path, text):
    path = tmp_path / "MergingPDF.properties"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_load_properties(tmp_path):
    path = write_properties(tmp_path, "\n".join([
        "# comment",
        "! other comment",
        "paths.input.directory=/data/in",
        "paths.output.directory=",
        "application.display.progress = t",
        r"output.pdf.id.split.regex=\.",
    ]))
    properties = load_properties(path)
    assert properties == {
        "paths.input.directory": "/data/in",
        "application.display.progress": "t",
        "output.pdf.id.split.regex": r"\.",
    }


def test_properties_provide_defaults_and_flags_override(tmp_path):
    properties = load_properties(write_properties(tmp_path, "\n".join([
        "paths.input.directory=/data/in",
        "paths.input.recursive_search=F",
        "merge.pdf.res.optimizing=T",
        "output.log.name=history",
    ])))
    config = build_configuration(build_parser(properties).parse_args([]))
    assert config.input_directory == "/data/in"
    assert config.recursive is False
    assert config.optimize_resources is True
    assert config.log_name == "history.log"

    config = build_configuration(build_parser(properties).parse_args(["-i", "/other", "-l", "run.log"]))
    assert config.input_directory == "/other"
    assert config.log_name == "run.log"


def test_defaults_without_properties():
    config = build_configuration(build_parser().parse_args(["-i", "in"]))
    assert config.recursive is True
    assert config.optimize_resources is False
    assert config.display_progress is False
    assert config.debug is False
    assert config.output_directory is None
    assert config.log_name == "merge.log"
    assert config.naming == DerivedFromInput()


def test_depth_flag_disables_recursion():
    config = build_configuration(build_parser().parse_args(["-i", "in", "-d", "-f", "-z", "--debug"]))
    assert config.recursive is False
    assert config.display_progress is True
    assert config.optimize_resources is True
    assert config.debug is True


def test_empty_log_name_derives_from_pdf_name():
    config = build_configuration(build_parser().parse_args(["-i", "in", "-l", ""]))
    assert config.log_name is None


def test_input_directory_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_invalid_integer_property(tmp_path):
    properties = load_properties(write_properties(tmp_path, "output.pdf.id.split.index=first\n"))
    with pytest.raises(ConfigurationError):
        build_parser(properties)


def test_naming_precedence():
    assert select_naming_strategy(name="x", extract_begin=1, extract_length=2, split_regex="_", split_index=1) == ExplicitName("x")
    assert select_naming_strategy(extract_begin=1, extract_length=2, split_regex="_", split_index=1) == ExtractName(1, 2)
    assert select_naming_strategy(split_regex="_", split_index=1) == SplitName("_", 1)
    assert select_naming_strategy() == DerivedFromInput()


@pytest.mark.parametrize("argv", [
    ["-i", "in", "-b", "0", "-s", "4"],
    ["-i", "in", "-b", "1"],
    ["-i", "in", "-b", "1", "-s", "0"],
    ["-i", "in", "-r", r"\.", "-p", "0"],
    ["-i", "in", "-r", r"\."],
    ["-i", "in", "-r", "", "-p", "1"],
    ["-i", "in", "-r", "(", "-p", "1"],
    ["-i", "in", "-n", ""],
])
def test_invalid_naming_parameters(argv):
    with pytest.raises(ConfigurationError):
        build_configuration(build_parser().parse_args(argv))


def test_find_properties_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert find_properties_file() is None
    path = write_properties(tmp_path, "paths.input.directory=in\n")
    assert os.path.samefile(find_properties_file(), path)
    with pytest.raises(ConfigurationError):
        find_properties_file(str(tmp_path / "missing.properties"))


def test_indented_properties_are_separate_keys(tmp_path):
    properties = load_properties(write_properties(tmp_path, "\n".join([
        "paths.input.directory=/data/in",
        "   output.pdf.name=combined",
        "\tmerge.pdf.res.optimizing=T",
    ])))
    assert properties == {
        "paths.input.directory": "/data/in",
        "output.pdf.name": "combined",
        "merge.pdf.res.optimizing": "T",
    }
