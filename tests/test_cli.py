import pytest

from conftest import page_count, read_merge_log
from merge_pdfs.cli import main


def test_main_merges_directory(input_dir, tmp_path):
    out = tmp_path / "out"

    assert main(["-i", str(input_dir), "-o", str(out), "-b", "3", "-s", "5", "-l", ""]) == 0

    assert page_count(out / "first.pdf") == 6
    assert len(read_merge_log(out / "first.log")) == 3


def test_main_reads_properties_file(input_dir, tmp_path):
    out = tmp_path / "out"
    properties = tmp_path / "custom.properties"
    properties.write_text("\n".join([
        f"paths.input.directory={input_dir}",
        f"paths.output.directory={out}",
        "paths.input.recursive_search=F",
        "output.pdf.name=combined",
    ]), encoding="utf-8")

    assert main(["-c", str(properties)]) == 0

    assert page_count(out / "combined.pdf") == 3


def test_main_rejects_invalid_configuration(input_dir, tmp_path, capsys):
    assert main(["-i", str(input_dir), "-o", str(tmp_path / "out"), "-b", "0", "-s", "4"]) == 1

    err = capsys.readouterr().err
    assert "Error in configuration" in err
    assert "--extractbegin" in err
    assert not (tmp_path / "out").exists()


def test_main_missing_input_directory_argument(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code != 0


def test_main_returns_failure_on_merge_error(tmp_path):
    assert main(["-i", str(tmp_path / "missing")]) == 1


def test_main_shows_help_for_invalid_integer_property(input_dir, tmp_path, capsys):
    properties = tmp_path / "bad.properties"
    properties.write_text(f"paths.input.directory={input_dir}\noutput.pdf.id.split.index=x\n", encoding="utf-8")

    assert main(["-c", str(properties)]) == 1

    err = capsys.readouterr().err
    assert "Error in configuration" in err
    assert "output.pdf.id.split.index" in err
    assert "--splitpartpos" in err
