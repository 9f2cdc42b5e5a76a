import fitz  # PyMuPDF
import pytest


def make_pdf(path, pages):
    """Write a small PDF with the given number of text pages"""
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page()
        page.insert_text((72, 72), f"{path.name} page {i + 1}")
    doc.save(str(path))
    doc.close()
    return path


def page_count(path):
    doc = fitz.open(str(path))
    try:
        return doc.page_count
    finally:
        doc.close()


def read_merge_log(path):
    return [line.split("\t") for line in path.read_text(encoding="utf-8").splitlines()]


@pytest.fixture
def input_dir(tmp_path):
    directory = tmp_path / "in"
    make_pdf(directory / "a_first.pdf", 2)
    make_pdf(directory / "b_second.pdf", 1)
    make_pdf(directory / "sub" / "c_third.pdf", 3)
    return directory
