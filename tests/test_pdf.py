import io

import pytest
from pypdf import PdfReader

from cmforge.core.error import UnbalancedStateError
from cmforge.devices.pdf.pdf import PDFDocument
from cmforge.operators.transformation import TransformationEmitter


def _draw(document):
    page = document.new_page()
    emitter = TransformationEmitter(page)
    emitter.translate_scoped(
        300, 300, lambda: emitter.rotate_scoped(30, lambda: page.stroke_rectangle(0, 0, 150, 200))
    )
    return page


@pytest.mark.parametrize("compress", [False, True])
def test_write_and_read_back(tmp_path, compress):
    document = PDFDocument(595, 842)
    _draw(document)
    document.new_page().stroke_rectangle(10, 10, 20, 20)

    path = tmp_path / "out.pdf"
    document.write(str(path), compress=compress)

    reader = PdfReader(str(path))
    assert len(reader.pages) == 2
    first = reader.pages[0]
    assert float(first.mediabox.width) == 595
    assert float(first.mediabox.height) == 842
    content = first["/Contents"].get_object().get_data()
    assert b"1.00000 0.00000 0.00000 1.00000 300.00000 300.00000 cm" in content
    assert b"0.86603 0.50000 -0.50000 0.86603 0.00000 0.00000 cm" in content
    assert content.count(b"q") == content.count(b"Q") == 2


def test_write_to_file_object():
    document = PDFDocument()
    _draw(document)
    buffer = io.BytesIO()
    document.write(buffer)
    assert buffer.getvalue().startswith(b"%PDF-")


def test_unbalanced_page_is_not_written(tmp_path):
    document = PDFDocument()
    page = document.new_page()
    TransformationEmitter(page).rotate(10)
    page.push_graphics_state()
    path = tmp_path / "bad.pdf"
    with pytest.raises(UnbalancedStateError):
        document.write(str(path))
    assert not path.exists()


@pytest.mark.parametrize("size", [(0, 792), (612, -1)])
def test_invalid_page_size(size):
    with pytest.raises(ValueError):
        PDFDocument(*size)
