import io
from unittest.mock import patch

import pytest
from PIL import Image
from PyPDF2 import PdfReader

from conftest import make_pdf
from core.assembler import assemble_pages
from core.errors import ProcessingError
from core.pdf_extractor import PDFTextExtractor


def _widths(data):
    reader = PdfReader(io.BytesIO(data))
    return [round(float(page.mediabox.width)) for page in reader.pages]


def test_assemble_reorders_pages(three_page_pdf):
    output = assemble_pages(three_page_pdf, [2, 0, 1])
    assert _widths(output) == [300, 100, 200]


def test_assemble_subset(three_page_pdf):
    assert _widths(assemble_pages(three_page_pdf, [1])) == [200]


def test_assemble_rejects_out_of_range(three_page_pdf):
    with pytest.raises(ProcessingError):
        assemble_pages(three_page_pdf, [0, 3])


def test_assemble_rejects_invalid_source():
    with pytest.raises(ProcessingError):
        assemble_pages(b"not a pdf", [0])


def test_extract_blank_pages(three_page_pdf):
    extractor = PDFTextExtractor(ocr_enabled=False)
    reader = extractor.load(three_page_pdf)
    assert extractor.extract_page_texts(reader, three_page_pdf) == ["", "", ""]


def test_load_invalid_bytes():
    with pytest.raises(ProcessingError):
        PDFTextExtractor(ocr_enabled=False).load(b"%PDF-garbage")


@patch("core.pdf_extractor.pytesseract.image_to_string", return_value="Skenirani RAČUN")
@patch("core.pdf_extractor.pdf2image.convert_from_bytes")
@patch("core.pdf_extractor.pytesseract.get_tesseract_version", return_value="5.3.0")
def test_ocr_fallback_for_blank_pages(mock_version, mock_convert, mock_ocr):
    mock_convert.return_value = [Image.new("RGB", (20, 20), "white")]
    data = make_pdf([100, 200])
    extractor = PDFTextExtractor(ocr_enabled=True, ocr_languages="srp+eng", ocr_dpi=150)

    texts = extractor.extract_page_texts(extractor.load(data), data)

    assert texts == ["Skenirani RAČUN", "Skenirani RAČUN"]
    assert mock_convert.call_count == 2
    assert mock_convert.call_args.kwargs["first_page"] == 2
    assert mock_convert.call_args.kwargs["dpi"] == 150
    assert mock_ocr.call_args.kwargs["lang"] == "srp+eng"
    mock_version.assert_called_once()


@patch("core.pdf_extractor.pytesseract.get_tesseract_version")
def test_ocr_skipped_when_tesseract_missing(mock_version, three_page_pdf):
    import pytesseract

    mock_version.side_effect = pytesseract.TesseractNotFoundError()
    extractor = PDFTextExtractor(ocr_enabled=True)

    with patch("core.pdf_extractor.pdf2image.convert_from_bytes") as mock_convert:
        texts = extractor.extract_page_texts(extractor.load(three_page_pdf), three_page_pdf)

    assert texts == ["", "", ""]
    assert not extractor.ocr_available()
    mock_convert.assert_not_called()


def test_ocr_failure_is_processing_error(three_page_pdf):
    extractor = PDFTextExtractor(ocr_enabled=True)
    extractor._ocr_available = True
    with patch("core.pdf_extractor.pdf2image.convert_from_bytes", side_effect=RuntimeError("poppler")):
        with pytest.raises(ProcessingError):
            extractor.extract_page_texts(extractor.load(three_page_pdf), three_page_pdf)
