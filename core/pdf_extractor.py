import io
import logging
from typing import List

import pdf2image
import pytesseract
from PIL import ImageEnhance, ImageFilter
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from config.settings import settings
from core.errors import ProcessingError

logger = logging.getLogger(__name__)


class PDFTextExtractor:
    def __init__(self, ocr_enabled=None, ocr_languages=None, ocr_dpi=None):
        self.ocr_enabled = settings.OCR_ENABLED if ocr_enabled is None else ocr_enabled
        self.ocr_languages = ocr_languages or settings.OCR_LANGUAGES
        self.ocr_dpi = ocr_dpi or settings.OCR_DPI
        self._ocr_available = None

    def ocr_available(self) -> bool:
        """Check once whether the tesseract binary can be called."""
        if self._ocr_available is None:
            try:
                version = pytesseract.get_tesseract_version()
                logger.info("Tesseract %s available", version)
                self._ocr_available = True
            except (pytesseract.TesseractNotFoundError, OSError) as e:
                logger.warning("Tesseract not available, OCR disabled: %s", e)
                self._ocr_available = False
        return self._ocr_available

    def load(self, data: bytes) -> PdfReader:
        try:
            reader = PdfReader(io.BytesIO(data))
            # page tree is parsed lazily; touch it so broken files fail here
            len(reader.pages)
            return reader
        except (PdfReadError, ValueError, KeyError, TypeError) as e:
            raise ProcessingError() from e

    def extract_page_texts(self, reader: PdfReader, data: bytes = None) -> List[str]:
        """Text of every page, in page order (1..N)."""
        texts = []
        try:
            for page_num, page in enumerate(reader.pages, start=1):
                page_text = page.extract_text() or ""
                if not page_text.strip() and data is not None and self._use_ocr():
                    page_text = self._ocr_page(data, page_num)
                texts.append(page_text)
        except ProcessingError:
            raise
        except Exception as e:
            raise ProcessingError() from e
        return texts

    def _use_ocr(self) -> bool:
        return self.ocr_enabled and self.ocr_available()

    def _ocr_page(self, data: bytes, page_num: int) -> str:
        images = pdf2image.convert_from_bytes(
            data,
            dpi=self.ocr_dpi,
            first_page=page_num,
            last_page=page_num
        )
        parts = []
        for img in images:
            img = img.convert('L')
            img = ImageEnhance.Contrast(img).enhance(2.0)
            img = img.filter(ImageFilter.SHARPEN)
            parts.append(pytesseract.image_to_string(img, lang=self.ocr_languages, config='--psm 6'))
        logger.debug("Page %d read with OCR", page_num)
        return " ".join(parts)
