import io
from typing import Sequence

from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError

from core.errors import ProcessingError


def assemble_pages(source: bytes, indices: Sequence[int]) -> bytes:
    """Build a new PDF from the given 0-based source pages, in the given order."""
    try:
        reader = PdfReader(io.BytesIO(source))
        page_count = len(reader.pages)
        writer = PdfWriter()
        for index in indices:
            if not 0 <= index < page_count:
                raise ProcessingError()
            writer.add_page(reader.pages[index])
        output = io.BytesIO()
        writer.write(output)
    except ProcessingError:
        raise
    except (PdfReadError, ValueError, KeyError, TypeError) as e:
        raise ProcessingError() from e
    return output.getvalue()
