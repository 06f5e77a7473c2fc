"""Filtering pipeline for one uploaded PDF.

extract text -> match -> (no match | preview | assemble)

Everything is request scoped; nothing is kept between calls.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import List

from config.settings import settings
from core.assembler import assemble_pages
from core.errors import ClientInputError, NoMatchError, NO_TERMS
from core.matcher import TermSpec, find_matches, order_matches
from core.pdf_extractor import PDFTextExtractor
from utils.helpers import make_snippet, parse_json_terms, parse_terms

logger = logging.getLogger(__name__)


@dataclass
class SnippetResult:
    page_number: int
    text_snippet: str


@dataclass
class FilterPreview:
    count: int
    total_pages: int
    pages: List[SnippetResult] = field(default_factory=list)
    preview_pdf: bytes = b""

    @property
    def preview_pdf_base64(self) -> str:
        return base64.b64encode(self.preview_pdf).decode("ascii")


@dataclass
class FilterDownload:
    content: bytes
    filename: str


def build_term_spec(required_terms, optional_terms, terms: str = "", mode: str = "any") -> TermSpec:
    """Pick the term shape supplied by the form and validate it.

    The JSON required/optional fields take precedence over ``terms``/``mode``
    whenever either of them is present.
    """
    if required_terms is not None or optional_terms is not None:
        spec = TermSpec.from_split(
            parse_json_terms(required_terms),
            parse_json_terms(optional_terms),
        )
    else:
        try:
            spec = TermSpec.from_mode(parse_terms(terms), mode)
        except ValueError as exc:
            raise ClientInputError() from exc
    if spec.is_empty:
        raise ClientInputError(NO_TERMS)
    return spec


class PageFilterService:
    def __init__(self, extractor: PDFTextExtractor = None, snippet_length: int = None,
                 output_filename: str = None):
        self.extractor = extractor or PDFTextExtractor()
        self.snippet_length = snippet_length or settings.SNIPPET_LENGTH
        self.output_filename = output_filename or settings.OUTPUT_FILENAME

    def run(self, data: bytes, spec: TermSpec, preview: bool = False):
        reader = self.extractor.load(data)
        page_texts = self.extractor.extract_page_texts(reader, data)
        total_pages = len(page_texts)

        matches = find_matches(page_texts, spec)
        logger.info(
            "Matched %d of %d pages (required=%d, optional=%d, preview=%s)",
            len(matches), total_pages, len(spec.required), len(spec.optional), preview,
        )
        if not matches:
            raise NoMatchError()

        if preview:
            return self._preview(data, page_texts, matches, spec)
        return self._download(data, page_texts, matches, spec)

    def _preview(self, data, page_texts, matches, spec) -> FilterPreview:
        ordered = order_matches(matches, page_texts, spec)
        snippets = [
            SnippetResult(
                page_number=result.page_number,
                text_snippet=make_snippet(page_texts[result.page_index], self.snippet_length),
            )
            for result in ordered
        ]
        preview_pdf = assemble_pages(data, [result.page_index for result in ordered])
        return FilterPreview(
            count=len(matches),
            total_pages=len(page_texts),
            pages=snippets,
            preview_pdf=preview_pdf,
        )

    def _download(self, data, page_texts, matches, spec) -> FilterDownload:
        if spec.reorder_download:
            page_order = [result.page_index for result in order_matches(matches, page_texts, spec)]
        else:
            page_order = list(matches)
        content = assemble_pages(data, page_order)
        logger.info("Assembled %d pages, %d bytes", len(page_order), len(content))
        return FilterDownload(
            content=content,
            filename=self.output_filename,
        )
