from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class FilterForm(BaseModel):
    """Validated form fields of a filter request."""
    required_terms: Optional[str] = None
    optional_terms: Optional[str] = None
    terms: str = ""
    # checked against "any"/"all" only when no JSON term fields are sent
    mode: str = "any"
    preview: bool = False

class PageSnippet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page_number: int = Field(alias="pageNumber")
    text_snippet: str = Field(alias="textSnippet")

class PreviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    count: int
    pages: List[PageSnippet] = []
    total_pages: int = Field(alias="totalPages")
    preview_pdf: str = Field(alias="previewPdf")

class CountResponse(BaseModel):
    count: int
    message: str

class MessageResponse(BaseModel):
    message: str

class HealthResponse(BaseModel):
    status: str
    ocr_enabled: bool
    ocr_available: bool
