import logging
from typing import Optional

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from api.schemas import CountResponse, FilterForm, HealthResponse, MessageResponse, PageSnippet, PreviewResponse
from core.errors import ClientInputError, FilterError, NoMatchError, INVALID_PARAMS, MISSING_FILE
from core.filter_service import PageFilterService, build_term_spec
from core.pdf_extractor import PDFTextExtractor

logger = logging.getLogger(__name__)

router = APIRouter()
health_router = APIRouter()
extractor = PDFTextExtractor()
service = PageFilterService(extractor)

JSON_MEDIA_TYPE = "application/json; charset=utf-8"


def _json(model, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        content=model.model_dump(by_alias=True),
        status_code=status_code,
        media_type=JSON_MEDIA_TYPE,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Form fields FastAPI could not bind, e.g. a text part sent as ``file``."""
    bad_file = any("file" in error.get("loc", ()) for error in exc.errors())
    logger.info("Rejected filter request: %s", exc.errors())
    return _json(MessageResponse(message=MISSING_FILE if bad_file else INVALID_PARAMS), status_code=400)


@router.post("/filter")
async def filter_pdf(
    file: Optional[UploadFile] = File(None),
    requiredTerms: Optional[str] = Form(None),
    optionalTerms: Optional[str] = Form(None),
    terms: str = Form(""),
    mode: str = Form("any"),
    preview: Optional[str] = Form(None),
):
    is_preview = preview == "1"
    try:
        if file is None:
            raise ClientInputError(MISSING_FILE)
        try:
            form = FilterForm(
                required_terms=requiredTerms,
                optional_terms=optionalTerms,
                terms=terms,
                mode=mode or "any",
                preview=is_preview,
            )
        except ValidationError as e:
            raise ClientInputError() from e
        spec = build_term_spec(form.required_terms, form.optional_terms, form.terms, form.mode)

        data = await file.read()
        result = await run_in_threadpool(service.run, data, spec, form.preview)
    except ClientInputError as e:
        return _json(MessageResponse(message=e.message), status_code=400)
    except NoMatchError as e:
        # prazan rezultat je validan odgovor za pregled
        return _json(CountResponse(count=0, message=e.message), status_code=200 if is_preview else 404)
    except FilterError as e:
        logger.exception("Error processing file %s", getattr(file, "filename", None))
        return _json(MessageResponse(message=e.message), status_code=500)
    except Exception:
        logger.exception("Unexpected error processing file %s", getattr(file, "filename", None))
        return _json(MessageResponse(message=FilterError.message), status_code=500)

    if form.preview:
        return _json(PreviewResponse(
            count=result.count,
            pages=[PageSnippet(page_number=p.page_number, text_snippet=p.text_snippet) for p in result.pages],
            total_pages=result.total_pages,
            preview_pdf=result.preview_pdf_base64,
        ))

    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={result.filename}",
            "Cache-Control": "no-store",
        },
    )


@health_router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        ocr_enabled=extractor.ocr_enabled,
        ocr_available=extractor.ocr_available() if extractor.ocr_enabled else False,
    )
