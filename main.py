"""FastAPI application - PDF page filter.

Endpoints
---------
POST /api/filter   - keep only pages containing the search terms
GET  /health       - service and OCR status
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from api.routes import extractor, health_router, request_validation_handler, router
from config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("pdf_filter")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check OCR support once at startup."""
    if extractor.ocr_enabled and not extractor.ocr_available():
        logger.warning("OCR_ENABLED is set but tesseract is missing; scanned pages will be empty")
    yield


app = FastAPI(
    title=settings.APP_TITLE,
    version="1.0.0",
    lifespan=lifespan,
)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.include_router(router, prefix=settings.API_PREFIX)
app.include_router(health_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
