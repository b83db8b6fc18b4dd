import logging
import pathlib

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.pages import router as pages_router
from app.api.routes import router
from app.core.config import settings
from app.core.exceptions import LetterError
from app.core.logging import setup_logging

setup_logging()

app = FastAPI(title="Resignation Letter Generator")

logger = logging.getLogger(__name__)

STATIC_DIR = pathlib.Path(__file__).parent / "static"

# Error fields that echo the request body back; the body may carry the Gemini key.
REDACTED_ERROR_FIELDS = ("input", "ctx", "url")


def public_errors(exc: RequestValidationError) -> list[dict]:
    return [{k: v for k, v in err.items() if k not in REDACTED_ERROR_FIELDS} for err in exc.errors()]


@app.on_event("startup")
async def startup_event() -> None:
    logger.info("Application started, generation model: %s", settings.model_id)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.error(f"HTTP exception: {exc.detail} (status: {exc.status_code})")
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = public_errors(exc)
    logger.error("Request validation failed: %s", errors, exc_info=False)
    return JSONResponse(
        {"error": "Input validation failed", "details": errors},
        status_code=422,
    )


@app.exception_handler(LetterError)
async def letter_exception_handler(_request: Request, exc: LetterError) -> JSONResponse:
    logger.error(f"{exc.kind}: {exc.message}")
    return JSONResponse({"error": exc.to_dict()}, status_code=exc.status_code)


@app.get("/health", status_code=status.HTTP_200_OK, tags=["Health"])
async def health_check() -> dict[str, str]:
    logger.info("Health check endpoint called")
    return {"status": "ok"}


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["*"],
)
app.include_router(router)
app.include_router(pages_router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
