import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import (
    Depends,
    FastAPI,
    File,
    HTTPException,
    Request,
    UploadFile,
    status,
)
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .models.schemas import AnalysisRequest, AnalysisResponse
from .services.analysis_facade import AnalysisFacade
from .services.language_client import LanguageClient
from .utils.file_processor import cleanup_file, extract_text, save_uploaded_file, validate_file

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Text Analysis Service v%s", app.version)
    yield
    logger.info("Shutting down Text Analysis Service")

app = FastAPI(
    title="Text Analysis Service",
    description="Sentiment, entity, syntax and category analysis backed by Google Cloud Natural Language.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

language_client_singleton = LanguageClient(credentials_path=settings.google_application_credentials)
analysis_facade_singleton = AnalysisFacade.from_client(language_client_singleton)


def get_analysis_facade() -> AnalysisFacade:
    return analysis_facade_singleton


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s %s", request.method, request.url)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred."},
    )


ANALYZE_SUCCESS_EXAMPLE = {
    "sentiment": [
        {"magnitude": 0.9, "score": 0.9},
        {"text": "I love this.", "magnitude": 0.9, "score": 0.9},
    ],
    "entities": [{"name": "this", "type": "OTHER", "salience": 1.0}],
    "syntax": [
        {"word": "I", "partOfSpeech": "PRON"},
        {"word": "love", "partOfSpeech": "VERB"},
        {"word": "this", "partOfSpeech": "DET"},
        {"word": ".", "partOfSpeech": "PUNCT"},
    ],
    "classification": [],
    "degraded": False,
}

ANALYZE_DEGRADED_EXAMPLE = {
    "sentiment": [
        {"magnitude": 0, "score": 0},
        {"text": "dummy_text", "magnitude": 0, "score": 0},
    ],
    "entities": [{"name": "dummy_name", "type": "OTHER", "salience": 0}],
    "syntax": [{"word": "dummy_word", "partOfSpeech": "NOUN"}],
    "classification": [{"name": "dummy_category", "confidence": 0}],
    "degraded": True,
}


@app.get("/", tags=["Health"])
def read_root() -> Dict[str, Any]:
    return {
        "message": "Welcome to the Text Analysis Service",
        "version": app.version,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> Dict[str, Any]:
    return {"status": "ok", "version": app.version}


@app.post(
    "/analyze",
    response_model=AnalysisResponse,
    summary="Analyze Text",
    description=(
        "Run the requested analyses on the given text. If any of them fails the "
        "placeholder outcome is returned for every requested analysis."
    ),
    responses={
        200: {
            "description": "Analysis outcome (real or placeholder).",
            "content": {
                "application/json": {
                    "examples": {
                        "success": {"value": ANALYZE_SUCCESS_EXAMPLE},
                        "degraded": {"value": ANALYZE_DEGRADED_EXAMPLE},
                    }
                }
            },
        },
    },
)
async def analyze_text(
    payload: AnalysisRequest,
    facade: AnalysisFacade = Depends(get_analysis_facade),
) -> AnalysisResponse:
    outcome, degraded = await facade.analyze_with_status(
        payload.text,
        analyze_sentiment=payload.analyze_sentiment,
        analyze_entities=payload.analyze_entities,
        analyze_syntax=payload.analyze_syntax,
        classify_content=payload.classify_content,
    )
    if degraded:
        logger.warning("Returned placeholder outcome for %s characters of text", len(payload.text))
    return AnalysisResponse.from_outcome(outcome, degraded=degraded)


@app.post(
    "/analyze/file",
    response_model=AnalysisResponse,
    summary="Analyze Uploaded Document",
    description="Extract the text of an uploaded PDF or TXT document and analyze it.",
    responses={
        400: {
            "description": "Invalid file upload.",
            "content": {
                "application/json": {
                    "example": {"detail": "Invalid file type. Only PDF and TXT files are allowed."}
                }
            },
        },
        413: {
            "description": "Uploaded file exceeds size limit.",
            "content": {
                "application/json": {
                    "example": {"detail": "File too large. Maximum size is 10MB."}
                }
            },
        },
    },
)
async def analyze_file(
    file: UploadFile = File(...),
    analyze_sentiment: bool = True,
    analyze_entities: bool = True,
    analyze_syntax: bool = True,
    classify_content: bool = True,
    facade: AnalysisFacade = Depends(get_analysis_facade),
) -> AnalysisResponse:
    try:
        contents = await file.read()
    except Exception as exc:
        logger.exception("Failed to read uploaded file %s", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to read uploaded file.",
        ) from exc

    validate_file(file, len(contents))

    file_path = await save_uploaded_file(file, contents)
    try:
        document_text = await extract_text(file_path)
    finally:
        cleanup_file(file_path)

    if not document_text or not document_text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No text could be extracted from the uploaded file.",
        )

    logger.info("Analyzing %s characters extracted from %s", len(document_text), file.filename)
    outcome, degraded = await facade.analyze_with_status(
        document_text,
        analyze_sentiment=analyze_sentiment,
        analyze_entities=analyze_entities,
        analyze_syntax=analyze_syntax,
        classify_content=classify_content,
    )
    return AnalysisResponse.from_outcome(outcome, degraded=degraded)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
