import os
import asyncio
import logging
from datetime import datetime
from typing import List

from fastapi import FastAPI, UploadFile, File, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# Suppress noisy logs
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)

from config import config
from errors import CampaignAnalyzerError, InputValidationError
from main import analyze_campaigns
from app_utils import INVALID_LIST_FILE, extract_ctas_from_csv, extract_lines_from_file
from presenter import EXPORT_FILENAME, render_results, results_to_csv
from schemas import CTA, AnalyzeRequest, CampaignAnalysisResult
from scoring_oracle import ScoringOracle

VERSION = "1.0.0"
ENVIRONMENT = config.ENVIRONMENT

app = FastAPI(
    title="Campaign Analyzer API",
    description="Score campaign messages against a marketing objective with an AI scoring oracle",
    version=VERSION,
    docs_url="/docs" if ENVIRONMENT == "development" else None,
    redoc_url="/redoc" if ENVIRONMENT == "development" else None,
    openapi_url="/openapi.json" if ENVIRONMENT == "development" else None,
)

allowed_origins = config.get_cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allowed_origins != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    max_age=3600,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


def get_scoring_oracle() -> ScoringOracle:
    """Build the oracle adapter from configuration; a missing key is a 500."""
    return ScoringOracle(
        api_key=config.OPENAI_API_KEY,
        model=config.OPENAI_MODEL,
        temperature=config.OPENAI_TEMPERATURE,
        timeout=config.ORACLE_TIMEOUT,
    )


@app.get("/")
async def index():
    """Root endpoint with API information"""
    return {
        "message": "Campaign Analyzer API",
        "version": VERSION,
        "status": "running",
        "environment": ENVIRONMENT,
        "endpoints": {
            "POST /api/analyze": "Score campaign messages",
            "POST /api/export": "Export analysis results as CSV",
            "POST /api/report": "Render analysis results as a text breakdown",
            "POST /api/ctas/upload": "Parse a CTA sheet (CSV with a 'CTA Text' column)",
            "POST /api/lines/upload": "Parse a one-per-line list of campaign messages or keywords",
            "GET /health": "Health check",
        },
        "limits": {
            "max_file_size": f"{config.FILE_SIZE_LIMIT // 1024}KB",
        },
    }


@app.get("/health")
async def health_check():
    oracle_configured = bool(config.OPENAI_API_KEY)
    health_status = {
        "status": "healthy" if oracle_configured else "unhealthy",
        "timestamp": datetime.now().isoformat(),
        "service": "campaign-analyzer",
        "version": VERSION,
        "environment": ENVIRONMENT,
        "components": {
            "scoring_oracle": {
                "status": "healthy" if oracle_configured else "unhealthy",
                "configured": oracle_configured,
                "model": config.OPENAI_MODEL,
            },
        },
    }

    if not oracle_configured:
        return JSONResponse(status_code=503, content=health_status)
    return health_status


@app.post("/api/analyze", response_model=List[CampaignAnalysisResult])
async def analyze_api(
    payload: AnalyzeRequest,
    oracle: ScoringOracle = Depends(get_scoring_oracle),
):
    """Score every campaign message; one result per message, in input order."""
    campaign_count = len(payload.campaigns or [])
    logger.info(f"🚀 Analysis request - {campaign_count} campaigns, objective: {payload.objective}")

    # The oracle call blocks; keep it off the event loop
    results = await asyncio.to_thread(analyze_campaigns, payload, oracle)
    return results


@app.post("/api/export")
async def export_api(results: List[CampaignAnalysisResult]):
    csv_text = results_to_csv(results)
    logger.info(f"📄 Exporting {len(results)} results as CSV")
    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@app.post("/api/report", response_class=PlainTextResponse)
async def report_api(results: List[CampaignAnalysisResult]):
    return render_results(results)


@app.post("/api/ctas/upload")
async def upload_ctas_api(cta_file: UploadFile = File(...)):
    if not cta_file.filename or not cta_file.filename.lower().endswith(".csv"):
        raise InputValidationError("Only CSV files are supported", error="Invalid CTA file.")

    logger.info(f"📊 Processing CTA file: {cta_file.filename}")
    file_content = await cta_file.read()

    if len(file_content) > config.FILE_SIZE_LIMIT:
        raise InputValidationError(
            f"CTA file size exceeds {config.FILE_SIZE_LIMIT // 1024}KB limit",
            error="Invalid CTA file.",
        )

    ctas: List[CTA] = extract_ctas_from_csv(file_content)
    return [cta.model_dump(by_alias=True) for cta in ctas]


@app.post("/api/lines/upload")
async def upload_lines_api(list_file: UploadFile = File(...)):
    """Campaign messages or keywords, one per line, as a plain text file."""
    if not list_file.filename or not list_file.filename.lower().endswith(".txt"):
        raise InputValidationError("Only TXT files are supported", error=INVALID_LIST_FILE)

    logger.info(f"📊 Processing list file: {list_file.filename}")
    file_content = await list_file.read()

    if len(file_content) > config.FILE_SIZE_LIMIT:
        raise InputValidationError(
            f"List file size exceeds {config.FILE_SIZE_LIMIT // 1024}KB limit",
            error=INVALID_LIST_FILE,
        )

    return extract_lines_from_file(file_content)


# Error handlers
@app.exception_handler(CampaignAnalyzerError)
async def analyzer_exception_handler(request: Request, exc: CampaignAnalyzerError):
    if exc.status_code >= 500:
        logger.error(f"❌ {type(exc).__name__} at {request.url.path}: {exc.message}")
    else:
        logger.warning(f"⚠️ HTTP {exc.status_code} at {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "details": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"⚠️ HTTP 400 at {request.url.path}: invalid request body")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Missing required parameters in request body.",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (405 keeps its Allow header)"""
    logger.warning(f"⚠️ HTTP {exc.status_code} at {request.url.path}: {exc.detail}")
    if exc.status_code == 405:
        error = f"Method {request.method} Not Allowed"
    else:
        error = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions - log internally, return generic error"""
    logger.error(f"❌ Unhandled exception at {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": type(exc).__name__},
    )


@app.on_event("startup")
async def startup_event():
    config.validate()
    logger.info(f"🚀 Campaign Analyzer API v{VERSION} ({ENVIRONMENT})")
    logger.info(f"✅ CORS allowed origins: {allowed_origins}")


# For local development only (not used in production)
if __name__ == "__main__":
    import uvicorn

    port = config.PORT or int(os.getenv("PORT", "5000"))
    host = config.HOST or os.getenv("HOST", "0.0.0.0")

    logger.info(f"🏃 Starting development server on {host}:{port}")

    uvicorn.run(
        "app:app",
        host=host,
        port=port,
        reload=ENVIRONMENT == "development",
        log_level=config.LOG_LEVEL,
    )
