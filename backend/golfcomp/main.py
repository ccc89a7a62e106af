import logging

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers import leaderboards, rounds
from .exceptions import DomainException, ProblemDetail
from .config import ALLOW_CREDENTIALS, ALLOWED_ORIGINS, API_PREFIX
from .services.validation import ValidationError
from .utils.sentry import init_sentry

logger = logging.getLogger(__name__)

SENTRY_ENABLED = init_sentry()

# -----------------------------------------------------------------------------
# CORS configuration
# -----------------------------------------------------------------------------
if not ALLOWED_ORIGINS:
    raise ValueError(
        "ALLOWED_ORIGINS environment variable must be set to a comma-separated "
        "list of trusted origins."
    )

# -----------------------------------------------------------------------------
# FastAPI app
# -----------------------------------------------------------------------------
app = FastAPI(
    title="Golf Competition Scoring API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("API_PREFIX=%r", API_PREFIX)


# -----------------------------------------------------------------------------
# Health checks
# -----------------------------------------------------------------------------
@app.get("/healthz", tags=["health"])  # Unprefixed for reverse proxy / uptime checks
def root_healthz():
    return {"status": "ok"}


# -----------------------------------------------------------------------------
# Error handling
# -----------------------------------------------------------------------------
def _problem_response(problem: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(),
        media_type="application/problem+json",
    )


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    return _problem_response(
        ProblemDetail(
            type=exc.type,
            title=exc.title,
            detail=exc.detail,
            status=exc.status_code,
            code=exc.code,
        )
    )


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _problem_response(
        ProblemDetail(
            title="Invalid input",
            detail=exc.detail,
            status=400,
            code="validation_error",
        )
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return _problem_response(
        ProblemDetail(
            title="Request validation failed",
            detail=detail,
            status=422,
            code="request_invalid",
        )
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    code = getattr(exc, "code", f"http_{exc.status_code}")
    return _problem_response(
        ProblemDetail(
            title=detail,
            detail=detail,
            status=exc.status_code,
            code=code,
        )
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception", exc_info=(type(exc), exc, exc.__traceback__))
    return _problem_response(
        ProblemDetail(
            title="Internal Server Error",
            status=500,
            detail=str(exc),
            code="internal_server_error",
        )
    )

# -----------------------------------------------------------------------------
# Routers
# -----------------------------------------------------------------------------
api_router = APIRouter(prefix=API_PREFIX, tags=["meta"])


@api_router.get("/healthz", tags=["health"])
def api_healthz():
    return {"status": "ok", "sentry": SENTRY_ENABLED}


@api_router.get("")
def api_root():
    return {"message": "Golf Competition Scoring API. See /docs."}


v0_router = APIRouter(prefix="/v0")
v0_router.include_router(rounds.router)
v0_router.include_router(leaderboards.router)
v0_router.include_router(leaderboards.handicaps_router)

api_router.include_router(v0_router)
app.include_router(api_router)
