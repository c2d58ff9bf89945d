"""Resume Advisor API: PDF resume + job description in, AI suggestions out.

Run: resume-advisor            (uvicorn on $PORT, default 3001)
 or: uvicorn resume_advisor.main:app --reload --port 3001
Docs: http://localhost:3001/docs
"""

import traceback
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from dotenv import load_dotenv
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from resume_advisor.config import load_settings  # noqa: E402
from resume_advisor.core.llm import close_suggestion_client  # noqa: E402
from resume_advisor.core.errors import AdvisorError  # noqa: E402
from resume_advisor.core.logger import logger  # noqa: E402
from resume_advisor.middleware import RequestIdMiddleware, request_id_var  # noqa: E402
from resume_advisor.routes import health, review  # noqa: E402

settings = load_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if not settings.has_api_key:
        logger.warning("OPENROUTER_API_KEY is not set; review requests will fail until it is")
    logger.info(f"Serving model '{settings.ai_model}' via {settings.ai_base_url}")
    yield
    await close_suggestion_client()


app = FastAPI(
    title="Resume Advisor API",
    version="1.0.0",
    description="Extracts text from a PDF resume and returns LLM-generated improvement suggestions.",
    lifespan=lifespan,
)

app.state.limiter = review.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

ALLOWED_ORIGINS = settings.allowed_origins.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)

# Request ID middleware (runs after CORS, before route handlers)
app.add_middleware(RequestIdMiddleware)


# ── Global exception handlers ────────────────────────────────────────


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    rid = request_id_var.get("-")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail), "request_id": rid},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    rid = request_id_var.get("-")
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request body", "request_id": rid},
    )


@app.exception_handler(AdvisorError)
async def advisor_exception_handler(request: Request, exc: AdvisorError):
    rid = request_id_var.get("-")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "request_id": rid},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = request_id_var.get("-")
    logger.error(f"Unhandled exception [{rid}]: {exc}\n{traceback.format_exc()}")
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "request_id": rid},
    )


app.include_router(health.router)
app.include_router(review.router)


def run() -> None:
    """Console entry point: serve the app on the configured port."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
