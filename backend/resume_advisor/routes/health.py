"""Liveness, health and save endpoints."""

import uuid
from typing import Any

from fastapi import APIRouter, Body

from resume_advisor.config import load_settings
from resume_advisor.core.constants import LLM_PROVIDER
from resume_advisor.core.logger import logger
from resume_advisor.models import HealthResponse, SaveResponse, StatusResponse

router = APIRouter(tags=["System"])


@router.get("/", response_model=StatusResponse)
async def root():
    return {"message": "working"}


@router.get("/health", response_model=HealthResponse)
async def health():
    """Report the configured provider/model and whether an API key is present (never the key)."""
    settings = load_settings()
    return HealthResponse(
        status="ok",
        provider=LLM_PROVIDER,
        model=settings.ai_model,
        baseURL=settings.ai_base_url,
        hasKey=settings.has_api_key,
    )


@router.post("/save", response_model=SaveResponse)
async def save_review(payload: Any = Body(default=None)):
    """Accept a finished review or roast from the client and hand back an id.

    Nothing is persisted; the text is only logged.
    """
    if isinstance(payload, dict):
        text = payload.get("review") or payload.get("roast")
        logger.info(f"Save requested: {text!r}")
    else:
        logger.info("Save requested with no review body")
    return SaveResponse(id=uuid.uuid4().hex)
