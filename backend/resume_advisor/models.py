"""Pydantic response models for the resume-advisor API.

Field names are camelCase because the web client reads them directly.
"""

from pydantic import BaseModel, Field


class TimingBreakdown(BaseModel):
    """Per-stage durations, each rendered as ``"<ms>ms"``."""
    pdfParsing: str
    aiGeneration: str
    total: str


class ReviewResponse(BaseModel):
    """Successful analysis or roast."""
    message: str = "Success"
    suggestions: str
    processingTime: str
    breakdown: TimingBreakdown


class RoastResponse(ReviewResponse):
    """Legacy roast clients read the text from ``roast``."""
    roast: str


class ErrorResponse(BaseModel):
    message: str
    processingTime: str | None = Field(default=None, description="Present for processing failures")


class StatusResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    provider: str
    model: str
    baseURL: str
    hasKey: bool


class SaveResponse(BaseModel):
    id: str


def format_ms(ms: int) -> str:
    return f"{ms}ms"
