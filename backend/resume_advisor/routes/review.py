"""Review endpoints: PDF resume (+ job description) in, markdown suggestions out.

/analyze/resume and the legacy /roast/resume share one pipeline and differ
only in the prompt strategy they pass to it.
"""

import time
from dataclasses import dataclass

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException

from resume_advisor.config import load_settings
from resume_advisor.core.constants import (
    JOB_DESCRIPTION_FIELD,
    MAX_FIELD_SIZE,
    MAX_FORM_FIELDS,
    MAX_UPLOAD_FILES,
    MAX_UPLOAD_SIZE,
    PDF_MIME_TYPE,
    RESUME_FIELD,
)
from resume_advisor.core.errors import (
    AdvisorError,
    EmptyExtraction,
    EmptyJobDescription,
    EmptySuggestions,
    FileTooLarge,
    MissingField,
    MissingFile,
    UnsupportedMediaType,
    UploadRejected,
)
from resume_advisor.core.llm import SuggestionClient, get_suggestion_client
from resume_advisor.core.logger import logger
from resume_advisor.core.prompts import ANALYSIS_PROMPT, ROAST_PROMPT, PromptStrategy, RoastPrompt
from resume_advisor.models import (
    ErrorResponse,
    ReviewResponse,
    RoastResponse,
    TimingBreakdown,
    format_ms,
)
from resume_advisor.services.pdf_text import extract_text_async
from resume_advisor.services.truncator import truncate

router = APIRouter(tags=["Review"])
limiter = Limiter(key_func=get_remote_address)

_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _rate_limit() -> str:
    return f"{load_settings().rate_limit_per_minute}/minute"


def _elapsed_ms(since: float) -> int:
    return int((time.perf_counter() - since) * 1000)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@dataclass
class UploadedFile:
    """The resume bytes for one request. Released before the response is sent."""

    buffer: bytearray
    declared_size: int | None
    content_type: str
    filename: str

    def release(self) -> None:
        """Zero and drop the buffer so the upload doesn't outlive the request."""
        self.buffer[:] = bytes(len(self.buffer))
        self.buffer.clear()


async def _read_form(request: Request) -> FormData:
    """Parse the multipart body with the upload limits applied.

    Starlette reports limit violations as a 400 HTTPException; they are
    re-raised as UploadRejected so the response body keeps the usual shape.
    """
    try:
        return await request.form(
            max_files=MAX_UPLOAD_FILES,
            max_fields=MAX_FORM_FIELDS,
            max_part_size=MAX_FIELD_SIZE,
        )
    except HTTPException as e:
        raise UploadRejected(str(e.detail))


async def _validate_upload(form: FormData, prompt: PromptStrategy) -> tuple[UploadedFile, str]:
    """Check file presence, job description presence, MIME type and size.

    Returns the buffered upload and the raw (untrimmed) job description.
    """
    resume_file = form.get(RESUME_FIELD)
    if not isinstance(resume_file, UploadFile):
        raise MissingFile()

    raw_jd = form.get(JOB_DESCRIPTION_FIELD)
    if not isinstance(raw_jd, str):
        raw_jd = ""
    if prompt.requires_job_description and not raw_jd:
        raise MissingField()

    if resume_file.content_type != PDF_MIME_TYPE:
        raise UnsupportedMediaType()

    if resume_file.size is not None and resume_file.size > MAX_UPLOAD_SIZE:
        raise FileTooLarge(MAX_UPLOAD_SIZE)
    buffer = bytearray(await resume_file.read(MAX_UPLOAD_SIZE + 1))
    if len(buffer) > MAX_UPLOAD_SIZE:
        buffer.clear()
        raise FileTooLarge(MAX_UPLOAD_SIZE)

    upload = UploadedFile(
        buffer=buffer,
        declared_size=resume_file.size,
        content_type=resume_file.content_type,
        filename=resume_file.filename or "",
    )
    return upload, raw_jd


async def _execute_review(
    upload: UploadedFile,
    raw_jd: str,
    client: SuggestionClient,
    prompt: PromptStrategy,
    start: float,
) -> ReviewResponse:
    """Extract → normalize → truncate → generate, timing each stage."""
    declared = f"declared {upload.declared_size}" if upload.declared_size is not None else "size undeclared"
    logger.info(
        f"Processing PDF '{upload.filename or 'unnamed'}' "
        f"({len(upload.buffer)} bytes, {declared}, {upload.content_type}) for {prompt.name}..."
    )

    pdf_start = time.perf_counter()
    extracted = await extract_text_async(upload.buffer)
    pdf_ms = _elapsed_ms(pdf_start)

    resume_content = extracted.strip()
    if not resume_content:
        raise EmptyExtraction()

    job_description = raw_jd.strip()
    if prompt.requires_job_description and not job_description:
        raise EmptyJobDescription()

    processed = truncate(resume_content)
    logger.info(
        f"Extracted {len(resume_content)} characters ({pdf_ms}ms). "
        f"Processing {len(processed)} chars for {prompt.name}..."
    )

    ai_start = time.perf_counter()
    suggestions = await client.generate(processed, job_description, prompt)
    ai_ms = _elapsed_ms(ai_start)
    if not suggestions:
        raise EmptySuggestions()

    total_ms = _elapsed_ms(start)
    logger.info(f"{prompt.name.capitalize()} completed in {total_ms}ms (PDF: {pdf_ms}ms, AI: {ai_ms}ms)")

    fields = dict(
        suggestions=suggestions,
        processingTime=format_ms(total_ms),
        breakdown=TimingBreakdown(
            pdfParsing=format_ms(pdf_ms),
            aiGeneration=format_ms(ai_ms),
            total=format_ms(total_ms),
        ),
    )
    if isinstance(prompt, RoastPrompt):
        return RoastResponse(roast=suggestions, **fields)
    return ReviewResponse(**fields)


async def handle_review(
    request: Request,
    client: SuggestionClient,
    prompt: PromptStrategy,
) -> ReviewResponse | JSONResponse:
    """Run one review request end to end; the upload is released on every path."""
    start = time.perf_counter()
    form: FormData | None = None
    upload: UploadedFile | None = None
    try:
        form = await _read_form(request)
        upload, raw_jd = await _validate_upload(form, prompt)
        return await _execute_review(upload, raw_jd, client, prompt, start)
    except AdvisorError as e:
        if e.status_code >= 500:
            elapsed = _elapsed_ms(start)
            logger.error(f"Error processing resume after {elapsed}ms: {e.message}")
            body = ErrorResponse(message=e.message, processingTime=format_ms(elapsed))
        else:
            logger.info(f"Rejected {prompt.name} request: {e.message}")
            body = ErrorResponse(message=e.message)
        return JSONResponse(status_code=e.status_code, content=body.model_dump(exclude_none=True))
    finally:
        if upload is not None:
            upload.release()
        if form is not None:
            await form.close()


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/analyze/resume", response_model=ReviewResponse, responses=_ERROR_RESPONSES)
@limiter.limit(_rate_limit)
async def analyze_resume(
    request: Request,
    client: SuggestionClient = Depends(get_suggestion_client),
):
    """Multipart ``resume`` (PDF) + ``jobDescription`` in -> improvement suggestions out."""
    return await handle_review(request, client, ANALYSIS_PROMPT)


@router.post("/roast/resume", response_model=RoastResponse, responses=_ERROR_RESPONSES)
@limiter.limit(_rate_limit)
async def roast_resume(
    request: Request,
    client: SuggestionClient = Depends(get_suggestion_client),
):
    """Legacy endpoint: multipart ``resume`` (PDF) in -> a humorous roast out."""
    return await handle_review(request, client, ROAST_PROMPT)
