"""Shared fixtures for resume-advisor backend tests."""

import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from httpx import ASGITransport, AsyncClient

from resume_advisor.core.llm import get_suggestion_client
from resume_advisor.core.prompts import ANALYSIS_PROMPT
from resume_advisor.main import app
from resume_advisor.routes import review as review_route


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Disable slowapi rate limiting for all tests."""
    app.state.limiter.enabled = False
    review_route.limiter.enabled = False
    yield
    app.state.limiter.enabled = True
    review_route.limiter.enabled = True


# ---------------------------------------------------------------------------
# In-memory PDFs
# ---------------------------------------------------------------------------


def _pdf_escape(line: str) -> str:
    return line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def make_pdf(*lines: str) -> bytes:
    """Build a one-page PDF whose text layer is ``lines``, one per row.

    With no lines the page has an empty content stream, which is what a
    scanned (image-only) resume looks like to a text extractor.
    """
    if lines:
        ops = ["BT", "/F1 10 Tf", "12 TL", "72 760 Td"]
        ops += [f"({_pdf_escape(line)}) Tj T*" for line in lines]
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")
    else:
        stream = b""

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_at
    return bytes(out)


SAMPLE_RESUME_LINES = (
    "Jane Doe - Backend Engineer",
    "Experience: 4 years building Python services with Django and FastAPI.",
    "Skills: Python, PostgreSQL, Docker, REST APIs",
)

SAMPLE_PDF = make_pdf(*SAMPLE_RESUME_LINES)

SAMPLE_JD = (
    "We are looking for a Senior Backend Engineer with experience in Python, "
    "Django, FastAPI, PostgreSQL, Docker, and Kubernetes."
)

SAMPLE_SUGGESTIONS = (
    "**Skills Gap Analysis**\n"
    "- Kubernetes is listed in the job description but missing from the resume\n"
)


def pdf_upload(content: bytes = SAMPLE_PDF, filename: str = "resume.pdf",
               content_type: str = "application/pdf") -> dict:
    """Build the ``files`` dict for an httpx multipart upload."""
    return {"resume": (filename, content, content_type)}


# ---------------------------------------------------------------------------
# Suggestion client doubles
# ---------------------------------------------------------------------------


class FakeSuggestionClient:
    """Stands in for SuggestionClient; records every call it receives.

    ``reply`` may be a string, None, or a callable taking
    (resume_text, job_description) for per-request answers.
    """

    def __init__(self, reply=SAMPLE_SUGGESTIONS, delay: float = 0.0, error: Exception | None = None):
        self.reply = reply
        self.delay = delay
        self.error = error
        self.calls: list[tuple] = []

    async def generate(self, resume_text, job_description="", prompt=ANALYSIS_PROMPT):
        self.calls.append((resume_text, job_description, prompt))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(resume_text, job_description)
        return self.reply


@pytest.fixture()
def fake_llm():
    """Install a FakeSuggestionClient as the route dependency."""
    fake = FakeSuggestionClient()
    app.dependency_overrides[get_suggestion_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_suggestion_client, None)


@pytest.fixture()
def use_llm():
    """Install an arbitrary client (e.g. a real SuggestionClient on a mock transport)."""
    def _install(client):
        app.dependency_overrides[get_suggestion_client] = lambda: client
        return client
    yield _install
    app.dependency_overrides.pop(get_suggestion_client, None)


@pytest.fixture
async def client():
    """Async httpx test client wired to the FastAPI app via ASGI transport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
