"""Step 1: pull plain text out of an uploaded PDF using pypdf."""

import asyncio
from io import BytesIO

from pypdf import PdfReader

from resume_advisor.core.errors import ExtractionFailed
from resume_advisor.core.logger import logger


def extract_text(pdf_bytes: bytes | bytearray) -> str:
    """Extract text from every page, joined by blank lines.

    Image-only (scanned) pages contribute nothing, so a scanned resume
    yields an empty string rather than an error.
    Raises ExtractionFailed if pypdf cannot read the document.
    """
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
    except Exception as e:
        logger.warning(f"pypdf could not read upload: {e}")
        raise ExtractionFailed(f"Failed to read PDF: {e}") from e

    return "\n\n".join(text_parts)


async def extract_text_async(pdf_bytes: bytes | bytearray) -> str:
    """Run extraction on a worker thread so parsing doesn't block the event loop."""
    return await asyncio.to_thread(extract_text, pdf_bytes)
