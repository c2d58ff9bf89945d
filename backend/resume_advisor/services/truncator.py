"""Hard-cut long resume text before it is sent to the LLM."""

from resume_advisor.core.constants import MAX_RESUME_CHARS, TRUNCATION_MARKER


def truncate(text: str, max_length: int = MAX_RESUME_CHARS) -> str:
    """Return ``text`` unchanged if it fits, else its first ``max_length`` chars plus the marker."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_MARKER
