"""Suggestion client: one chat completion per review, via OpenRouter.

OpenRouter speaks the OpenAI wire format, so the official SDK is pointed at
its base URL. The SDK's own retries are disabled and redirects are not
followed: each review is exactly one upstream attempt bounded by
UPSTREAM_TIMEOUT.
"""

import asyncio

import httpx
import openai as openai_errors
from openai import AsyncOpenAI

from resume_advisor.config import Settings, load_settings
from resume_advisor.core.constants import MODELS_CATALOG_URL, UPSTREAM_TIMEOUT
from resume_advisor.core.errors import (
    AuthenticationFailed,
    BillingOrAccessIssue,
    ConfigurationError,
    ModelNotFound,
    UpstreamError,
)
from resume_advisor.core.logger import logger
from resume_advisor.core.prompts import ANALYSIS_PROMPT, PromptStrategy


def _provider_message(body: object) -> str | None:
    """Pull a human message out of an upstream error body, if there is one."""
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
        nested = body.get("error")
        if isinstance(nested, dict) and isinstance(nested.get("message"), str):
            return nested["message"] or None
        return None
    if isinstance(body, str) and body.strip():
        return body.strip()
    return None


class SuggestionClient:
    """Calls the completion API and maps its failures to AdvisorError subclasses."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        self.settings = settings
        self.model = settings.ai_model
        self._http_client = http_client or httpx.AsyncClient(
            timeout=UPSTREAM_TIMEOUT,
            follow_redirects=False,
        )
        self.client = AsyncOpenAI(
            api_key=settings.openrouter_api_key,
            base_url=settings.ai_base_url,
            timeout=UPSTREAM_TIMEOUT,
            max_retries=0,
            http_client=self._http_client,
        ) if settings.openrouter_api_key else None

    def _headers(self, prompt: PromptStrategy) -> dict[str, str]:
        return {
            "HTTP-Referer": self.settings.openrouter_site_url,
            "X-Title": self.settings.openrouter_app_title or prompt.app_title,
        }

    async def generate(
        self,
        resume_text: str,
        job_description: str = "",
        prompt: PromptStrategy = ANALYSIS_PROMPT,
    ) -> str | None:
        """Request suggestions for a resume. Returns markdown text or None.

        Raises ConfigurationError when no API key is set (before any network
        activity) and an UpstreamError subclass for every upstream failure.
        """
        if self.client is None:
            raise ConfigurationError("Missing OPENROUTER_API_KEY in environment")

        messages = prompt.build_messages(resume_text, job_description)

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                extra_headers=self._headers(prompt),
            )
        except openai_errors.APIStatusError as e:
            raise self._map_status_error(e.status_code, e.body, str(e)) from e
        except openai_errors.APIConnectionError as e:
            detail = str(e.__cause__ or "") or str(e)
            logger.warning(f"OpenRouter unreachable: {detail}")
            raise UpstreamError(f"OpenRouter API error (network): {detail}") from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        return content or None

    def _map_status_error(self, status: int, body: object, fallback: str) -> UpstreamError:
        provider_message = _provider_message(body)
        logger.warning(f"OpenRouter returned {status}: {provider_message or fallback}")

        if status == 401:
            return AuthenticationFailed(
                "OpenRouter authentication failed (401): invalid API key", status=status
            )
        if status == 402:
            return BillingOrAccessIssue(
                "OpenRouter billing/access issue (402): "
                f"{provider_message or 'insufficient credit or model not accessible'}",
                status=status,
            )
        if status == 404:
            return ModelNotFound(
                f"OpenRouter model not found (404) for '{self.model}'. "
                "Set AI_MODEL in backend/.env to an available model for your key "
                "(e.g., 'deepseek/deepseek-chat-v3-0324:free' or 'deepseek/deepseek-chat'). "
                f"See {MODELS_CATALOG_URL}",
                status=status,
            )
        return UpstreamError(
            f"OpenRouter API error ({status}): {provider_message or fallback}", status=status
        )

    async def aclose(self) -> None:
        await self._http_client.aclose()


_client: SuggestionClient | None = None
_lock = asyncio.Lock()


async def get_suggestion_client() -> SuggestionClient:
    """Get or create the process-wide suggestion client."""
    global _client
    if _client is None:
        async with _lock:
            if _client is None:
                _client = SuggestionClient(load_settings())
    return _client


async def close_suggestion_client() -> None:
    """Close the shared client's connection pool (application shutdown)."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
