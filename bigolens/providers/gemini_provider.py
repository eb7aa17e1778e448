"""
Gemini LLM provider for code complexity analysis.

One call per analysis, no retries. Failures come back as a ProviderError
whose kind is decided from the HTTP status Gemini answered with.
"""
from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors, types

from bigolens.config import Settings, logger


class ProviderErrorKind(str, Enum):
    QUOTA = "quota"
    UNAUTHORIZED = "unauthorized"
    TRANSPORT = "transport"


class ProviderError(Exception):
    """Exception for Gemini API errors."""

    def __init__(
        self,
        message: str,
        kind: ProviderErrorKind = ProviderErrorKind.TRANSPORT,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)


_QUOTA_STATUSES = {"RESOURCE_EXHAUSTED"}
_UNAUTHORIZED_STATUSES = {"UNAUTHENTICATED", "PERMISSION_DENIED"}
_UNAUTHORIZED_REASONS = {"API_KEY_INVALID", "API_KEY_EXPIRED"}


def _error_reasons(details: Any) -> set[str]:
    """Collect ``ErrorInfo.reason`` values from a Gemini error payload."""
    if isinstance(details, list):
        details = details[0] if details else {}
    if not isinstance(details, dict):
        return set()
    error = details.get("error", details)
    if not isinstance(error, dict):
        return set()
    reasons = set()
    for item in error.get("details") or []:
        if isinstance(item, dict) and item.get("reason"):
            reasons.add(str(item["reason"]))
    return reasons


def classify_api_error(exc: errors.APIError) -> ProviderErrorKind:
    """Map a Gemini API error to a ProviderErrorKind by status code."""
    code = exc.code
    status = (exc.status or "").upper()

    if code == 429 or status in _QUOTA_STATUSES:
        return ProviderErrorKind.QUOTA
    if code in (401, 403) or status in _UNAUTHORIZED_STATUSES:
        return ProviderErrorKind.UNAUTHORIZED
    if code == 400 and _error_reasons(exc.details) & _UNAUTHORIZED_REASONS:
        return ProviderErrorKind.UNAUTHORIZED
    return ProviderErrorKind.TRANSPORT


class GeminiProvider:
    """
    Gemini provider for code complexity analysis.
    """

    def __init__(self, settings: Settings):
        self._client: genai.Client | None = None
        self._model = settings.GEMINI_MODEL
        self._temperature = settings.TEMPERATURE
        self._max_tokens = settings.MAX_TOKENS
        self._timeout = settings.GEMINI_TIMEOUT_SECONDS
        self._initialize(settings.GEMINI_API_KEY.strip())

    def _initialize(self, api_key: str) -> None:
        """Initialize Gemini client."""
        if not api_key:
            logger.warning("Gemini API key not configured")
            return

        self._client = genai.Client(api_key=api_key)
        logger.info("Gemini client initialized (model=%s)", self._model)

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    @property
    def model_name(self) -> str:
        return self._model

    async def _generate_content(self, contents: Any, config: types.GenerateContentConfig) -> types.GenerateContentResponse:
        if not self._client:
            raise ProviderError(
                "Gemini client not initialized - check GEMINI_API_KEY",
                kind=ProviderErrorKind.UNAUTHORIZED,
            )

        try:
            return await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self._model,
                    contents=contents,
                    config=config,
                ),
                timeout=self._timeout,
            )
        except errors.APIError as exc:
            kind = classify_api_error(exc)
            logger.error("Gemini API error (%s, status=%s): %s", kind.value, exc.code, exc.message)
            raise ProviderError(
                f"Gemini API error ({exc.code}): {exc.message or exc.status}",
                kind=kind,
                status_code=exc.code,
            ) from exc
        except asyncio.TimeoutError as exc:
            logger.error("Gemini API timeout after %ss", self._timeout)
            raise ProviderError(f"Gemini request timed out after {self._timeout}s") from exc
        except (httpx.HTTPError, ConnectionError) as exc:
            logger.error("Gemini transport error: %s", exc)
            raise ProviderError(f"Gemini request failed: {exc}") from exc

    async def generate(self, prompt: str) -> str:
        """
        Send ``prompt`` as the only user message and return the raw reply text.

        Raises:
            ProviderError: If the call fails for any reason
        """
        response = await self._generate_content(
            contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
            config=types.GenerateContentConfig(
                temperature=self._temperature,
                max_output_tokens=self._max_tokens,
            ),
        )

        text = response.text
        if not text:
            finish_reason = response.candidates[0].finish_reason if response.candidates else "unknown"
            logger.warning("Empty response from Gemini (finish reason: %s)", finish_reason)
            return ""

        logger.debug("Raw Gemini response: %s", text[:500])
        return text

    async def ping(self) -> None:
        """Make a tiny request to prove the key and model work."""
        await self._generate_content(
            contents="Hello",
            config=types.GenerateContentConfig(max_output_tokens=10),
        )
