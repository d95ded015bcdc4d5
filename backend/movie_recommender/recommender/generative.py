"""
Generative Recommender
======================

Single-attempt call to the OpenAI chat completions endpoint.

Input: free-text preference
Output: GenerationOutcome (ok with the trimmed reply text, or failed with
the ExternalServiceError that caused it)

No retries; the whole call is bounded by settings.openai_timeout_seconds.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import httpx

from movie_recommender.config import Settings
from movie_recommender.recommender.errors import (
    ConfigError,
    ExternalServiceError,
    GenerationTimeoutError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Suggest exactly {count} movies based on this preference: {preference}. "
    "Return ONLY a comma-separated list of movie names, nothing else."
)
DIAGNOSTIC_PROMPT = "Name 3 famous movies. Return only names separated by commas."
HELP_TEXT = "Check your API key at https://platform.openai.com/api-keys"


@dataclass(frozen=True)
class GenerationOutcome:
    """
    Tagged result of one generative call.

    Exactly one of text / error is set.
    """
    text: Optional[str] = None
    error: Optional[ExternalServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str) -> "GenerationOutcome":
        return cls(text=text)

    @classmethod
    def failure(cls, error: ExternalServiceError) -> "GenerationOutcome":
        return cls(error=error)


@dataclass
class DiagnosticReport:
    """HTTP status and JSON body for the connectivity probe."""
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)


def _mask_key(api_key: Optional[str]) -> str:
    if not api_key:
        return "<missing>"
    return f"{api_key[:10]}..."


def _extract_content(data: Dict[str, Any]) -> Optional[str]:
    """Return choices[0].message.content, or None if any level is missing."""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return error.get("message") or "API Error"
    return str(error)


class GenerativeRecommender:
    """
    Client for the text generation service.

    Settings are injected; nothing is read from the environment here.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            settings: Settings with the openai_* attributes
            transport: Optional httpx transport (used to stub the endpoint in tests)
        """
        self.settings = settings
        self.transport = transport

    def build_prompt(self, preference: str) -> str:
        return PROMPT_TEMPLATE.format(
            count=self.settings.expected_title_count,
            preference=preference
        )

    async def fetch(self, preference: str) -> GenerationOutcome:
        """
        Ask the service for recommendations.

        Never raises for service failures; they are returned in the outcome.
        """
        try:
            text = await self.complete(self.build_prompt(preference))
        except ExternalServiceError as e:
            logger.warning(f"OpenAI call failed ({e.kind.value}): {e.message}")
            if e.status_code is not None:
                logger.warning(f"   Status: {e.status_code}")
            return GenerationOutcome.failure(e)

        logger.info(f"✅ Movies extracted: {text[:50]}...")
        return GenerationOutcome.success(text)

    async def complete(self, prompt: str) -> str:
        """
        Send one prompt and return the trimmed reply text.

        Raises:
            ConfigError: no API key configured (no request is sent)
            GenerationTimeoutError: the call exceeded the timeout
            UpstreamError: error payload, empty content or failed transport
        """
        status_code, data = await self._post(prompt)

        # An error field can come back even on a 2xx reply
        if data.get("error"):
            message = _error_message(data["error"])
            raise UpstreamError(
                f"OpenAI API error: {message}",
                status_code=status_code,
                payload=data["error"]
            )

        content = _extract_content(data)
        if not content or not content.strip():
            raise UpstreamError(
                "No content in OpenAI response - check API key validity",
                status_code=status_code,
                payload=data
            )

        return content.strip()

    async def diagnose(self) -> DiagnosticReport:
        """
        Probe the service with a fixed prompt and report what came back.

        Same single attempt and timeout as fetch(); meant for operators.
        """
        logger.info(
            f"Testing OpenAI API... key present: {bool(self.settings.openai_api_key)}, "
            f"key: {_mask_key(self.settings.openai_api_key)}"
        )
        try:
            status_code, data = await self._post(DIAGNOSTIC_PROMPT)
        except ExternalServiceError as e:
            logger.error(f"OpenAI test failed: {e.message} (status: {e.status_code})")
            return DiagnosticReport(
                status_code=500,
                body={
                    "status": "ERROR",
                    "message": e.message,
                    "statusCode": e.status_code,
                    "errorData": e.payload,
                    "helpText": HELP_TEXT,
                }
            )

        logger.info(f"OpenAI test response status: {status_code}")

        if data.get("error"):
            logger.error(f"OpenAI test API error: {data['error']}")
            return DiagnosticReport(
                status_code=400,
                body={
                    "status": "ERROR",
                    "message": _error_message(data["error"]),
                    "details": data["error"],
                }
            )

        result = _extract_content(data)
        if not result:
            logger.error(f"OpenAI test returned no content: {data}")
            return DiagnosticReport(
                status_code=400,
                body={
                    "status": "ERROR",
                    "message": "No content in response",
                    "response": data,
                }
            )

        logger.info(f"OpenAI test successful: {result}")
        return DiagnosticReport(
            status_code=200,
            body={
                "status": "SUCCESS",
                "message": "OpenAI API is working!",
                "result": result,
                "apiKeyValid": True,
            }
        )

    async def _post(self, prompt: str) -> Tuple[int, Dict[str, Any]]:
        """
        POST one chat completion request.

        Returns:
            Tuple of (HTTP status, decoded JSON object)
        """
        api_key = self.settings.openai_api_key
        if not api_key:
            raise ConfigError("OPENAI_API_KEY not configured")

        timeout = self.settings.openai_timeout_seconds
        request_body = {
            "model": self.settings.openai_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.settings.openai_temperature,
        }
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        logger.info("📡 Calling OpenAI API...")
        async with httpx.AsyncClient(
            base_url=self.settings.openai_base_url,
            timeout=timeout,
            transport=self.transport
        ) as client:
            try:
                # httpx times out per phase; wait_for bounds the whole call
                response = await asyncio.wait_for(
                    client.post("/chat/completions", json=request_body, headers=headers),
                    timeout=timeout
                )
            except (httpx.TimeoutException, asyncio.TimeoutError) as e:
                raise GenerationTimeoutError(
                    f"OpenAI request timed out after {timeout:g}s"
                ) from e
            except httpx.RequestError as e:
                raise UpstreamError(f"OpenAI request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            message = f"Request failed with status code {response.status_code}"
            if isinstance(data, dict) and data.get("error"):
                message = f"{message}: {_error_message(data['error'])}"
            raise UpstreamError(
                message,
                status_code=response.status_code,
                payload=data if data is not None else response.text
            )

        if not isinstance(data, dict):
            raise UpstreamError(
                "Malformed OpenAI response",
                status_code=response.status_code,
                payload=response.text
            )

        logger.info("✅ OpenAI API response received")
        return response.status_code, data
