"""
Generation Client - External Text Generation
=============================================

ARCHITECTURAL DECISION:
- Talks to any OpenAI-compatible chat completions endpoint
- One call = one attempt; the caller owns retries
- Every call is bounded by a total deadline (connect + wait + body read)
- No business logic - prompt in, text (or error) out

ERROR CONTRACT:
- Non-success HTTP status: GenerationServiceError with the upstream body verbatim
- Timeout: GenerationTimeout
- Transport failure: GenerationServiceError("AI generation failed")
- Missing/empty text: returns "" (the caller's validator rejects it)
"""

import json
import logging
import time
import requests
from typing import Optional

from ..config import GenerationSettings, get_settings

logger = logging.getLogger(__name__)

# A buffered read only returns once the whole chunk has arrived, so read
# byte by byte to check the deadline as data trickles in
BODY_CHUNK_SIZE = 1


class GenerationServiceError(Exception):
    """Raised when the text-generation service cannot produce a response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GenerationTimeout(GenerationServiceError):
    """The service did not answer within the configured time budget."""

    def __init__(self, timeout: float):
        super().__init__(f"Generation timed out after {timeout}s")
        self.timeout = timeout


class GenerationClient:
    """
    Thin client for the chat completions API.

    USAGE:
        client = GenerationClient()
        text = client.generate("Write a review...", temperature=1.0)
    """

    def __init__(self, settings: Optional[GenerationSettings] = None):
        settings = settings or get_settings().generation
        self._api_key = settings.api_key
        self._api_url = settings.api_url
        self._model = settings.model
        self._timeout = settings.timeout_seconds
        self._max_tokens = settings.max_tokens
        self._system_prompt = settings.system_prompt

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def generate(self, prompt: str, temperature: float, max_tokens: Optional[int] = None) -> str:
        """
        Run a single generation.

        Args:
            prompt: The user-role instruction.
            temperature: Sampling temperature for this attempt.
            max_tokens: Token budget, defaults to the configured one.

        Returns:
            The first choice's message content, trimmed. Empty string if absent.

        Raises:
            GenerationServiceError: upstream error or transport failure.
            GenerationTimeout: the call exceeded the timeout.
        """
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": self._system_prompt},
                {"role": "user", "content": prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens or self._max_tokens,
        }

        deadline = time.monotonic() + self._timeout

        try:
            response = requests.post(
                self._api_url,
                headers=headers,
                json=payload,
                timeout=self._timeout,
                stream=True
            )
        except requests.Timeout as e:
            raise GenerationTimeout(self._timeout) from e
        except requests.RequestException as e:
            logger.warning(f"Generation transport error: {e}")
            raise GenerationServiceError("AI generation failed") from e

        try:
            body = self._read_body(response, deadline)
        finally:
            response.close()

        if not response.ok:
            raise GenerationServiceError(
                body.decode(response.encoding or "utf-8", errors="replace"),
                status_code=response.status_code
            )

        try:
            data = json.loads(body)
        except ValueError:
            logger.warning("Generation response was not JSON")
            return ""

        return self._extract_response_content(data)

    def _read_body(self, response: requests.Response, deadline: float) -> bytes:
        """
        Read the response body, giving up once the attempt's deadline passes.

        The per-read socket timeout alone would let a server that trickles
        bytes hold the attempt open indefinitely.
        """
        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=BODY_CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise GenerationTimeout(self._timeout)
                chunks.append(chunk)
        except requests.Timeout as e:
            raise GenerationTimeout(self._timeout) from e
        except requests.RequestException as e:
            # A read timeout mid-stream arrives as a ConnectionError
            if time.monotonic() > deadline:
                raise GenerationTimeout(self._timeout) from e
            logger.warning(f"Generation transport error while reading: {e}")
            raise GenerationServiceError("AI generation failed") from e

        if time.monotonic() > deadline:
            raise GenerationTimeout(self._timeout)

        return b"".join(chunks)

    def _extract_response_content(self, data: dict) -> str:
        """Extract text content from API response."""
        try:
            choices = data.get("choices", [])
            if choices:
                message = choices[0].get("message") or {}
                return (message.get("content") or "").strip()
        except (AttributeError, TypeError):
            pass
        return ""
