"""Hugging Face Inference API Text-to-Speech adapter."""

import json
import logging
from typing import Any

import httpx

from minicog.ports.speech import ProviderError

logger = logging.getLogger(__name__)


class HuggingFaceTTSAdapter:
    """Hugging Face TTS adapter implementing TTSPort.

    POSTs text to a hosted inference endpoint and returns the raw audio
    payload. Uses lazy client initialization for connection reuse.
    """

    def __init__(
        self,
        api_url: str,
        api_token: str = "",
        payload_style: str = "plain",
        model: str = "qwen2-audio-1.5b",
        voice: str = "default",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize adapter.

        Args:
            api_url: Inference endpoint URL
            api_token: Bearer token; empty makes every call fail with ProviderError
            payload_style: 'plain' ({"inputs": text}) or 'structured'
                ({"inputs": {"text", "model", "voice"}})
            model: Model name for structured payloads
            voice: Voice name for structured payloads
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        if payload_style not in ("plain", "structured"):
            raise ValueError(f"Unknown payload style: '{payload_style}'")
        self._api_url = api_url
        self._api_token = api_token
        self._payload_style = payload_style
        self._model = model
        self._voice = voice
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        if not api_token:
            logger.warning("HF_API_TOKEN is not set. Remote TTS calls will fail.")

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy client initialization for connection reuse."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    def _build_payload(self, text: str) -> dict[str, Any]:
        if self._payload_style == "structured":
            return {"inputs": {"text": text, "model": self._model, "voice": self._voice}}
        return {"inputs": text}

    async def synthesize(self, text: str) -> bytes:
        """Convert text to an audio payload.

        Raises:
            ProviderError: Missing token, transport failure, or non-2xx response
        """
        if not self._api_token:
            raise ProviderError(
                "API request failed: HF_API_TOKEN is not set",
                detail="missing credential",
            )

        logger.debug("Calling TTS endpoint", extra={"url": self._api_url, "chars": len(text)})
        client = await self._get_client()
        try:
            response = await client.post(
                self._api_url,
                json=self._build_payload(text),
                headers={"Authorization": f"Bearer {self._api_token}"},
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"API request failed: {e}", detail=str(e)) from e

        if not response.is_success:
            detail = self._describe_error_body(response)
            message = f"API request failed: Status: {response.status_code} {response.reason_phrase}"
            if detail:
                message += f" - {detail}"
            logger.error(message)
            raise ProviderError(
                message,
                status=response.status_code,
                status_text=response.reason_phrase,
                detail=detail,
            )

        audio = response.content
        logger.debug("Received audio data", extra={"bytes": len(audio)})
        return audio

    @staticmethod
    def _describe_error_body(response: httpx.Response) -> str:
        """Diagnostic body text; JSON is re-serialized compactly when parseable."""
        body = response.text
        try:
            return json.dumps(json.loads(body))
        except ValueError:
            return body

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
