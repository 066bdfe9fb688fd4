"""
Speech Delivery Pipeline.

Turns text into audible speech. Prefers the remote TTS provider, retries it
with exponential backoff, and falls back to local synthesis once the attempt
budget is exhausted.
"""

import asyncio
import logging
import time

from minicog.domain.constants import TTS_MAX_ATTEMPTS, TTS_RETRY_BASE_DELAY_MS
from minicog.domain.value_objects.speech_request import SpeechRequest
from minicog.infrastructure.retry import SleepFn, retry_operation
from minicog.ports.speech import (
    AudioPlayerPort,
    DecodeError,
    LocalSynthesizerPort,
    PlaybackError,
    ProviderError,
    SpeechDeliveryError,
    TTSPort,
)

logger = logging.getLogger(__name__)

# Primary-path failures worth another attempt
RETRYABLE_ERRORS = (ProviderError, DecodeError, PlaybackError)


class SpeechDeliveryPipeline:
    """Domain service delivering spoken prompts with retry and fallback.

    Responsibilities:
    - Synthesize via the remote provider and play to completion
    - Retry any primary-path failure with exponential backoff
    - Fall back to local synthesis exactly once after exhaustion
    - Report the primary-path error when the fallback fails too

    No state is kept between speak() calls.
    """

    def __init__(
        self,
        tts: TTSPort,
        player: AudioPlayerPort,
        fallback: LocalSynthesizerPort,
        max_attempts: int = TTS_MAX_ATTEMPTS,
        base_delay_ms: int = TTS_RETRY_BASE_DELAY_MS,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        """Initialize pipeline.

        Args:
            tts: Remote TTS port (e.g., HuggingFaceTTSAdapter)
            player: Audio playback port
            fallback: Local synthesis port used after retries are exhausted
            max_attempts: Remote attempts before falling back
            base_delay_ms: Backoff base delay in milliseconds
            sleep: Async sleep used between attempts (injectable for tests)
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self._tts = tts
        self._player = player
        self._fallback = fallback
        self._max_attempts = max_attempts
        self._base_delay_ms = base_delay_ms
        self._sleep = sleep

    async def speak(self, text: str) -> None:
        """Speak text, returning once playback has finished.

        Raises:
            SpeechDeliveryError: The last primary-path error, when both the
                remote provider and the local fallback failed
        """
        request = SpeechRequest(text=text)
        start_time = time.perf_counter()

        try:
            await retry_operation(
                self._speak_remote,
                request,
                max_attempts=self._max_attempts,
                initial_wait=self._base_delay_ms / 1000,
                retryable_exceptions=RETRYABLE_ERRORS,
                sleep=self._sleep,
            )
            logger.info(
                "speech_delivered",
                extra={
                    "path": "remote",
                    "chars": len(request.text),
                    "elapsed_ms": round((time.perf_counter() - start_time) * 1000, 2),
                },
            )
            return
        except SpeechDeliveryError as primary_error:
            logger.warning(
                f"All {self._max_attempts} remote TTS attempts failed, using local synthesis",
                extra={"error": str(primary_error)},
            )
            await self._speak_fallback(request, primary_error)

        logger.info(
            "speech_delivered",
            extra={
                "path": "fallback",
                "chars": len(request.text),
                "elapsed_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )

    def stop(self) -> None:
        """Silence whatever is audible right now (remote playback or local voice)."""
        self._player.stop()
        self._fallback.stop()

    async def _speak_remote(self, request: SpeechRequest) -> None:
        """One primary-path attempt: synthesize, then play to completion."""
        audio = await self._tts.synthesize(request.text)
        logger.debug("Received audio payload", extra={"bytes": len(audio)})
        await self._player.play(audio)

    async def _speak_fallback(
        self,
        request: SpeechRequest,
        primary_error: SpeechDeliveryError,
    ) -> None:
        """Speak with local synthesis; on failure re-raise the primary error."""
        try:
            await self._fallback.speak(request.text)
        except SpeechDeliveryError as fallback_error:
            logger.error(
                f"Local synthesis fallback also failed: {fallback_error}",
                extra={"primary_error": str(primary_error)},
            )
            raise primary_error from fallback_error
