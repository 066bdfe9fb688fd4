"""Port interfaces for speech services (TTS, playback, local synthesis, STT)."""

from typing import Protocol, runtime_checkable


class SpeechDeliveryError(Exception):
    """Base exception for speech delivery failures."""

    pass


class ProviderError(SpeechDeliveryError):
    """Remote TTS provider returned a non-2xx response or the transport failed.

    Attributes:
        status: HTTP status code, or None for transport failures
        status_text: HTTP reason phrase (empty for transport failures)
        detail: Response body or transport error description
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        status_text: str = "",
        detail: str = "",
    ):
        self.status = status
        self.status_text = status_text
        self.detail = detail
        super().__init__(message)


class DecodeError(SpeechDeliveryError):
    """Audio payload could not be interpreted as audio."""

    pass


class PlaybackError(SpeechDeliveryError):
    """Audio output device failed while playing decoded audio."""

    pass


class FallbackUnavailable(SpeechDeliveryError):
    """Local speech synthesis is not available on this platform."""

    pass


class FallbackFailed(SpeechDeliveryError):
    """Local speech synthesis was attempted but errored."""

    pass


class SpeechRecognitionError(Exception):
    """Base exception for recall capture failures."""

    pass


class RecognitionUnsupported(SpeechRecognitionError):
    """Platform has no speech recognition capability (no microphone or backend)."""

    pass


class RecognitionError(SpeechRecognitionError):
    """A single listening activation failed (no speech, unintelligible, backend error)."""

    pass


@runtime_checkable
class TTSPort(Protocol):
    """Remote Text-to-Speech port interface."""

    async def synthesize(self, text: str) -> bytes:
        """
        Convert text to an opaque audio payload.

        Raises:
            ProviderError: On non-success responses or transport failures
        """
        ...


@runtime_checkable
class AudioPlayerPort(Protocol):
    """Audio output port interface."""

    async def play(self, audio: bytes) -> None:
        """
        Decode and play audio, returning only after playback has ended.

        Raises:
            DecodeError: If the payload is not decodable audio
            PlaybackError: If the output device fails
        """
        ...

    def stop(self) -> None:
        """Silence in-flight playback, if any. Safe to call from the event loop."""
        ...


@runtime_checkable
class LocalSynthesizerPort(Protocol):
    """Platform-native speech synthesis (no network, no credential)."""

    async def speak(self, text: str) -> None:
        """
        Speak text and return once the utterance has finished.

        Raises:
            FallbackUnavailable: If no synthesis engine exists on this platform
            FallbackFailed: If the engine errored while speaking
        """
        ...

    def stop(self) -> None:
        """Interrupt an in-flight utterance, if any."""
        ...


@runtime_checkable
class SpeechRecognizerPort(Protocol):
    """Speech-to-Text port for a single, non-continuous utterance."""

    def is_supported(self) -> bool:
        """Check whether the platform can capture and recognize speech at all."""
        ...

    async def listen(self) -> str:
        """
        Capture one utterance and return its final transcript.

        Emits exactly one transcript or raises exactly one error per call.

        Raises:
            RecognitionError: If this activation failed
        """
        ...

    def stop(self) -> None:
        """Abandon an in-flight listening activation, if any.

        The abandoned capture must release the microphone before the next
        listen() opens it.
        """
        ...
