"""Local speech synthesis fallback using pyttsx3 (SAPI5, NSSpeechSynthesizer, eSpeak)."""

import asyncio
import logging

from minicog.ports.speech import FallbackFailed, FallbackUnavailable

logger = logging.getLogger(__name__)


class Pyttsx3Synthesizer:
    """
    Local synthesizer implementing LocalSynthesizerPort.

    Needs no network and no credential. Each speak() call creates its own
    engine in a worker thread; the engine is kept only while it speaks so
    stop() can interrupt it.
    """

    def __init__(self, rate: int = 150, voice_id: str | None = None) -> None:
        self.rate = rate
        self.voice_id = voice_id
        self._engine = None

    async def speak(self, text: str) -> None:
        """Speak text and return once the utterance finished.

        Raises:
            FallbackUnavailable: If no engine/driver exists on this platform
            FallbackFailed: If the engine errored while speaking
        """
        logger.info("Using local speech synthesis", extra={"chars": len(text)})
        await asyncio.to_thread(self._speak_blocking, text)
        logger.debug("Local speech synthesis completed")

    def stop(self) -> None:
        """Interrupt the utterance in progress; runAndWait() returns early."""
        engine = self._engine
        if engine is None:
            return
        logger.info("Stopping local speech synthesis")
        try:
            engine.stop()
        except (OSError, RuntimeError) as e:
            logger.warning(f"Failed to stop local speech synthesis: {e}")

    def _speak_blocking(self, text: str) -> None:
        # Import here to avoid loading platform drivers when not used
        import pyttsx3

        try:
            engine = pyttsx3.init()
        except (ImportError, OSError, RuntimeError) as e:
            raise FallbackUnavailable(
                f"Speech synthesis not supported on this system: {e}"
            ) from e

        self._engine = engine
        try:
            engine.setProperty("rate", self.rate)
            if self.voice_id:
                engine.setProperty("voice", self.voice_id)
            engine.say(text)
            engine.runAndWait()
        except (OSError, RuntimeError) as e:
            raise FallbackFailed(f"Speech synthesis error: {e}") from e
        finally:
            self._engine = None
            engine.stop()
