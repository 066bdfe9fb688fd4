"""Speech-to-Text adapter using the SpeechRecognition library.

Audio is captured through sounddevice (already used for playback) rather
than PyAudio, via an AudioSource the recognizer reads like its own
Microphone.
"""

import asyncio
import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import speech_recognition as sr

from minicog.ports.speech import RecognitionError

logger = logging.getLogger(__name__)

SourceFactory = Callable[[threading.Event], sr.AudioSource]


class CaptureAborted(Exception):
    """Raised inside the capture thread once the activation was abandoned."""

    pass


class _AbortableStream:
    """Stream wrapper the recognizer reads from; stops delivering audio after abort."""

    def __init__(self, raw, abort: threading.Event) -> None:
        self._raw = raw
        self._abort = abort

    def read(self, size: int) -> bytes:
        if self._abort.is_set():
            raise CaptureAborted()
        data, _overflowed = self._raw.read(size)
        return bytes(data)


class SoundDeviceMicrophone(sr.AudioSource):
    """16-bit mono microphone source backed by a sounddevice input stream."""

    def __init__(
        self,
        device: int | str | None = None,
        sample_rate: int = 16000,
        chunk_size: int = 1024,
        abort: threading.Event | None = None,
    ) -> None:
        self.device = device
        self.SAMPLE_RATE = sample_rate
        self.SAMPLE_WIDTH = 2
        self.CHUNK = chunk_size
        self.abort = abort or threading.Event()
        self.stream = None
        self._raw = None

    def __enter__(self):
        # Import here to avoid requiring PortAudio when not used
        import sounddevice as sd

        try:
            self._raw = sd.RawInputStream(
                samplerate=self.SAMPLE_RATE,
                blocksize=self.CHUNK,
                device=self.device,
                channels=1,
                dtype="int16",
            )
            self._raw.start()
        except sd.PortAudioError as e:
            self._raw = None
            raise OSError(f"Microphone unavailable: {e}") from e
        self.stream = _AbortableStream(self._raw, self.abort)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        try:
            self._raw.stop()
            self._raw.close()
        finally:
            self._raw = None
            self.stream = None


class SpeechRecognitionAdapter:
    """
    Recognizer implementing SpeechRecognizerPort.

    Captures a single utterance from the microphone and returns the final
    transcript (no interim results). Language is fixed per instance.

    Captures run on a single worker thread, so an activation abandoned by
    stop() releases the microphone before the next one opens it.
    """

    def __init__(
        self,
        language: str = "en-US",
        timeout: float = 10.0,
        phrase_time_limit: float | None = 15.0,
        device: int | str | None = None,
        recognizer: sr.Recognizer | None = None,
        source_factory: SourceFactory | None = None,
    ) -> None:
        """Initialize adapter.

        Args:
            language: Recognition locale
            timeout: Seconds to wait for speech to start
            phrase_time_limit: Maximum utterance length in seconds
            device: Input device (default device when None)
            recognizer: Optional pre-built recognizer
            source_factory: Builds the audio source for one activation from
                its abort event (defaults to SoundDeviceMicrophone)
        """
        self.language = language
        self.timeout = timeout
        self.phrase_time_limit = phrase_time_limit
        self.device = device
        self._recognizer = recognizer or sr.Recognizer()
        self._source_factory = source_factory or self._default_source
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="speech-capture")
        self._abort: threading.Event | None = None

    def is_supported(self) -> bool:
        """Check for a PortAudio backend with at least one input device."""
        try:
            import sounddevice as sd
        except OSError as e:
            logger.warning(f"Speech recognition unavailable: {e}")
            return False

        try:
            sd.query_devices(kind="input")
        except (sd.PortAudioError, ValueError) as e:
            logger.warning(f"Speech recognition unavailable, no input device: {e}")
            return False
        return True

    async def listen(self) -> str:
        """Capture one utterance and transcribe it.

        Raises:
            RecognitionError: No speech, unintelligible speech, backend
                failure, or the activation was stopped
        """
        abort = threading.Event()
        self._abort = abort
        future = self._executor.submit(self._listen_blocking, abort)
        transcript = await asyncio.wrap_future(future)
        logger.info("Transcript received", extra={"chars": len(transcript)})
        return transcript

    def stop(self) -> None:
        """Abandon the current activation; its capture ends within one audio chunk."""
        if self._abort is not None:
            self._abort.set()

    def close(self) -> None:
        """Abort any capture and release the worker thread."""
        self.stop()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _default_source(self, abort: threading.Event) -> sr.AudioSource:
        return SoundDeviceMicrophone(device=self.device, abort=abort)

    def _listen_blocking(self, abort: threading.Event) -> str:
        if abort.is_set():
            raise RecognitionError("aborted")
        recognizer = self._recognizer

        try:
            with self._source_factory(abort) as source:
                recognizer.adjust_for_ambient_noise(source, duration=0.5)
                audio = recognizer.listen(
                    source,
                    timeout=self.timeout,
                    phrase_time_limit=self.phrase_time_limit,
                )
        except CaptureAborted as e:
            logger.info("Speech capture aborted")
            raise RecognitionError("aborted") from e
        except sr.WaitTimeoutError as e:
            raise RecognitionError("no-speech") from e
        except OSError as e:
            raise RecognitionError(f"audio-capture: {e}") from e

        if abort.is_set():
            raise RecognitionError("aborted")

        try:
            return recognizer.recognize_google(audio, language=self.language)
        except sr.UnknownValueError as e:
            raise RecognitionError("no-match") from e
        except sr.RequestError as e:
            raise RecognitionError(f"network: {e}") from e
