"""Local audio playback adapter (soundfile decode + sounddevice output)."""

import asyncio
import io
import logging

from minicog.ports.speech import DecodeError, PlaybackError

logger = logging.getLogger(__name__)


class SoundDevicePlayer:
    """
    Audio player implementing AudioPlayerPort.

    Decodes an in-memory payload with soundfile (WAV, FLAC, OGG, MP3 where
    libsndfile supports it) and plays it on the default output device.
    play() returns only after playback has ended or stop() silenced it.
    """

    def __init__(self, device: int | str | None = None) -> None:
        self.device = device
        self._playing = False
        self._stopped = False

    async def play(self, audio: bytes) -> None:
        """Decode and play audio to completion.

        Raises:
            DecodeError: If the payload is empty or not decodable
            PlaybackError: If the output device fails
        """
        data, sample_rate = self._decode(audio)
        duration = len(data) / sample_rate if sample_rate else 0.0
        logger.debug("Audio decoded", extra={"duration_s": round(duration, 3)})
        self._stopped = False
        await asyncio.to_thread(self._play_blocking, data, sample_rate)
        logger.debug("Audio playback completed")

    def stop(self) -> None:
        """Abort the current playback; the blocked worker thread returns promptly."""
        self._stopped = True
        if not self._playing:
            return

        import sounddevice as sd

        logger.info("Stopping audio playback")
        try:
            sd.stop()
        except sd.PortAudioError as e:
            logger.warning(f"Failed to stop audio playback: {e}")

    @staticmethod
    def _decode(audio: bytes):
        if not audio:
            raise DecodeError("Failed to decode audio data: empty payload")

        # Import here to avoid loading libsndfile when not used
        import soundfile as sf

        try:
            data, sample_rate = sf.read(io.BytesIO(audio), dtype="float32")
        except (sf.LibsndfileError, RuntimeError, TypeError) as e:
            raise DecodeError(f"Failed to decode audio data: {e}") from e
        if len(data) == 0:
            raise DecodeError("Failed to decode audio data: no frames")
        return data, sample_rate

    def _play_blocking(self, data, sample_rate: int) -> None:
        # Import here to avoid requiring PortAudio when not used
        try:
            import sounddevice as sd
        except OSError as e:
            raise PlaybackError(f"Audio output unavailable: {e}") from e

        self._playing = True
        try:
            # stop() may land before this thread got scheduled
            if self._stopped:
                return
            sd.play(data, sample_rate, device=self.device)
            sd.wait()
        except sd.PortAudioError as e:
            raise PlaybackError(f"Audio playback failed: {e}") from e
        finally:
            self._playing = False
