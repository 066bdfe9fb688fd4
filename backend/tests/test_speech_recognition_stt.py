# tests/test_speech_recognition_stt.py

import asyncio
import sys
import time
import types

import pytest
import speech_recognition as sr

from minicog.adapters.speech_recognition_stt import SpeechRecognitionAdapter
from minicog.ports.speech import RecognitionError


class PortAudioError(Exception):
    pass


class FakeInputStream:
    """Raw input stream yielding silence; records open/close in a shared log."""

    def __init__(self, log: list[str], **kwargs) -> None:
        self.log = log
        self.kwargs = kwargs

    def start(self) -> None:
        self.log.append("open")

    def read(self, frames: int):
        time.sleep(0.001)
        return b"\x00\x00" * frames, False

    def stop(self) -> None:
        self.log.append("close")

    def close(self) -> None:
        pass


class ScriptedRecognizer:
    """Reads the source like sr.Recognizer does, returning a scripted phrase per activation.

    Activations without a script keep reading until the stream stops them.
    """

    def __init__(self, script: dict | None = None) -> None:
        self.script = dict(script or {})
        self.activations = 0
        self.active = 0
        self.max_active = 0

    def adjust_for_ambient_noise(self, source, duration=1) -> None:
        source.stream.read(source.CHUNK)

    def listen(self, source, timeout=None, phrase_time_limit=None):
        self.activations += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        outcome = self.script.get(self.activations)
        try:
            while True:
                source.stream.read(source.CHUNK)
                if outcome is None:
                    continue
                if isinstance(outcome, BaseException):
                    raise outcome
                return outcome
        finally:
            self.active -= 1

    def recognize_google(self, audio, language=None) -> str:
        if audio == "<mumble>":
            raise sr.UnknownValueError()
        return audio


@pytest.fixture
def capture_log(monkeypatch) -> list[str]:
    log: list[str] = []
    fake_sd = types.SimpleNamespace(
        RawInputStream=lambda **kwargs: FakeInputStream(log, **kwargs),
        PortAudioError=PortAudioError,
    )
    monkeypatch.setitem(sys.modules, "sounddevice", fake_sd)
    return log


@pytest.fixture
def make_adapter():
    adapters = []

    def _make(recognizer: ScriptedRecognizer) -> SpeechRecognitionAdapter:
        adapter = SpeechRecognitionAdapter(recognizer=recognizer)
        adapters.append(adapter)
        return adapter

    yield _make
    for adapter in adapters:
        adapter.close()


async def wait_for_entry(log: list[str], entry: str, count: int = 1) -> None:
    for _ in range(500):
        if log.count(entry) >= count:
            return
        await asyncio.sleep(0.01)
    raise AssertionError(f"'{entry}' never logged")


async def test_returns_transcript_and_releases_microphone(capture_log, make_adapter):
    adapter = make_adapter(ScriptedRecognizer({1: "banana and chair"}))

    assert await adapter.listen() == "banana and chair"
    assert capture_log == ["open", "close"]


async def test_stop_aborts_blocked_capture(capture_log, make_adapter):
    adapter = make_adapter(ScriptedRecognizer())
    activation = asyncio.create_task(adapter.listen())
    await wait_for_entry(capture_log, "open")

    adapter.stop()

    with pytest.raises(RecognitionError, match="aborted"):
        await asyncio.wait_for(activation, timeout=5)
    assert capture_log == ["open", "close"]


async def test_abandoned_capture_closes_before_next_activation(capture_log, make_adapter):
    recognizer = ScriptedRecognizer({2: "leader season table"})
    adapter = make_adapter(recognizer)
    first = asyncio.create_task(adapter.listen())
    await wait_for_entry(capture_log, "open")

    adapter.stop()
    first.cancel()
    with pytest.raises(asyncio.CancelledError):
        await first

    assert await asyncio.wait_for(adapter.listen(), timeout=5) == "leader season table"
    assert capture_log == ["open", "close", "open", "close"]
    assert recognizer.max_active == 1


async def test_no_speech_before_timeout(capture_log, make_adapter):
    adapter = make_adapter(ScriptedRecognizer({1: sr.WaitTimeoutError("listening timed out")}))

    with pytest.raises(RecognitionError, match="no-speech"):
        await adapter.listen()


async def test_unintelligible_speech_is_no_match(capture_log, make_adapter):
    adapter = make_adapter(ScriptedRecognizer({1: "<mumble>"}))

    with pytest.raises(RecognitionError, match="no-match"):
        await adapter.listen()


async def test_device_failure_is_audio_capture_error(monkeypatch, make_adapter):
    def broken_stream(**kwargs):
        raise PortAudioError("Invalid number of channels")

    monkeypatch.setitem(
        sys.modules,
        "sounddevice",
        types.SimpleNamespace(RawInputStream=broken_stream, PortAudioError=PortAudioError),
    )
    adapter = make_adapter(ScriptedRecognizer({1: "banana"}))

    with pytest.raises(RecognitionError, match="audio-capture"):
        await adapter.listen()
