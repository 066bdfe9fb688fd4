"""Fakes for the speech ports, shared by the test modules."""

import asyncio


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


class FakeTTS:
    """TTSPort returning queued outcomes (bytes or exceptions), then a default payload.

    Texts listed in fail_on raise their error on every call.
    """

    def __init__(self, outcomes: list | None = None, fail_on: dict | None = None) -> None:
        self.outcomes = list(outcomes or [])
        self.fail_on = dict(fail_on or {})
        self.calls: list[str] = []

    async def synthesize(self, text: str) -> bytes:
        self.calls.append(text)
        if text in self.fail_on:
            raise self.fail_on[text]
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        return f"audio:{text}".encode()


class FakePlayer:
    """AudioPlayerPort recording every payload it played.

    Payloads listed in hold_on keep playing until the caller is cancelled.
    """

    def __init__(self, errors: list | None = None, hold_on: set | None = None) -> None:
        self.errors = list(errors or [])
        self.hold_on = set(hold_on or ())
        self.played: list[bytes] = []
        self.holding = 0
        self.stop_calls = 0

    async def play(self, audio: bytes) -> None:
        if self.errors:
            raise self.errors.pop(0)
        if audio in self.hold_on:
            self.holding += 1
            await asyncio.Event().wait()
        await asyncio.sleep(0)
        self.played.append(audio)

    def stop(self) -> None:
        self.stop_calls += 1


class FakeFallback:
    """LocalSynthesizerPort that succeeds or raises a configured error."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        self.spoken: list[str] = []
        self.stop_calls = 0

    async def speak(self, text: str) -> None:
        self.spoken.append(text)
        if self.error is not None:
            raise self.error

    def stop(self) -> None:
        self.stop_calls += 1


class FakeRecognizer:
    """SpeechRecognizerPort returning queued transcripts or raising queued errors.

    With block=True, listen() waits until release() or stop() is called.
    """

    def __init__(self, outcomes: list | None = None, supported: bool = True, block: bool = False):
        self.outcomes = list(outcomes or [])
        self.supported = supported
        self.block = block
        self.listen_calls = 0
        self.stop_calls = 0
        self._released = asyncio.Event()

    def is_supported(self) -> bool:
        return self.supported

    async def listen(self) -> str:
        self.listen_calls += 1
        if self.block:
            await self._released.wait()
        outcome = self.outcomes.pop(0) if self.outcomes else ""
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def release(self) -> None:
        self._released.set()

    def stop(self) -> None:
        self.stop_calls += 1


