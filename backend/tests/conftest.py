"""Shared fixtures wiring the fakes into pipelines and state machines."""

import random

import pytest

from minicog.domain.services.assessment import AssessmentStateMachine
from minicog.domain.services.speech_delivery import SpeechDeliveryPipeline
from minicog.ports.speech import FallbackUnavailable
from tests.fakes import FakeFallback, FakePlayer, FakeRecognizer, FakeSleep, FakeTTS


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def tts() -> FakeTTS:
    return FakeTTS()


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture
def fallback() -> FakeFallback:
    return FakeFallback(error=FallbackUnavailable("no engine"))


@pytest.fixture
def pipeline(tts, player, fallback, fake_sleep) -> SpeechDeliveryPipeline:
    return SpeechDeliveryPipeline(tts, player, fallback, sleep=fake_sleep)


@pytest.fixture
def make_machine(pipeline, fake_sleep):
    """Factory for state machines sharing the fake pipeline and sleep."""

    def _make(recognizer: FakeRecognizer, catalog=None, seed: int | None = 7):
        kwargs = {}
        if catalog is not None:
            kwargs["catalog"] = catalog
        return AssessmentStateMachine(
            pipeline,
            recognizer,
            sleep=fake_sleep,
            rng=random.Random(seed) if seed is not None else None,
            **kwargs,
        )

    return _make
