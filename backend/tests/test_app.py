# tests/test_app.py

from datetime import UTC, datetime

from minicog.app import format_result, run_session
from minicog.domain.constants import DISCLAIMER
from minicog.domain.value_objects.recall_result import RecallResult
from minicog.domain.value_objects.word_set import WordSet
from minicog.ports.speech import ProviderError, RecognitionError
from tests.fakes import FakeRecognizer

BANANA = [("Banana", "Sunrise", "Chair")]


class ScriptedInput:
    """Answers prompts from a fixed script."""

    def __init__(self, answers: list[str]) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answers.pop(0)


async def test_single_run_prints_score(make_machine, capsys):
    machine = make_machine(FakeRecognizer(["banana and chair"]), catalog=BANANA)
    ask = ScriptedInput(["", "n"])

    exit_code = await run_session(machine, ask)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Score: 2 out of 3" in out
    assert "Listen carefully to the three words..." in out
    assert machine.state.word_set is None


async def test_retry_listening_after_recognition_error(make_machine, capsys):
    recognizer = FakeRecognizer([RecognitionError("no-speech"), "banana sunrise chair"])
    machine = make_machine(recognizer, catalog=BANANA)
    ask = ScriptedInput(["", "", "n"])

    exit_code = await run_session(machine, ask)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Speech recognition error: no-speech" in out
    assert "Score: 3 out of 3" in out
    assert recognizer.listen_calls == 2


async def test_aborted_run_returns_to_prompt(make_machine, tts, capsys):
    tts.outcomes = [ProviderError("API request failed: Status: 503", status=503)] * 2
    machine = make_machine(FakeRecognizer(["banana"]), catalog=BANANA)
    ask = ScriptedInput(["", "q"])

    exit_code = await run_session(machine, ask)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Error during test: API request failed: Status: 503" in out
    assert len(ask.prompts) == 2


async def test_unsupported_recognition_exits_without_prompting(make_machine, capsys):
    machine = make_machine(FakeRecognizer(supported=False))
    ask = ScriptedInput([])

    exit_code = await run_session(machine, ask)

    assert exit_code == 1
    assert ask.prompts == []
    assert "not supported" in capsys.readouterr().out


async def test_quit_before_start(make_machine, tts):
    machine = make_machine(FakeRecognizer())

    assert await run_session(machine, ScriptedInput(["q"])) == 0
    assert tts.calls == []


def test_format_result_includes_disclaimer():
    result = RecallResult(
        word_set=WordSet.of("Leader", "Season", "Table"),
        transcript="",
        score=0,
        recalled_words=(),
        completed_at=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
    )

    text = format_result(result)

    assert "Score: 0 out of 3" in text
    assert DISCLAIMER in text
