"""
Mini-Cog Voice - console runner

Voice-driven word recall screening: three words are spoken, the user is
asked to recall them after a short delay, and the answer is scored.
"""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable

from dotenv import load_dotenv

from minicog import config
from minicog.composition import (
    create_assessment,
    create_recognizer,
    create_speech_pipeline,
    create_tts_adapter,
)
from minicog.domain.constants import DISCLAIMER
from minicog.domain.services.assessment import AssessmentStateMachine, SequenceAborted
from minicog.domain.value_objects.phase import Phase
from minicog.domain.value_objects.recall_result import RecallResult
from minicog.logging_config import configure_logging
from minicog.ports.speech import RecognitionUnsupported

logger = logging.getLogger(__name__)

AskFn = Callable[[str], Awaitable[str]]

PHASE_MESSAGES = {
    Phase.IDLE: "Ready.",
    Phase.PRESENTING: "Listen carefully to the three words...",
    Phase.DISTRACTING: "Please wait a moment...",
    Phase.RECALLING: "Listening for your response... say the three words now.",
    Phase.SCORED: "Thank you.",
}


async def ask(prompt: str) -> str:
    """Read a line from stdin without blocking the event loop."""
    return await asyncio.to_thread(input, prompt)


def format_result(result: RecallResult) -> str:
    lines = [
        "Test Results",
        f"  Score: {result.score} out of {result.max_score}",
        f'  Your response: "{result.transcript}"',
        f"  Completed at: {result.completed_at.astimezone():%Y-%m-%d %H:%M:%S}",
        "",
        f"  {result.interpretation}",
        "",
        DISCLAIMER,
    ]
    return "\n".join(lines)


async def run_session(machine: AssessmentStateMachine, ask_fn: AskFn = ask) -> int:
    """Interactive loop: start, retry listening on errors, show result, repeat.

    Returns:
        Process exit code
    """
    machine.add_listener(lambda phase: print(PHASE_MESSAGES[phase]))

    print("Voice Memory Test")
    print(
        "You will hear three words and then be asked to recall them. "
        "This test is based on the word recall portion of the Mini-Cog assessment."
    )
    print(DISCLAIMER)

    if not machine.recall_enabled:
        print(machine.state.last_error)
        return 1

    while True:
        answer = await ask_fn("\nPress Enter to start the test (q to quit): ")
        if answer.strip().lower() == "q":
            return 0

        try:
            result = await machine.start()
        except RecognitionUnsupported as e:
            print(e)
            return 1
        except SequenceAborted as e:
            print(e)
            continue

        while result is None and machine.phase is Phase.RECALLING:
            print(machine.state.last_error or "No response captured.")
            answer = await ask_fn("Press Enter to speak again (q to quit): ")
            if answer.strip().lower() == "q":
                await machine.reset()
                return 0
            result = await machine.retry_listening()

        if result is not None:
            print(format_result(result))

        answer = await ask_fn("\nTake the test again? [y/N]: ")
        await machine.reset()
        if answer.strip().lower() not in ("y", "yes"):
            return 0


async def _main() -> int:
    tts = create_tts_adapter()
    recognizer = create_recognizer()
    machine = create_assessment(create_speech_pipeline(tts), recognizer)
    try:
        return await run_session(machine)
    finally:
        recognizer.close()
        await tts.close()


def main() -> None:
    """Console entry point."""
    # Load .env from the working directory before reading configuration
    load_dotenv()
    configure_logging(config.get_log_level())
    logger.info("Starting Mini-Cog voice test")
    try:
        exit_code = asyncio.run(_main())
    except KeyboardInterrupt:
        exit_code = 130
    sys.exit(exit_code)
