"""
Assessment State Machine.

Sequences the Mini-Cog word recall protocol:
IDLE → PRESENTING → DISTRACTING → RECALLING → SCORED

The spoken part of the run (instructions, words, distraction delay, recall
prompt) is a LangGraph graph of three async nodes; each node owns one phase
transition. Recall capture and scoring happen outside the graph so a failed
recognition can be retried without replaying the words.

Exactly one suspending operation is in flight at any time (the graph run or
a listening activation). reset() cancels it.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

from langgraph.graph import END, START, StateGraph
from typing_extensions import TypedDict

from minicog.domain.constants import (
    DISTRACTION_INTERVAL_MS,
    WORD_CATALOG,
    WORD_PAUSE_MS,
    Prompts,
)
from minicog.domain.entities.session_state import SessionState
from minicog.domain.scoring import recalled_words
from minicog.domain.services.speech_delivery import SpeechDeliveryPipeline
from minicog.domain.value_objects.phase import Phase
from minicog.domain.value_objects.recall_result import RecallResult
from minicog.domain.value_objects.session_snapshot import SessionSnapshot
from minicog.domain.value_objects.word_set import WordSet
from minicog.infrastructure.retry import SleepFn
from minicog.ports.speech import (
    RecognitionError,
    RecognitionUnsupported,
    SpeechDeliveryError,
    SpeechRecognizerPort,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

PhaseListener = Callable[[Phase], None]

UNSUPPORTED_MESSAGE = (
    "Speech recognition is not supported on this system. "
    "Check that a microphone is connected and audio capture is available."
)


class SequenceAborted(Exception):
    """Raised when speech delivery failed while presenting the test.

    The underlying SpeechDeliveryError is available as __cause__.
    """

    def __init__(self, message: str, phase: Phase):
        self.phase = phase
        super().__init__(message)


class PresentationState(TypedDict):
    """State for the presentation graph."""

    words: list[str]
    words_spoken: int
    phase: str


class AssessmentStateMachine:
    """Drives one assessment run at a time.

    Responsibilities:
    - Guard triggers by phase (out-of-phase triggers are ignored)
    - Present instructions and words through the speech delivery pipeline
    - Capture recall through the recognizer, retryable in place
    - Score the transcript and expose the result

    SessionState is only ever written here.
    """

    def __init__(
        self,
        pipeline: SpeechDeliveryPipeline,
        recognizer: SpeechRecognizerPort,
        catalog: Sequence[Sequence[str]] = WORD_CATALOG,
        word_pause_ms: int = WORD_PAUSE_MS,
        distraction_interval_ms: int = DISTRACTION_INTERVAL_MS,
        sleep: SleepFn = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize state machine.

        Args:
            pipeline: Speech delivery pipeline for every spoken prompt
            recognizer: Speech-to-text port used in the recall phase
            catalog: Candidate word lists
            word_pause_ms: Pause after each presented word
            distraction_interval_ms: Delay between presentation and recall
            sleep: Async sleep for pauses (injectable for tests)
            rng: Optional random source for word set selection
        """
        self._pipeline = pipeline
        self._recognizer = recognizer
        self._catalog = catalog
        self._word_pause_ms = word_pause_ms
        self._distraction_interval_ms = distraction_interval_ms
        self._sleep = sleep
        self._rng = rng
        self._state = SessionState()
        self._listeners: list[PhaseListener] = []
        self._pending: asyncio.Future | None = None
        self._generation = 0
        self._graph = self._build_graph().compile()

        # Detected once; disables the recall trigger instead of failing per attempt
        self._recall_enabled = recognizer.is_supported()
        if not self._recall_enabled:
            logger.warning("Speech recognition unsupported, recall disabled")
            self._state.record_error(UNSUPPORTED_MESSAGE)

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def state(self) -> SessionSnapshot:
        """Frozen snapshot of the current session state."""
        return self._state.snapshot()

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def recall_enabled(self) -> bool:
        return self._recall_enabled

    @property
    def is_busy(self) -> bool:
        """True while a suspending operation is in flight."""
        return self._pending is not None and not self._pending.done()

    @property
    def result(self) -> RecallResult | None:
        """Result of the run once SCORED, otherwise None."""
        state = self._state
        if state.phase is not Phase.SCORED or state.word_set is None:
            return None
        return RecallResult(
            word_set=state.word_set,
            transcript=state.transcript,
            score=state.score,
            recalled_words=recalled_words(state.word_set, state.transcript),
            completed_at=state.completed_at,
        )

    def add_listener(self, listener: PhaseListener) -> None:
        """Register a callback invoked with each new phase."""
        self._listeners.append(listener)

    # =========================================================================
    # Triggers
    # =========================================================================

    async def start(self) -> RecallResult | None:
        """Run the test from IDLE through presentation into recall.

        Returns:
            RecallResult if the first listening activation produced a
            transcript, None if it failed (phase stays RECALLING) or the run
            was reset, or if the trigger was out of phase

        Raises:
            RecognitionUnsupported: If recall capture is unavailable
            SequenceAborted: If a prompt could not be delivered; the machine
                is back in IDLE
        """
        if self._state.phase is not Phase.IDLE:
            logger.warning(f"Ignoring start trigger in phase {self._state.phase}")
            return None
        if not self._recall_enabled:
            raise RecognitionUnsupported(UNSUPPORTED_MESSAGE)

        word_set = WordSet.choose(self._catalog, self._rng)
        self._state.begin(word_set)
        self._notify()
        logger.info("Assessment started", extra={"word_count": len(word_set)})

        generation = self._generation
        initial: PresentationState = {
            "words": list(word_set),
            "words_spoken": 0,
            "phase": Phase.PRESENTING.value,
        }
        try:
            await self._run_pending(self._graph.ainvoke(initial))
        except SpeechDeliveryError as e:
            failed_phase = self._state.phase
            message = f"Error during test: {e}"
            logger.error(message, extra={"phase": str(failed_phase)})
            self._state.reset(error=message)
            self._notify()
            raise SequenceAborted(message, failed_phase) from e
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info("Presentation abandoned by reset")
                return None
            raise

        return await self.listen()

    async def listen(self) -> RecallResult | None:
        """Activate the recognizer once and score its transcript.

        Returns:
            RecallResult on success; None on recognition error (recorded in
            last_error, phase stays RECALLING), reset, or an out-of-phase
            trigger
        """
        if self._state.phase is not Phase.RECALLING:
            logger.warning(f"Ignoring listen trigger in phase {self._state.phase}")
            return None
        if not self._recall_enabled:
            self._state.record_error(UNSUPPORTED_MESSAGE)
            return None
        if self.is_busy:
            logger.warning("Ignoring listen trigger while already listening")
            return None

        generation = self._generation
        try:
            transcript = await self._run_pending(self._recognizer.listen())
        except RecognitionError as e:
            logger.warning(f"Speech recognition failed: {e}")
            self._state.record_error(f"Speech recognition error: {e}")
            return None
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info("Listening abandoned by reset")
                return None
            raise

        score = self._state.record_transcript(transcript)
        self._notify()
        logger.info(
            "Assessment scored",
            extra={"score": score, "transcript_chars": len(transcript)},
        )
        return self.result

    async def retry_listening(self) -> RecallResult | None:
        """Listen again after a recognition error without replaying the words."""
        return await self.listen()

    async def reset(self) -> None:
        """Return to IDLE, clearing transcript, score, error and word set.

        Honored in any phase; during an active phase it is a hard abort that
        cancels the in-flight operation.
        """
        self._generation += 1
        pending = self._pending
        if pending is not None and not pending.done():
            logger.info(f"Aborting in-flight operation in phase {self._state.phase}")
            # Cancelling the task does not reach the worker threads behind it
            self._pipeline.stop()
            self._recognizer.stop()
            pending.cancel()
            await asyncio.wait({pending})
        self._pending = None

        self._state.reset(error=None if self._recall_enabled else UNSUPPORTED_MESSAGE)
        self._notify()

    # =========================================================================
    # Internals
    # =========================================================================

    async def _run_pending(self, operation: Awaitable[T]) -> T:
        """Run the single in-flight operation so reset() can cancel it."""
        task = asyncio.ensure_future(operation)
        self._pending = task
        try:
            return await task
        finally:
            if self._pending is task:
                self._pending = None

    def _advance(self, phase: Phase) -> None:
        self._state.transition_to(phase)
        self._notify()

    def _notify(self) -> None:
        phase = self._state.phase
        logger.debug(f"Phase changed to {phase}")
        for listener in self._listeners:
            listener(phase)

    async def _pause(self, milliseconds: int) -> None:
        if milliseconds > 0:
            await self._sleep(milliseconds / 1000)

    def _build_graph(self) -> StateGraph:
        """Build the LangGraph presentation graph."""
        graph = StateGraph(PresentationState)

        async def present_words(state: PresentationState) -> dict[str, Any]:
            await self._pipeline.speak(Prompts.INTRO)
            spoken = 0
            for word in state["words"]:
                await self._pipeline.speak(word)
                spoken += 1
                await self._pause(self._word_pause_ms)
            return {"words_spoken": spoken, "phase": Phase.PRESENTING.value}

        async def distract(state: PresentationState) -> dict[str, Any]:
            self._advance(Phase.DISTRACTING)
            await self._pipeline.speak(Prompts.TRANSITION)
            await self._pause(self._distraction_interval_ms)
            return {"phase": Phase.DISTRACTING.value}

        async def prompt_recall(state: PresentationState) -> dict[str, Any]:
            self._advance(Phase.RECALLING)
            await self._pipeline.speak(Prompts.RECALL)
            return {"phase": Phase.RECALLING.value}

        graph.add_node("present_words", present_words)
        graph.add_node("distract", distract)
        graph.add_node("prompt_recall", prompt_recall)

        graph.add_edge(START, "present_words")
        graph.add_edge("present_words", "distract")
        graph.add_edge("distract", "prompt_recall")
        graph.add_edge("prompt_recall", END)

        return graph
