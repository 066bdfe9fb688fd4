"""Session state entity for a single assessment run."""

from dataclasses import dataclass
from datetime import UTC, datetime

from minicog.domain.scoring import score_recall
from minicog.domain.value_objects.phase import Phase
from minicog.domain.value_objects.session_snapshot import SessionSnapshot
from minicog.domain.value_objects.word_set import WordSet


@dataclass
class SessionState:
    """Mutable record of the current assessment run.

    Owned exclusively by the assessment state machine; everything else
    observes it read-only.

    Attributes:
        phase: Current lifecycle phase
        word_set: Words drawn for this run (None while idle)
        transcript: Recognized recall response, verbatim
        score: Recomputed from word_set and transcript, never incremented
        last_error: Human-readable description of the last error (if any)
        started_at: When the run left IDLE
        completed_at: When the transcript was scored
    """

    phase: Phase = Phase.IDLE
    word_set: WordSet | None = None
    transcript: str = ""
    score: int = 0
    last_error: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def begin(self, word_set: WordSet) -> None:
        """Start a run with a freshly drawn word set.

        Raises:
            ValueError: If not idle
        """
        if self.phase is not Phase.IDLE:
            raise ValueError(f"Cannot start a run in phase {self.phase}")
        self.word_set = word_set
        self.last_error = None
        self.started_at = datetime.now(UTC)
        self.transition_to(Phase.PRESENTING)

    def record_transcript(self, transcript: str) -> int:
        """Store the transcript verbatim, recompute the score and finish the run.

        Returns:
            The recomputed score

        Raises:
            ValueError: If not recalling
        """
        if self.phase is not Phase.RECALLING or self.word_set is None:
            raise ValueError(f"Cannot record a transcript in phase {self.phase}")
        self.transcript = transcript
        self.score = score_recall(self.word_set, transcript)
        self.last_error = None
        self.completed_at = datetime.now(UTC)
        self.transition_to(Phase.SCORED)
        return self.score

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self.phase,
            word_set=self.word_set,
            transcript=self.transcript,
            score=self.score,
            last_error=self.last_error,
            started_at=self.started_at,
            completed_at=self.completed_at,
        )

    def record_error(self, message: str) -> None:
        self.last_error = message

    def reset(self, error: str | None = None) -> None:
        """Return to IDLE, clearing the run.

        Args:
            error: Optional message to keep visible after an aborted run
        """
        self.phase = Phase.IDLE
        self.word_set = None
        self.transcript = ""
        self.score = 0
        self.last_error = error
        self.started_at = None
        self.completed_at = None

    def transition_to(self, new_phase: Phase) -> None:
        """Advance to the next phase.

        Only strictly forward, single-step transitions are allowed; going
        back to IDLE is done with reset().

        Raises:
            ValueError: If transition is invalid
        """
        allowed = self.phase.next()
        if new_phase is not allowed:
            raise ValueError(
                f"Invalid transition from {self.phase} to {new_phase}. Allowed: {allowed}"
            )
        self.phase = new_phase
