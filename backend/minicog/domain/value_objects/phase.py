"""Assessment phase value object for test lifecycle management."""

from enum import StrEnum


class Phase(StrEnum):
    """Assessment lifecycle phases.

    State machine:
        IDLE -> PRESENTING -> DISTRACTING -> RECALLING -> SCORED
          ^                                                 |
          +------------------- reset -----------------------+

    Any phase may also return to IDLE through an explicit reset or an
    aborted presentation.

    States:
        IDLE: Waiting for the start trigger
        PRESENTING: Speaking the instructions and the three words
        DISTRACTING: Fixed delay so recall is not an immediate echo
        RECALLING: Listening for the user's spoken answer
        SCORED: Transcript captured and scored
    """

    IDLE = "idle"
    PRESENTING = "presenting"
    DISTRACTING = "distracting"
    RECALLING = "recalling"
    SCORED = "scored"

    def is_active(self) -> bool:
        """Check if a test run is in progress."""
        return self in (Phase.PRESENTING, Phase.DISTRACTING, Phase.RECALLING)

    def owns_audio_output(self) -> bool:
        """Check if this phase speaks to the user."""
        return self in (Phase.PRESENTING, Phase.DISTRACTING)

    def is_terminal(self) -> bool:
        """Check if the run has finished (only reset leaves this phase)."""
        return self is Phase.SCORED

    def next(self) -> "Phase | None":
        """Get the phase that follows this one in a forward run."""
        order = list(Phase)
        index = order.index(self)
        if index + 1 >= len(order):
            return None
        return order[index + 1]
