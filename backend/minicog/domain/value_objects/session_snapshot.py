"""Read-only view of the session state handed to observers."""

from dataclasses import dataclass
from datetime import datetime

from .phase import Phase
from .word_set import WordSet


@dataclass(frozen=True)
class SessionSnapshot:
    """Frozen copy of SessionState at one point in time.

    Mirrors SessionState field for field; later changes to the live state
    do not show up here.
    """

    phase: Phase
    word_set: WordSet | None
    transcript: str
    score: int
    last_error: str | None
    started_at: datetime | None
    completed_at: datetime | None
