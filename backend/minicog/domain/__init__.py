# Domain layer - Business logic (NO adapter dependencies)

from .entities import SessionState
from .scoring import recalled_words, score_recall
from .value_objects import (
    Phase,
    RecallResult,
    SessionSnapshot,
    SpeechRequest,
    WordSet,
)

__all__ = [
    "Phase",
    "RecallResult",
    "SessionSnapshot",
    "SessionState",
    "SpeechRequest",
    "WordSet",
    "recalled_words",
    "score_recall",
]
