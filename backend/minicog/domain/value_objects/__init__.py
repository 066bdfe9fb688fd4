"""Domain value objects - immutable objects without identity."""

from .phase import Phase
from .recall_result import RecallResult
from .session_snapshot import SessionSnapshot
from .speech_request import SpeechRequest
from .word_set import WordSet

__all__ = [
    "Phase",
    "RecallResult",
    "SessionSnapshot",
    "SpeechRequest",
    "WordSet",
]
