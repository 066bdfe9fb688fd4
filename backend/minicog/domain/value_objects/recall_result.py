"""
Recall Result Value Object.

Outcome of a completed assessment run. Immutable data structure handed from
the assessment state machine to the presentation layer.
"""

from dataclasses import dataclass
from datetime import datetime

from minicog.domain.constants import WORDS_PER_SET, Interpretations
from minicog.domain.value_objects.word_set import WordSet


@dataclass(frozen=True)
class RecallResult:
    """Scored recall of a single run.

    Attributes:
        word_set: Words that were presented
        transcript: Recognized response, stored verbatim
        score: Number of presented words found in the transcript (0-3)
        recalled_words: Presented words that were found, in presentation order
        completed_at: When the transcript was scored
    """

    word_set: WordSet
    transcript: str
    score: int
    recalled_words: tuple[str, ...]
    completed_at: datetime

    def __post_init__(self) -> None:
        if not 0 <= self.score <= WORDS_PER_SET:
            raise ValueError(f"score must be 0-{WORDS_PER_SET}, got {self.score}")
        if self.score != len(self.recalled_words):
            raise ValueError("score must equal the number of recalled words")

    @property
    def max_score(self) -> int:
        return WORDS_PER_SET

    @property
    def missed_words(self) -> tuple[str, ...]:
        """Presented words that were not recalled."""
        return tuple(word for word in self.word_set if word not in self.recalled_words)

    @property
    def interpretation(self) -> str:
        return Interpretations.for_score(self.score)

    def to_dict(self) -> dict:
        """Convert to a plain dict for display or logging."""
        return {
            "words": list(self.word_set),
            "transcript": self.transcript,
            "score": self.score,
            "max_score": self.max_score,
            "recalled_words": list(self.recalled_words),
            "interpretation": self.interpretation,
            "completed_at": self.completed_at.isoformat(),
        }
