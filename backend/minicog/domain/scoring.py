"""Recall scoring - whole-word, case-insensitive overlap with the word set."""

import re

from minicog.domain.value_objects.word_set import WordSet

_WORD_PATTERN = re.compile(r"\w+")


def tokenize(transcript: str) -> set[str]:
    """Split a transcript into lowercase words, dropping punctuation."""
    return set(_WORD_PATTERN.findall(transcript.casefold()))


def recalled_words(word_set: WordSet, transcript: str) -> tuple[str, ...]:
    """Get presented words found in the transcript, in presentation order.

    A word counts once no matter how often it is repeated, and only as a
    whole word ("chairs" does not recall "chair").
    """
    spoken = tokenize(transcript)
    return tuple(word for word in word_set if word.casefold() in spoken)


def score_recall(word_set: WordSet, transcript: str) -> int:
    """Number of presented words recalled in the transcript (0-3)."""
    return len(recalled_words(word_set, transcript))
