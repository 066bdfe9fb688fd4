# tests/test_scoring.py

import pytest

from minicog.domain.scoring import recalled_words, score_recall, tokenize
from minicog.domain.value_objects.word_set import WordSet

BANANA = WordSet.of("Banana", "Sunrise", "Chair")
LEADER = WordSet.of("Leader", "Season", "Table")


def test_two_of_three_recalled():
    assert score_recall(BANANA, "I remember banana and chair") == 2


def test_empty_transcript_scores_zero():
    assert score_recall(LEADER, "") == 0


def test_matching_is_case_insensitive():
    assert score_recall(BANANA, "BANANA SunRise cHaIr") == 3


def test_punctuation_does_not_block_matches():
    assert score_recall(LEADER, "Leader, season. Table!") == 3


def test_partial_words_do_not_count():
    assert score_recall(BANANA, "bananas chairs sunrises") == 0


def test_repeated_word_counts_once():
    assert score_recall(BANANA, "banana banana banana") == 1


@pytest.mark.parametrize(
    "transcript",
    [
        "",
        "nothing relevant",
        "banana",
        "chair sunrise",
        "banana sunrise chair banana sunrise chair extra words",
    ],
)
def test_score_always_within_bounds(transcript):
    assert 0 <= score_recall(BANANA, transcript) <= 3


def test_recalled_words_keep_presentation_order():
    assert recalled_words(BANANA, "chair then banana") == ("Banana", "Chair")


def test_tokenize_lowercases_and_strips_punctuation():
    assert tokenize("Hello, World!") == {"hello", "world"}
