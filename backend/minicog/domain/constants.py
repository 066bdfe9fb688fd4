"""
Shared Domain Constants.

Central location for the word catalog, spoken prompts and timing defaults.
All timing values are in milliseconds for consistency.
"""

# =============================================================================
# Word Catalog
# =============================================================================
# Mini-Cog word lists. One list is drawn uniformly at random per session.

WORD_CATALOG: tuple[tuple[str, str, str], ...] = (
    ("Banana", "Sunrise", "Chair"),
    ("Leader", "Season", "Table"),
    ("Village", "Kitchen", "Baby"),
    ("River", "Nation", "Finger"),
    ("Captain", "Garden", "Picture"),
    ("Daughter", "Heaven", "Mountain"),
)

WORDS_PER_SET = 3


# =============================================================================
# Timing (milliseconds)
# =============================================================================

WORD_PAUSE_MS = 1000  # Silence after each presented word
DISTRACTION_INTERVAL_MS = 5000  # Delay between presentation and recall

TTS_MAX_ATTEMPTS = 2  # Remote attempts before falling back to local synthesis
TTS_RETRY_BASE_DELAY_MS = 1000  # Backoff: base * 2^(attempt-1)


# =============================================================================
# Recognition
# =============================================================================

RECOGNITION_LANGUAGE = "en-US"


# =============================================================================
# Spoken Prompts (Single Source of Truth)
# =============================================================================


class Prompts:
    """Fixed instructions spoken during the assessment."""

    INTRO = (
        "I'm going to say three words that I want you to remember. "
        "Please listen carefully."
    )
    TRANSITION = "Thank you. Please wait a few moments before I ask you about those words."
    RECALL = "Now, I'd like you to recall the three words I just said."


# =============================================================================
# Result Interpretation
# =============================================================================

DISCLAIMER = (
    "This is a simple screening test and not a diagnosis. "
    "If you have concerns about memory, please consult a healthcare professional."
)


class Interpretations:
    """Human-readable interpretation of a recall score (0-3)."""

    PERFECT = "Perfect recall! You remembered all three words correctly."
    GOOD = "Good recall. You remembered two out of three words."
    PARTIAL = "Partial recall. You remembered one out of three words."
    NONE = "No words recalled. This may indicate a need for further assessment."

    @classmethod
    def for_score(cls, score: int) -> str:
        """Get interpretation message for a score (0-3)."""
        return {
            3: cls.PERFECT,
            2: cls.GOOD,
            1: cls.PARTIAL,
        }.get(score, cls.NONE)
