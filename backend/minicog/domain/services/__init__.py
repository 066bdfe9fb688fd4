"""Domain services - orchestration and business logic."""

from .assessment import (
    AssessmentStateMachine,
    PresentationState,
    SequenceAborted,
)
from .speech_delivery import SpeechDeliveryPipeline

__all__ = [
    "AssessmentStateMachine",
    "PresentationState",
    "SequenceAborted",
    "SpeechDeliveryPipeline",
]
