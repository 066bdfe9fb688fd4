"""
Composition Root.

Centralized dependency wiring for the application.
All factory functions that instantiate adapters belong here to maintain
hexagonal architecture (domain NEVER imports from adapters).
"""

from minicog import config
from minicog.adapters.huggingface_tts import HuggingFaceTTSAdapter
from minicog.adapters.pyttsx3_synthesizer import Pyttsx3Synthesizer
from minicog.adapters.sounddevice_player import SoundDevicePlayer
from minicog.adapters.speech_recognition_stt import SpeechRecognitionAdapter
from minicog.domain.services.assessment import AssessmentStateMachine
from minicog.domain.services.speech_delivery import SpeechDeliveryPipeline


def create_tts_adapter() -> HuggingFaceTTSAdapter:
    """Create the remote TTS adapter from environment configuration."""
    return HuggingFaceTTSAdapter(
        api_url=config.get_tts_api_url(),
        api_token=config.get_hf_api_token(),
        payload_style=config.get_tts_payload_style(),
        model=config.get_tts_model(),
        voice=config.get_tts_voice(),
        timeout=config.get_tts_timeout_seconds(),
    )


def create_speech_pipeline(tts: HuggingFaceTTSAdapter | None = None) -> SpeechDeliveryPipeline:
    """Create SpeechDeliveryPipeline with local playback and pyttsx3 fallback.

    Args:
        tts: Optional pre-built TTS adapter (created from config when None)

    Returns:
        SpeechDeliveryPipeline configured from the environment
    """
    return SpeechDeliveryPipeline(
        tts=tts or create_tts_adapter(),
        player=SoundDevicePlayer(),
        fallback=Pyttsx3Synthesizer(),
        max_attempts=config.get_tts_max_attempts(),
        base_delay_ms=config.get_tts_retry_base_delay_ms(),
    )


def create_recognizer() -> SpeechRecognitionAdapter:
    return SpeechRecognitionAdapter(
        language=config.get_recognition_language(),
        timeout=config.get_recognition_timeout_seconds(),
    )


def create_assessment(
    pipeline: SpeechDeliveryPipeline | None = None,
    recognizer: SpeechRecognitionAdapter | None = None,
) -> AssessmentStateMachine:
    """Create AssessmentStateMachine with dependencies.

    Args:
        pipeline: Optional pre-built speech pipeline
        recognizer: Optional pre-built recognizer

    Returns:
        AssessmentStateMachine wired to the local microphone and speakers
    """
    return AssessmentStateMachine(
        pipeline=pipeline or create_speech_pipeline(),
        recognizer=recognizer or create_recognizer(),
        word_pause_ms=config.get_word_pause_ms(),
        distraction_interval_ms=config.get_distraction_interval_ms(),
    )
