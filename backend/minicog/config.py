"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
A missing API token never fails at load time; only the first remote
TTS call reports it.
"""

import os

from minicog.domain.constants import (
    DISTRACTION_INTERVAL_MS,
    RECOGNITION_LANGUAGE,
    TTS_MAX_ATTEMPTS,
    TTS_RETRY_BASE_DELAY_MS,
    WORD_PAUSE_MS,
)

DEFAULT_TTS_API_URL = "https://api-inference.huggingface.co/models/sesame/csm-1b"

# Request body shapes understood by the Hugging Face adapter
PAYLOAD_STYLES = ("plain", "structured")


def _get_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'") from None


def get_hf_api_token() -> str:
    """Get Hugging Face API token.

    Environment variable: HF_API_TOKEN
    Default: empty (remote TTS calls will fail with a clear error)
    """
    return os.getenv("HF_API_TOKEN", "")


def get_tts_api_url() -> str:
    """Get remote TTS inference endpoint.

    Environment variable: TTS_API_URL
    Default: Hugging Face inference API for sesame/csm-1b
    """
    return os.getenv("TTS_API_URL", DEFAULT_TTS_API_URL)


def get_tts_payload_style() -> str:
    """Get request body style for the TTS endpoint.

    Environment variable: TTS_PAYLOAD_STYLE
    Options:
        - 'plain': {"inputs": text} (default)
        - 'structured': {"inputs": {"text", "model", "voice"}} (Qwen2-Audio)
    """
    style = os.getenv("TTS_PAYLOAD_STYLE", "plain").lower()
    if style not in PAYLOAD_STYLES:
        raise ValueError(
            f"Invalid TTS_PAYLOAD_STYLE: '{style}'. Valid options: {', '.join(PAYLOAD_STYLES)}"
        )
    return style


def get_tts_model() -> str:
    """Get model name sent with structured payloads.

    Environment variable: TTS_MODEL
    """
    return os.getenv("TTS_MODEL", "qwen2-audio-1.5b")


def get_tts_voice() -> str:
    """Get voice name sent with structured payloads.

    Environment variable: TTS_VOICE
    """
    return os.getenv("TTS_VOICE", "default")


def get_tts_timeout_seconds() -> float:
    """Environment variable: TTS_TIMEOUT_SECONDS (default 30)."""
    return _get_float("TTS_TIMEOUT_SECONDS", 30.0)


def get_tts_max_attempts() -> int:
    """Get remote TTS attempts before the local fallback.

    Environment variable: TTS_MAX_ATTEMPTS
    Default: 2
    """
    return _get_int("TTS_MAX_ATTEMPTS", TTS_MAX_ATTEMPTS, minimum=1)


def get_tts_retry_base_delay_ms() -> int:
    """Environment variable: TTS_RETRY_BASE_DELAY_MS (default 1000)."""
    return _get_int("TTS_RETRY_BASE_DELAY_MS", TTS_RETRY_BASE_DELAY_MS)


def get_word_pause_ms() -> int:
    """Environment variable: WORD_PAUSE_MS (default 1000)."""
    return _get_int("WORD_PAUSE_MS", WORD_PAUSE_MS)


def get_distraction_interval_ms() -> int:
    """Environment variable: DISTRACTION_INTERVAL_MS (default 5000)."""
    return _get_int("DISTRACTION_INTERVAL_MS", DISTRACTION_INTERVAL_MS)


def get_recognition_language() -> str:
    """Environment variable: RECOGNITION_LANGUAGE (default en-US)."""
    return os.getenv("RECOGNITION_LANGUAGE", RECOGNITION_LANGUAGE)


def get_recognition_timeout_seconds() -> float:
    """Seconds to wait for the user to start speaking.

    Environment variable: RECOGNITION_TIMEOUT_SECONDS
    Default: 10
    """
    return _get_float("RECOGNITION_TIMEOUT_SECONDS", 10.0)


def get_log_level() -> str:
    """Environment variable: LOG_LEVEL (default INFO)."""
    return os.getenv("LOG_LEVEL", "INFO").upper()
