# Ports layer - Abstract interfaces (Protocols)

from .speech import (
    AudioPlayerPort,
    DecodeError,
    FallbackFailed,
    FallbackUnavailable,
    LocalSynthesizerPort,
    PlaybackError,
    ProviderError,
    RecognitionError,
    RecognitionUnsupported,
    SpeechDeliveryError,
    SpeechRecognitionError,
    SpeechRecognizerPort,
    TTSPort,
)

__all__ = [
    "TTSPort",
    "AudioPlayerPort",
    "LocalSynthesizerPort",
    "SpeechRecognizerPort",
    "SpeechDeliveryError",
    "ProviderError",
    "DecodeError",
    "PlaybackError",
    "FallbackUnavailable",
    "FallbackFailed",
    "SpeechRecognitionError",
    "RecognitionUnsupported",
    "RecognitionError",
]
