# Adapters layer - Concrete implementations (Hugging Face, sounddevice, pyttsx3, SpeechRecognition)

from .huggingface_tts import HuggingFaceTTSAdapter
from .pyttsx3_synthesizer import Pyttsx3Synthesizer
from .sounddevice_player import SoundDevicePlayer
from .speech_recognition_stt import SpeechRecognitionAdapter

__all__ = [
    "HuggingFaceTTSAdapter",
    "Pyttsx3Synthesizer",
    "SoundDevicePlayer",
    "SpeechRecognitionAdapter",
]
