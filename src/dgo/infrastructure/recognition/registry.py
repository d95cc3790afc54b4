from __future__ import annotations

from dgo.application.ports.recognition import RecognitionAdapter
from dgo.infrastructure.recognition.gemini_adapter import GeminiRecognitionAdapter
from dgo.infrastructure.recognition.ollama_adapter import OllamaRecognitionAdapter


def build_default_adapters() -> list[RecognitionAdapter]:
    """Preferred provider first. Gemini is skipped when no API key is configured."""
    adapters: list[RecognitionAdapter] = []
    gemini = GeminiRecognitionAdapter.from_env()
    if gemini is not None:
        adapters.append(gemini)
    adapters.append(OllamaRecognitionAdapter.from_env())
    return adapters
