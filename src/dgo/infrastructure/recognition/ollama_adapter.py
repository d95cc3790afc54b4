from __future__ import annotations

import base64
import os

import httpx

from dgo.infrastructure.recognition.base import HttpRecognitionAdapter, ProviderError

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "qwen3-vl:32b"

OLLAMA_PROMPT = """Read this drink menu image and extract every drink and its price.
Reply in JSON using this format:
[{"name": "drink name", "price": numeric price}, ...]

Notes:
- Only list drinks, no other text.
- Prices must be numbers without currency symbols.
- If a drink comes in several sizes, list each size separately.
- Reply with the JSON array only."""


class OllamaRecognitionAdapter(HttpRecognitionAdapter):
    name = "ollama"

    def __init__(
        self,
        base_url: str = DEFAULT_OLLAMA_URL,
        model: str = DEFAULT_OLLAMA_MODEL,
        client: httpx.Client | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(client=client, timeout_seconds=timeout_seconds)
        self._base_url = base_url.rstrip("/")
        self._model = model

    @classmethod
    def from_env(cls) -> OllamaRecognitionAdapter:
        return cls(
            base_url=os.getenv("OLLAMA_URL", DEFAULT_OLLAMA_URL),
            model=os.getenv("OLLAMA_MODEL", DEFAULT_OLLAMA_MODEL),
        )

    def _extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        body = self._post_json(
            f"{self._base_url}/api/generate",
            {
                "model": self._model,
                "prompt": OLLAMA_PROMPT,
                "images": [base64.b64encode(image_bytes).decode("ascii")],
                "stream": False,
            },
        )
        if not isinstance(body, dict):
            raise ProviderError("ollama returned an unexpected body")
        response = body.get("response")
        return response if isinstance(response, str) else ""
