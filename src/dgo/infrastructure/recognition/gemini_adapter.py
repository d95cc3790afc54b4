from __future__ import annotations

import base64
import os
from typing import Any

import httpx

from dgo.infrastructure.recognition.base import HttpRecognitionAdapter

DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

GEMINI_PROMPT = """You are an OCR system for Taiwanese drink shop menus.

Task: extract every drink listed on this menu image.

Output format: a strict JSON array:
[{"name": "full drink name", "price": medium-size price as a number, "category": "section title"}]

Rules:
1. Scan block by block; menus are often split into several columns or sections.
2. Use the full drink name exactly as printed (for example 珍珠奶茶, 鮮萃大麥紅茶).
3. When a drink has M/L (中/大) prices, use the M (中杯) price. Prices are whole
   numbers without currency symbols and usually fall between 25 and 100.
4. Take the category from the section heading the drink appears under.
5. Leave out toppings, add-ons and ice or sugar level notes.

Output only the JSON array, with no other text."""


class GeminiRecognitionAdapter(HttpRecognitionAdapter):
    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        api_base: str = DEFAULT_GEMINI_API_BASE,
        client: httpx.Client | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(client=client, timeout_seconds=timeout_seconds)
        self._api_key = api_key
        self._model = model
        self._api_base = api_base.rstrip("/")

    @classmethod
    def from_env(cls) -> GeminiRecognitionAdapter | None:
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            return None
        return cls(
            api_key=api_key,
            model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            api_base=os.getenv("GEMINI_API_BASE", DEFAULT_GEMINI_API_BASE),
        )

    def _extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        url = f"{self._api_base}/models/{self._model}:generateContent?key={self._api_key}"
        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": GEMINI_PROMPT},
                        {
                            "inline_data": {
                                "mime_type": mime_type,
                                "data": base64.b64encode(image_bytes).decode("ascii"),
                            }
                        },
                    ]
                }
            ],
            "generationConfig": {"temperature": 0.1, "maxOutputTokens": 16384},
        }
        return _first_candidate_text(self._post_json(url, payload))


def _first_candidate_text(body: Any) -> str:
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""
