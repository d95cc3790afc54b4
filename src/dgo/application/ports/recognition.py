from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class FailureKind(str, Enum):
    ERROR = "error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class ProviderFailure:
    provider: str
    kind: FailureKind
    message: str
    status_code: int | None = None


@dataclass(frozen=True)
class RecognitionResult:
    provider: str
    text: str | None = None
    failure: ProviderFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.text is not None

    @classmethod
    def success(cls, provider: str, text: str) -> RecognitionResult:
        return cls(provider=provider, text=text)

    @classmethod
    def failed(cls, failure: ProviderFailure) -> RecognitionResult:
        return cls(provider=failure.provider, failure=failure)


class RecognitionAdapter(Protocol):
    name: str

    def recognize(self, image_bytes: bytes, mime_type: str) -> RecognitionResult: ...
