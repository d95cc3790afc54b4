from __future__ import annotations

import os
from typing import Any

import httpx
from opentelemetry import trace

from dgo.application.ports.recognition import (
    FailureKind,
    ProviderFailure,
    RecognitionResult,
)

DEFAULT_TIMEOUT_SECONDS = 60.0

tracer = trace.get_tracer(__name__)


class ProviderError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderTimeout(Exception):
    pass


def recognition_timeout_seconds() -> float:
    raw = os.getenv("RECOGNITION_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


class HttpRecognitionAdapter:
    """Shared plumbing for recognizers reached over HTTP.

    Subclasses implement ``_extract_text``; transport errors, non-2xx replies
    and deadline overruns come back as a failed ``RecognitionResult`` rather
    than an exception.
    """

    name = "http"

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else recognition_timeout_seconds()
        )
        self._client = client or httpx.Client(timeout=self._timeout_seconds)

    def recognize(self, image_bytes: bytes, mime_type: str) -> RecognitionResult:
        with tracer.start_as_current_span(f"recognition.{self.name}") as span:
            span.set_attribute("recognition.provider", self.name)
            span.set_attribute("recognition.image_bytes", len(image_bytes))
            try:
                text = self._extract_text(image_bytes, mime_type)
            except ProviderTimeout as exc:
                span.set_attribute("recognition.outcome", FailureKind.TIMEOUT.value)
                return RecognitionResult.failed(
                    ProviderFailure(provider=self.name, kind=FailureKind.TIMEOUT, message=str(exc))
                )
            except ProviderError as exc:
                span.set_attribute("recognition.outcome", FailureKind.ERROR.value)
                return RecognitionResult.failed(
                    ProviderFailure(
                        provider=self.name,
                        kind=FailureKind.ERROR,
                        message=str(exc),
                        status_code=exc.status_code,
                    )
                )
            span.set_attribute("recognition.outcome", "ok")
            return RecognitionResult.success(self.name, text)

    def _extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        raise NotImplementedError

    def _post_json(self, url: str, payload: dict[str, Any]) -> Any:
        try:
            response = self._client.post(url, json=payload, timeout=self._timeout_seconds)
        except httpx.TimeoutException as exc:
            raise ProviderTimeout(
                f"{self.name} did not answer within {self._timeout_seconds:g}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"{self.name} request failed: {exc}") from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise ProviderError(
                f"{self.name} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(
                f"{self.name} returned a non-JSON body", status_code=response.status_code
            ) from exc
