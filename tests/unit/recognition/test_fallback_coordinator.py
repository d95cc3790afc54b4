from __future__ import annotations

import base64
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dgo.application.dto.requests import RecognizeMenuRequest
from dgo.application.ports.recognition import FailureKind, ProviderFailure, RecognitionResult
from dgo.application.use_cases.recognize_menu import (
    FallbackCoordinator,
    InvalidImageError,
    RecognizeMenu,
)

VALID_TEXT = '[{"name": "珍珠奶茶", "price": 55}, {"name": "綠茶", "price": 30}]'


class FakeAdapter:
    def __init__(self, name: str, result: RecognitionResult) -> None:
        self.name = name
        self._result = result
        self.calls: list[tuple[bytes, str]] = []

    def recognize(self, image_bytes: bytes, mime_type: str) -> RecognitionResult:
        self.calls.append((image_bytes, mime_type))
        return self._result


def _ok(name: str, text: str) -> FakeAdapter:
    return FakeAdapter(name, RecognitionResult.success(name, text))


def _failing(name: str, kind: FailureKind = FailureKind.ERROR) -> FakeAdapter:
    failure = ProviderFailure(provider=name, kind=kind, message="boom", status_code=503)
    return FakeAdapter(name, RecognitionResult.failed(failure))


def test_first_successful_provider_wins() -> None:
    primary = _ok("primary", VALID_TEXT)
    secondary = _ok("secondary", VALID_TEXT)

    candidates = FallbackCoordinator([primary, secondary]).recognize(b"img", "image/png")

    assert [candidate.name for candidate in candidates] == ["珍珠奶茶", "綠茶"]
    assert primary.calls == [(b"img", "image/png")]
    assert secondary.calls == []


def test_failed_provider_falls_back_to_next() -> None:
    primary = _failing("primary", FailureKind.TIMEOUT)
    secondary = _ok("secondary", VALID_TEXT)

    candidates = FallbackCoordinator([primary, secondary]).recognize(b"img", "image/jpeg")

    assert len(candidates) == 2
    assert len(primary.calls) == 1
    assert len(secondary.calls) == 1


def test_empty_normalized_output_falls_back_to_next() -> None:
    primary = _ok("primary", "I could not find any drinks.")
    secondary = _ok("secondary", VALID_TEXT)

    candidates = FallbackCoordinator([primary, secondary]).recognize(b"img", "image/jpeg")

    assert len(candidates) == 2
    assert len(secondary.calls) == 1


def test_deeply_nested_output_falls_back_to_next() -> None:
    primary = _ok("primary", "[" * 100_000 + "]" * 100_000)
    secondary = _ok("secondary", VALID_TEXT)

    candidates = FallbackCoordinator([primary, secondary]).recognize(b"img", "image/png")

    assert [candidate.name for candidate in candidates] == ["珍珠奶茶", "綠茶"]
    assert len(secondary.calls) == 1


def test_all_providers_failing_returns_empty_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    coordinator = FallbackCoordinator([_failing("primary"), _ok("secondary", "[]")])

    with caplog.at_level(logging.WARNING):
        candidates = coordinator.recognize(b"img", "image/jpeg")

    assert candidates == []
    assert "recognition_exhausted" in caplog.messages


def test_no_providers_returns_empty() -> None:
    assert FallbackCoordinator([]).recognize(b"img", "image/jpeg") == []


def test_recognize_menu_decodes_data_url() -> None:
    adapter = _ok("primary", VALID_TEXT)
    encoded = base64.b64encode(b"\x89PNG").decode("ascii")
    request = RecognizeMenuRequest(image=f"data:image/png;base64,{encoded}", mimeType="image/png")

    response = RecognizeMenu(FallbackCoordinator([adapter])).execute(request)

    assert adapter.calls == [(b"\x89PNG", "image/png")]
    assert [candidate.name for candidate in response.candidates] == ["珍珠奶茶", "綠茶"]
    assert all(candidate.id.startswith("itm_") for candidate in response.candidates)
    assert response.candidates[0].category == "milk-tea-class"


def test_recognize_menu_rejects_invalid_base64() -> None:
    request = RecognizeMenuRequest(image="not base64!!")

    with pytest.raises(InvalidImageError):
        RecognizeMenu(FallbackCoordinator([])).execute(request)
