from __future__ import annotations

import base64
import binascii
import logging
import time
from collections.abc import Callable, Sequence

from dgo.application.dto.requests import RecognizeMenuRequest
from dgo.application.dto.responses import MenuRecognitionResponse
from dgo.application.mappers.menu_mapper import to_recognition_response
from dgo.application.metrics.group_order_lifecycle import (
    record_candidates_suggested,
    record_recognition_attempt,
)
from dgo.application.ports.recognition import RecognitionAdapter
from dgo.domain.menu.extraction import MenuCandidate, parse_candidates, promote

logger = logging.getLogger(__name__)


class InvalidImageError(Exception):
    pass


class FallbackCoordinator:
    """Try recognition providers in order until one yields usable suggestions.

    Provider failures and unparseable output are logged and skipped. When no
    provider produces a suggestion the result is an empty list, which callers
    treat as "enter the menu by hand".
    """

    def __init__(
        self,
        adapters: Sequence[RecognitionAdapter],
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._adapters = list(adapters)
        self._clock = clock

    def recognize(self, image_bytes: bytes, mime_type: str) -> list[MenuCandidate]:
        for adapter in self._adapters:
            started = self._clock()
            result = adapter.recognize(image_bytes, mime_type)
            duration = self._clock() - started

            if result.failure is not None:
                record_recognition_attempt(adapter.name, result.failure.kind.value, duration)
                logger.warning(
                    "recognition_provider_failed",
                    extra={
                        "provider": adapter.name,
                        "failure_kind": result.failure.kind.value,
                        "status_code": result.failure.status_code,
                        "error": result.failure.message,
                    },
                )
                continue

            parsed = parse_candidates(result.text or "")
            rejected = [candidate for candidate in parsed if not candidate.accepted]
            for candidate in rejected:
                logger.debug(
                    "recognition_candidate_rejected",
                    extra={
                        "provider": adapter.name,
                        "candidate_name": candidate.name,
                        "reason": candidate.reason,
                    },
                )

            candidates = promote(parsed)
            if not candidates:
                record_recognition_attempt(adapter.name, "empty", duration)
                logger.warning(
                    "recognition_provider_empty",
                    extra={"provider": adapter.name, "parsed": len(parsed)},
                )
                continue

            record_recognition_attempt(adapter.name, "ok", duration)
            logger.info(
                "recognition_succeeded",
                extra={
                    "provider": adapter.name,
                    "candidates": len(candidates),
                    "rejected": len(rejected),
                },
            )
            return candidates

        logger.warning("recognition_exhausted", extra={"providers": len(self._adapters)})
        return []


class RecognizeMenu:
    def __init__(self, coordinator: FallbackCoordinator) -> None:
        self._coordinator = coordinator

    def execute(self, request_dto: RecognizeMenuRequest) -> MenuRecognitionResponse:
        image_bytes = _decode_image(request_dto.image)
        candidates = self._coordinator.recognize(image_bytes, request_dto.mime_type)
        record_candidates_suggested(len(candidates))
        return to_recognition_response(candidates)


def _decode_image(encoded: str) -> bytes:
    # Browsers hand over data URLs; only the payload after the comma is base64.
    if encoded.startswith("data:") and "," in encoded:
        encoded = encoded.split(",", 1)[1]
    try:
        image_bytes = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageError("image must be base64-encoded") from exc
    if not image_bytes:
        raise InvalidImageError("image must not be empty")
    return image_bytes
