from __future__ import annotations

from fastapi import APIRouter

from dgo.application.dto.requests import RecognizeMenuRequest
from dgo.application.dto.responses import MenuRecognitionResponse
from dgo.application.use_cases.recognize_menu import FallbackCoordinator, RecognizeMenu
from dgo.infrastructure.recognition.registry import build_default_adapters

router = APIRouter()


def _recognize_menu_use_case() -> RecognizeMenu:
    return RecognizeMenu(coordinator=FallbackCoordinator(build_default_adapters()))


@router.post("/v1/menu-recognitions", response_model=MenuRecognitionResponse)
def recognize_menu(request: RecognizeMenuRequest) -> MenuRecognitionResponse:
    return _recognize_menu_use_case().execute(request)
