from __future__ import annotations

import os

from fastapi import APIRouter, Header, Response

from dgo.application.dto.requests import PublishMenuRequest
from dgo.application.dto.responses import MenuResponse
from dgo.application.use_cases.get_menu import GetMenu, GetMenuById
from dgo.application.use_cases.publish_menu import PublishMenu
from dgo.domain.common.ids import MenuId, RestaurantId
from dgo.infrastructure.cache.cache_store import build_cache_store
from dgo.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from dgo.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository

router = APIRouter()

DEFAULT_MENU_CACHE_TTL_SECONDS = 300


def _menu_cache_ttl_seconds() -> int:
    raw = os.getenv("MENU_CACHE_TTL_SECONDS")
    if not raw:
        return DEFAULT_MENU_CACHE_TTL_SECONDS
    try:
        ttl_seconds = int(raw)
    except ValueError:
        return DEFAULT_MENU_CACHE_TTL_SECONDS
    # redis rejects a non-positive expiry.
    return ttl_seconds if ttl_seconds > 0 else DEFAULT_MENU_CACHE_TTL_SECONDS


def _get_menu_use_case() -> GetMenu:
    return GetMenu(
        repository=SqlAlchemyMenuRepository(),
        cache=build_cache_store(),
        ttl_seconds=_menu_cache_ttl_seconds(),
    )


def _get_menu_by_id_use_case() -> GetMenuById:
    return GetMenuById(repository=SqlAlchemyMenuRepository())


def _publish_menu_use_case() -> PublishMenu:
    return PublishMenu(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
        cache=build_cache_store(),
    )


def _menu_etag(menu: MenuResponse) -> str:
    return f'"menu-v{menu.menuVersion}"'


@router.get("/v1/restaurants/{restaurant_id}/menu", response_model=MenuResponse)
def get_menu(
    restaurant_id: str,
    response: Response,
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
) -> MenuResponse | Response:
    payload = _get_menu_use_case().execute(RestaurantId(restaurant_id))

    etag = _menu_etag(payload)
    if if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag})

    response.headers["ETag"] = etag
    return payload


@router.put("/v1/restaurants/{restaurant_id}/menu", response_model=MenuResponse)
def publish_menu(
    restaurant_id: str,
    request: PublishMenuRequest,
    response: Response,
) -> MenuResponse:
    payload = _publish_menu_use_case().execute(RestaurantId(restaurant_id), request)
    response.headers["ETag"] = _menu_etag(payload)
    return payload


@router.get("/v1/menus/{menu_id}", response_model=MenuResponse)
def get_menu_by_id(menu_id: str) -> MenuResponse:
    return _get_menu_by_id_use_case().execute(MenuId(menu_id))
