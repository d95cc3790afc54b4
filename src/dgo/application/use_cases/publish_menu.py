from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from dgo.application.dto.requests import MenuItemInput, PublishMenuRequest
from dgo.application.dto.responses import MenuResponse
from dgo.application.mappers.menu_mapper import to_menu_response
from dgo.application.ports.cache import CacheStore
from dgo.application.ports.repositories import MenuRepository, RestaurantRepository
from dgo.application.use_cases.get_menu import invalidate_menu_cache
from dgo.domain.common.ids import MenuId, MenuItemId, RestaurantId
from dgo.domain.menu.entities import Menu, MenuItem

logger = logging.getLogger(__name__)


class RestaurantNotFoundError(Exception):
    pass


class InvalidMenuItemError(Exception):
    pass


def build_menu_items(inputs: list[MenuItemInput]) -> list[MenuItem]:
    items: list[MenuItem] = []
    seen: set[str] = set()
    for item_input in inputs:
        item_id = item_input.id or f"itm_{uuid4().hex[:12]}"
        if item_id in seen:
            raise InvalidMenuItemError(f"duplicate menu item id {item_id}")
        seen.add(item_id)
        category = item_input.category.strip() if item_input.category else None
        try:
            items.append(
                MenuItem(
                    item_id=MenuItemId(item_id),
                    name=item_input.name.strip(),
                    price=item_input.price,
                    category=category or None,
                )
            )
        except ValueError as exc:
            raise InvalidMenuItemError(f"menu item {item_id}: {exc}") from exc
    return items


def new_menu(restaurant_id: RestaurantId, items: list[MenuItem], version: int) -> Menu:
    return Menu(
        menu_id=MenuId(f"men_{uuid4().hex[:12]}"),
        restaurant_id=restaurant_id,
        version=version,
        items=items,
        created_at=datetime.now(timezone.utc),
    )


class PublishMenu:
    """Turn the organizer's confirmed items into the restaurant's current menu.

    A new menu version is created every time; earlier versions stay in place
    so group orders that reference them keep their prices.
    """

    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        menu_repository: MenuRepository,
        cache: CacheStore,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._menu_repository = menu_repository
        self._cache = cache

    def execute(self, restaurant_id: RestaurantId, request_dto: PublishMenuRequest) -> MenuResponse:
        if self._restaurant_repository.get(restaurant_id) is None:
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")

        items = build_menu_items(request_dto.items)
        current = self._menu_repository.get_menu_by_restaurant_id(restaurant_id)
        version = current.version + 1 if current is not None else 1

        menu = new_menu(restaurant_id, items, version)
        self._menu_repository.add(menu)
        invalidate_menu_cache(self._cache, restaurant_id)
        logger.info(
            "menu_published",
            extra={"restaurant_id": str(restaurant_id), "menu_version": version},
        )
        return to_menu_response(menu)
