from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from dgo.application.dto.requests import CreateRestaurantRequest
from dgo.application.dto.responses import RestaurantListResponse, RestaurantResponse
from dgo.application.mappers.menu_mapper import to_restaurant_response
from dgo.application.ports.cache import CacheStore
from dgo.application.ports.repositories import MenuRepository, RestaurantRepository
from dgo.application.use_cases.get_menu import invalidate_menu_cache
from dgo.application.use_cases.publish_menu import (
    RestaurantNotFoundError,
    build_menu_items,
    new_menu,
)
from dgo.domain.common.ids import RestaurantId
from dgo.domain.menu.entities import Restaurant

logger = logging.getLogger(__name__)


class InvalidRestaurantError(Exception):
    pass


class CreateRestaurant:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._menu_repository = menu_repository

    def execute(self, request_dto: CreateRestaurantRequest) -> RestaurantResponse:
        items = build_menu_items(request_dto.items)
        try:
            restaurant = Restaurant(
                restaurant_id=RestaurantId(f"rst_{uuid4().hex[:12]}"),
                name=request_dto.name.strip(),
                created_at=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            raise InvalidRestaurantError(str(exc)) from exc

        self._restaurant_repository.add(restaurant)
        menu = None
        if items:
            menu = new_menu(restaurant.restaurant_id, items, version=1)
            self._menu_repository.add(menu)

        logger.info(
            "restaurant_created",
            extra={"restaurant_id": str(restaurant.restaurant_id), "items": len(items)},
        )
        return to_restaurant_response(restaurant, menu)


class ListRestaurants:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._menu_repository = menu_repository

    def execute(self) -> RestaurantListResponse:
        restaurants = self._restaurant_repository.list_all()
        return RestaurantListResponse(
            restaurants=[
                to_restaurant_response(
                    restaurant,
                    self._menu_repository.get_menu_by_restaurant_id(restaurant.restaurant_id),
                )
                for restaurant in restaurants
            ]
        )


class GetRestaurant:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._menu_repository = menu_repository

    def execute(self, restaurant_id: RestaurantId) -> RestaurantResponse:
        restaurant = self._restaurant_repository.get(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")
        menu = self._menu_repository.get_menu_by_restaurant_id(restaurant_id)
        return to_restaurant_response(restaurant, menu)


class DeleteRestaurant:
    """Remove a restaurant with its menus, group orders and submissions."""

    def __init__(self, restaurant_repository: RestaurantRepository, cache: CacheStore) -> None:
        self._restaurant_repository = restaurant_repository
        self._cache = cache

    def execute(self, restaurant_id: RestaurantId) -> None:
        if not self._restaurant_repository.delete(restaurant_id):
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")
        invalidate_menu_cache(self._cache, restaurant_id)
        logger.info("restaurant_deleted", extra={"restaurant_id": str(restaurant_id)})
