from __future__ import annotations

from dgo.application.dto.responses import (
    MenuCandidateResponse,
    MenuCategoryResponse,
    MenuItemResponse,
    MenuRecognitionResponse,
    MenuResponse,
    RestaurantResponse,
)
from dgo.domain.menu.categories import group_menu_items
from dgo.domain.menu.entities import Menu, MenuItem, Restaurant
from dgo.domain.menu.extraction import MenuCandidate


def _to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=str(item.item_id),
        name=item.name,
        price=item.price,
        category=item.category,
    )


def to_menu_response(menu: Menu) -> MenuResponse:
    return MenuResponse(
        menuId=str(menu.menu_id),
        restaurantId=str(menu.restaurant_id),
        menuVersion=menu.version,
        items=[_to_menu_item_response(item) for item in menu.items],
        categories=[
            MenuCategoryResponse(
                category=category,
                items=[_to_menu_item_response(item) for item in items],
            )
            for category, items in group_menu_items(menu.items)
        ],
        createdAt=menu.created_at,
    )


def to_restaurant_response(restaurant: Restaurant, menu: Menu | None) -> RestaurantResponse:
    return RestaurantResponse(
        id=str(restaurant.restaurant_id),
        name=restaurant.name,
        createdAt=restaurant.created_at,
        menu=to_menu_response(menu) if menu is not None else None,
    )


def to_recognition_response(candidates: list[MenuCandidate]) -> MenuRecognitionResponse:
    return MenuRecognitionResponse(
        candidates=[
            MenuCandidateResponse(
                id=str(candidate.item_id),
                name=candidate.name,
                price=candidate.price,
                category=candidate.category,
            )
            for candidate in candidates
        ]
    )
