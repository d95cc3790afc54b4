from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from dgo.domain.common.ids import MenuId, MenuItemId, RestaurantId

MAX_ITEM_NAME_LENGTH = 255


@dataclass(frozen=True)
class Restaurant:
    restaurant_id: RestaurantId
    name: str
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    price: int
    category: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if len(self.name) > MAX_ITEM_NAME_LENGTH:
            raise ValueError(f"name must be at most {MAX_ITEM_NAME_LENGTH} characters")
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise ValueError("price must be an integer")
        if self.price < 1:
            raise ValueError("price must be >= 1")


@dataclass(frozen=True)
class Menu:
    menu_id: MenuId
    restaurant_id: RestaurantId
    version: int
    items: list[MenuItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.version < 1:
            raise ValueError("version must be >= 1")
        item_ids = [item.item_id for item in self.items]
        if len(item_ids) != len(set(item_ids)):
            raise ValueError("menu item ids must be unique")

    def find_item(self, item_id: str) -> MenuItem | None:
        for item in self.items:
            if item.item_id == item_id:
                return item
        return None
