from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dgo.domain.common.ids import MenuId, MenuItemId, RestaurantId
from dgo.domain.menu.entities import Menu, MenuItem, Restaurant


def _item(item_id: str = "itm_001", name: str = "珍珠奶茶", price: int = 55) -> MenuItem:
    return MenuItem(item_id=MenuItemId(item_id), name=name, price=price)


def test_menu_item_rejects_non_positive_price() -> None:
    with pytest.raises(ValueError, match="price"):
        _item(price=0)


def test_menu_item_rejects_fractional_and_boolean_prices() -> None:
    with pytest.raises(ValueError, match="integer"):
        MenuItem(item_id=MenuItemId("itm_001"), name="紅茶", price=30.5)  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="integer"):
        MenuItem(item_id=MenuItemId("itm_001"), name="紅茶", price=True)


def test_menu_item_rejects_blank_or_overlong_name() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        _item(name="   ")
    with pytest.raises(ValueError, match="at most"):
        _item(name="x" * 256)


def test_menu_requires_unique_item_ids() -> None:
    with pytest.raises(ValueError, match="unique"):
        Menu(
            menu_id=MenuId("men_001"),
            restaurant_id=RestaurantId("rst_001"),
            version=1,
            items=[_item("itm_001"), _item("itm_001", name="綠茶")],
        )


def test_menu_rejects_version_zero() -> None:
    with pytest.raises(ValueError, match="version"):
        Menu(menu_id=MenuId("men_001"), restaurant_id=RestaurantId("rst_001"), version=0)


def test_find_item_returns_match_or_none() -> None:
    menu = Menu(
        menu_id=MenuId("men_001"),
        restaurant_id=RestaurantId("rst_001"),
        version=2,
        items=[_item("itm_001"), _item("itm_002", name="綠茶", price=30)],
    )

    found = menu.find_item("itm_002")
    assert found is not None
    assert found.name == "綠茶"
    assert menu.find_item("itm_404") is None


def test_restaurant_requires_name() -> None:
    with pytest.raises(ValueError):
        Restaurant(
            restaurant_id=RestaurantId("rst_001"),
            name=" ",
            created_at=datetime.now(timezone.utc),
        )
