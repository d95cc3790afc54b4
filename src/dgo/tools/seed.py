"""Load a demo drink shop with a small menu.

Safe to run repeatedly: an existing demo restaurant is left untouched.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import inspect

from dgo.domain.common.ids import MenuId, MenuItemId, RestaurantId
from dgo.domain.menu.entities import Menu, MenuItem, Restaurant
from dgo.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from dgo.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository
from dgo.infrastructure.db.session import get_engine

DEMO_RESTAURANT_ID = RestaurantId("rst_demo00000001")
DEMO_MENU_ID = MenuId("men_demo00000001")

DEMO_ITEMS = (
    ("itm_demo00000001", "珍珠奶茶", 55, "milk-tea-class"),
    ("itm_demo00000002", "阿薩姆紅茶", 30, "black-tea-class"),
    ("itm_demo00000003", "茉莉綠茶", 30, "green-tea-class"),
    ("itm_demo00000004", "凍頂烏龍茶", 35, "oolong-class"),
    ("itm_demo00000005", "紅茶拿鐵", 60, "fresh-milk-class"),
    ("itm_demo00000006", "多多綠茶", 45, "specialty-class"),
)


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    required_tables = {"restaurants", "menus", "menu_items"}
    if not required_tables.issubset(set(inspect(engine).get_table_names())):
        print("no schema yet")
        return

    restaurants = SqlAlchemyRestaurantRepository(engine=engine)
    if restaurants.get(DEMO_RESTAURANT_ID) is not None:
        print("seed already present")
        return

    now = datetime.now(timezone.utc)
    restaurants.add(
        Restaurant(restaurant_id=DEMO_RESTAURANT_ID, name="Demo Tea House", created_at=now)
    )
    SqlAlchemyMenuRepository(engine=engine).add(
        Menu(
            menu_id=DEMO_MENU_ID,
            restaurant_id=DEMO_RESTAURANT_ID,
            version=1,
            items=[
                MenuItem(
                    item_id=MenuItemId(item_id), name=name, price=price, category=category
                )
                for item_id, name, price, category in DEMO_ITEMS
            ],
            created_at=now,
        )
    )
    print("seed complete")


if __name__ == "__main__":
    main()
