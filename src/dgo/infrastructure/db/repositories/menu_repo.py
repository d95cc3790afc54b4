from __future__ import annotations

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session, selectinload

from dgo.application.ports.repositories import MenuRepository
from dgo.domain.common.ids import MenuId, MenuItemId, RestaurantId
from dgo.domain.menu.entities import Menu, MenuItem
from dgo.infrastructure.db.models.catalog import MenuItemModel, MenuModel
from dgo.infrastructure.db.session import as_utc, get_engine


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, menu: Menu) -> None:
        model = MenuModel(
            id=str(menu.menu_id),
            restaurant_id=str(menu.restaurant_id),
            version=menu.version,
            created_at=menu.created_at,
            items=[
                MenuItemModel(
                    id=str(item.item_id),
                    position=position,
                    name=item.name,
                    price=item.price,
                    category=item.category,
                )
                for position, item in enumerate(menu.items)
            ],
        )
        with Session(self._engine) as session:
            session.add(model)
            session.commit()

    def get(self, menu_id: MenuId) -> Menu | None:
        statement = (
            select(MenuModel)
            .options(selectinload(MenuModel.items))
            .where(MenuModel.id == str(menu_id))
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def get_menu_by_restaurant_id(self, restaurant_id: RestaurantId) -> Menu | None:
        statement = (
            select(MenuModel)
            .options(selectinload(MenuModel.items))
            .where(MenuModel.restaurant_id == str(restaurant_id))
            .order_by(MenuModel.version.desc())
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def _to_domain(self, model: MenuModel) -> Menu:
        return Menu(
            menu_id=MenuId(model.id),
            restaurant_id=RestaurantId(model.restaurant_id),
            version=model.version,
            items=[
                MenuItem(
                    item_id=MenuItemId(item.id),
                    name=item.name,
                    price=item.price,
                    category=item.category,
                )
                for item in model.items
            ],
            created_at=as_utc(model.created_at),
        )
