from __future__ import annotations

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session

from dgo.application.ports.repositories import RestaurantRepository
from dgo.domain.common.ids import RestaurantId
from dgo.domain.menu.entities import Restaurant
from dgo.infrastructure.db.models.catalog import MenuItemModel, MenuModel, RestaurantModel
from dgo.infrastructure.db.models.group_order import (
    GroupOrderModel,
    SubmissionLineModel,
    SubmissionModel,
)
from dgo.infrastructure.db.session import as_utc, get_engine

_UNSYNCHRONIZED = {"synchronize_session": False}


class SqlAlchemyRestaurantRepository(RestaurantRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, restaurant: Restaurant) -> None:
        with Session(self._engine) as session:
            session.add(
                RestaurantModel(
                    id=str(restaurant.restaurant_id),
                    name=restaurant.name,
                    created_at=restaurant.created_at,
                )
            )
            session.commit()

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None:
        statement = select(RestaurantModel).where(RestaurantModel.id == str(restaurant_id))
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model)

    def list_all(self) -> list[Restaurant]:
        statement = select(RestaurantModel).order_by(
            RestaurantModel.created_at.desc(), RestaurantModel.id.desc()
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [self._to_domain(model) for model in models]

    def delete(self, restaurant_id: RestaurantId) -> bool:
        # Children are removed explicitly so the cascade does not depend on the
        # backend enforcing ON DELETE CASCADE.
        restaurant_key = str(restaurant_id)
        group_order_ids = select(GroupOrderModel.id).where(
            GroupOrderModel.restaurant_id == restaurant_key
        )
        submission_ids = select(SubmissionModel.id).where(
            SubmissionModel.group_order_id.in_(group_order_ids)
        )
        menu_ids = select(MenuModel.id).where(MenuModel.restaurant_id == restaurant_key)

        statements = [
            delete(SubmissionLineModel).where(
                SubmissionLineModel.submission_id.in_(submission_ids)
            ),
            delete(SubmissionModel).where(SubmissionModel.group_order_id.in_(group_order_ids)),
            delete(GroupOrderModel).where(GroupOrderModel.restaurant_id == restaurant_key),
            delete(MenuItemModel).where(MenuItemModel.menu_id.in_(menu_ids)),
            delete(MenuModel).where(MenuModel.restaurant_id == restaurant_key),
        ]
        with Session(self._engine) as session, session.begin():
            for statement in statements:
                session.execute(statement, execution_options=_UNSYNCHRONIZED)
            result = session.execute(
                delete(RestaurantModel).where(RestaurantModel.id == restaurant_key),
                execution_options=_UNSYNCHRONIZED,
            )
            return result.rowcount == 1

    def _to_domain(self, model: RestaurantModel) -> Restaurant:
        return Restaurant(
            restaurant_id=RestaurantId(model.id),
            name=model.name,
            created_at=as_utc(model.created_at),
        )
