from __future__ import annotations

from sqlalchemy import Engine, delete, select, update
from sqlalchemy.orm import Session

from dgo.application.ports.repositories import GroupOrderRepository
from dgo.domain.common.ids import GroupOrderId, MenuId, RestaurantId
from dgo.domain.group_order.entities import GroupOrder, GroupOrderStatus
from dgo.infrastructure.db.models.group_order import (
    GroupOrderModel,
    SubmissionLineModel,
    SubmissionModel,
)
from dgo.infrastructure.db.session import as_utc, get_engine

_UNSYNCHRONIZED = {"synchronize_session": False}


class SqlAlchemyGroupOrderRepository(GroupOrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, group_order: GroupOrder) -> None:
        with Session(self._engine) as session:
            session.add(
                GroupOrderModel(
                    id=str(group_order.group_order_id),
                    restaurant_id=str(group_order.restaurant_id),
                    restaurant_name=group_order.restaurant_name,
                    menu_id=str(group_order.menu_id),
                    status=group_order.status.value,
                    created_by=group_order.created_by,
                    created_at=group_order.created_at,
                )
            )
            session.commit()

    def get(self, group_order_id: GroupOrderId) -> GroupOrder | None:
        statement = select(GroupOrderModel).where(GroupOrderModel.id == str(group_order_id))
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model)

    def list_all(self) -> list[GroupOrder]:
        statement = select(GroupOrderModel).order_by(
            GroupOrderModel.created_at.desc(), GroupOrderModel.id.desc()
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [self._to_domain(model) for model in models]

    def update_status(
        self,
        group_order_id: GroupOrderId,
        status: GroupOrderStatus,
    ) -> GroupOrder | None:
        statement = (
            update(GroupOrderModel)
            .where(GroupOrderModel.id == str(group_order_id))
            .values(status=status.value)
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                return None
            session.commit()
        return self.get(group_order_id)

    def delete(self, group_order_id: GroupOrderId) -> bool:
        group_order_key = str(group_order_id)
        submission_ids = select(SubmissionModel.id).where(
            SubmissionModel.group_order_id == group_order_key
        )
        with Session(self._engine) as session, session.begin():
            session.execute(
                delete(SubmissionLineModel).where(
                    SubmissionLineModel.submission_id.in_(submission_ids)
                ),
                execution_options=_UNSYNCHRONIZED,
            )
            session.execute(
                delete(SubmissionModel).where(SubmissionModel.group_order_id == group_order_key),
                execution_options=_UNSYNCHRONIZED,
            )
            result = session.execute(
                delete(GroupOrderModel).where(GroupOrderModel.id == group_order_key),
                execution_options=_UNSYNCHRONIZED,
            )
            return result.rowcount == 1

    def _to_domain(self, model: GroupOrderModel) -> GroupOrder:
        return GroupOrder(
            group_order_id=GroupOrderId(model.id),
            restaurant_id=RestaurantId(model.restaurant_id),
            restaurant_name=model.restaurant_name,
            menu_id=MenuId(model.menu_id),
            status=GroupOrderStatus(model.status),
            created_by=model.created_by,
            created_at=as_utc(model.created_at),
        )
