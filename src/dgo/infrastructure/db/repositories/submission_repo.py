from __future__ import annotations

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session, selectinload

from dgo.application.ports.repositories import (
    GroupOrderMissingError,
    GroupOrderNotAcceptingError,
    SubmissionRepository,
)
from dgo.domain.common.ids import GroupOrderId, MenuItemId, SubmissionId
from dgo.domain.group_order.entities import GroupOrderStatus
from dgo.domain.group_order.submission import LineItem, Submission
from dgo.infrastructure.db.models.group_order import (
    GroupOrderModel,
    SubmissionLineModel,
    SubmissionModel,
)
from dgo.infrastructure.db.session import as_utc, get_engine

_UNSYNCHRONIZED = {"synchronize_session": False}


class SqlAlchemySubmissionRepository(SubmissionRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add_if_open(self, submission: Submission) -> None:
        """Insert the submission only while its group order is open.

        The group order row is locked for the duration of the insert, so a
        concurrent lock either happens before (and the insert is refused) or
        waits until the submission is committed.
        """
        status_statement = (
            select(GroupOrderModel.status)
            .where(GroupOrderModel.id == str(submission.group_order_id))
            .with_for_update()
        )
        with Session(self._engine) as session, session.begin():
            status = session.execute(status_statement).scalar_one_or_none()
            if status is None:
                raise GroupOrderMissingError(
                    f"group order {submission.group_order_id} not found"
                )
            if status != GroupOrderStatus.OPEN.value:
                raise GroupOrderNotAcceptingError(
                    f"group order {submission.group_order_id} is locked "
                    "and no longer accepts submissions"
                )
            session.add(self._to_model(submission))

    def list_for_group_order(self, group_order_id: GroupOrderId) -> list[Submission]:
        statement = (
            select(SubmissionModel)
            .options(selectinload(SubmissionModel.lines))
            .where(SubmissionModel.group_order_id == str(group_order_id))
            .order_by(SubmissionModel.created_at, SubmissionModel.id)
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
            return [self._to_domain(model) for model in models]

    def delete(self, submission_id: SubmissionId) -> bool:
        with Session(self._engine) as session, session.begin():
            session.execute(
                delete(SubmissionLineModel).where(
                    SubmissionLineModel.submission_id == str(submission_id)
                ),
                execution_options=_UNSYNCHRONIZED,
            )
            result = session.execute(
                delete(SubmissionModel).where(SubmissionModel.id == str(submission_id)),
                execution_options=_UNSYNCHRONIZED,
            )
            return result.rowcount == 1

    def _to_model(self, submission: Submission) -> SubmissionModel:
        return SubmissionModel(
            id=str(submission.submission_id),
            group_order_id=str(submission.group_order_id),
            user_name=submission.user_name,
            total=submission.total,
            created_at=submission.created_at,
            lines=[
                SubmissionLineModel(
                    position=position,
                    menu_item_id=str(line.menu_item_id),
                    menu_item_name=line.menu_item_name,
                    price=line.price,
                    temperature=line.temperature,
                    sugar_level=line.sugar_level,
                    quantity=line.quantity,
                )
                for position, line in enumerate(submission.lines)
            ],
        )

    def _to_domain(self, model: SubmissionModel) -> Submission:
        return Submission(
            submission_id=SubmissionId(model.id),
            group_order_id=GroupOrderId(model.group_order_id),
            user_name=model.user_name,
            lines=[
                LineItem(
                    menu_item_id=MenuItemId(line.menu_item_id),
                    menu_item_name=line.menu_item_name,
                    price=line.price,
                    temperature=line.temperature,
                    sugar_level=line.sugar_level,
                    quantity=line.quantity,
                )
                for line in model.lines
            ],
            total=model.total,
            created_at=as_utc(model.created_at),
        )
