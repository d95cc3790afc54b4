from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from dgo.application.dto.requests import SubmitOrderRequest
from dgo.application.dto.responses import GroupOrderResponse
from dgo.application.metrics.group_order_lifecycle import (
    record_submission_accepted,
    record_submission_rejected,
)
from dgo.application.ports.repositories import (
    GroupOrderMissingError,
    GroupOrderNotAcceptingError,
    GroupOrderRepository,
    MenuRepository,
    SubmissionRepository,
)
from dgo.application.use_cases.get_menu import MenuNotFoundError
from dgo.application.use_cases.group_order_lifecycle import (
    GroupOrderNotFoundError,
    build_group_order_view,
)
from dgo.domain.common.ids import GroupOrderId, SubmissionId
from dgo.domain.group_order.entities import GroupOrderLockedError
from dgo.domain.group_order.submission import LineItem, create_submission

logger = logging.getLogger(__name__)

GROUP_ORDER_LOCKED_REASON = "order is locked"


class GroupOrderNotOpenError(Exception):
    def __init__(self, message: str, reason: str = GROUP_ORDER_LOCKED_REASON) -> None:
        super().__init__(message)
        self.reason = reason
        self.details = {"reason": reason}


class MenuItemNotFoundError(Exception):
    pass


class InvalidSubmissionError(Exception):
    pass


class SubmissionNotFoundError(Exception):
    pass


class SubmitOrder:
    def __init__(
        self,
        group_order_repository: GroupOrderRepository,
        menu_repository: MenuRepository,
        submission_repository: SubmissionRepository,
    ) -> None:
        self._group_order_repository = group_order_repository
        self._menu_repository = menu_repository
        self._submission_repository = submission_repository

    def execute(
        self,
        group_order_id: GroupOrderId,
        request_dto: SubmitOrderRequest,
    ) -> GroupOrderResponse:
        group_order = self._group_order_repository.get(group_order_id)
        if group_order is None:
            raise GroupOrderNotFoundError(f"group order {group_order_id} not found")
        try:
            group_order.ensure_open()
        except GroupOrderLockedError as exc:
            record_submission_rejected("locked")
            raise GroupOrderNotOpenError(str(exc)) from exc

        menu = self._menu_repository.get(group_order.menu_id)
        if menu is None:
            raise MenuNotFoundError(f"menu {group_order.menu_id} not found")

        lines: list[LineItem] = []
        for request_line in request_dto.items:
            menu_item = menu.find_item(request_line.menu_item_id)
            if menu_item is None:
                raise MenuItemNotFoundError(
                    f"menu item {request_line.menu_item_id} is not on menu {menu.menu_id}"
                )
            try:
                lines.append(
                    LineItem(
                        menu_item_id=menu_item.item_id,
                        menu_item_name=menu_item.name,
                        price=menu_item.price,
                        temperature=request_line.temperature,
                        sugar_level=request_line.sugar_level,
                        quantity=request_line.quantity,
                    )
                )
            except ValueError as exc:
                raise InvalidSubmissionError(str(exc)) from exc

        try:
            submission = create_submission(
                submission_id=SubmissionId(f"sub_{uuid4().hex[:12]}"),
                group_order_id=group_order_id,
                user_name=request_dto.user_name,
                lines=lines,
                now=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            raise InvalidSubmissionError(str(exc)) from exc

        try:
            self._submission_repository.add_if_open(submission)
        except GroupOrderNotAcceptingError as exc:
            record_submission_rejected("locked")
            raise GroupOrderNotOpenError(str(exc)) from exc
        except GroupOrderMissingError as exc:
            raise GroupOrderNotFoundError(str(exc)) from exc

        record_submission_accepted(sum(line.quantity for line in submission.lines))
        logger.info(
            "submission_accepted",
            extra={
                "group_order_id": str(group_order_id),
                "submission_id": str(submission.submission_id),
                "lines": len(submission.lines),
            },
        )
        return build_group_order_view(group_order, self._submission_repository)


class DeleteSubmission:
    def __init__(self, submission_repository: SubmissionRepository) -> None:
        self._submission_repository = submission_repository

    def execute(self, submission_id: SubmissionId) -> None:
        if not self._submission_repository.delete(submission_id):
            raise SubmissionNotFoundError(f"submission {submission_id} not found")
        logger.info("submission_deleted", extra={"submission_id": str(submission_id)})
