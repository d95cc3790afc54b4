from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from dgo.application.dto.requests import ChangeGroupOrderStatusRequest, CreateGroupOrderRequest
from dgo.application.dto.responses import (
    GroupOrderListResponse,
    GroupOrderResponse,
    OrderSummaryResponse,
)
from dgo.application.mappers.group_order_mapper import to_group_order_response, to_summary_response
from dgo.application.metrics.group_order_lifecycle import (
    record_group_order_created,
    record_transition,
)
from dgo.application.ports.repositories import (
    GroupOrderRepository,
    MenuRepository,
    RestaurantRepository,
    SubmissionRepository,
)
from dgo.application.use_cases.get_menu import MenuNotFoundError
from dgo.application.use_cases.publish_menu import RestaurantNotFoundError
from dgo.domain.common.ids import GroupOrderId, RestaurantId
from dgo.domain.group_order.entities import (
    GroupOrder,
    GroupOrderStatus,
    create_open_group_order,
)
from dgo.domain.group_order.submission import Submission
from dgo.domain.group_order.summary import summarize

logger = logging.getLogger(__name__)


class GroupOrderNotFoundError(Exception):
    pass


class InvalidGroupOrderError(Exception):
    pass


def display_order(submissions: list[Submission]) -> list[Submission]:
    return sorted(submissions, key=lambda item: (item.created_at, str(item.submission_id)))


def build_group_order_view(
    group_order: GroupOrder,
    submission_repository: SubmissionRepository,
    menu_repository: MenuRepository | None = None,
) -> GroupOrderResponse:
    submissions = display_order(
        submission_repository.list_for_group_order(group_order.group_order_id)
    )
    menu = menu_repository.get(group_order.menu_id) if menu_repository is not None else None
    return to_group_order_response(group_order, submissions, summarize(submissions), menu)


class CreateGroupOrder:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        menu_repository: MenuRepository,
        group_order_repository: GroupOrderRepository,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._menu_repository = menu_repository
        self._group_order_repository = group_order_repository

    def execute(self, request_dto: CreateGroupOrderRequest) -> GroupOrderResponse:
        restaurant_id = RestaurantId(request_dto.restaurant_id)
        restaurant = self._restaurant_repository.get(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")

        menu = self._menu_repository.get_menu_by_restaurant_id(restaurant_id)
        if menu is None:
            raise MenuNotFoundError(f"menu not found for restaurant_id={restaurant_id}")

        try:
            group_order = create_open_group_order(
                group_order_id=GroupOrderId(f"grp_{uuid4().hex[:12]}"),
                restaurant_id=restaurant_id,
                restaurant_name=restaurant.name,
                menu_id=menu.menu_id,
                created_by=request_dto.created_by,
                now=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            raise InvalidGroupOrderError(str(exc)) from exc

        self._group_order_repository.add(group_order)
        record_group_order_created(restaurant_id=str(restaurant_id))
        logger.info(
            "group_order_created",
            extra={
                "group_order_id": str(group_order.group_order_id),
                "restaurant_id": str(restaurant_id),
                "menu_id": str(menu.menu_id),
            },
        )
        return to_group_order_response(group_order, [], summarize([]), menu)


class ListGroupOrders:
    def __init__(
        self,
        group_order_repository: GroupOrderRepository,
        submission_repository: SubmissionRepository,
    ) -> None:
        self._group_order_repository = group_order_repository
        self._submission_repository = submission_repository

    def execute(self) -> GroupOrderListResponse:
        return GroupOrderListResponse(
            groupOrders=[
                build_group_order_view(group_order, self._submission_repository)
                for group_order in self._group_order_repository.list_all()
            ]
        )


class GetGroupOrder:
    def __init__(
        self,
        group_order_repository: GroupOrderRepository,
        submission_repository: SubmissionRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._group_order_repository = group_order_repository
        self._submission_repository = submission_repository
        self._menu_repository = menu_repository

    def execute(self, group_order_id: GroupOrderId) -> GroupOrderResponse:
        group_order = self._group_order_repository.get(group_order_id)
        if group_order is None:
            raise GroupOrderNotFoundError(f"group order {group_order_id} not found")
        return build_group_order_view(
            group_order,
            self._submission_repository,
            self._menu_repository,
        )


class GetGroupOrderSummary:
    def __init__(
        self,
        group_order_repository: GroupOrderRepository,
        submission_repository: SubmissionRepository,
    ) -> None:
        self._group_order_repository = group_order_repository
        self._submission_repository = submission_repository

    def execute(self, group_order_id: GroupOrderId) -> OrderSummaryResponse:
        if self._group_order_repository.get(group_order_id) is None:
            raise GroupOrderNotFoundError(f"group order {group_order_id} not found")
        submissions = display_order(
            self._submission_repository.list_for_group_order(group_order_id)
        )
        return to_summary_response(summarize(submissions))


class ChangeGroupOrderStatus:
    """Lock or reopen a group order. Both directions are always allowed."""

    def __init__(
        self,
        group_order_repository: GroupOrderRepository,
        submission_repository: SubmissionRepository,
    ) -> None:
        self._group_order_repository = group_order_repository
        self._submission_repository = submission_repository

    def execute(
        self,
        group_order_id: GroupOrderId,
        request_dto: ChangeGroupOrderStatusRequest,
    ) -> GroupOrderResponse:
        group_order = self._group_order_repository.get(group_order_id)
        if group_order is None:
            raise GroupOrderNotFoundError(f"group order {group_order_id} not found")

        target = GroupOrderStatus(request_dto.status)
        updated = group_order.transition_to(target)
        if updated.status != group_order.status:
            persisted = self._group_order_repository.update_status(group_order_id, updated.status)
            if persisted is None:
                raise GroupOrderNotFoundError(f"group order {group_order_id} not found")
            updated = persisted
            record_transition(group_order.status, updated.status)
            logger.info(
                "group_order_status_changed",
                extra={
                    "group_order_id": str(group_order_id),
                    "from_status": group_order.status.value,
                    "to_status": updated.status.value,
                },
            )
        return build_group_order_view(updated, self._submission_repository)


class DeleteGroupOrder:
    def __init__(self, group_order_repository: GroupOrderRepository) -> None:
        self._group_order_repository = group_order_repository

    def execute(self, group_order_id: GroupOrderId) -> None:
        if not self._group_order_repository.delete(group_order_id):
            raise GroupOrderNotFoundError(f"group order {group_order_id} not found")
        logger.info("group_order_deleted", extra={"group_order_id": str(group_order_id)})
