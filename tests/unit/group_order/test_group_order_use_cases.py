from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dgo.application.dto.requests import (
    ChangeGroupOrderStatusRequest,
    CreateGroupOrderRequest,
    SubmissionLineRequest,
    SubmitOrderRequest,
)
from dgo.application.ports.repositories import GroupOrderMissingError, GroupOrderNotAcceptingError
from dgo.application.use_cases.get_menu import MenuNotFoundError
from dgo.application.use_cases.group_order_lifecycle import (
    ChangeGroupOrderStatus,
    CreateGroupOrder,
    DeleteGroupOrder,
    GetGroupOrder,
    GetGroupOrderSummary,
    GroupOrderNotFoundError,
    ListGroupOrders,
)
from dgo.application.use_cases.publish_menu import RestaurantNotFoundError
from dgo.application.use_cases.submit_order import (
    DeleteSubmission,
    GroupOrderNotOpenError,
    MenuItemNotFoundError,
    SubmissionNotFoundError,
    SubmitOrder,
)
from dgo.domain.common.ids import GroupOrderId, MenuId, MenuItemId, RestaurantId, SubmissionId
from dgo.domain.group_order.entities import GroupOrder, GroupOrderStatus
from dgo.domain.group_order.submission import Submission
from dgo.domain.menu.entities import Menu, MenuItem, Restaurant

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class FakeRestaurantRepository:
    def __init__(self, restaurants: list[Restaurant]) -> None:
        self._restaurants = {str(item.restaurant_id): item for item in restaurants}

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None:
        return self._restaurants.get(str(restaurant_id))


class FakeMenuRepository:
    def __init__(self, menus: list[Menu]) -> None:
        self.menus = list(menus)

    def get(self, menu_id: MenuId) -> Menu | None:
        return next((menu for menu in self.menus if menu.menu_id == menu_id), None)

    def get_menu_by_restaurant_id(self, restaurant_id: RestaurantId) -> Menu | None:
        candidates = [menu for menu in self.menus if menu.restaurant_id == restaurant_id]
        return max(candidates, key=lambda menu: menu.version, default=None)


class FakeGroupOrderRepository:
    def __init__(self) -> None:
        self.group_orders: dict[str, GroupOrder] = {}

    def add(self, group_order: GroupOrder) -> None:
        self.group_orders[str(group_order.group_order_id)] = group_order

    def get(self, group_order_id: GroupOrderId) -> GroupOrder | None:
        return self.group_orders.get(str(group_order_id))

    def list_all(self) -> list[GroupOrder]:
        return sorted(self.group_orders.values(), key=lambda item: item.created_at, reverse=True)

    def update_status(
        self,
        group_order_id: GroupOrderId,
        status: GroupOrderStatus,
    ) -> GroupOrder | None:
        current = self.group_orders.get(str(group_order_id))
        if current is None:
            return None
        updated = replace(current, status=status)
        self.group_orders[str(group_order_id)] = updated
        return updated

    def delete(self, group_order_id: GroupOrderId) -> bool:
        return self.group_orders.pop(str(group_order_id), None) is not None


class FakeSubmissionRepository:
    """Mirrors the SQL guard: inserts consult the group order store's current status."""

    def __init__(self, group_orders: FakeGroupOrderRepository) -> None:
        self._group_orders = group_orders
        self.submissions: list[Submission] = []

    def add_if_open(self, submission: Submission) -> None:
        group_order = self._group_orders.get(submission.group_order_id)
        if group_order is None:
            raise GroupOrderMissingError(f"group order {submission.group_order_id} not found")
        if not group_order.is_open:
            raise GroupOrderNotAcceptingError(f"group order {submission.group_order_id} is locked")
        self.submissions.append(submission)

    def list_for_group_order(self, group_order_id: GroupOrderId) -> list[Submission]:
        return [item for item in self.submissions if item.group_order_id == group_order_id]

    def delete(self, submission_id: SubmissionId) -> bool:
        before = len(self.submissions)
        self.submissions = [
            item for item in self.submissions if item.submission_id != submission_id
        ]
        return len(self.submissions) != before

    def delete_for_group_order(self, group_order_id: GroupOrderId) -> None:
        self.submissions = [
            item for item in self.submissions if item.group_order_id != group_order_id
        ]


class CascadingGroupOrderRepository(FakeGroupOrderRepository):
    def __init__(self) -> None:
        super().__init__()
        self.submission_repository: FakeSubmissionRepository | None = None

    def delete(self, group_order_id: GroupOrderId) -> bool:
        if self.submission_repository is not None:
            self.submission_repository.delete_for_group_order(group_order_id)
        return super().delete(group_order_id)


class World:
    def __init__(self) -> None:
        self.restaurant = Restaurant(
            restaurant_id=RestaurantId("rst_001"),
            name="Tea House",
            created_at=NOW,
        )
        self.menu = Menu(
            menu_id=MenuId("men_001"),
            restaurant_id=RestaurantId("rst_001"),
            version=1,
            items=[
                MenuItem(item_id=MenuItemId("A"), name="珍珠奶茶", price=50),
                MenuItem(item_id=MenuItemId("B"), name="綠茶", price=30),
            ],
            created_at=NOW,
        )
        self.restaurants = FakeRestaurantRepository([self.restaurant])
        self.menus = FakeMenuRepository([self.menu])
        self.group_orders = CascadingGroupOrderRepository()
        self.submissions = FakeSubmissionRepository(self.group_orders)
        self.group_orders.submission_repository = self.submissions

    def create_group_order(self) -> str:
        response = CreateGroupOrder(
            restaurant_repository=self.restaurants,
            menu_repository=self.menus,
            group_order_repository=self.group_orders,
        ).execute(CreateGroupOrderRequest(restaurant_id="rst_001", created_by="Organizer"))
        return response.id

    def submit(self, group_order_id: str, user_name: str, *lines: tuple[str, int]):
        return SubmitOrder(
            group_order_repository=self.group_orders,
            menu_repository=self.menus,
            submission_repository=self.submissions,
        ).execute(
            GroupOrderId(group_order_id),
            SubmitOrderRequest(
                user_name=user_name,
                items=[
                    SubmissionLineRequest(
                        menu_item_id=item_id,
                        temperature="less ice",
                        sugar_level="half sugar",
                        quantity=quantity,
                    )
                    for item_id, quantity in lines
                ],
            ),
        )

    def change_status(self, group_order_id: str, status: str):
        return ChangeGroupOrderStatus(
            group_order_repository=self.group_orders,
            submission_repository=self.submissions,
        ).execute(GroupOrderId(group_order_id), ChangeGroupOrderStatusRequest(status=status))


def test_create_group_order_snapshots_current_menu() -> None:
    world = World()

    response = CreateGroupOrder(
        restaurant_repository=world.restaurants,
        menu_repository=world.menus,
        group_order_repository=world.group_orders,
    ).execute(CreateGroupOrderRequest(restaurant_id="rst_001", created_by="Organizer"))

    assert response.id.startswith("grp_")
    assert response.status == "open"
    assert response.menuId == "men_001"
    assert response.restaurantName == "Tea House"
    assert response.summary.submissionCount == 0
    assert response.menu is not None


def test_create_group_order_requires_restaurant_and_menu() -> None:
    world = World()

    with pytest.raises(RestaurantNotFoundError):
        CreateGroupOrder(
            restaurant_repository=world.restaurants,
            menu_repository=world.menus,
            group_order_repository=world.group_orders,
        ).execute(CreateGroupOrderRequest(restaurant_id="rst_404", created_by="Organizer"))

    world.menus.menus.clear()
    with pytest.raises(MenuNotFoundError):
        CreateGroupOrder(
            restaurant_repository=world.restaurants,
            menu_repository=world.menus,
            group_order_repository=world.group_orders,
        ).execute(CreateGroupOrderRequest(restaurant_id="rst_001", created_by="Organizer"))


def test_submissions_aggregate_into_summary() -> None:
    world = World()
    group_order_id = world.create_group_order()

    world.submit(group_order_id, "Alice", ("A", 2), ("B", 1))
    response = world.submit(group_order_id, "Bob", ("A", 1))

    assert response.summary.totalItems == 4
    assert response.summary.totalPrice == 180
    assert response.summary.submissionCount == 2
    first = response.summary.perItem[0]
    assert (first.menuItemId, first.menuItemName, first.quantity) == ("A", "珍珠奶茶", 3)
    assert [detail.userName for detail in first.details] == ["Alice", "Bob"]
    assert [submission.userName for submission in response.submissions] == ["Alice", "Bob"]


def test_submission_captures_name_and_price_from_menu_snapshot() -> None:
    world = World()
    group_order_id = world.create_group_order()

    response = world.submit(group_order_id, "Alice", ("B", 3))

    line = response.submissions[0].items[0]
    assert (line.menuItemName, line.price) == ("綠茶", 30)
    assert response.submissions[0].total == 90


def test_locked_group_order_rejects_submission_and_summary_is_unchanged() -> None:
    world = World()
    group_order_id = world.create_group_order()
    world.submit(group_order_id, "Alice", ("A", 1))
    world.change_status(group_order_id, "locked")

    with pytest.raises(GroupOrderNotOpenError) as exc_info:
        world.submit(group_order_id, "Bob", ("A", 1))

    assert exc_info.value.details == {"reason": "order is locked"}
    summary = GetGroupOrderSummary(
        group_order_repository=world.group_orders,
        submission_repository=world.submissions,
    ).execute(GroupOrderId(group_order_id))
    assert summary.submissionCount == 1
    assert summary.totalItems == 1


def test_reopened_group_order_accepts_submissions_again() -> None:
    world = World()
    group_order_id = world.create_group_order()

    world.change_status(group_order_id, "locked")
    reopened = world.change_status(group_order_id, "open")
    response = world.submit(group_order_id, "Carol", ("A", 1))

    assert reopened.status == "open"
    assert response.summary.submissionCount == 1


def test_lock_is_idempotent() -> None:
    world = World()
    group_order_id = world.create_group_order()

    world.change_status(group_order_id, "locked")
    response = world.change_status(group_order_id, "locked")

    assert response.status == "locked"


def test_lock_between_check_and_insert_is_refused() -> None:
    world = World()
    group_order_id = world.create_group_order()

    class LockingMenuRepository(FakeMenuRepository):
        def get(self, menu_id: MenuId) -> Menu | None:
            # Lock lands after SubmitOrder saw the order as open.
            world.group_orders.update_status(GroupOrderId(group_order_id), GroupOrderStatus.LOCKED)
            return super().get(menu_id)

    with pytest.raises(GroupOrderNotOpenError):
        SubmitOrder(
            group_order_repository=world.group_orders,
            menu_repository=LockingMenuRepository([world.menu]),
            submission_repository=world.submissions,
        ).execute(
            GroupOrderId(group_order_id),
            SubmitOrderRequest(user_name="Dave", items=[SubmissionLineRequest(menu_item_id="A")]),
        )

    assert world.submissions.submissions == []


def test_submission_with_unknown_menu_item_is_rejected() -> None:
    world = World()
    group_order_id = world.create_group_order()

    with pytest.raises(MenuItemNotFoundError):
        world.submit(group_order_id, "Alice", ("Z", 1))

    assert world.submissions.submissions == []


def test_submit_to_missing_group_order_raises_not_found() -> None:
    with pytest.raises(GroupOrderNotFoundError):
        World().submit("grp_404", "Alice", ("A", 1))


def test_get_group_order_includes_menu_submissions_and_summary() -> None:
    world = World()
    group_order_id = world.create_group_order()
    world.submit(group_order_id, "Alice", ("A", 1))

    response = GetGroupOrder(
        group_order_repository=world.group_orders,
        submission_repository=world.submissions,
        menu_repository=world.menus,
    ).execute(GroupOrderId(group_order_id))

    assert response.menu is not None
    assert response.menu.menuId == "men_001"
    assert len(response.submissions) == 1
    assert response.summary.totalPrice == 50


def test_list_group_orders_includes_submissions() -> None:
    world = World()
    group_order_id = world.create_group_order()
    world.submit(group_order_id, "Alice", ("A", 1))

    response = ListGroupOrders(
        group_order_repository=world.group_orders,
        submission_repository=world.submissions,
    ).execute()

    assert [item.id for item in response.groupOrders] == [group_order_id]
    assert len(response.groupOrders[0].submissions) == 1


def test_delete_submission_updates_summary() -> None:
    world = World()
    group_order_id = world.create_group_order()
    world.submit(group_order_id, "Alice", ("A", 1))
    response = world.submit(group_order_id, "Bob", ("B", 2))
    bob_submission_id = next(item.id for item in response.submissions if item.userName == "Bob")

    DeleteSubmission(submission_repository=world.submissions).execute(
        SubmissionId(bob_submission_id)
    )

    summary = GetGroupOrderSummary(
        group_order_repository=world.group_orders,
        submission_repository=world.submissions,
    ).execute(GroupOrderId(group_order_id))
    assert summary.submissionCount == 1
    assert summary.totalPrice == 50

    with pytest.raises(SubmissionNotFoundError):
        DeleteSubmission(submission_repository=world.submissions).execute(
            SubmissionId(bob_submission_id)
        )


def test_delete_group_order_removes_its_submissions() -> None:
    world = World()
    group_order_id = world.create_group_order()
    for user_name in ("Alice", "Bob", "Carol"):
        world.submit(group_order_id, user_name, ("A", 1))

    DeleteGroupOrder(group_order_repository=world.group_orders).execute(
        GroupOrderId(group_order_id)
    )

    assert world.submissions.list_for_group_order(GroupOrderId(group_order_id)) == []
    with pytest.raises(GroupOrderNotFoundError):
        GetGroupOrder(
            group_order_repository=world.group_orders,
            submission_repository=world.submissions,
            menu_repository=world.menus,
        ).execute(GroupOrderId(group_order_id))
