from __future__ import annotations

from typing import Protocol

from dgo.domain.common.ids import GroupOrderId, MenuId, RestaurantId, SubmissionId
from dgo.domain.group_order.entities import GroupOrder, GroupOrderStatus
from dgo.domain.group_order.submission import Submission
from dgo.domain.menu.entities import Menu, Restaurant


class RestaurantRepository(Protocol):
    def add(self, restaurant: Restaurant) -> None: ...

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None: ...

    def list_all(self) -> list[Restaurant]: ...

    def delete(self, restaurant_id: RestaurantId) -> bool: ...


class MenuRepository(Protocol):
    def add(self, menu: Menu) -> None: ...

    def get(self, menu_id: MenuId) -> Menu | None: ...

    def get_menu_by_restaurant_id(self, restaurant_id: RestaurantId) -> Menu | None: ...


class GroupOrderRepository(Protocol):
    def add(self, group_order: GroupOrder) -> None: ...

    def get(self, group_order_id: GroupOrderId) -> GroupOrder | None: ...

    def list_all(self) -> list[GroupOrder]: ...

    def update_status(
        self,
        group_order_id: GroupOrderId,
        status: GroupOrderStatus,
    ) -> GroupOrder | None: ...

    def delete(self, group_order_id: GroupOrderId) -> bool: ...


class SubmissionRepository(Protocol):
    def add_if_open(self, submission: Submission) -> None: ...

    def list_for_group_order(self, group_order_id: GroupOrderId) -> list[Submission]: ...

    def delete(self, submission_id: SubmissionId) -> bool: ...


class GroupOrderMissingError(Exception):
    pass


class GroupOrderNotAcceptingError(Exception):
    pass
