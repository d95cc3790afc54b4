from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from dgo.domain.common.ids import GroupOrderId, MenuId, RestaurantId


class GroupOrderStatus(str, Enum):
    OPEN = "open"
    LOCKED = "locked"


@dataclass(frozen=True)
class GroupOrder:
    group_order_id: GroupOrderId
    restaurant_id: RestaurantId
    restaurant_name: str
    menu_id: MenuId
    status: GroupOrderStatus
    created_by: str
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.created_by.strip():
            raise ValueError("created_by must be non-empty")

    @property
    def is_open(self) -> bool:
        return self.status == GroupOrderStatus.OPEN

    def lock(self) -> GroupOrder:
        if self.status == GroupOrderStatus.LOCKED:
            return self
        return replace(self, status=GroupOrderStatus.LOCKED)

    def unlock(self) -> GroupOrder:
        if self.status == GroupOrderStatus.OPEN:
            return self
        return replace(self, status=GroupOrderStatus.OPEN)

    def transition_to(self, status: GroupOrderStatus) -> GroupOrder:
        if status == GroupOrderStatus.LOCKED:
            return self.lock()
        return self.unlock()

    def ensure_open(self) -> None:
        if self.status != GroupOrderStatus.OPEN:
            raise GroupOrderLockedError(
                f"group order {self.group_order_id} is locked and no longer accepts submissions"
            )


def create_open_group_order(
    group_order_id: GroupOrderId,
    restaurant_id: RestaurantId,
    restaurant_name: str,
    menu_id: MenuId,
    created_by: str,
    now: datetime,
) -> GroupOrder:
    return GroupOrder(
        group_order_id=group_order_id,
        restaurant_id=restaurant_id,
        restaurant_name=restaurant_name,
        menu_id=menu_id,
        status=GroupOrderStatus.OPEN,
        created_by=created_by.strip(),
        created_at=now,
    )


class GroupOrderLockedError(Exception):
    pass
