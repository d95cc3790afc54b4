from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from dgo.domain.common.ids import GroupOrderId, MenuItemId, SubmissionId


@dataclass(frozen=True)
class LineItem:
    menu_item_id: MenuItemId
    menu_item_name: str
    price: int
    temperature: str
    sugar_level: str
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        if self.price < 1:
            raise ValueError("price must be >= 1")

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


@dataclass(frozen=True)
class Submission:
    submission_id: SubmissionId
    group_order_id: GroupOrderId
    user_name: str
    lines: list[LineItem]
    total: int
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.user_name.strip():
            raise ValueError("user_name must be non-empty")
        if not self.lines:
            raise ValueError("submission must contain at least one line")
        expected_total = sum(line.subtotal for line in self.lines)
        if self.total != expected_total:
            raise ValueError("submission total must equal sum of line subtotals")


def create_submission(
    submission_id: SubmissionId,
    group_order_id: GroupOrderId,
    user_name: str,
    lines: list[LineItem],
    now: datetime,
) -> Submission:
    if not lines:
        raise ValueError("submission must contain at least one line")

    return Submission(
        submission_id=submission_id,
        group_order_id=group_order_id,
        user_name=user_name.strip(),
        lines=lines,
        total=sum(line.subtotal for line in lines),
        created_at=now,
    )
