"""Merge per-person submissions into a per-drink tally.

``summarize`` is a pure function of its input: the same submission list always
yields an equal summary, and per-item quantities and totals do not depend on
the order of submissions. ``per_item`` follows first appearance so a polling
client sees a stable layout as new submissions arrive.

Name and price for a drink are taken from the first line seen for that menu
item. Lines are denormalized from a single menu snapshot, so they agree.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from dgo.domain.common.ids import MenuItemId
from dgo.domain.group_order.submission import Submission


@dataclass(frozen=True)
class SummaryDetail:
    user_name: str
    temperature: str
    sugar_level: str
    quantity: int


@dataclass(frozen=True)
class ItemSummary:
    menu_item_id: MenuItemId
    menu_item_name: str
    price: int
    quantity: int
    details: list[SummaryDetail] = field(default_factory=list)

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


@dataclass(frozen=True)
class OrderSummary:
    per_item: list[ItemSummary]
    total_items: int
    total_price: int
    submission_count: int


@dataclass
class _Accumulator:
    menu_item_name: str
    price: int
    quantity: int = 0
    details: list[SummaryDetail] = field(default_factory=list)


def summarize(submissions: Iterable[Submission]) -> OrderSummary:
    accumulators: dict[MenuItemId, _Accumulator] = {}
    submission_count = 0

    for submission in submissions:
        submission_count += 1
        for line in submission.lines:
            accumulator = accumulators.get(line.menu_item_id)
            if accumulator is None:
                accumulator = _Accumulator(menu_item_name=line.menu_item_name, price=line.price)
                accumulators[line.menu_item_id] = accumulator
            accumulator.quantity += line.quantity
            accumulator.details.append(
                SummaryDetail(
                    user_name=submission.user_name,
                    temperature=line.temperature,
                    sugar_level=line.sugar_level,
                    quantity=line.quantity,
                )
            )

    per_item = [
        ItemSummary(
            menu_item_id=menu_item_id,
            menu_item_name=accumulator.menu_item_name,
            price=accumulator.price,
            quantity=accumulator.quantity,
            details=list(accumulator.details),
        )
        for menu_item_id, accumulator in accumulators.items()
    ]
    return OrderSummary(
        per_item=per_item,
        total_items=sum(item.quantity for item in per_item),
        total_price=sum(item.subtotal for item in per_item),
        submission_count=submission_count,
    )
