from __future__ import annotations

from dgo.application.dto.responses import (
    GroupOrderResponse,
    ItemSummaryResponse,
    LineItemResponse,
    OrderSummaryResponse,
    SubmissionResponse,
    SummaryDetailResponse,
)
from dgo.application.mappers.menu_mapper import to_menu_response
from dgo.domain.group_order.entities import GroupOrder
from dgo.domain.group_order.submission import Submission
from dgo.domain.group_order.summary import OrderSummary
from dgo.domain.menu.entities import Menu


def to_submission_response(submission: Submission) -> SubmissionResponse:
    return SubmissionResponse(
        id=str(submission.submission_id),
        groupOrderId=str(submission.group_order_id),
        userName=submission.user_name,
        items=[
            LineItemResponse(
                menuItemId=str(line.menu_item_id),
                menuItemName=line.menu_item_name,
                price=line.price,
                temperature=line.temperature,
                sugarLevel=line.sugar_level,
                quantity=line.quantity,
            )
            for line in submission.lines
        ],
        total=submission.total,
        createdAt=submission.created_at,
    )


def to_summary_response(summary: OrderSummary) -> OrderSummaryResponse:
    return OrderSummaryResponse(
        perItem=[
            ItemSummaryResponse(
                menuItemId=str(item.menu_item_id),
                menuItemName=item.menu_item_name,
                price=item.price,
                quantity=item.quantity,
                details=[
                    SummaryDetailResponse(
                        userName=detail.user_name,
                        temperature=detail.temperature,
                        sugarLevel=detail.sugar_level,
                        quantity=detail.quantity,
                    )
                    for detail in item.details
                ],
            )
            for item in summary.per_item
        ],
        totalItems=summary.total_items,
        totalPrice=summary.total_price,
        submissionCount=summary.submission_count,
    )


def to_group_order_response(
    group_order: GroupOrder,
    submissions: list[Submission],
    summary: OrderSummary,
    menu: Menu | None = None,
) -> GroupOrderResponse:
    return GroupOrderResponse(
        id=str(group_order.group_order_id),
        restaurantId=str(group_order.restaurant_id),
        restaurantName=group_order.restaurant_name,
        menuId=str(group_order.menu_id),
        status=group_order.status.value,
        createdBy=group_order.created_by,
        createdAt=group_order.created_at,
        submissions=[to_submission_response(submission) for submission in submissions],
        summary=to_summary_response(summary),
        menu=to_menu_response(menu) if menu is not None else None,
    )
