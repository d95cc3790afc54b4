from __future__ import annotations

from fastapi import APIRouter, Response, status

from dgo.application.dto.requests import (
    ChangeGroupOrderStatusRequest,
    CreateGroupOrderRequest,
    SubmitOrderRequest,
)
from dgo.application.dto.responses import (
    GroupOrderListResponse,
    GroupOrderResponse,
    OrderSummaryResponse,
)
from dgo.application.use_cases.group_order_lifecycle import (
    ChangeGroupOrderStatus,
    CreateGroupOrder,
    DeleteGroupOrder,
    GetGroupOrder,
    GetGroupOrderSummary,
    ListGroupOrders,
)
from dgo.application.use_cases.submit_order import DeleteSubmission, SubmitOrder
from dgo.domain.common.ids import GroupOrderId, SubmissionId
from dgo.infrastructure.db.repositories.group_order_repo import SqlAlchemyGroupOrderRepository
from dgo.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from dgo.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository
from dgo.infrastructure.db.repositories.submission_repo import SqlAlchemySubmissionRepository

router = APIRouter()


def _create_group_order_use_case() -> CreateGroupOrder:
    return CreateGroupOrder(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
        group_order_repository=SqlAlchemyGroupOrderRepository(),
    )


def _list_group_orders_use_case() -> ListGroupOrders:
    return ListGroupOrders(
        group_order_repository=SqlAlchemyGroupOrderRepository(),
        submission_repository=SqlAlchemySubmissionRepository(),
    )


def _get_group_order_use_case() -> GetGroupOrder:
    return GetGroupOrder(
        group_order_repository=SqlAlchemyGroupOrderRepository(),
        submission_repository=SqlAlchemySubmissionRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )


def _group_order_summary_use_case() -> GetGroupOrderSummary:
    return GetGroupOrderSummary(
        group_order_repository=SqlAlchemyGroupOrderRepository(),
        submission_repository=SqlAlchemySubmissionRepository(),
    )


def _change_status_use_case() -> ChangeGroupOrderStatus:
    return ChangeGroupOrderStatus(
        group_order_repository=SqlAlchemyGroupOrderRepository(),
        submission_repository=SqlAlchemySubmissionRepository(),
    )


def _delete_group_order_use_case() -> DeleteGroupOrder:
    return DeleteGroupOrder(group_order_repository=SqlAlchemyGroupOrderRepository())


def _submit_order_use_case() -> SubmitOrder:
    return SubmitOrder(
        group_order_repository=SqlAlchemyGroupOrderRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
        submission_repository=SqlAlchemySubmissionRepository(),
    )


def _delete_submission_use_case() -> DeleteSubmission:
    return DeleteSubmission(submission_repository=SqlAlchemySubmissionRepository())


@router.post(
    "/v1/group-orders",
    response_model=GroupOrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_group_order(request: CreateGroupOrderRequest) -> GroupOrderResponse:
    return _create_group_order_use_case().execute(request)


@router.get("/v1/group-orders", response_model=GroupOrderListResponse)
def list_group_orders() -> GroupOrderListResponse:
    return _list_group_orders_use_case().execute()


@router.get("/v1/group-orders/{group_order_id}", response_model=GroupOrderResponse)
def get_group_order(group_order_id: str) -> GroupOrderResponse:
    return _get_group_order_use_case().execute(GroupOrderId(group_order_id))


@router.get("/v1/group-orders/{group_order_id}/summary", response_model=OrderSummaryResponse)
def get_group_order_summary(group_order_id: str) -> OrderSummaryResponse:
    return _group_order_summary_use_case().execute(GroupOrderId(group_order_id))


@router.patch("/v1/group-orders/{group_order_id}/status", response_model=GroupOrderResponse)
def change_group_order_status(
    group_order_id: str,
    request: ChangeGroupOrderStatusRequest,
) -> GroupOrderResponse:
    return _change_status_use_case().execute(GroupOrderId(group_order_id), request)


@router.delete("/v1/group-orders/{group_order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_group_order(group_order_id: str) -> Response:
    _delete_group_order_use_case().execute(GroupOrderId(group_order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/v1/group-orders/{group_order_id}/submissions",
    response_model=GroupOrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_order(group_order_id: str, request: SubmitOrderRequest) -> GroupOrderResponse:
    return _submit_order_use_case().execute(GroupOrderId(group_order_id), request)


@router.delete("/v1/submissions/{submission_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_submission(submission_id: str) -> Response:
    _delete_submission_use_case().execute(SubmissionId(submission_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
