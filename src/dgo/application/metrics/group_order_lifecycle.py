from __future__ import annotations

from prometheus_client import Counter, Histogram

from dgo.domain.group_order.entities import GroupOrderStatus

GROUP_ORDERS_CREATED_TOTAL = Counter(
    "dgo_group_orders_created_total",
    "Total number of group orders opened.",
    ["restaurant_id"],
)

GROUP_ORDER_TRANSITION_TOTAL = Counter(
    "dgo_group_order_transition_total",
    "Total number of group order status transitions.",
    ["from", "to"],
)

SUBMISSIONS_TOTAL = Counter(
    "dgo_submissions_total",
    "Total number of submission attempts by outcome.",
    ["outcome"],
)

SUBMISSION_QUANTITY = Histogram(
    "dgo_submission_quantity",
    "Number of drinks in an accepted submission.",
    buckets=(1, 2, 3, 5, 8, 13, 21),
)

RECOGNITION_ATTEMPTS_TOTAL = Counter(
    "dgo_recognition_attempts_total",
    "Total number of menu recognition attempts by provider and outcome.",
    ["provider", "outcome"],
)

RECOGNITION_DURATION_SECONDS = Histogram(
    "dgo_recognition_duration_seconds",
    "Time spent in a single recognition provider call.",
    ["provider"],
)

RECOGNITION_CANDIDATES = Histogram(
    "dgo_recognition_candidates",
    "Number of menu item suggestions returned to the organizer.",
    buckets=(0, 1, 5, 10, 20, 40, 80),
)


def record_group_order_created(restaurant_id: str) -> None:
    GROUP_ORDERS_CREATED_TOTAL.labels(restaurant_id=restaurant_id).inc()


def record_transition(from_status: GroupOrderStatus, to_status: GroupOrderStatus) -> None:
    GROUP_ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_submission_accepted(quantity: int) -> None:
    SUBMISSIONS_TOTAL.labels(outcome="accepted").inc()
    SUBMISSION_QUANTITY.observe(quantity)


def record_submission_rejected(reason: str) -> None:
    SUBMISSIONS_TOTAL.labels(outcome=reason).inc()


def record_recognition_attempt(provider: str, outcome: str, duration_seconds: float) -> None:
    RECOGNITION_ATTEMPTS_TOTAL.labels(provider=provider, outcome=outcome).inc()
    RECOGNITION_DURATION_SECONDS.labels(provider=provider).observe(max(duration_seconds, 0.0))


def record_candidates_suggested(count: int) -> None:
    RECOGNITION_CANDIDATES.observe(count)
