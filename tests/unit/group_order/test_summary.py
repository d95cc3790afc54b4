from __future__ import annotations

import itertools
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dgo.domain.common.ids import GroupOrderId, MenuItemId, SubmissionId
from dgo.domain.group_order.submission import LineItem, Submission, create_submission
from dgo.domain.group_order.summary import SummaryDetail, summarize

START = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _submission(
    index: int,
    user_name: str,
    lines: list[tuple[str, str, int, str, str, int]],
) -> Submission:
    return create_submission(
        submission_id=SubmissionId(f"sub_{index:03d}"),
        group_order_id=GroupOrderId("grp_001"),
        user_name=user_name,
        lines=[
            LineItem(
                menu_item_id=MenuItemId(item_id),
                menu_item_name=name,
                price=price,
                temperature=temperature,
                sugar_level=sugar_level,
                quantity=quantity,
            )
            for item_id, name, price, temperature, sugar_level, quantity in lines
        ],
        now=START + timedelta(minutes=index),
    )


def _alice_and_bob() -> list[Submission]:
    return [
        _submission(
            1,
            "Alice",
            [
                ("A", "珍珠奶茶", 50, "less ice", "half sugar", 2),
                ("B", "綠茶", 30, "normal ice", "no sugar", 1),
            ],
        ),
        _submission(2, "Bob", [("A", "珍珠奶茶", 50, "hot", "full sugar", 1)]),
    ]


def test_summarize_empty_list() -> None:
    summary = summarize([])

    assert summary.per_item == []
    assert summary.total_items == 0
    assert summary.total_price == 0
    assert summary.submission_count == 0


def test_summarize_merges_per_menu_item() -> None:
    summary = summarize(_alice_and_bob())

    assert [item.menu_item_id for item in summary.per_item] == ["A", "B"]
    first, second = summary.per_item
    assert first.quantity == 3
    assert first.details == [
        SummaryDetail(
            user_name="Alice", temperature="less ice", sugar_level="half sugar", quantity=2
        ),
        SummaryDetail(user_name="Bob", temperature="hot", sugar_level="full sugar", quantity=1),
    ]
    assert second.quantity == 1
    assert summary.total_items == 4
    assert summary.total_price == 180
    assert summary.submission_count == 2


def test_summarize_keeps_identical_options_as_separate_details() -> None:
    submissions = [
        _submission(1, "Alice", [("A", "珍珠奶茶", 50, "less ice", "half sugar", 1)]),
        _submission(2, "Alice", [("A", "珍珠奶茶", 50, "less ice", "half sugar", 1)]),
    ]

    summary = summarize(submissions)

    assert summary.per_item[0].quantity == 2
    assert len(summary.per_item[0].details) == 2


def test_summarize_is_deterministic() -> None:
    submissions = _alice_and_bob()

    assert summarize(submissions) == summarize(submissions)


def test_totals_do_not_depend_on_submission_order() -> None:
    submissions = _alice_and_bob() + [
        _submission(3, "Carol", [("C", "烏龍茶", 35, "normal ice", "less sugar", 3)]),
    ]
    baseline = summarize(submissions)
    baseline_quantities = {item.menu_item_id: item.quantity for item in baseline.per_item}

    for permutation in itertools.permutations(submissions):
        summary = summarize(list(permutation))
        assert summary.total_items == baseline.total_items
        assert summary.total_price == baseline.total_price
        assert {item.menu_item_id: item.quantity for item in summary.per_item} == (
            baseline_quantities
        )


def test_totals_match_sum_of_submission_totals() -> None:
    submissions = _alice_and_bob()

    summary = summarize(submissions)

    assert summary.total_price == sum(submission.total for submission in submissions)
    assert summary.total_items == sum(
        line.quantity for submission in submissions for line in submission.lines
    )


def test_milk_tea_scenario() -> None:
    submissions = [
        _submission(1, "Alice", [("m1", "Milk Tea", 50, "less ice", "half", 2)]),
        _submission(2, "Bob", [("m1", "Milk Tea", 50, "normal ice", "full", 1)]),
    ]

    summary = summarize(submissions)

    assert len(summary.per_item) == 1
    item = summary.per_item[0]
    assert (item.menu_item_name, item.price, item.quantity) == ("Milk Tea", 50, 3)
    assert [(detail.user_name, detail.quantity) for detail in item.details] == [
        ("Alice", 2),
        ("Bob", 1),
    ]
    assert summary.total_items == 3
    assert summary.total_price == 150
    assert summary.submission_count == 2
