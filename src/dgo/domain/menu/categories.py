from __future__ import annotations

from collections.abc import Iterable

from dgo.domain.menu.entities import MenuItem

OTHER_CATEGORY = "other"

# First matching rule wins, so the more specific drink families come first.
_CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("奶茶", "珍珠", "波霸", "milk tea", "pearl", "boba", "bubble"), "milk-tea-class"),
    (("紅茶", "阿薩姆", "錫蘭", "black tea", "assam", "ceylon"), "black-tea-class"),
    (("綠茶", "茉莉", "香片", "green tea", "jasmine"), "green-tea-class"),
    (("烏龍", "青茶", "高山", "oolong"), "oolong-class"),
    (("鮮奶", "拿鐵", "牛奶", "latte", "fresh milk"), "fresh-milk-class"),
    (
        (
            "多多",
            "果汁",
            "檸檬",
            "冬瓜",
            "仙草",
            "愛玉",
            "yakult",
            "juice",
            "lemon",
            "winter melon",
        ),
        "specialty-class",
    ),
)

DEFAULT_CATEGORY_ORDER: tuple[str, ...] = tuple(category for _, category in _CATEGORY_RULES) + (
    OTHER_CATEGORY,
)


def classify(name: str) -> str:
    lowered = name.lower()
    for keywords, category in _CATEGORY_RULES:
        if any(keyword in lowered for keyword in keywords):
            return category
    return OTHER_CATEGORY


def category_of(item: MenuItem) -> str:
    return item.category or classify(item.name)


def group_menu_items(items: Iterable[MenuItem]) -> list[tuple[str, list[MenuItem]]]:
    """Group items for display.

    Known categories follow DEFAULT_CATEGORY_ORDER; categories supplied by the
    organizer that are not in that order are appended in first-seen order.
    """
    groups: dict[str, list[MenuItem]] = {}
    for item in items:
        groups.setdefault(category_of(item), []).append(item)

    ordered = [
        (category, groups[category]) for category in DEFAULT_CATEGORY_ORDER if category in groups
    ]
    ordered.extend(
        (category, grouped)
        for category, grouped in groups.items()
        if category not in DEFAULT_CATEGORY_ORDER
    )
    return ordered
