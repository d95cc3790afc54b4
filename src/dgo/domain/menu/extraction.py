"""Turn free-form recognizer output into validated menu item suggestions.

Recognizers are asked for a JSON array of ``{"name", "price", "category"}``
objects but routinely wrap it in prose or code fences, truncate it, or invent
entries. Only the first balanced array in the text is considered, it is parsed
all-or-nothing, and each element is then validated on its own.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from uuid import uuid4

from dgo.domain.common.ids import MenuItemId
from dgo.domain.menu.categories import classify

MIN_NAME_LENGTH_EXCLUSIVE = 1
MAX_NAME_LENGTH_EXCLUSIVE = 50
MIN_PRICE_EXCLUSIVE = 0
MAX_PRICE_EXCLUSIVE = 500


class CandidateStatus(str, Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class ParsedCandidate:
    status: CandidateStatus
    name: str | None = None
    price: int | None = None
    category: str | None = None
    reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.status == CandidateStatus.ACCEPTED


@dataclass(frozen=True)
class MenuCandidate:
    item_id: MenuItemId
    name: str
    price: int
    category: str


def _new_item_id() -> MenuItemId:
    return MenuItemId(f"itm_{uuid4().hex[:12]}")


def find_first_array(text: str) -> str | None:
    start = text.find("[")
    while start != -1:
        end = _matching_bracket(text, start)
        if end is not None:
            return text[start : end + 1]
        start = text.find("[", start + 1)
    return None


def _matching_bracket(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index
    return None


def parse_candidate(raw: object) -> ParsedCandidate:
    if not isinstance(raw, dict):
        return ParsedCandidate(status=CandidateStatus.REJECTED, reason="not an object")

    name = raw.get("name")
    if not isinstance(name, str):
        return ParsedCandidate(status=CandidateStatus.REJECTED, reason="name is not a string")
    name = name.strip()
    if not MIN_NAME_LENGTH_EXCLUSIVE < len(name) < MAX_NAME_LENGTH_EXCLUSIVE:
        return ParsedCandidate(
            status=CandidateStatus.REJECTED,
            name=name,
            reason=f"name length {len(name)} out of bounds",
        )

    price = raw.get("price")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return ParsedCandidate(
            status=CandidateStatus.REJECTED, name=name, reason="price is not a number"
        )
    if not MIN_PRICE_EXCLUSIVE < price < MAX_PRICE_EXCLUSIVE:
        return ParsedCandidate(
            status=CandidateStatus.REJECTED, name=name, reason=f"price {price} out of bounds"
        )

    category = raw.get("category")
    if not isinstance(category, str) or not category.strip():
        category = None

    return ParsedCandidate(
        status=CandidateStatus.ACCEPTED,
        name=name,
        price=max(1, int(price)),
        category=category.strip() if category else None,
    )


def parse_candidates(text: str) -> list[ParsedCandidate]:
    array_text = find_first_array(text)
    if array_text is None:
        return []
    try:
        payload = json.loads(array_text)
    except (ValueError, RecursionError):
        # Pathologically nested arrays exhaust the decoder stack.
        return []
    if not isinstance(payload, list):
        return []
    return [parse_candidate(raw) for raw in payload]


def promote(
    parsed: list[ParsedCandidate],
    id_factory: Callable[[], MenuItemId] = _new_item_id,
) -> list[MenuCandidate]:
    candidates: list[MenuCandidate] = []
    for candidate in parsed:
        if not candidate.accepted or candidate.name is None or candidate.price is None:
            continue
        candidates.append(
            MenuCandidate(
                item_id=id_factory(),
                name=candidate.name,
                price=candidate.price,
                category=candidate.category or classify(candidate.name),
            )
        )
    return candidates


def normalize(
    text: str,
    id_factory: Callable[[], MenuItemId] = _new_item_id,
) -> list[MenuCandidate]:
    return promote(parse_candidates(text), id_factory=id_factory)
