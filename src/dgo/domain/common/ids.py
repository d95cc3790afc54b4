from __future__ import annotations

from typing import NewType

RestaurantId = NewType("RestaurantId", str)
MenuId = NewType("MenuId", str)
MenuItemId = NewType("MenuItemId", str)
GroupOrderId = NewType("GroupOrderId", str)
SubmissionId = NewType("SubmissionId", str)
