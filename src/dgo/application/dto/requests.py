from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class RecognizeMenuRequest(CamelBaseModel):
    image: str = Field(min_length=1)
    mime_type: str = "image/jpeg"


class MenuItemInput(CamelBaseModel):
    id: str | None = Field(default=None, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    price: int = Field(gt=0)
    category: str | None = Field(default=None, max_length=100)


class CreateRestaurantRequest(CamelBaseModel):
    name: str = Field(min_length=1, max_length=255)
    items: list[MenuItemInput] = Field(default_factory=list)


class PublishMenuRequest(CamelBaseModel):
    items: list[MenuItemInput] = Field(min_length=1)


class CreateGroupOrderRequest(CamelBaseModel):
    restaurant_id: str
    created_by: str = Field(min_length=1, max_length=100)


class ChangeGroupOrderStatusRequest(CamelBaseModel):
    status: Literal["open", "locked"]


class SubmissionLineRequest(CamelBaseModel):
    menu_item_id: str
    temperature: str = Field(default="normal ice", min_length=1, max_length=50)
    sugar_level: str = Field(default="normal sugar", min_length=1, max_length=50)
    quantity: int = Field(default=1, ge=1)


class SubmitOrderRequest(CamelBaseModel):
    user_name: str = Field(min_length=1, max_length=100)
    items: list[SubmissionLineRequest] = Field(min_length=1)
