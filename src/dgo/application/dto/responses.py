from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class MenuCandidateResponse(BaseModel):
    id: str
    name: str
    price: int
    category: str


class MenuRecognitionResponse(BaseModel):
    candidates: list[MenuCandidateResponse] = Field(default_factory=list)


class MenuItemResponse(BaseModel):
    id: str
    name: str
    price: int
    category: str | None = None


class MenuCategoryResponse(BaseModel):
    category: str
    items: list[MenuItemResponse] = Field(default_factory=list)


class MenuResponse(BaseModel):
    menuId: str
    restaurantId: str
    menuVersion: int
    items: list[MenuItemResponse] = Field(default_factory=list)
    categories: list[MenuCategoryResponse] = Field(default_factory=list)
    createdAt: datetime


class RestaurantResponse(BaseModel):
    id: str
    name: str
    createdAt: datetime
    menu: MenuResponse | None = None


class RestaurantListResponse(BaseModel):
    restaurants: list[RestaurantResponse] = Field(default_factory=list)


class LineItemResponse(BaseModel):
    menuItemId: str
    menuItemName: str
    price: int
    temperature: str
    sugarLevel: str
    quantity: int


class SubmissionResponse(BaseModel):
    id: str
    groupOrderId: str
    userName: str
    items: list[LineItemResponse] = Field(default_factory=list)
    total: int
    createdAt: datetime


class SummaryDetailResponse(BaseModel):
    userName: str
    temperature: str
    sugarLevel: str
    quantity: int


class ItemSummaryResponse(BaseModel):
    menuItemId: str
    menuItemName: str
    price: int
    quantity: int
    details: list[SummaryDetailResponse] = Field(default_factory=list)


class OrderSummaryResponse(BaseModel):
    perItem: list[ItemSummaryResponse] = Field(default_factory=list)
    totalItems: int
    totalPrice: int
    submissionCount: int


class GroupOrderResponse(BaseModel):
    id: str
    restaurantId: str
    restaurantName: str
    menuId: str
    status: str
    createdBy: str
    createdAt: datetime
    submissions: list[SubmissionResponse] = Field(default_factory=list)
    summary: OrderSummaryResponse
    menu: MenuResponse | None = None


class GroupOrderListResponse(BaseModel):
    groupOrders: list[GroupOrderResponse] = Field(default_factory=list)
