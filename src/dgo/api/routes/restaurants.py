from __future__ import annotations

from fastapi import APIRouter, Response, status

from dgo.application.dto.requests import CreateRestaurantRequest
from dgo.application.dto.responses import RestaurantListResponse, RestaurantResponse
from dgo.application.use_cases.restaurants import (
    CreateRestaurant,
    DeleteRestaurant,
    GetRestaurant,
    ListRestaurants,
)
from dgo.domain.common.ids import RestaurantId
from dgo.infrastructure.cache.cache_store import build_cache_store
from dgo.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from dgo.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository

router = APIRouter()


def _create_restaurant_use_case() -> CreateRestaurant:
    return CreateRestaurant(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )


def _list_restaurants_use_case() -> ListRestaurants:
    return ListRestaurants(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )


def _get_restaurant_use_case() -> GetRestaurant:
    return GetRestaurant(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )


def _delete_restaurant_use_case() -> DeleteRestaurant:
    return DeleteRestaurant(
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        cache=build_cache_store(),
    )


@router.post(
    "/v1/restaurants",
    response_model=RestaurantResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_restaurant(request: CreateRestaurantRequest) -> RestaurantResponse:
    return _create_restaurant_use_case().execute(request)


@router.get("/v1/restaurants", response_model=RestaurantListResponse)
def list_restaurants() -> RestaurantListResponse:
    return _list_restaurants_use_case().execute()


@router.get("/v1/restaurants/{restaurant_id}", response_model=RestaurantResponse)
def get_restaurant(restaurant_id: str) -> RestaurantResponse:
    return _get_restaurant_use_case().execute(RestaurantId(restaurant_id))


@router.delete("/v1/restaurants/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_restaurant(restaurant_id: str) -> Response:
    _delete_restaurant_use_case().execute(RestaurantId(restaurant_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
