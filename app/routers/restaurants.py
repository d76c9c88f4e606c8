"""식당 관리 API 모듈

이 모듈은 FastAPI를 기반으로 식당 관련 CRUD API를 제공합니다.

API 목록:
    - `GET /restaurants`: 모든 식당을 조회합니다.
    - `GET /restaurants/popular`: 평점이 높은 식당을 `limit`개까지 조회합니다.
    - `GET /restaurants/{restaurant_id}`: 특정 식당 정보를 조회합니다.
    - `POST /restaurants`: 새로운 식당을 등록합니다.
    - `PATCH /restaurants/{restaurant_id}`: 식당 정보를 수정합니다.
    - `DELETE /restaurants/{restaurant_id}`: 특정 식당을 삭제합니다.

성공 응답은 `{"data": ...}`, 실패 응답은 `{"error": {"message": ...}}` 형태입니다.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Config, logger
from app.models.restaurants import Restaurant
from app.schemas.base import DataResponse
from app.schemas.restaurants import (
    RestaurantCreate,
    RestaurantResponse,
    RestaurantUpdate,
)
from app.services import restaurant_service
from app.utils.db import get_db
from app.utils.restaurants import build_restaurant_schema, get_restaurant_or_404

router = APIRouter(prefix="/restaurants", tags=["Restaurant"])


@router.get("", response_model=DataResponse[list[RestaurantResponse]])
async def get_restaurants(db: Annotated[AsyncSession, Depends(get_db)]):
    """모든 식당을 조회합니다.

    Returns:
        DataResponse[list[RestaurantResponse]]: 식당 목록.
    """
    restaurants = await restaurant_service.list_restaurants(db)
    logger.info("Listing %s restaurants", len(restaurants))
    return DataResponse[list[RestaurantResponse]](
        data=[build_restaurant_schema(restaurant) for restaurant in restaurants]
    )


@router.get("/popular", response_model=DataResponse[list[RestaurantResponse]])
async def get_popular_restaurants(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: int = Query(
        Config.POPULAR_DEFAULT_LIMIT, ge=1, description="최대 조회 개수"
    ),
):
    """평점이 높은 순으로 인기 식당을 조회합니다.

    Args:
        db (AsyncSession): 비동기 DB 세션 객체입니다.
        limit (int): 최대 조회 개수 (기본값 5).

    Returns:
        DataResponse[list[RestaurantResponse]]: 인기 식당 목록.
    """
    restaurants = await restaurant_service.get_popular_restaurants(db, limit)
    logger.debug("Popular restaurants (limit=%s): %s", limit, [r.id for r in restaurants])
    return DataResponse[list[RestaurantResponse]](
        data=[build_restaurant_schema(restaurant) for restaurant in restaurants]
    )


@router.get("/{restaurant_id}", response_model=DataResponse[RestaurantResponse])
async def get_restaurant(
    restaurant: Annotated[Restaurant, Depends(get_restaurant_or_404)],
):
    """특정 식당 정보를 조회합니다.

    Raises:
        NotFoundError(404): 해당 식당을 찾을 수 없는 경우 발생합니다.
    """
    return DataResponse[RestaurantResponse](data=build_restaurant_schema(restaurant))


@router.post(
    "",
    status_code=Config.HttpStatus.CREATED,
    response_model=DataResponse[RestaurantResponse],
)
async def create_restaurant(
    request: RestaurantCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """새로운 식당을 등록합니다.

    Args:
        request (RestaurantCreate): 등록할 식당 정보입니다.
        db (AsyncSession): 비동기 DB 세션 객체입니다.

    Returns:
        DataResponse[RestaurantResponse]: 등록된 식당 정보.
    """
    logger.info("Create restaurant request received: %s", request.name)
    created = await restaurant_service.create_restaurant(db, request.model_dump())
    return DataResponse[RestaurantResponse](data=build_restaurant_schema(created))


@router.patch("/{restaurant_id}", response_model=DataResponse[RestaurantResponse])
async def update_restaurant(
    request: RestaurantUpdate,
    restaurant: Annotated[Restaurant, Depends(get_restaurant_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """식당 정보를 수정합니다.

    요청 바디에 포함된 필드만 반영합니다.

    Raises:
        NotFoundError(404): 해당 식당을 찾을 수 없는 경우 발생합니다.
    """
    logger.info("Update request received for restaurant_id: %s", restaurant.id)
    updated = await restaurant_service.update_restaurant(
        db, restaurant, request.model_dump(exclude_unset=True)
    )
    return DataResponse[RestaurantResponse](data=build_restaurant_schema(updated))


@router.delete("/{restaurant_id}", status_code=Config.HttpStatus.NO_CONTENT)
async def delete_restaurant(
    restaurant: Annotated[Restaurant, Depends(get_restaurant_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """특정 식당을 삭제합니다.

    Raises:
        NotFoundError(404): 해당 식당을 찾을 수 없는 경우 발생합니다.
    """
    logger.info("Delete request received for restaurant_id: %s", restaurant.id)
    await restaurant_service.delete_restaurant_by_id(db, restaurant.id)
    return Response(status_code=Config.HttpStatus.NO_CONTENT)
