"""Restaurants 유틸리티 모듈.

이 모듈은 식당 라우터에서 공통으로 사용하는 함수들을 포함하고 있습니다.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import logger
from app.exceptions import NotFoundError
from app.models.restaurants import Restaurant
from app.schemas.restaurants import RestaurantResponse
from app.services import restaurant_service
from app.utils.db import get_db

RESTAURANT_NOT_FOUND = "Restaurant not found"


async def get_restaurant_or_404(
    restaurant_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Restaurant:
    """Restaurant를 조회하고, 없으면 404 예외를 발생시킨다.

    Args:
        restaurant_id (int): 식당 ID.
        db (AsyncSession): 데이터베이스 세션.

    Returns:
        Restaurant: 조회된 식당 객체.

    Raises:
        NotFoundError: 식당 객체가 존재하지 않을 때 발생.
    """
    restaurant = await restaurant_service.get_restaurant_by_id(db, restaurant_id)
    if restaurant is None:
        logger.info("Restaurant %s not found", restaurant_id)
        raise NotFoundError(RESTAURANT_NOT_FOUND)
    return restaurant


def build_restaurant_schema(restaurant: Restaurant) -> RestaurantResponse:
    """RestaurantResponse 스키마 생성."""
    return RestaurantResponse.model_validate(restaurant)
