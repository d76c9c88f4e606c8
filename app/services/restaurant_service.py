"""식당(Restaurant) 저장소 로직.

라우터는 이 모듈의 함수로만 식당 데이터를 읽고 씁니다.
존재하지 않는 식당은 `None`(또는 `False`)으로 알려주며, 404 변환은 호출하는 쪽의 몫입니다.
"""

from typing import Any, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.config import logger
from app.models.restaurants import Restaurant
from app.schemas.restaurants import RESTAURANT_FIELDS

# NULL을 허용하지 않는 컬럼은 수정 요청의 None 값을 무시합니다.
_NON_NULLABLE_FIELDS = ("name", "recommended_menu")


async def _commit(db: AsyncSession, action: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Restaurant %s 처리 중 DB 오류 발생", action)
        raise


async def list_restaurants(db: AsyncSession) -> Sequence[Restaurant]:
    """모든 식당을 ID 순으로 조회합니다."""
    result = await db.execute(select(Restaurant).order_by(Restaurant.id))
    return result.scalars().all()


async def get_restaurant_by_id(
    db: AsyncSession, restaurant_id: int
) -> Optional[Restaurant]:
    """ID로 식당을 조회합니다. 없으면 None을 반환합니다."""
    return await db.get(Restaurant, restaurant_id)


async def get_popular_restaurants(db: AsyncSession, limit: int) -> Sequence[Restaurant]:
    """평점이 높은 순으로 최대 `limit`개의 식당을 조회합니다.

    평점이 없는 식당은 뒤로 보내고, 평점이 같으면 ID 순으로 정렬합니다.

    Args:
        db (AsyncSession): 비동기 DB 세션.
        limit (int): 최대 개수.

    Returns:
        Sequence[Restaurant]: 인기 식당 목록.
    """
    result = await db.execute(
        select(Restaurant)
        .order_by(
            Restaurant.rating.is_(None),
            Restaurant.rating.desc(),
            Restaurant.id,
        )
        .limit(limit)
    )
    return result.scalars().all()


async def create_restaurant(db: AsyncSession, payload: dict[str, Any]) -> Restaurant:
    """식당을 생성합니다.

    허용된 필드(RESTAURANT_FIELDS)만 사용하며, 값은 변환하지 않고 그대로 저장합니다.

    Args:
        db (AsyncSession): 비동기 DB 세션.
        payload (dict[str, Any]): snake_case 키를 가진 식당 정보.

    Returns:
        Restaurant: 생성된 식당 객체.
    """
    values = {key: payload[key] for key in RESTAURANT_FIELDS if key in payload}
    if values.get("recommended_menu") is None:
        values["recommended_menu"] = []

    restaurant = Restaurant(**values)
    db.add(restaurant)
    await _commit(db, "create")
    await db.refresh(restaurant)
    logger.info("Restaurant %s created (name=%s)", restaurant.id, restaurant.name)
    return restaurant


async def update_restaurant(
    db: AsyncSession, restaurant: Restaurant, payload: dict[str, Any]
) -> Restaurant:
    """요청에 포함된 허용 필드만 식당에 반영합니다."""
    for key in RESTAURANT_FIELDS:
        if key not in payload:
            continue
        if payload[key] is None and key in _NON_NULLABLE_FIELDS:
            continue
        setattr(restaurant, key, payload[key])

    await _commit(db, "update")
    await db.refresh(restaurant)
    logger.info("Restaurant %s updated", restaurant.id)
    return restaurant


async def delete_restaurant_by_id(db: AsyncSession, restaurant_id: int) -> bool:
    """ID로 식당을 삭제합니다.

    Returns:
        bool: 삭제했으면 True, 해당 식당이 없으면 False.
    """
    restaurant = await db.get(Restaurant, restaurant_id)
    if restaurant is None:
        logger.warning("Restaurant %s not found for deletion", restaurant_id)
        return False

    await db.delete(restaurant)
    await _commit(db, "delete")
    logger.info("Restaurant %s deleted", restaurant_id)
    return True
