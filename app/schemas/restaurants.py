"""이 모듈은 식당 관련 데이터 스키마를 정의합니다.

Pydantic BaseModel을 사용하여 데이터 유효성 검사를 수행합니다.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from app.schemas.base import CamelModel
from app.schemas.base import Timestamp as Tsp

Timestamp = Annotated[datetime, Tsp]

# 생성/수정 시 요청 바디에서 받아들이는 필드 목록
RESTAURANT_FIELDS = (
    "name",
    "category",
    "location",
    "price_range",
    "rating",
    "description",
    "recommended_menu",
    "image",
)


class RestaurantSchema(CamelModel):
    """식당의 기본 정보를 나타내는 클래스입니다.

    Attributes:
        name (str): 식당 이름
        category (Optional[str]): 음식 분류
        location (Optional[str]): 위치
        price_range (Optional[str]): 가격대
        rating (Optional[float]): 평점
        description (Optional[str]): 소개
        recommended_menu (Optional[List[str]]): 추천 메뉴 목록
        image (Optional[str]): 대표 이미지 주소
    """

    name: str
    category: Optional[str] = None
    location: Optional[str] = None
    price_range: Optional[str] = None
    rating: Optional[float] = None
    description: Optional[str] = None
    recommended_menu: Optional[List[str]] = None
    image: Optional[str] = None


class RestaurantCreate(RestaurantSchema):
    """POST /restaurants 요청 바디를 나타내는 클래스입니다."""


class RestaurantUpdate(CamelModel):
    """PATCH /restaurants/{id} 요청 바디를 나타내는 클래스입니다.

    모든 필드는 선택 사항이며, 요청에 포함된 필드만 반영합니다.
    """

    name: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    price_range: Optional[str] = None
    rating: Optional[float] = None
    description: Optional[str] = None
    recommended_menu: Optional[List[str]] = None
    image: Optional[str] = None


class RestaurantResponse(RestaurantSchema):
    """식당 조회 응답 바디를 나타내는 클래스입니다.

    Attributes:
        id (int): 식당 ID
        recommended_menu (List[str]): 추천 메뉴 목록
        created_at (Timestamp): 생성 시간
        updated_at (Timestamp): 수정 시간
    """

    id: int
    recommended_menu: List[str] = []
    created_at: Timestamp
    updated_at: Timestamp
