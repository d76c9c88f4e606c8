"""이 모듈은 식당(Restaurant) 데이터베이스 모델을 정의합니다."""

from __future__ import annotations
from typing import List, Optional
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.types import NonEscapedJSON


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Restaurant(Base):
    """식당 정보를 저장하는 클래스

    식당은 카탈로그 API로 직접 등록되거나, 제보(RestaurantSubmission)가 승인될 때 생성됩니다.

    Attributes:
        id (int): 식당의 고유 식별자
        name (str): 식당 이름
        category (Optional[str]): 음식 분류 (예: 한식, 분식)
        location (Optional[str]): 위치
        price_range (Optional[str]): 가격대
        rating (Optional[float]): 평점
        description (Optional[str]): 소개
        recommended_menu (List[str]): 추천 메뉴 목록 (순서 유지)
        image (Optional[str]): 대표 이미지 주소
        created_at (datetime): 생성 시간
        updated_at (datetime): 수정 시간
    """

    __tablename__ = "Restaurant"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price_range: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[Optional[float]] = mapped_column(Float(53), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    recommended_menu: Mapped[List[str]] = mapped_column(
        NonEscapedJSON, nullable=False, default=list
    )
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        Index("restaurant_name_index", "name"),
        Index("restaurant_rating_index", "rating"),
        # SQLite에서도 삭제된 ID를 재사용하지 않음
        {"sqlite_autoincrement": True},
    )
