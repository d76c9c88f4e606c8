"""이 모듈은 식당 제보(RestaurantSubmission) 데이터베이스 모델을 정의합니다."""

from __future__ import annotations
from typing import List, Optional
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.types import NonEscapedJSON


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RestaurantSubmission(Base):
    """사용자가 제보한 식당 정보를 관리하는 클래스

    `restaurant_id`는 승인 시 생성된 식당을 가리키는 약한 참조입니다.
    외래 키로 묶지 않으므로, 식당이 먼저 지워져도 제보는 남아 있을 수 있습니다.

    Attributes:
        id (int): 제보의 고유 식별자
        restaurant_name (str): 제보된 식당 이름
        category (str): 음식 분류
        location (str): 위치
        price_range (str): 가격대
        recommended_menu (List[str]): 추천 메뉴 목록
        review (str): 제보자 후기
        submitter_name (str): 제보자 이름
        submitter_email (str): 제보자 이메일
        status (str): 제보 상태("pending", "approved", "rejected")
        restaurant_id (Optional[int]): 승인으로 생성된 식당 ID
        created_at (datetime): 제보 시간
        updated_at (datetime): 수정 시간
    """

    __tablename__ = "Restaurant_submission"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    restaurant_name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    price_range: Mapped[str] = mapped_column(Text, nullable=False, default="")
    recommended_menu: Mapped[List[str]] = mapped_column(
        NonEscapedJSON, nullable=False, default=list
    )
    review: Mapped[str] = mapped_column(Text, nullable=False, default="")
    submitter_name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    submitter_email: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(Text, nullable=False, default="pending")
    restaurant_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        Index("restaurant_submission_status_index", "status"),
        Index("restaurant_submission_restaurant_index", "restaurant_id"),
        {"sqlite_autoincrement": True},
    )
