"""식당 제보 관련 데이터 스키마 모듈

클래스 목록:
    - SubmissionStatus: 제보 상태 Enum
    - SubmissionCreate: 제보 생성 요청 모델
    - SubmissionUpdate: 제보 수정(승인/거절 포함) 요청 모델
    - SubmissionResponse: 제보 응답 모델
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, List, Optional

from app.schemas.base import CamelModel
from app.schemas.base import Timestamp as Tsp

Timestamp = Annotated[datetime, Tsp]


class SubmissionStatus(str, Enum):
    """제보 상태를 나타내는 Enum 클래스

    Attributes:
        pending (str): 검토 대기
        approved (str): 승인 (식당으로 등록됨)
        rejected (str): 거절
    """

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class SubmissionCreate(CamelModel):
    """POST /submissions 요청 바디

    필수 필드(restaurantName, category, location)의 누락 여부는 라우터에서 순서대로 검사합니다.
    `recommendedMenu`는 리스트, 콤마로 구분된 문자열 등 어떤 값이든 받아서 정규화합니다.
    """

    restaurant_name: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    price_range: Optional[str] = None
    recommended_menu: Any = None
    review: Optional[str] = None
    submitter_name: Optional[str] = None
    submitter_email: Optional[str] = None


class SubmissionUpdate(CamelModel):
    """PATCH /submissions/{id} 요청 바디

    값이 있는 필드만 기존 값을 덮어씁니다. `restaurantId`는 받지 않습니다.
    """

    restaurant_name: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    price_range: Optional[str] = None
    recommended_menu: Any = None
    review: Optional[str] = None
    submitter_name: Optional[str] = None
    submitter_email: Optional[str] = None
    status: Optional[SubmissionStatus] = None


class SubmissionResponse(CamelModel):
    """제보 응답 모델"""

    id: int
    restaurant_name: str
    category: str
    location: str
    price_range: str = ""
    recommended_menu: List[str] = []
    review: str = ""
    submitter_name: str = ""
    submitter_email: str = ""
    status: SubmissionStatus
    restaurant_id: Optional[int] = None
    created_at: Timestamp
    updated_at: Timestamp
