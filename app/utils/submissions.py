"""Submissions 유틸리티 모듈.

제보 생성 시의 입력 정규화, 수정 시의 병합 규칙 등 제보 라우터에서 사용하는 함수들을 포함합니다.
"""

from typing import Annotated, Any, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import logger
from app.exceptions import NotFoundError
from app.models.submissions import RestaurantSubmission
from app.schemas.submissions import SubmissionCreate, SubmissionResponse, SubmissionUpdate
from app.services import submission_service
from app.utils.db import get_db

SUBMISSION_NOT_FOUND = "Submission not found"

# 누락 검사 순서 (오류 메시지는 첫 번째 누락 필드를 알려줌)
REQUIRED_FIELDS = (
    ("restaurant_name", "restaurantName"),
    ("category", "category"),
    ("location", "location"),
)

# 수정 시 값이 있으면 덮어쓰는 필드 (recommended_menu, restaurant_id는 별도 규칙)
MERGEABLE_FIELDS = (
    "restaurant_name",
    "category",
    "location",
    "price_range",
    "review",
    "submitter_name",
    "submitter_email",
    "status",
)


def menu_items(menu: list) -> list[str]:
    """리스트 항목을 문자열로 바꿉니다. None 항목은 버립니다."""
    return [
        item if isinstance(item, str) else str(item)
        for item in menu
        if item is not None
    ]


def normalise_menu(menu: Any) -> list[str]:
    """추천 메뉴 입력을 문자열 리스트로 정규화합니다.

    - 리스트는 그대로 사용합니다. (None 항목은 버리고, 문자열이 아닌 항목만 문자열로 바꿈)
    - 문자열은 콤마로 나누고 공백을 제거한 뒤 빈 항목을 버립니다.
    - 그 외의 값(None, 숫자, 객체 등)은 빈 리스트가 됩니다.

    Examples:
        >>> normalise_menu("a, b, ,c")
        ['a', 'b', 'c']
        >>> normalise_menu(42)
        []
    """
    if not menu:
        return []
    if isinstance(menu, list):
        return menu_items(menu)
    if isinstance(menu, str):
        return [item.strip() for item in menu.split(",") if item.strip()]
    return []


def build_create_payload(request: SubmissionCreate) -> dict[str, Any]:
    """제보 생성 요청을 저장할 payload로 변환합니다.

    선택 필드는 빈 문자열로 채우고, 상태는 항상 `pending`으로 시작합니다.
    """
    return {
        "restaurant_name": request.restaurant_name,
        "category": request.category,
        "location": request.location,
        "price_range": request.price_range if request.price_range is not None else "",
        "recommended_menu": normalise_menu(request.recommended_menu),
        "review": request.review if request.review is not None else "",
        "submitter_name": (
            request.submitter_name if request.submitter_name is not None else ""
        ),
        "submitter_email": (
            request.submitter_email if request.submitter_email is not None else ""
        ),
        "status": "pending",
        "restaurant_id": None,
    }


def find_missing_field(payload: dict[str, Any]) -> Optional[str]:
    """필수 필드 중 처음으로 비어 있는 필드의 JSON 이름을 반환합니다."""
    for key, json_name in REQUIRED_FIELDS:
        if not payload.get(key):
            return json_name
    return None


def merge_submission(
    existing: RestaurantSubmission, request: SubmissionUpdate
) -> dict[str, Any]:
    """기존 제보와 수정 요청을 병합합니다.

    요청에 값이 있는(None이 아닌) 필드만 기존 값을 덮어씁니다.
    `recommended_menu`는 요청 값이 리스트일 때만 덮어쓰며, 문자열 등은 무시합니다.
    `restaurant_id`는 요청에서 받지 않고 항상 기존 값을 유지합니다.

    Args:
        existing (RestaurantSubmission): 저장되어 있는 제보.
        request (SubmissionUpdate): 수정 요청.

    Returns:
        dict[str, Any]: 저장할 전체 payload.
    """
    payload: dict[str, Any] = {}
    for key in MERGEABLE_FIELDS:
        value = getattr(request, key)
        if key == "status" and value is not None:
            value = value.value
        payload[key] = value if value is not None else getattr(existing, key)

    payload["recommended_menu"] = (
        menu_items(request.recommended_menu)
        if isinstance(request.recommended_menu, list)
        else existing.recommended_menu
    )
    payload["restaurant_id"] = existing.restaurant_id
    return payload


async def get_submission_or_404(
    submission_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RestaurantSubmission:
    """Submission을 조회하고, 없으면 404 예외를 발생시킨다.

    Raises:
        NotFoundError: 제보가 존재하지 않을 때 발생.
    """
    submission = await submission_service.get_submission_by_id(db, submission_id)
    if submission is None:
        logger.info("Submission %s not found", submission_id)
        raise NotFoundError(SUBMISSION_NOT_FOUND)
    return submission


def build_submission_schema(submission: RestaurantSubmission) -> SubmissionResponse:
    """SubmissionResponse 스키마 생성."""
    return SubmissionResponse.model_validate(submission)
