"""식당 제보 API 모듈

사용자는 새로운 식당을 제보할 수 있고, 관리자는 제보를 승인하거나 거절할 수 있습니다.
제보를 승인하면 식당이 생성되어 카탈로그에 등록되고, 거절하거나 삭제하면 연결된 식당도 함께 삭제됩니다.

API 목록:
    - `GET /submissions`: 제보 목록을 조회합니다. (`status`로 필터링 가능)
    - `GET /submissions/{submission_id}`: 특정 제보를 조회합니다.
    - `POST /submissions`: 새로운 제보를 생성합니다.
    - `PATCH /submissions/{submission_id}`: 제보를 수정합니다. (승인/거절 포함)
    - `DELETE /submissions/{submission_id}`: 제보를 삭제합니다.

식당 생성/삭제와 제보 저장은 하나의 트랜잭션이 아닙니다.
제보 저장이 실패하면 승인으로 새로 만든 식당은 다시 삭제하지만,
거절로 이미 삭제한 식당은 되돌릴 수 없으므로 제보에 끊어진 `restaurantId`가 남을 수 있습니다.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Config, logger
from app.exceptions import ValidationError
from app.models.submissions import RestaurantSubmission
from app.schemas.base import DataResponse
from app.schemas.submissions import (
    SubmissionCreate,
    SubmissionResponse,
    SubmissionStatus,
    SubmissionUpdate,
)
from app.services import restaurant_service, submission_service
from app.utils.db import get_db
from app.utils.submissions import (
    build_create_payload,
    build_submission_schema,
    find_missing_field,
    get_submission_or_404,
    merge_submission,
)

router = APIRouter(prefix="/submissions", tags=["Submission"])


@router.get("", response_model=DataResponse[list[SubmissionResponse]])
async def list_submissions(
    db: Annotated[AsyncSession, Depends(get_db)],
    status: Optional[SubmissionStatus] = Query(None, description="제보 상태 필터"),
):
    """제보 목록을 조회합니다.

    Args:
        db (AsyncSession): 비동기 DB 세션 객체입니다.
        status (Optional[SubmissionStatus]): 조회할 제보 상태 (pending|approved|rejected).

    Returns:
        DataResponse[list[SubmissionResponse]]: 제보 목록.
    """
    submissions = await submission_service.list_submissions(
        db, status.value if status else None
    )
    logger.info("Listing %s submissions (status=%s)", len(submissions), status)
    return DataResponse[list[SubmissionResponse]](
        data=[build_submission_schema(submission) for submission in submissions]
    )


@router.get("/{submission_id}", response_model=DataResponse[SubmissionResponse])
async def get_submission(
    submission: Annotated[RestaurantSubmission, Depends(get_submission_or_404)],
):
    """특정 제보를 조회합니다.

    Raises:
        NotFoundError(404): 해당 제보를 찾을 수 없는 경우 발생합니다.
    """
    return DataResponse[SubmissionResponse](data=build_submission_schema(submission))


@router.post(
    "",
    status_code=Config.HttpStatus.CREATED,
    response_model=DataResponse[SubmissionResponse],
)
async def create_submission(
    request: SubmissionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """새로운 식당 제보를 생성합니다.

    `restaurantName`, `category`, `location`은 필수이며, 이 순서대로 검사하여 처음 누락된 필드를 알려줍니다.
    `recommendedMenu`는 리스트나 콤마로 구분된 문자열을 받으며, 그 외의 값은 빈 리스트로 저장합니다.
    제보는 항상 `pending` 상태로 생성됩니다.

    Args:
        request (SubmissionCreate): 제보 정보입니다.
        db (AsyncSession): 비동기 DB 세션 객체입니다.

    Returns:
        DataResponse[SubmissionResponse]: 생성된 제보.

    Raises:
        ValidationError(400): 필수 필드가 누락된 경우 발생합니다.
    """
    payload = build_create_payload(request)

    missing = find_missing_field(payload)
    if missing:
        raise ValidationError(f"'{missing}' is required")

    created = await submission_service.create_submission(db, payload)
    return DataResponse[SubmissionResponse](data=build_submission_schema(created))


@router.patch("/{submission_id}", response_model=DataResponse[SubmissionResponse])
async def update_submission(
    request: SubmissionUpdate,
    existing: Annotated[RestaurantSubmission, Depends(get_submission_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """제보를 수정합니다. (승인/거절/일반 수정)

    - 승인(`approved`)이고 연결된 식당이 없으면 식당을 생성하여 연결합니다.
      이미 연결된 식당이 있으면 아무것도 하지 않습니다.
    - 거절(`rejected`)이고 연결된 식당이 있으면 식당을 삭제하고 연결을 끊습니다.

    식당 생성/삭제를 먼저 한 뒤 제보를 저장합니다.

    Args:
        request (SubmissionUpdate): 수정할 필드입니다.
        existing (RestaurantSubmission): 수정할 제보입니다.
        db (AsyncSession): 비동기 DB 세션 객체입니다.

    Returns:
        DataResponse[SubmissionResponse]: 수정된 제보.

    Raises:
        NotFoundError(404): 해당 제보를 찾을 수 없는 경우 발생합니다.
    """
    submission_id = existing.id
    payload = merge_submission(existing, request)
    created_restaurant_id = None

    # 승인 시 → 식당 생성 (이미 생성된 경우는 건너뜀)
    if payload["status"] == SubmissionStatus.approved.value and not payload["restaurant_id"]:
        restaurant = await restaurant_service.create_restaurant(
            db,
            {
                "name": payload["restaurant_name"],
                "category": payload["category"],
                "location": payload["location"],
                "price_range": payload["price_range"],
                "description": payload["review"],
                "recommended_menu": payload["recommended_menu"],
            },
        )
        created_restaurant_id = restaurant.id
        payload["restaurant_id"] = restaurant.id
        logger.info(
            "Submission %s approved: restaurant %s created", submission_id, restaurant.id
        )

    # 거절 시 → 연결된 식당 자동 삭제
    if payload["status"] == SubmissionStatus.rejected.value and payload["restaurant_id"]:
        await restaurant_service.delete_restaurant_by_id(db, payload["restaurant_id"])
        logger.info(
            "Submission %s rejected: restaurant %s deleted",
            submission_id,
            payload["restaurant_id"],
        )
        payload["restaurant_id"] = None

    try:
        updated = await submission_service.update_submission(db, existing, payload)
    except SQLAlchemyError:
        if created_restaurant_id is not None:
            logger.error(
                "Saving submission %s failed; removing restaurant %s created by approval",
                submission_id,
                created_restaurant_id,
            )
            await restaurant_service.delete_restaurant_by_id(db, created_restaurant_id)
        else:
            logger.error(
                "Saving submission %s failed after restaurant changes", submission_id
            )
        raise

    return DataResponse[SubmissionResponse](data=build_submission_schema(updated))


@router.delete("/{submission_id}", status_code=Config.HttpStatus.NO_CONTENT)
async def delete_submission(
    existing: Annotated[RestaurantSubmission, Depends(get_submission_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """제보를 삭제합니다.

    승인되어 연결된 식당이 있으면 식당을 먼저 삭제합니다.
    연결된 식당이 이미 없어진 경우에는 제보만 삭제합니다.

    Raises:
        NotFoundError(404): 해당 제보를 찾을 수 없는 경우 발생합니다.
    """
    logger.info("Delete request received for submission_id: %s", existing.id)

    # 승인된 제보 → 식당도 같이 삭제
    if existing.restaurant_id:
        await restaurant_service.delete_restaurant_by_id(db, existing.restaurant_id)

    await submission_service.delete_submission(db, existing)
    return Response(status_code=Config.HttpStatus.NO_CONTENT)
