"""식당 제보(RestaurantSubmission) 저장소 로직."""

from typing import Any, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.config import logger
from app.models.submissions import RestaurantSubmission

SUBMISSION_FIELDS = (
    "restaurant_name",
    "category",
    "location",
    "price_range",
    "recommended_menu",
    "review",
    "submitter_name",
    "submitter_email",
    "status",
    "restaurant_id",
)


async def _commit(db: AsyncSession, action: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Submission %s 처리 중 DB 오류 발생", action)
        raise


async def list_submissions(
    db: AsyncSession, status: Optional[str] = None
) -> Sequence[RestaurantSubmission]:
    """제보 목록을 조회합니다. `status`가 주어지면 해당 상태만 조회합니다."""
    stmt = select(RestaurantSubmission).order_by(RestaurantSubmission.id)
    if status:
        stmt = stmt.where(RestaurantSubmission.status == status)
    result = await db.execute(stmt)
    return result.scalars().all()


async def get_submission_by_id(
    db: AsyncSession, submission_id: int
) -> Optional[RestaurantSubmission]:
    """ID로 제보를 조회합니다. 없으면 None을 반환합니다."""
    return await db.get(RestaurantSubmission, submission_id)


async def create_submission(
    db: AsyncSession, payload: dict[str, Any]
) -> RestaurantSubmission:
    """정규화가 끝난 payload로 제보를 저장합니다."""
    submission = RestaurantSubmission(
        **{key: payload[key] for key in SUBMISSION_FIELDS if key in payload}
    )
    db.add(submission)
    await _commit(db, "create")
    await db.refresh(submission)
    logger.info(
        "Submission %s created (restaurant_name=%s)",
        submission.id,
        submission.restaurant_name,
    )
    return submission


async def update_submission(
    db: AsyncSession, submission: RestaurantSubmission, payload: dict[str, Any]
) -> RestaurantSubmission:
    """병합이 끝난 payload 전체를 제보에 덮어쓰고 저장합니다."""
    for key in SUBMISSION_FIELDS:
        if key in payload:
            setattr(submission, key, payload[key])

    await _commit(db, "update")
    await db.refresh(submission)
    logger.info(
        "Submission %s updated (status=%s, restaurant_id=%s)",
        submission.id,
        submission.status,
        submission.restaurant_id,
    )
    return submission


async def delete_submission(db: AsyncSession, submission: RestaurantSubmission) -> None:
    """제보를 삭제합니다."""
    submission_id = submission.id
    await db.delete(submission)
    await _commit(db, "delete")
    logger.info("Submission %s deleted", submission_id)
