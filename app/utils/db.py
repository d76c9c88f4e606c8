"""이 모듈은 데이터베이스 세션과 로그인 세션(사용자 식별)을 위한 유틸리티 함수를 제공합니다."""

from typing import Annotated, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import logger
from app.database import AsyncSessionLocal
from app.models.user import User
from app.services import user_service

SESSION_USER_KEY = "user_id"


async def get_db():
    """비동기 데이터베이스 세션을 생성하고 반환합니다.

    Yields:
        AsyncSession: 비동기 데이터베이스 세션 객체
    """
    async with AsyncSessionLocal() as db:
        yield db


def login_user(request: Request, user: User) -> None:
    """세션에 사용자 ID를 기록합니다."""
    request.session[SESSION_USER_KEY] = user.id
    logger.debug("Session established for user %s", user.id)


def logout_user(request: Request) -> None:
    """세션을 비웁니다."""
    request.session.clear()


async def get_session_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Optional[User]:
    """세션 쿠키에 기록된 사용자를 조회합니다.

    로그인하지 않았거나, 세션의 사용자가 삭제된 경우 None을 반환합니다.

    Args:
        request (Request): 요청 객체 (SessionMiddleware가 `request.session`을 채움)
        db (AsyncSession): 비동기 데이터베이스 세션

    Returns:
        Optional[User]: 로그인한 사용자 또는 None
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None

    user = await user_service.get_user_by_id(db, user_id)
    if user is None:
        logger.warning("Session refers to missing user %s; clearing session", user_id)
        request.session.clear()
    return user
