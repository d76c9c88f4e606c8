"""사용자(User) 저장소 로직."""

from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.config import logger
from app.exceptions import ConflictError
from app.models.user import User
from app.utils.security import hash_password


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    """ID로 사용자를 조회합니다."""
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """이메일로 사용자를 조회합니다."""
    return await db.scalar(select(User).where(User.email == email))


async def register_user(db: AsyncSession, email: str, password: str, name: str) -> User:
    """로컬 계정을 생성하는 비즈니스 로직.

    Args:
        db (AsyncSession): 비동기 데이터베이스 세션.
        email (str): 이메일.
        password (str): 평문 비밀번호 (bcrypt로 해시하여 저장).
        name (str): 이름.

    Raises:
        ConflictError: 같은 이메일의 사용자가 이미 존재하는 경우.

    Returns:
        User: 생성된 사용자 객체.
    """
    existing_user = await get_user_by_email(db, email)
    if existing_user:
        logger.info("Register rejected: email already in use (%s)", email)
        raise ConflictError("이미 사용 중인 이메일입니다.")

    user = User(
        email=email,
        name=name,
        password_hash=hash_password(password),
        provider="local",
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # 다른 요청에서 먼저 가입했을 수 있음
        await db.rollback()
        raise ConflictError("이미 사용 중인 이메일입니다.") from e
    except SQLAlchemyError:
        await db.rollback()
        raise
    await db.refresh(user)
    logger.info("User %s registered (%s)", user.id, user.email)
    return user


async def find_or_create_oauth_user(
    db: AsyncSession,
    provider: str,
    provider_id: str,
    email: str,
    name: str,
) -> User:
    """OAuth 프로필로 사용자를 찾거나 생성합니다.

    1. provider + provider_id가 일치하는 사용자가 있으면 반환합니다.
    2. 같은 이메일의 사용자가 있으면 반환합니다. 아직 소셜 계정에 연결되지 않은
       로컬 계정이면 provider 정보를 연결하고, 이미 연결된 계정은 그대로 둡니다.
    3. 둘 다 없으면 새 사용자를 생성합니다.

    Args:
        db (AsyncSession): 비동기 데이터베이스 세션.
        provider (str): OAuth 제공자 이름 ("google", "naver").
        provider_id (str): 제공자 측 사용자 ID.
        email (str): 이메일.
        name (str): 이름.

    Returns:
        User: 조회 또는 생성된 사용자 객체.
    """
    user = await db.scalar(
        select(User).where(User.provider == provider, User.provider_id == provider_id)
    )
    if user:
        return user

    user = await get_user_by_email(db, email)
    if user:
        if user.provider_id is not None:
            # 이미 다른 소셜 계정에 연결된 사용자는 연결 정보를 바꾸지 않음
            logger.info(
                "User %s already linked to %s; signing in via %s",
                user.id,
                user.provider,
                provider,
            )
            return user
        logger.info("Linking %s account to existing user %s", provider, user.id)
        user.provider = provider
        user.provider_id = provider_id
    else:
        user = User(email=email, name=name, provider=provider, provider_id=provider_id)
        db.add(user)

    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise
    await db.refresh(user)
    logger.info("OAuth user %s ready (provider=%s)", user.id, provider)
    return user
