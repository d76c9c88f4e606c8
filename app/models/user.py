"""이 모듈은 사용자 정보를 저장하는 User 클래스를 정의합니다."""

from typing import Optional
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """사용자 정보를 저장하는 클래스

    로컬 계정은 `password_hash`를, OAuth 계정은 `provider`와 `provider_id`를 가집니다.
    같은 이메일의 로컬 계정으로 소셜 로그인하면 기존 계정에 provider 정보가 연결됩니다.

    속성:
        id (int): 사용자의 고유 ID
        email (str): 이메일 (고유)
        name (str): 이름
        password_hash (Optional[str]): bcrypt 해시 (로컬 계정만)
        provider (str): 가입 경로 ("local", "google", "naver")
        provider_id (Optional[str]): OAuth 제공자의 사용자 ID
        created_at (datetime): 가입 시간
    """

    __tablename__ = "User"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    password_hash: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    provider: Mapped[str] = mapped_column(Text, nullable=False, default="local")
    provider_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="user_provider_uc"),
        Index("user_email_index", "email"),
    )
