from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel

from app.schemas.base import CamelModel
from app.schemas.base import Timestamp as Tsp

Timestamp = Annotated[datetime, Tsp]


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserSchema(CamelModel):
    """사용자 정보를 나타내는 클래스입니다.

    비밀번호 해시는 포함하지 않습니다.

    Attributes:
        id (int): 사용자 ID
        email (str): 사용자 이메일
        name (str): 사용자 이름
        provider (str): 가입 경로 (local, google, naver)
        created_at (datetime): 가입 시간
    """

    id: int
    email: str
    name: str
    provider: str = "local"
    created_at: Timestamp
