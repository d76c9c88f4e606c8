"""이 모듈은 기본 스키마를 정의합니다.

Pydantic을 사용하여 응답 봉투(envelope) 스키마를 정의하고,
설정된 시간대(기본 KST)로 자동 변환되는 datetime 필드를 제공합니다.

리소스 API(식당, 제보)는 `{data}` / `{error: {message}}` 형태를,
인증 API는 `{success, message, data}` 형태를 사용합니다.
"""

from typing import Any, Generic, Optional, TypeVar
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, GetCoreSchemaHandler
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

from app.config import Config, logger


T = TypeVar("T")


class CamelModel(BaseModel):
    """JSON 필드는 camelCase로, 파이썬 속성은 snake_case로 다루는 기본 모델."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(BaseModel, Generic[T]):
    """리소스 API의 성공 응답 봉투.

    Attributes:
        data (T): 데이터 객체.
    """

    data: T


class ErrorDetail(BaseModel):
    """오류 메시지를 담는 클래스."""

    message: str


class ErrorResponse(BaseModel):
    """리소스 API의 실패 응답 봉투.

    Attributes:
        error (ErrorDetail): 오류 정보.
    """

    error: ErrorDetail


class AuthResponse(BaseModel):
    """인증 API의 응답 봉투.

    Attributes:
        success (bool): 성공 여부.
        message (Optional[str]): 사용자에게 보여줄 메시지.
        data (Optional[dict]): 응답 데이터 (예: `{"user": ...}`).
    """

    success: bool
    message: Optional[str] = None
    data: Optional[dict[str, Any]] = None


class Timestamp:
    """설정된 시간대(Config.TZ)로 자동 변환되는 datetime 필드"""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler: GetCoreSchemaHandler):
        """Pydantic이 사용할 스키마를 정의합니다.

        Args:
            source_type (type): 원본 타입.
            handler (GetCoreSchemaHandler): 스키마 핸들러.

        Returns:
            core_schema: Pydantic 코어 스키마.
        """
        return core_schema.no_info_after_validator_function(
            cls.convert_to_local, handler.generate_schema(datetime)
        )

    @classmethod
    def convert_to_local(cls, value: str | datetime) -> datetime:
        """ISO 8601 문자열 또는 datetime을 받아 설정된 시간대로 변환합니다.

        시간대 정보가 없는 값은 UTC로 간주합니다. (SQLite는 시간대 정보를 저장하지 않습니다.)

        Args:
            value (str | datetime): 변환할 값.

        Returns:
            datetime: 설정된 시간대로 변환된 datetime 객체.

        Raises:
            ValueError: 유효하지 않은 ISO 8601 형식의 문자열인 경우.
            TypeError: str 또는 datetime이 아닌 타입인 경우.
        """
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value)
            except ValueError as err:
                logger.error("Invalid ISO 8601 format: %s", value)
                raise ValueError(f"Invalid ISO 8601 format: {value}") from err

        if not isinstance(value, datetime):
            logger.error("Expected str or datetime, got %s", type(value))
            raise TypeError(f"Expected str or datetime, got {type(value)}")

        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(Config.TZ)
