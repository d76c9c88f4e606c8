"""이 모듈은 HTTP 비동기 클라이언트를 생성하는 유틸리티 함수를 제공합니다."""

from typing import AsyncGenerator

from httpx import AsyncClient

from app.config import Config


async def get_async_client() -> AsyncGenerator[AsyncClient, None]:
    """비동기 HTTP 클라이언트를 생성하고 반환합니다.

    OAuth 제공자(구글, 네이버)와 통신할 때 사용합니다.

    Yields:
        AsyncClient: 요청이 끝나면 닫히는 비동기 HTTP 클라이언트
    """
    async with AsyncClient(timeout=Config.HTTP_TIMEOUT) as client:
        yield client
