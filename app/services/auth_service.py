"""인증 전략(strategy) 모듈

이름으로 찾을 수 있는 인증 전략을 제공합니다.

    - `local`: 이메일/비밀번호 로그인
    - `google`: 구글 OAuth 2.0 (authorization code)
    - `naver`: 네이버 로그인 (authorization code)

모든 전략은 `AuthResult`를 돌려줍니다. 사용자가 없으면 `user`가 None이고 `message`에 실패 사유가 담깁니다.
제공자와의 통신 자체가 실패하면 `AuthStrategyError`를 발생시킵니다.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Config, logger
from app.models.user import User
from app.services import user_service
from app.utils.security import verify_password


@dataclass
class AuthResult:
    """인증 결과

    Attributes:
        user (Optional[User]): 인증된 사용자. 실패 시 None.
        message (Optional[str]): 실패 사유.
    """

    user: Optional[User]
    message: Optional[str] = None


@dataclass
class OAuthProfile:
    """OAuth 제공자에게서 받아온 사용자 프로필"""

    provider_id: str
    email: Optional[str]
    name: Optional[str]


class AuthStrategyError(Exception):
    """인증 제공자와의 통신이 실패했을 때 발생하는 예외"""


class LocalStrategy:
    """이메일/비밀번호 로그인 전략"""

    name = "local"

    async def authenticate(
        self, db: AsyncSession, email: Optional[str], password: Optional[str]
    ) -> AuthResult:
        if not email or not password:
            return AuthResult(None, "이메일과 비밀번호를 입력해주세요.")

        user = await user_service.get_user_by_email(db, email)
        if user is None:
            logger.info("Local login failed: unknown email %s", email)
            return AuthResult(None, "존재하지 않는 이메일입니다.")
        if user.password_hash is None:
            logger.info("Local login failed: user %s has no password", user.id)
            return AuthResult(None, "소셜 로그인으로 가입된 계정입니다.")
        if not verify_password(password, user.password_hash):
            logger.info("Local login failed: wrong password for user %s", user.id)
            return AuthResult(None, "비밀번호가 일치하지 않습니다.")
        return AuthResult(user)


class OAuthStrategy:
    """authorization code 방식 OAuth 전략의 공통 흐름

    하위 클래스는 엔드포인트 주소, 클라이언트 정보, `parse_profile`을 정의합니다.
    """

    name: str = ""
    authorize_endpoint: str = ""
    token_endpoint: str = ""
    profile_endpoint: str = ""
    scope: Optional[str] = None

    @property
    def client_id(self) -> str:
        raise NotImplementedError

    @property
    def client_secret(self) -> str:
        raise NotImplementedError

    @property
    def callback_url(self) -> str:
        raise NotImplementedError

    def authorization_url(self, state: str) -> str:
        """제공자의 로그인 페이지 주소를 만듭니다."""
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "state": state,
        }
        if self.scope:
            params["scope"] = self.scope
        return f"{self.authorize_endpoint}?{urlencode(params)}"

    def token_request_data(self, code: str, state: Optional[str]) -> dict:
        return {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.callback_url,
            "code": code,
        }

    def parse_profile(self, payload: dict) -> OAuthProfile:
        raise NotImplementedError

    async def exchange_code(
        self, client: httpx.AsyncClient, code: str, state: Optional[str]
    ) -> str:
        """authorization code를 access token으로 교환합니다."""
        response = await client.post(
            self.token_endpoint,
            data=self.token_request_data(code, state),
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        payload = response.json()
        access_token = payload.get("access_token")
        if not access_token:
            raise AuthStrategyError(
                f"[{self.name}] token response without access_token: "
                f"{payload.get('error_description') or payload.get('error')}"
            )
        return access_token

    async def fetch_profile(
        self, client: httpx.AsyncClient, access_token: str
    ) -> OAuthProfile:
        """access token으로 사용자 프로필을 조회합니다."""
        response = await client.get(
            self.profile_endpoint,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        response.raise_for_status()
        return self.parse_profile(response.json())

    async def authenticate(  # noqa: PLR0913
        self,
        db: AsyncSession,
        client: httpx.AsyncClient,
        *,
        code: Optional[str],
        state: Optional[str],
        expected_state: Optional[str],
        error: Optional[str] = None,
    ) -> AuthResult:
        """콜백 요청을 검증하고 사용자를 찾거나 생성합니다.

        Args:
            db (AsyncSession): 비동기 DB 세션.
            client (httpx.AsyncClient): 제공자와 통신할 HTTP 클라이언트.
            code (Optional[str]): 콜백으로 받은 authorization code.
            state (Optional[str]): 콜백으로 받은 state.
            expected_state (Optional[str]): 세션에 저장해 둔 state.
            error (Optional[str]): 제공자가 전달한 오류 코드 (예: 사용자가 동의를 거부).

        Returns:
            AuthResult: 인증 결과.

        Raises:
            AuthStrategyError: 토큰 교환이나 프로필 조회가 실패한 경우.
        """
        if error:
            return AuthResult(None, error)
        if not code:
            return AuthResult(None, "missing_code")
        if not expected_state or state != expected_state:
            logger.warning("[%s] OAuth state mismatch", self.name)
            return AuthResult(None, "invalid_state")

        try:
            access_token = await self.exchange_code(client, code, state)
            profile = await self.fetch_profile(client, access_token)
        except httpx.HTTPError as e:
            raise AuthStrategyError(f"[{self.name}] provider request failed: {e}") from e
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            # JSON이 아닌 응답, 필드가 빠진 프로필
            raise AuthStrategyError(
                f"[{self.name}] malformed provider response: {e!r}"
            ) from e

        if not profile.email:
            return AuthResult(None, "이메일 정보를 가져올 수 없습니다.")

        user = await user_service.find_or_create_oauth_user(
            db,
            provider=self.name,
            provider_id=profile.provider_id,
            email=profile.email,
            name=profile.name or profile.email.split("@")[0],
        )
        return AuthResult(user)


class GoogleStrategy(OAuthStrategy):
    """구글 OAuth 2.0 전략"""

    name = "google"
    authorize_endpoint = "https://accounts.google.com/o/oauth2/v2/auth"
    token_endpoint = "https://oauth2.googleapis.com/token"
    profile_endpoint = "https://openidconnect.googleapis.com/v1/userinfo"
    scope = "openid profile email"

    @property
    def client_id(self) -> str:
        return Config.GOOGLE_CLIENT_ID

    @property
    def client_secret(self) -> str:
        return Config.GOOGLE_CLIENT_SECRET

    @property
    def callback_url(self) -> str:
        return Config.GOOGLE_CALLBACK_URL

    def parse_profile(self, payload: dict) -> OAuthProfile:
        if "sub" not in payload:
            raise AuthStrategyError("[google] profile without subject id")
        return OAuthProfile(
            provider_id=str(payload["sub"]),
            email=payload.get("email"),
            name=payload.get("name"),
        )


class NaverStrategy(OAuthStrategy):
    """네이버 로그인 전략

    네이버 프로필 응답은 `{"resultcode": "00", "response": {...}}` 형태입니다.
    """

    name = "naver"
    authorize_endpoint = "https://nid.naver.com/oauth2.0/authorize"
    token_endpoint = "https://nid.naver.com/oauth2.0/token"
    profile_endpoint = "https://openapi.naver.com/v1/nid/me"

    @property
    def client_id(self) -> str:
        return Config.NAVER_CLIENT_ID

    @property
    def client_secret(self) -> str:
        return Config.NAVER_CLIENT_SECRET

    @property
    def callback_url(self) -> str:
        return Config.NAVER_CALLBACK_URL

    def token_request_data(self, code: str, state: Optional[str]) -> dict:
        data = super().token_request_data(code, state)
        data["state"] = state
        return data

    def parse_profile(self, payload: dict) -> OAuthProfile:
        if payload.get("resultcode") != "00" or "response" not in payload:
            raise AuthStrategyError(
                f"[naver] profile request failed: {payload.get('message')}"
            )
        profile = payload["response"]
        return OAuthProfile(
            provider_id=str(profile["id"]),
            email=profile.get("email"),
            name=profile.get("name") or profile.get("nickname"),
        )


STRATEGIES = {
    LocalStrategy.name: LocalStrategy(),
    GoogleStrategy.name: GoogleStrategy(),
    NaverStrategy.name: NaverStrategy(),
}


def get_strategy(name: str):
    """이름으로 인증 전략을 찾습니다.

    Raises:
        KeyError: 등록되지 않은 전략 이름인 경우.
    """
    return STRATEGIES[name]
