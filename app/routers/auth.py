"""인증 API 모듈

로컬 회원가입/로그인과 구글·네이버 소셜 로그인을 제공합니다.
로그인 상태는 서명된 세션 쿠키(SessionMiddleware)에 사용자 ID로 저장됩니다.

API 목록:
    - `POST /auth/register`: 회원가입 후 자동 로그인
    - `POST /auth/login`: 로컬 로그인
    - `POST /auth/logout`: 로그아웃
    - `GET /auth/me`: 현재 사용자 정보 조회
    - `GET /auth/google`, `GET /auth/naver`: 소셜 로그인 페이지로 이동
    - `GET /auth/google/callback`, `GET /auth/naver/callback`: 소셜 로그인 콜백

응답은 `{"success": bool, "message": str, "data": {...}}` 형태입니다.
소셜 로그인 콜백은 JSON 대신 CLIENT_URL로 리다이렉트합니다.
"""

import secrets
from typing import Annotated, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Config, logger
from app.exceptions import ConflictError
from app.models.user import User
from app.schemas.base import AuthResponse
from app.schemas.users import LoginRequest, RegisterRequest, UserSchema
from app.services import user_service
from app.services.auth_service import AuthStrategyError, get_strategy
from app.utils.db import get_db, get_session_user, login_user, logout_user
from app.utils.http import get_async_client

router = APIRouter(prefix="/auth", tags=["Auth"])


def auth_response(
    status_code: int,
    success: bool,
    message: Optional[str] = None,
    user: Optional[User] = None,
) -> JSONResponse:
    """인증 API 응답을 만듭니다."""
    body = AuthResponse(
        success=success,
        message=message,
        data=(
            {"user": UserSchema.model_validate(user).model_dump(by_alias=True, mode="json")}
            if user is not None
            else None
        ),
    )
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


def _state_key(provider: str) -> str:
    return f"oauth_state_{provider}"


@router.post("/register")
async def register(
    body: RegisterRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """회원가입

    이메일, 비밀번호, 이름은 필수이며 비밀번호는 최소 6자 이상이어야 합니다.
    가입이 끝나면 바로 로그인 상태가 됩니다.
    """
    logger.info("회원가입 요청: email=%s, name=%s", body.email, body.name)

    # 유효성 검사
    if not body.email or not body.password or not body.name:
        logger.info("회원가입 유효성 검사 실패: 이메일, 비밀번호, 이름 필수")
        return auth_response(
            Config.HttpStatus.BAD_REQUEST, False, "이메일, 비밀번호, 이름은 필수입니다."
        )

    if len(body.password) < Config.MIN_PASSWORD_LENGTH:
        logger.info("비밀번호 길이 부족")
        return auth_response(
            Config.HttpStatus.BAD_REQUEST,
            False,
            f"비밀번호는 최소 {Config.MIN_PASSWORD_LENGTH}자 이상이어야 합니다.",
        )

    try:
        user = await user_service.register_user(
            db, email=body.email, password=body.password, name=body.name
        )
    except ConflictError as e:
        return auth_response(e.status_code, False, e.detail)

    # 회원가입 후 자동 로그인
    login_user(request, user)
    logger.info("회원가입 완료: user %s", user.id)
    return auth_response(
        Config.HttpStatus.CREATED, True, "회원가입이 완료되었습니다.", user
    )


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """로컬 로그인

    `local` 전략으로 이메일/비밀번호를 검증하고 세션을 만듭니다.
    """
    result = await get_strategy("local").authenticate(db, body.email, body.password)
    if result.user is None:
        logger.warning("[Login Failed] %s", result.message)
        return auth_response(
            Config.HttpStatus.UNAUTHORIZED,
            False,
            result.message or "로그인에 실패했습니다.",
        )

    login_user(request, result.user)
    logger.info("[Login] user %s logged in", result.user.id)
    return auth_response(Config.HttpStatus.OK, True, "로그인되었습니다.", result.user)


@router.post("/logout")
async def logout(request: Request):
    """로그아웃

    세션을 비우고 세션 쿠키를 삭제합니다.
    """
    logout_user(request)
    response = auth_response(Config.HttpStatus.OK, True, "로그아웃되었습니다.")
    response.delete_cookie(Config.SESSION_COOKIE_NAME)
    return response


@router.get("/me")
async def get_current_user(
    user: Annotated[Optional[User], Depends(get_session_user)],
):
    """현재 사용자 정보 조회"""
    if user is None:
        return auth_response(
            Config.HttpStatus.UNAUTHORIZED, False, "로그인이 필요합니다."
        )
    return auth_response(Config.HttpStatus.OK, True, user=user)


async def _start_oauth(provider: str, request: Request) -> RedirectResponse:
    state = secrets.token_urlsafe(16)
    request.session[_state_key(provider)] = state
    url = get_strategy(provider).authorization_url(state)
    logger.info("[%s] Redirecting to provider login", provider)
    return RedirectResponse(url, status_code=Config.HttpStatus.FOUND)


async def _finish_oauth(  # noqa: PLR0913
    provider: str,
    request: Request,
    db: AsyncSession,
    client: AsyncClient,
    code: Optional[str],
    state: Optional[str],
    error: Optional[str],
) -> RedirectResponse:
    expected_state = request.session.pop(_state_key(provider), None)
    try:
        result = await get_strategy(provider).authenticate(
            db,
            client,
            code=code,
            state=state,
            expected_state=expected_state,
            error=error,
        )
    except AuthStrategyError:
        logger.exception("[%s Callback] Authentication error", provider)
        return RedirectResponse(
            Config.client_redirect("/login?error=server_error"),
            status_code=Config.HttpStatus.FOUND,
        )

    if result.user is None:
        logger.error("[%s Callback] No user found: %s", provider, result.message)
        message = quote(result.message or "로그인 실패", safe="")
        return RedirectResponse(
            Config.client_redirect(f"/login?error={message}"),
            status_code=Config.HttpStatus.FOUND,
        )

    login_user(request, result.user)
    logger.info("[%s Callback] Successfully logged in user: %s", provider, result.user.id)
    return RedirectResponse(
        Config.client_redirect("/dashboard"), status_code=Config.HttpStatus.FOUND
    )


@router.get("/google")
async def google_login(request: Request):
    """구글 로그인 페이지로 이동"""
    return await _start_oauth("google", request)


@router.get("/google/callback")
async def google_callback(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    client: Annotated[AsyncClient, Depends(get_async_client)],
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
):
    """구글 OAuth 콜백"""
    return await _finish_oauth("google", request, db, client, code, state, error)


@router.get("/naver")
async def naver_login(request: Request):
    """네이버 로그인 페이지로 이동"""
    return await _start_oauth("naver", request)


@router.get("/naver/callback")
async def naver_callback(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    client: Annotated[AsyncClient, Depends(get_async_client)],
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
):
    """네이버 OAuth 콜백"""
    return await _finish_oauth("naver", request, db, client, code, state, error)
