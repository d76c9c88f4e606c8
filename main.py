"""맛집 제보 서비스의 메인 애플리케이션 파일입니다."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
import uvicorn

from app.config import logger, Config
from app.database import init_db
from app.exceptions import register_exception_handlers
from app.routers import auth_router, restaurants_router, submissions_router

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI의 lifespan 이벤트 핸들러"""
    logger.info("🚀 서비스 시작: 데이터베이스 초기화")
    logger.debug(
        "Config 정보 로드: %s",
        {
            "debug": Config.debug,
            "timezone": Config.TIMEZONE,
            "database_url": Config.DATABASE_URL,
            "client_url": Config.CLIENT_URL,
        },
    )

    # DB 초기화
    await init_db()

    yield  # FastAPI 실행 유지

    logger.info("🛑 서비스 종료: 정리 작업 완료")


app = FastAPI(lifespan=lifespan, title="Restaurant Tip Service API")

app.add_middleware(
    SessionMiddleware,
    secret_key=Config.SESSION_SECRET,
    session_cookie=Config.SESSION_COOKIE_NAME,
    max_age=Config.SESSION_MAX_AGE,
    same_site="lax",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[Config.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# 라우터 추가
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(restaurants_router, prefix=API_PREFIX)
app.include_router(submissions_router, prefix=API_PREFIX)


@app.get("/")
async def root():
    """루트 엔드포인트입니다."""
    logger.info("Root endpoint accessed")
    return {"message": "Restaurant Tip Service"}


@app.get("/health")
async def health_check():
    """헬스 체크 엔드포인트입니다."""
    return {"status": "ok"}


if __name__ == "__main__":
    HOST = "0.0.0.0"  # noqa: S104
    PORT = 8000
    logger.info("Starting tip service on %s:%s", HOST, PORT)
    uvicorn.run("main:app", host=HOST, port=PORT, reload=Config.debug)
