"""FastAPI 앱의 설정을 정의하는 모듈입니다.

이 모듈은 환경 변수를 로드하고, 로깅을 설정하며, FastAPI 애플리케이션의 설정 값을 관리하는 Config 클래스를 제공합니다.
세션, OAuth(구글/네이버) 클라이언트 정보, 클라이언트 리다이렉트 주소 등의 값도 이 모듈에서 관리합니다.
"""

import os
import logging
from dotenv import load_dotenv
from pytz import timezone

# 환경 변수 로딩
load_dotenv()

# 현재 파일이 위치한 디렉터리 (config 폴더의 절대 경로)
CONFIG_DIR = os.path.dirname(__file__)
CONFIG_DIR = os.path.abspath(CONFIG_DIR)

SERVICE_DIR = os.path.abspath(os.path.join(CONFIG_DIR, "../.."))

# 로깅 설정
logger = logging.getLogger("tip_service")
logger.setLevel(logging.DEBUG)  # 모든 로그 기록

if not logger.handlers:
    # 핸들러 1: 파일에 모든 로그 저장 (디버깅용)
    file_handler = logging.FileHandler(
        os.getenv("LOG_FILE", os.path.join(SERVICE_DIR, "app.log")), encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)  # DEBUG 이상 저장
    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
    )
    file_handler.setFormatter(file_formatter)

    # 핸들러 2: 콘솔에 INFO 이상만 출력 (간결한 버전)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)  # INFO 이상만 출력
    console_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    console_handler.setFormatter(console_formatter)

    # 로거에 핸들러 추가
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)


class Config:
    """FastAPI 설정 값을 관리하는 클래스

    이 클래스는 환경 변수에서 설정 값을 로드하고, 기본 값을 제공합니다.
    """

    debug = os.getenv("DEBUG", "False").lower() == "true"

    SERVICE_DIR = SERVICE_DIR
    CONFIG_DIR = CONFIG_DIR

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./tip_service.db")

    TIMEZONE = os.getenv("TIMEZONE", "Asia/Seoul")
    TZ = timezone(TIMEZONE)

    # 세션
    SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me-in-production")
    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session")
    SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(60 * 60 * 24 * 7)))

    # 로그인 성공/실패 후 돌아갈 프론트엔드 주소
    CLIENT_URL = os.getenv("CLIENT_URL", "http://localhost:3000")

    # OAuth
    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_CALLBACK_URL = os.getenv(
        "GOOGLE_CALLBACK_URL", "http://localhost:8000/api/auth/google/callback"
    )
    NAVER_CLIENT_ID = os.getenv("NAVER_CLIENT_ID", "")
    NAVER_CLIENT_SECRET = os.getenv("NAVER_CLIENT_SECRET", "")
    NAVER_CALLBACK_URL = os.getenv(
        "NAVER_CALLBACK_URL", "http://localhost:8000/api/auth/naver/callback"
    )

    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

    MIN_PASSWORD_LENGTH = 6
    POPULAR_DEFAULT_LIMIT = 5

    class HttpStatus:
        """HTTP 상태 코드를 정의하는 클래스"""

        OK = 200
        CREATED = 201
        NO_CONTENT = 204
        FOUND = 302
        BAD_REQUEST = 400
        UNAUTHORIZED = 401
        FORBIDDEN = 403
        NOT_FOUND = 404
        CONFLICT = 409
        INTERNAL_SERVER_ERROR = 500

    @staticmethod
    def client_redirect(path: str) -> str:
        """CLIENT_URL 기준의 리다이렉트 주소를 반환

        Args:
            path (str): `/`로 시작하는 경로 (쿼리 문자열 포함 가능)

        Returns:
            str: CLIENT_URL과 path를 이어 붙인 절대 주소
        """
        return f"{Config.CLIENT_URL.rstrip('/')}{path}"
