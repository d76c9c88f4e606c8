import os
import sys
from logging.config import fileConfig
from sqlalchemy import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy import pool
from alembic import context
from dotenv import load_dotenv

# ✅ 환경 변수 로드
load_dotenv()

# ✅ 프로젝트 경로 추가 (어디서든 `app` import 가능)
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# ✅ 데이터베이스 설정 (없을 경우 에러 발생)
DATABASE_URL = os.environ.get("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("❌ DATABASE_URL 환경 변수가 설정되지 않았습니다.")

# alembic은 sync driver 사용
SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql",
    "sqlite+aiosqlite": "sqlite",
    "mysql+aiomysql": "mysql+pymysql",
}

config = context.config
url = make_url(DATABASE_URL)
if url.drivername in SYNC_DRIVERS:
    url = url.set(drivername=SYNC_DRIVERS[url.drivername])
config.set_main_option(
    "sqlalchemy.url", url.render_as_string(hide_password=False).replace("%", "%%")
)

# ✅ Python 로깅 설정 (앱 로거는 그대로 유지)
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# ✅ SQLAlchemy 모델 자동 감지
from app.database import Base  # noqa: E402
from app.models import NonEscapedJSON  # noqa: E402

target_metadata = Base.metadata


# ✅ 커스텀 타입을 자동으로 마이그레이션 파일에 포함하도록 설정
def render_item(type_, obj, autogen_context):
    """Alembic이 마이그레이션 파일을 생성할 때 커스텀 타입을 자동으로 인식"""
    if isinstance(obj, NonEscapedJSON):
        autogen_context.imports.add("from app.models.types import NonEscapedJSON")
        return "NonEscapedJSON()"
    return False  # 기본 동작 유지


def run_migrations_offline():
    """오프라인 모드에서 마이그레이션 실행"""
    context.configure(
        url=url,
        target_metadata=target_metadata,
        render_item=render_item,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """DB에 직접 연결하여 마이그레이션 실행"""
    connectable = create_engine(url, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_item=render_item,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
