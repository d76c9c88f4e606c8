"""비밀번호 해시 유틸리티"""

import bcrypt

# bcrypt는 72바이트까지만 사용합니다.
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return str(password).encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """비밀번호를 bcrypt로 해시합니다."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """비밀번호가 해시와 일치하는지 확인합니다. 해시가 없으면 False."""
    if not password_hash:
        return False
    return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
