from .db import get_db, get_session_user

__all__ = ["get_db", "get_session_user"]
