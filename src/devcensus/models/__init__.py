from .base import async_session_maker, engine, get_db
from .user import PROFILE_FIELDS, User

__all__ = [
    "engine",
    "async_session_maker",
    "get_db",
    "PROFILE_FIELDS",
    "User",
]
