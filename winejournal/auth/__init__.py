"""FastAPI-Users authentication module for Wine Journal."""

from winejournal.auth.backend import auth_backend
from winejournal.auth.db import get_user_db
from winejournal.auth.schemas import UserCreate, UserRead, UserUpdate
from winejournal.auth.users import UserManager, fastapi_users, get_user_manager

__all__ = [
    "auth_backend",
    "get_user_db",
    "UserManager",
    "get_user_manager",
    "fastapi_users",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
