from .dto import (
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisterIn,
    UpdateAccountIn,
    UserPublicOut,
    WatchRecordOut,
)
from .service import AuthService

__all__ = [
    "AuthService",
    "ChangePasswordIn",
    "LoginIn",
    "LoginOut",
    "RefreshIn",
    "RegisterIn",
    "UpdateAccountIn",
    "UserPublicOut",
    "WatchRecordOut",
]
