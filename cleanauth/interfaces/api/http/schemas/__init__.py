from .auth import AuthTokenRes, LoginReq, RefreshTokenReq
from .users import CreateUserReq, UpdateUserProfileReq, UserRes

__all__ = [
    "AuthTokenRes",
    "CreateUserReq",
    "LoginReq",
    "RefreshTokenReq",
    "UpdateUserProfileReq",
    "UserRes",
]
