from .create_user import CreateUserInput, CreateUserUseCase
from .deactivate_user import DeactivateUserInput, DeactivateUserUseCase
from .get_user import GetUserByIdUseCase, user_cache_key
from .update_profile import UpdateUserProfileInput, UpdateUserProfileUseCase
from .user_access import UserActor, can_manage_user
from .user_results import UserError, UserErrorCode, UserResult

__all__ = [
    "CreateUserInput",
    "CreateUserUseCase",
    "DeactivateUserInput",
    "DeactivateUserUseCase",
    "GetUserByIdUseCase",
    "UpdateUserProfileInput",
    "UpdateUserProfileUseCase",
    "UserActor",
    "UserError",
    "UserErrorCode",
    "UserResult",
    "can_manage_user",
    "user_cache_key",
]
