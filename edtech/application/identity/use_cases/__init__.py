from .change_user_role_use_case import ChangeUserRoleUseCase
from .change_user_status_use_case import ChangeUserStatusUseCase
from .create_user_use_case import CreateUserUseCase
from .login_attempt_use_case import LoginAttemptResult, LoginAttemptUseCase
from .update_user_profile_use_case import UpdateUserProfileUseCase
from .user_query_use_case import TutorEligibility, UserQueryUseCase

__all__ = [
    "ChangeUserRoleUseCase",
    "ChangeUserStatusUseCase",
    "CreateUserUseCase",
    "LoginAttemptResult",
    "LoginAttemptUseCase",
    "TutorEligibility",
    "UpdateUserProfileUseCase",
    "UserQueryUseCase",
]
