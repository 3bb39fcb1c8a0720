from .user import USER_STATUS_TRANSITIONS, User

__all__ = ["USER_STATUS_TRANSITIONS", "User"]
