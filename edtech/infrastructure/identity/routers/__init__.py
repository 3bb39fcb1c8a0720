from edtech.infrastructure.identity.routers import users

__all__ = ["users"]
