"""Mapper for User ORM ↔ Domain conversion."""

from edtech.domain.common.value_objects import Email, UserId, UserName
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.value_objects import UserRole, UserStatus
from edtech.infrastructure.common.timestamps import ensure_utc, ensure_utc_or_none
from edtech.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            email=Email(orm_model.email),
            name=UserName(orm_model.first_name, orm_model.last_name),
            role=UserRole(orm_model.role),
            status=UserStatus(orm_model.status),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            bio=orm_model.bio,
            skills=tuple(orm_model.skills or ()),
            failed_login_attempts=orm_model.failed_login_attempts,
            last_login_at=ensure_utc_or_none(orm_model.last_login_at),
            email_changed_at=ensure_utc_or_none(orm_model.email_changed_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """Convert domain entity to ORM model."""
        if orm_model is None:
            orm_model = UserORM(id=domain_entity.id.value)
        orm_model.email = domain_entity.email.value
        orm_model.first_name = domain_entity.name.first_name
        orm_model.last_name = domain_entity.name.last_name
        orm_model.role = domain_entity.role.value
        orm_model.status = domain_entity.status.value
        orm_model.bio = domain_entity.bio
        orm_model.skills = list(domain_entity.skills)
        orm_model.failed_login_attempts = domain_entity.failed_login_attempts
        orm_model.last_login_at = domain_entity.last_login_at
        orm_model.email_changed_at = domain_entity.email_changed_at
        orm_model.created_at = domain_entity.created_at
        orm_model.updated_at = domain_entity.updated_at
        return orm_model
