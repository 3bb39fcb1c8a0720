"""Repository for User domain entities."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import Email, UserId
from edtech.domain.identity.entities.user import User
from edtech.domain.identity.exceptions import EmailAlreadyExistsError
from edtech.infrastructure.identity.mappers.user_mapper import UserMapper
from edtech.models import User as UserORM

logger = logging.getLogger(__name__)


class UserRepository:
    """SQLAlchemy repository for User aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId, for_update: bool = False) -> User | None:
        """
        Find a user by ID.

        Args:
            user_id: The user ID
            for_update: Lock the row until the session commits

        Returns:
            User entity if found, None otherwise
        """
        stmt = select(UserORM).where(UserORM.id == user_id.value)
        if for_update:
            stmt = stmt.with_for_update()
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: Email) -> User | None:
        stmt = select(UserORM).where(UserORM.email == email.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all(self, offset: int, limit: int) -> Page[User]:
        """Users ordered by creation time, oldest first."""
        total = self.db.execute(select(func.count()).select_from(UserORM)).scalar() or 0
        stmt = (
            select(UserORM)
            .order_by(UserORM.created_at, UserORM.id)
            .offset(offset)
            .limit(limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return Page(items=[self.mapper.to_domain(orm) for orm in orm_models], total=total)

    def save(self, user: User) -> User:
        """
        Insert or update a user keyed by its id.

        Raises:
            EmailAlreadyExistsError: If another user already has the email
        """
        orm_model = self.db.get(UserORM, user.id.value)
        is_new = orm_model is None
        orm_model = self.mapper.to_orm(user, orm_model)
        if is_new:
            self.db.add(orm_model)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            message = str(e.orig).lower()
            if "unique" in message and "email" in message:
                raise EmailAlreadyExistsError(user.email.value) from e
            raise
        self.db.refresh(orm_model)
        logger.info(f"{'Created' if is_new else 'Updated'} user {user.id}")
        return self.mapper.to_domain(orm_model)

    def delete(self, user_id: UserId) -> bool:
        """
        Delete a user.

        Returns:
            True if deleted, False if not found
        """
        orm_model = self.db.get(UserORM, user_id.value)
        if not orm_model:
            return False
        self.db.delete(orm_model)
        self.db.commit()
        return True
