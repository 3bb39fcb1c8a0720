"""Mapper for MatchingRequest ORM ↔ Domain conversion."""

from decimal import Decimal

from edtech.domain.common.value_objects import MatchingRequestId, TutorId, UserId
from edtech.domain.matching.entities.matching_request import MatchingRequest
from edtech.domain.matching.value_objects import ExperienceLevel, MatchingRequestStatus, Subject
from edtech.infrastructure.common.timestamps import ensure_utc
from edtech.models import MatchingRequest as MatchingRequestORM


class MatchingRequestMapper:
    def to_domain(self, orm_model: MatchingRequestORM) -> MatchingRequest:
        level = orm_model.preferred_experience_level
        return MatchingRequest.create_with_id(
            id=MatchingRequestId(orm_model.id),
            student_id=UserId(orm_model.student_id),
            subject=Subject(orm_model.subject),
            status=MatchingRequestStatus(orm_model.status),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            expires_at=ensure_utc(orm_model.expires_at),
            preferred_experience_level=ExperienceLevel(level) if level else None,
            max_hourly_rate=(
                Decimal(orm_model.max_hourly_rate)
                if orm_model.max_hourly_rate is not None
                else None
            ),
            preferred_languages=tuple(orm_model.preferred_languages or ()),
            description=orm_model.description,
            matched_tutor_id=(
                TutorId(orm_model.matched_tutor_id) if orm_model.matched_tutor_id else None
            ),
        )

    def to_orm(
        self, domain_entity: MatchingRequest, orm_model: MatchingRequestORM | None = None
    ) -> MatchingRequestORM:
        if orm_model is None:
            orm_model = MatchingRequestORM(id=domain_entity.id.value)
        level = domain_entity.preferred_experience_level
        orm_model.student_id = domain_entity.student_id.value
        orm_model.subject = domain_entity.subject.value
        orm_model.preferred_experience_level = level.value if level else None
        orm_model.max_hourly_rate = domain_entity.max_hourly_rate
        orm_model.preferred_languages = list(domain_entity.preferred_languages)
        orm_model.description = domain_entity.description
        orm_model.status = domain_entity.status.value
        orm_model.matched_tutor_id = (
            domain_entity.matched_tutor_id.value if domain_entity.matched_tutor_id else None
        )
        orm_model.created_at = domain_entity.created_at
        orm_model.updated_at = domain_entity.updated_at
        orm_model.expires_at = domain_entity.expires_at
        return orm_model
