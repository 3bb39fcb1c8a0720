"""API routes for user accounts."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from edtech.application.common.pagination import Pagination
from edtech.application.identity.use_cases.change_user_role_use_case import (
    ChangeUserRoleUseCase,
)
from edtech.application.identity.use_cases.change_user_status_use_case import (
    ChangeUserStatusUseCase,
)
from edtech.application.identity.use_cases.create_user_use_case import CreateUserUseCase
from edtech.application.identity.use_cases.login_attempt_use_case import LoginAttemptUseCase
from edtech.application.identity.use_cases.update_user_profile_use_case import (
    UpdateUserProfileUseCase,
)
from edtech.application.identity.use_cases.user_query_use_case import UserQueryUseCase
from edtech.core import container
from edtech.domain.common.exceptions import DomainError
from edtech.domain.identity.entities.user import User
from edtech.exceptions import EdtechError
from edtech.infrastructure.common.dependencies import ActorId
from edtech.infrastructure.common.di import inject_use_case
from edtech.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from edtech.infrastructure.identity.schemas import (
    LoginAttemptRequest,
    LoginAttemptResponse,
    RoleChangeRequest,
    StatusChangeRequest,
    TutorEligibilityResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _unexpected(action: str, err: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {err!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id.value,
        email=user.email.value,
        first_name=user.name.first_name,
        last_name=user.name.last_name,
        full_name=user.full_name,
        role=user.role.value,
        status=user.status.value,
        bio=user.bio,
        skills=list(user.skills),
        failed_login_attempts=user.failed_login_attempts,
        last_login_at=user.last_login_at,
        email_changed_at=user.email_changed_at,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    request: UserCreateRequest,
    use_case: CreateUserUseCase = Depends(inject_use_case(container.create_user_use_case)),
) -> UserResponse:
    """
    Register a new user.

    The account starts in PENDING_VERIFICATION with the STUDENT role unless
    another role is given.
    """
    try:
        user = use_case.create_user(
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            role=request.role,
            bio=request.bio,
            skills=request.skills,
        )
        return to_user_response(user)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected("create user", e) from e


@router.get("", response_model=PaginatedResponse[UserResponse])
def list_users(
    page: int = Query(1, description="Page number, starting at 1"),
    page_size: int = Query(20, description="Number of users per page"),
    use_case: UserQueryUseCase = Depends(inject_use_case(container.user_query_use_case)),
) -> PaginatedResponse[UserResponse]:
    try:
        result = use_case.list_users(Pagination(page=page, page_size=page_size))
        return PaginatedResponse[UserResponse].build(
            result, [to_user_response(user) for user in result.items]
        )
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected("list users", e) from e


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    use_case: UserQueryUseCase = Depends(inject_use_case(container.user_query_use_case)),
) -> UserResponse:
    try:
        return to_user_response(use_case.get_user(user_id))
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"get user {user_id}", e) from e


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    request: UserUpdateRequest,
    actor_id: ActorId,
    use_case: UpdateUserProfileUseCase = Depends(
        inject_use_case(container.update_user_profile_use_case)
    ),
) -> UserResponse:
    """
    Update profile fields.

    Only the provided fields are validated and applied; an update that
    changes nothing returns the user as is.
    """
    try:
        user = use_case.update_profile(
            user_id, request.model_dump(exclude_none=True), actor_id=actor_id
        )
        return to_user_response(user)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"update user {user_id}", e) from e


@router.post("/{user_id}/status", response_model=UserResponse)
def change_user_status(
    user_id: str,
    request: StatusChangeRequest,
    actor_id: ActorId,
    use_case: ChangeUserStatusUseCase = Depends(
        inject_use_case(container.change_user_status_use_case)
    ),
) -> UserResponse:
    try:
        user = use_case.change_status(user_id, request.status, actor_id=actor_id)
        return to_user_response(user)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"change status of user {user_id}", e) from e


@router.post("/{user_id}/role", response_model=UserResponse)
def change_user_role(
    user_id: str,
    request: RoleChangeRequest,
    actor_id: ActorId,
    use_case: ChangeUserRoleUseCase = Depends(
        inject_use_case(container.change_user_role_use_case)
    ),
) -> UserResponse:
    try:
        user = use_case.change_role(user_id, request.role, actor_id=actor_id)
        return to_user_response(user)
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"change role of user {user_id}", e) from e


@router.post("/{user_id}/become-tutor", response_model=UserResponse)
def become_tutor(
    user_id: str,
    actor_id: ActorId,
    use_case: ChangeUserRoleUseCase = Depends(
        inject_use_case(container.change_user_role_use_case)
    ),
) -> UserResponse:
    """Promote a student to TUTOR once the tutor requirements are met."""
    try:
        return to_user_response(use_case.become_tutor(user_id, actor_id=actor_id))
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"promote user {user_id}", e) from e


@router.post("/{user_id}/logins", response_model=LoginAttemptResponse)
def record_login_attempt(
    user_id: str,
    request: LoginAttemptRequest,
    use_case: LoginAttemptUseCase = Depends(inject_use_case(container.login_attempt_use_case)),
) -> LoginAttemptResponse:
    """
    Record the outcome of a login attempt.

    Repeated failures suspend the account; a successful login on an
    account that is not active is rejected.
    """
    try:
        if request.successful:
            result = use_case.record_success(user_id)
        else:
            result = use_case.record_failure(user_id)
        return LoginAttemptResponse(
            user=to_user_response(result.user),
            failed_attempts=result.failed_attempts,
            locked=result.locked,
        )
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"record login for user {user_id}", e) from e


@router.get("/{user_id}/tutor-eligibility", response_model=TutorEligibilityResponse)
def get_tutor_eligibility(
    user_id: str,
    use_case: UserQueryUseCase = Depends(inject_use_case(container.user_query_use_case)),
) -> TutorEligibilityResponse:
    try:
        eligibility = use_case.check_tutor_eligibility(user_id)
        return TutorEligibilityResponse(
            user_id=eligibility.user_id,
            eligible=eligibility.eligible,
            account_age_days=eligibility.account_age_days,
            profile_complete=eligibility.profile_complete,
            reasons=eligibility.reasons,
        )
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"check tutor eligibility of user {user_id}", e) from e


@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: str,
    actor_id: ActorId,
    use_case: UserQueryUseCase = Depends(inject_use_case(container.user_query_use_case)),
) -> SuccessResponse:
    try:
        use_case.delete_user(user_id)
        logger.info(f"User {user_id} deleted by {actor_id}")
        return SuccessResponse(success=True, message="User deleted successfully")
    except (DomainError, EdtechError):
        raise
    except Exception as e:
        raise _unexpected(f"delete user {user_id}", e) from e
