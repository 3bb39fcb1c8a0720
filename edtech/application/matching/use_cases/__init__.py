from .change_tutor_status_use_case import ChangeTutorStatusUseCase
from .create_matching_request_use_case import CreateMatchingRequestUseCase
from .create_tutor_use_case import CreateTutorUseCase
from .matching_request_query_use_case import MatchingRequestQueryUseCase
from .matching_request_use_case import MatchingRequestUseCase
from .tutor_activity_use_case import TutorActivityUseCase
from .tutor_query_use_case import TutorQueryUseCase, TutorStanding
from .update_tutor_profile_use_case import UpdateTutorProfileUseCase

__all__ = [
    "ChangeTutorStatusUseCase",
    "CreateMatchingRequestUseCase",
    "CreateTutorUseCase",
    "MatchingRequestQueryUseCase",
    "MatchingRequestUseCase",
    "TutorActivityUseCase",
    "TutorQueryUseCase",
    "TutorStanding",
    "UpdateTutorProfileUseCase",
]
