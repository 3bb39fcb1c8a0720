from .in_memory_matching_request_repository import InMemoryMatchingRequestRepository
from .in_memory_tutor_repository import InMemoryTutorRepository
from .matching_request_repository import MatchingRequestRepository
from .tutor_repository import TutorRepository

__all__ = [
    "InMemoryMatchingRequestRepository",
    "InMemoryTutorRepository",
    "MatchingRequestRepository",
    "TutorRepository",
]
