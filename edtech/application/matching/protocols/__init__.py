from .matching_request_repository import MatchingRequestRepositoryProtocol
from .tutor_repository import TutorRepositoryProtocol

__all__ = ["MatchingRequestRepositoryProtocol", "TutorRepositoryProtocol"]
