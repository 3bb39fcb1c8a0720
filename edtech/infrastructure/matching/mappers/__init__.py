from .matching_request_mapper import MatchingRequestMapper
from .tutor_mapper import TutorMapper

__all__ = ["MatchingRequestMapper", "TutorMapper"]
