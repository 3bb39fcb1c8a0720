from edtech.infrastructure.matching.routers import matching_requests, tutors

__all__ = ["matching_requests", "tutors"]
