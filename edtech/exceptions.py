"""Infrastructure error hierarchy for the HTTP surface."""

from starlette import status


class EdtechError(Exception):
    """Base exception for errors raised outside the domain layer."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class MissingActorError(EdtechError):
    """A mutating request arrived without an X-Actor-Id header."""

    def __init__(self) -> None:
        super().__init__("X-Actor-Id header is required", status_code=status.HTTP_400_BAD_REQUEST)
