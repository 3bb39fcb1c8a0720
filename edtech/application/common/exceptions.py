"""Application layer exceptions."""


class PublishError(Exception):
    """
    Raised by an event sink when an event could not be delivered.

    Sinks wrap transport failures in this so the dispatcher knows the
    attempt may be retried.
    """

    def __init__(self, event_type: str, reason: str) -> None:
        self.event_type = event_type
        self.reason = reason
        super().__init__(f"Failed to publish {event_type}: {reason}")
