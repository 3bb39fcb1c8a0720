"""Request-level FastAPI dependencies shared by all routers."""

from typing import Annotated

from fastapi import Depends, Header

from edtech.exceptions import MissingActorError


def get_actor_id(
    x_actor_id: Annotated[str | None, Header(alias="X-Actor-Id")] = None,
) -> str:
    """Return the acting user's identifier from the ``X-Actor-Id`` header."""
    if x_actor_id is None or not x_actor_id.strip():
        raise MissingActorError()
    return x_actor_id.strip()


ActorId = Annotated[str, Depends(get_actor_id)]
