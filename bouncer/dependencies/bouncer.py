"""Bouncer dependencies for FastAPI."""

from typing import Any

from fastapi import Depends, Request

from bouncer.services.authorizer import ActionsAuthorizer
from bouncer.services.bouncer import Bouncer


def get_bouncer(request: Request) -> Bouncer:
    """Get the bouncer registered on the application."""
    bouncer = getattr(request.app.state, "bouncer", None)
    if bouncer is None:
        raise RuntimeError("No bouncer registered on the application. Call register_bouncer(app, bouncer)")
    return bouncer


def get_current_user(request: Request) -> Any | None:
    """Get the user set on the request by the authentication layer, ``None`` for guests."""
    return getattr(request.state, "user", None)


def get_authorizer(
    request: Request,
    bouncer: Bouncer = Depends(get_bouncer),
    user: Any | None = Depends(get_current_user),
) -> ActionsAuthorizer:
    """Get an authorizer for the current user, profiled with the request profiler."""
    authorizer = bouncer.for_user(user)
    authorizer.set_profiler(getattr(request.state, "profiler", None))
    return authorizer
