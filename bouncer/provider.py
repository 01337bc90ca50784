"""Wires a bouncer into a FastAPI application."""

import logging
from typing import Any

from bouncer.middleware.exception_handler import register_exception_handlers
from bouncer.middleware.profiler_middleware import ProfilerMiddleware
from bouncer.services.bouncer import Bouncer

logger = logging.getLogger(__name__)


def register_bouncer(app: Any, bouncer: Bouncer, *, profile: bool = False) -> Bouncer:
    """
    Register a bouncer on a FastAPI app.

    Stores it on ``app.state.bouncer`` for the dependencies, registers the
    exception handlers and, with ``profile=True``, the profiler middleware.
    Must be called before the application starts.
    """
    app.state.bouncer = bouncer
    register_exception_handlers(app)

    if profile:
        app.add_middleware(
            ProfilerMiddleware,
            slow_span_threshold=bouncer.settings.SLOW_SPAN_THRESHOLD,
        )

    logging.getLogger("bouncer").setLevel(bouncer.settings.LOG_LEVEL)

    logger.info(
        "Bouncer registered",
        extra={
            "event": "bouncer_registered",
            "actions": list(bouncer.actions),
            "policies": bouncer.policies.names,
            "profile": profile,
        },
    )
    return bouncer
