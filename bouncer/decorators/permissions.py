"""Authorization decorators for route protection."""

import functools
from collections.abc import Callable

from bouncer.services.authorizer import ActionsAuthorizer


def authorize(action: str, *resource_params: str, policy: str | None = None):
    """
    Decorator running ``authorize`` before the route body.

    Args:
        action: The action to authorize
        resource_params: Names of route parameters passed to the action, in order
        policy: Optional policy name to scope the action to

    The route must receive the authorizer through ``Depends(get_authorizer)``.

    Usage:
        @router.put("/posts/{post_id}")
        @authorize("update", "post", policy="post")
        async def update_post(
            post_id: int,
            post: Post = Depends(load_post),
            bouncer: ActionsAuthorizer = Depends(get_authorizer),
        ):
            ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            # Find the authorizer in kwargs
            authorizer = None
            for value in kwargs.values():
                if isinstance(value, ActionsAuthorizer):
                    authorizer = value
                    break

            if authorizer is None:
                raise RuntimeError(
                    f'Route "{func.__name__}" must depend on get_authorizer to use @authorize'
                )

            missing = [name for name in resource_params if name not in kwargs]
            if missing:
                raise RuntimeError(
                    f'Route "{func.__name__}" has no parameters named {", ".join(missing)}'
                )

            if policy:
                authorizer = authorizer.with_policy(policy)

            await authorizer.authorize(action, *(kwargs[name] for name in resource_params))

            return await func(*args, **kwargs)

        return wrapper

    return decorator
