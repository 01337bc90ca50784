"""Before/after hook chain wrapped around every evaluation."""

import inspect
from typing import Any, Awaitable, Callable, List, Optional, Union

from bouncer.policies.base_policy import ActionResponse, AuthorizationResult

MaybeResponse = Union[Optional[ActionResponse], Awaitable[Optional[ActionResponse]]]

# before(user, action, *args) and after(user, action, result, *args)
BeforeHookHandler = Callable[..., MaybeResponse]
AfterHookHandler = Callable[..., MaybeResponse]


async def call_handler(handler: Callable, *args: Any) -> Any:
    """Call a sync or async callable and return its awaited result."""
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class HookChain:
    """Ordered before and after hooks."""

    def __init__(
        self,
        before: Optional[List[BeforeHookHandler]] = None,
        after: Optional[List[AfterHookHandler]] = None,
    ):
        self.before: List[BeforeHookHandler] = list(before or [])
        self.after: List[AfterHookHandler] = list(after or [])

    def add_before(self, callback: BeforeHookHandler) -> None:
        if not callable(callback):
            raise TypeError(f"Before hook must be callable, got {callback!r}")
        self.before.append(callback)

    def add_after(self, callback: AfterHookHandler) -> None:
        if not callable(callback):
            raise TypeError(f"After hook must be callable, got {callback!r}")
        self.after.append(callback)

    def extended(
        self,
        before: Optional[BeforeHookHandler] = None,
        after: Optional[AfterHookHandler] = None,
    ) -> "HookChain":
        """
        Copy of the chain with extra hooks closest to the handler.

        The extra before hook runs last among the before hooks and the extra
        after hook runs first among the after hooks.
        """
        return HookChain(
            before=self.before + ([before] if before else []),
            after=([after] if after else []) + self.after,
        )

    async def run_before(self, user: Any, action: str, *args: Any) -> Optional[ActionResponse]:
        """Run before hooks in order; the first response short-circuits."""
        for hook in self.before:
            response = await call_handler(hook, user, action, *args)
            if response is not None:
                return response
        return None

    async def run_after(
        self,
        user: Any,
        action: str,
        result: AuthorizationResult,
        *args: Any,
        normalize: Callable[[Any], AuthorizationResult],
    ) -> AuthorizationResult:
        """Run after hooks in order; every response replaces the verdict."""
        for hook in self.after:
            response = await call_handler(hook, user, action, result, *args)
            if response is not None:
                result = normalize(response)
        return result

    def __len__(self) -> int:
        return len(self.before) + len(self.after)
