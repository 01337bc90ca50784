"""Per-user authorizers evaluating actions and policy actions."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from bouncer.policies.base_policy import ActionOptions, AuthorizationResult
from bouncer.utils.exceptions import ActionNotFoundError, AuthorizationError, PolicyNotFoundError
from bouncer.utils.profiler import Profiler, profile

from .hooks import HookChain, call_handler

if TYPE_CHECKING:
    from .bouncer import Bouncer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedAction:
    """Everything needed to run one action."""

    name: str
    handler: Callable[..., Any]
    options: ActionOptions
    hooks: HookChain
    policy: Optional[str] = None


class BaseAuthorizer(ABC):
    """Evaluation shared by action and policy authorizers.

    An evaluation runs the before hooks, then the action handler (unless a
    hook answered or a guest is not allowed), then the after hooks.
    """

    policy_name: Optional[str] = None

    def __init__(self, bouncer: "Bouncer", user: Any, profiler: Optional[Profiler] = None):
        self._bouncer = bouncer
        self._user = user
        self.profiler = profiler

    @property
    def bouncer(self) -> "Bouncer":
        return self._bouncer

    @property
    def user(self) -> Any:
        return self._user

    def set_profiler(self, profiler: Optional[Profiler] = None) -> "BaseAuthorizer":
        """Set the profiler used to record evaluations."""
        self.profiler = profiler
        return self

    @abstractmethod
    async def _resolve_action(self, action: str) -> ResolvedAction:
        """Find the handler, options and hooks for an action name."""
        pass

    async def evaluate(self, action: str, *args: Any) -> AuthorizationResult:
        """Run one evaluation and return its verdict."""
        span_data = {"action": action, "policy": self.policy_name}
        with profile(self.profiler, f"Authorizing {action}", span_data):
            target = await self._resolve_action(action)
            result = await self._run(target, args)

        if self._bouncer.settings.LOG_DECISIONS:
            self._log_decision(target, result)

        return result

    async def _run(self, target: ResolvedAction, args: tuple) -> AuthorizationResult:
        bouncer = self._bouncer

        response = await target.hooks.run_before(self._user, target.name, *args)
        if response is not None:
            result = bouncer.normalize(response)
        elif self._user is None and not target.options.allow_guest:
            result = bouncer.guest_denied()
        else:
            result = bouncer.normalize(await call_handler(target.handler, self._user, *args))

        return await target.hooks.run_after(
            self._user, target.name, result, *args, normalize=bouncer.normalize
        )

    async def allows(self, action: str, *args: Any) -> bool:
        """Find if the user is allowed to perform the action."""
        result = await self.evaluate(action, *args)
        return result.authorized

    async def denies(self, action: str, *args: Any) -> bool:
        """Find if the user is not allowed to perform the action."""
        result = await self.evaluate(action, *args)
        return not result.authorized

    async def authorize(self, action: str, *args: Any) -> None:
        """Authorize the user for the action, raising AuthorizationError on deny."""
        result = await self.evaluate(action, *args)
        if not result.authorized:
            raise AuthorizationError.from_result(
                result,
                details={"action": action, "policy": self.policy_name},
            )

    def _log_decision(self, target: ResolvedAction, result: AuthorizationResult) -> None:
        log_data = {
            "event": "authorization_decision",
            "action": target.name,
            "policy": target.policy,
            "user_id": getattr(self._user, "id", None),
            "guest": self._user is None,
            "authorized": result.authorized,
        }
        if result.authorized:
            logger.debug(f"Authorization allowed: {target.name}", extra=log_data)
        else:
            log_data["error_response"] = result.error_response
            logger.debug(f"Authorization denied: {target.name}", extra=log_data)


class ActionsAuthorizer(BaseAuthorizer):
    """Authorizes actions defined on the bouncer for one user."""

    def for_user(self, user: Any) -> "ActionsAuthorizer":
        """Get an authorizer for another user."""
        return ActionsAuthorizer(self._bouncer, user, self.profiler)

    def with_policy(self, policy: str) -> "PoliciesAuthorizer":
        """Use a policy for authorization."""
        if policy not in self._bouncer.policies:
            raise PolicyNotFoundError(policy)
        return PoliciesAuthorizer(self._bouncer, self._user, policy, self.profiler)

    async def _resolve_action(self, action: str) -> ResolvedAction:
        definition = self._bouncer.actions.get(action)
        if definition is None:
            raise ActionNotFoundError(action)

        return ResolvedAction(
            name=action,
            handler=definition.handler,
            options=definition.options,
            hooks=self._bouncer.hooks,
        )


class PoliciesAuthorizer(BaseAuthorizer):
    """Authorizes the actions of one policy for one user."""

    def __init__(
        self,
        bouncer: "Bouncer",
        user: Any,
        policy_name: str,
        profiler: Optional[Profiler] = None,
    ):
        super().__init__(bouncer, user, profiler)
        self.policy_name = policy_name

    def for_user(self, user: Any) -> "PoliciesAuthorizer":
        """Get an authorizer for another user, scoped to the same policy."""
        return PoliciesAuthorizer(self._bouncer, user, self.policy_name, self.profiler)

    async def _resolve_action(self, action: str) -> ResolvedAction:
        policy = await self._bouncer.policies.resolve(self.policy_name)
        if not policy.has_action(action):
            raise ActionNotFoundError(action, policy=self.policy_name)

        options = policy.options_for(action)

        # Policy hooks receive the bare action name, global hooks the qualified one
        async def policy_before(user, _name, *args):
            return await call_handler(policy.before, user, action, *args)

        async def policy_after(user, _name, result, *args):
            return await call_handler(policy.after, user, action, result, *args)

        run_policy_before = self._user is not None or options.allow_guest

        return ResolvedAction(
            name=f"{self.policy_name}.{action}",
            handler=getattr(policy, action),
            options=options,
            hooks=self._bouncer.hooks.extended(
                before=policy_before if run_policy_before else None,
                after=policy_after,
            ),
            policy=self.policy_name,
        )
