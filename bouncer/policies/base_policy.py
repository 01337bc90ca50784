"""Base policy classes and types."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Union

from bouncer.constants.status_codes import AuthStatus, is_error_status
from bouncer.utils.exceptions import InvalidActionResponseError

# What an action handler or a hook may return: allow/deny or a deny reason
ActionResponse = Union[bool, Tuple[str], Tuple[str, int]]

DEFAULT_DENY_MESSAGE = "E_AUTHORIZATION_FAILURE: Not authorized to perform this action"

ACTION_OPTIONS_ATTR = "__bouncer_action_options__"


@dataclass(frozen=True)
class ActionOptions:
    """Options attached to an action."""

    allow_guest: bool = False


@dataclass(frozen=True)
class AuthorizationResult:
    """Normalized verdict of one evaluation."""

    authorized: bool
    error_response: Optional[Tuple[str, int]] = None

    def __post_init__(self):
        if self.authorized and self.error_response is not None:
            raise ValueError("An authorized result cannot carry an error response")
        if not self.authorized and self.error_response is None:
            raise ValueError("An unauthorized result must carry an error response")

    @classmethod
    def allow(cls) -> "AuthorizationResult":
        """Create an allow result."""
        return cls(authorized=True, error_response=None)

    @classmethod
    def deny(
        cls,
        message: str = DEFAULT_DENY_MESSAGE,
        status: int = AuthStatus.ACCESS_DENIED,
    ) -> "AuthorizationResult":
        """Create a deny result."""
        return cls(authorized=False, error_response=(message, int(status)))

    @classmethod
    def from_response(
        cls,
        response: Any,
        default_message: str = DEFAULT_DENY_MESSAGE,
        default_status: int = AuthStatus.ACCESS_DENIED,
    ) -> "AuthorizationResult":
        """
        Normalize an action response into a verdict.

        ``True`` allows. ``False`` denies with the defaults. ``(message,)``
        denies with the default status and ``(message, status)`` denies with
        both given. Statuses outside 4xx and 5xx are rejected.
        """
        if isinstance(response, bool):
            if response:
                return cls.allow()
            return cls.deny(default_message, default_status)

        if isinstance(response, (tuple, list)) and len(response) in (1, 2):
            message = response[0]
            status = response[1] if len(response) == 2 else default_status
            if status is None:
                status = default_status

            if (
                isinstance(message, str)
                and isinstance(status, int)
                and not isinstance(status, bool)
                and is_error_status(status)
            ):
                return cls.deny(message, status)

        raise InvalidActionResponseError(response)


def deny(message: str, status: Optional[int] = None) -> Union[Tuple[str], Tuple[str, int]]:
    """
    Deny an authorization check with a custom message and an optional status.

    Without a status the bouncer's configured default deny status applies.
    """
    if status is None:
        return (message,)
    if not is_error_status(status):
        raise ValueError(f"Deny status must be a 4xx or 5xx code, got {status}")
    return (message, int(status))


def action(*, allow_guest: bool = False) -> Callable:
    """
    Declare options for a policy action.

    Usage:
        class PostPolicy(BasePolicy):
            @action(allow_guest=True)
            def view(self, user, post):
                return post.is_published
    """
    options = ActionOptions(allow_guest=allow_guest)

    def decorator(func: Callable) -> Callable:
        setattr(func, ACTION_OPTIONS_ATTR, options)
        return func

    return decorator


class BasePolicy:
    """Base class for all policies.

    Every public method of a subclass is an action. ``before`` and ``after``
    are optional policy-wide hooks.
    """

    actions_options: ClassVar[Dict[str, ActionOptions]] = {}
    booted: ClassVar[bool] = False

    # Names that are part of the policy lifecycle and never resolvable as actions
    reserved_names: ClassVar[frozenset] = frozenset(
        {
            "boot",
            "before",
            "after",
            "store_action_options",
            "has_action",
            "options_for",
            "actions_options",
            "booted",
            "reserved_names",
        }
    )

    @classmethod
    def boot(cls) -> None:
        """Collect ``@action`` declarations. Runs once per class."""
        # Checked on the class itself so a booted parent does not boot its children
        if cls.__dict__.get("booted", False):
            return

        options: Dict[str, ActionOptions] = {}
        for klass in reversed(cls.__mro__):
            for name, member in vars(klass).items():
                declared = getattr(member, ACTION_OPTIONS_ATTR, None)
                if declared is not None:
                    options[name] = declared
                elif name in options and callable(member):
                    del options[name]

        cls.actions_options = options
        cls.booted = True

    @classmethod
    def store_action_options(cls, name: str, options: Optional[ActionOptions] = None) -> type:
        """Store options for a given action."""
        cls.boot()
        cls.actions_options[name] = options or ActionOptions()
        return cls

    @classmethod
    def has_action(cls, name: str) -> bool:
        """Check if the policy exposes an action with this name."""
        if not name or name.startswith("_") or name in cls.reserved_names:
            return False

        # Only functions declared on policy classes, never metaclass or object members
        for klass in cls.__mro__:
            if klass in (BasePolicy, object):
                continue
            if name in vars(klass):
                return inspect.isfunction(vars(klass)[name])
        return False

    @classmethod
    def options_for(cls, name: str) -> ActionOptions:
        """Get the options of an action, defaulting to no options."""
        cls.boot()
        return cls.actions_options.get(name, ActionOptions())

    async def before(self, user: Any, action: str, *args: Any) -> Optional[ActionResponse]:
        """Called before any action. Return a response to short-circuit, ``None`` to continue."""
        return None

    async def after(self, user: Any, action: str, result: AuthorizationResult, *args: Any) -> Optional[ActionResponse]:
        """Called after any action. Return a response to override the verdict."""
        return None
