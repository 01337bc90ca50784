"""Lazily resolved policy registry."""

import asyncio
import importlib
import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Type, Union

from bouncer.utils.exceptions import InvalidPolicyError, PolicyNotFoundError

from .base_policy import BasePolicy

logger = logging.getLogger(__name__)

# A policy class, an import string ("package.module:PolicyClass") or a
# zero-argument callable (sync or async) returning a policy class
PolicyLoader = Union[str, Type[BasePolicy], Callable[[], Any]]


def import_string(path: str) -> Any:
    """
    Import an object from a dotted path.

    Both "package.module:Name" and "package.module.Name" are accepted.
    """
    if ":" in path:
        module_path, _, attribute = path.partition(":")
    else:
        module_path, _, attribute = path.rpartition(".")

    if not module_path or not attribute:
        raise InvalidPolicyError(f'Invalid policy import path "{path}"')

    module = importlib.import_module(module_path)
    try:
        return getattr(module, attribute)
    except AttributeError:
        raise InvalidPolicyError(f'Module "{module_path}" does not define "{attribute}"') from None


class PolicyRegistry:
    """Holds policy loaders and caches booted policy instances.

    A policy is loaded, booted and instantiated at most once. Concurrent
    first uses of the same policy wait for the one in-flight resolution.
    """

    def __init__(self, policies: Mapping[str, PolicyLoader] | None = None):
        self._loaders: Dict[str, PolicyLoader] = {}
        self._resolved: Dict[str, BasePolicy] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        if policies:
            self.register(policies)

    def register(self, policies: Mapping[str, PolicyLoader]) -> None:
        """Replace the whole policy set."""
        self._loaders = dict(policies)
        self._resolved = {}
        self._locks = {}
        logger.debug("Policies registered", extra={"policies": list(self._loaders)})

    @property
    def names(self) -> list[str]:
        return list(self._loaders)

    def __contains__(self, name: object) -> bool:
        return name in self._loaders

    def is_resolved(self, name: str) -> bool:
        return name in self._resolved

    async def resolve(self, name: str) -> BasePolicy:
        """Get the booted instance of a policy, loading it on first use."""
        policy = self._resolved.get(name)
        if policy is not None:
            return policy

        if name not in self._loaders:
            raise PolicyNotFoundError(name)

        lock = self._locks.setdefault(name, asyncio.Lock())
        async with lock:
            # Another caller may have finished while we waited
            policy = self._resolved.get(name)
            if policy is not None:
                return policy

            policy = await self._load(name)
            self._resolved[name] = policy

        self._locks.pop(name, None)
        return policy

    async def _load(self, name: str) -> BasePolicy:
        loader = self._loaders[name]

        if isinstance(loader, str):
            policy_class = import_string(loader)
        elif inspect.isclass(loader):
            policy_class = loader
        elif callable(loader):
            policy_class = loader()
            if inspect.isawaitable(policy_class):
                policy_class = await policy_class
        else:
            raise InvalidPolicyError(f'Invalid loader for "{name}" policy: {loader!r}')

        if not (inspect.isclass(policy_class) and issubclass(policy_class, BasePolicy)):
            raise InvalidPolicyError(
                f'"{name}" policy must resolve to a BasePolicy subclass, got {policy_class!r}'
            )

        policy_class.boot()
        policy = policy_class()

        logger.info(
            f"Policy resolved: {name}",
            extra={
                "event": "policy_resolved",
                "policy": name,
                "policy_class": policy_class.__qualname__,
                "actions_options": sorted(policy_class.actions_options),
            },
        )
        return policy
