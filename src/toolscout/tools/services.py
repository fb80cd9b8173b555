"""Dependency lookup and construction for tool-owning classes.

The ServiceProvider is filled at the composition root with instances and
factories. Classes nobody registered are constructed by resolving their
annotated constructor parameters through the same provider.
"""

import inspect
import logging
import typing
from collections.abc import Callable
from typing import Any, TypeVar

from toolscout.tools.exceptions import InstanceResolutionError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Factory = Callable[["ServiceProvider"], Any]


class ServiceProvider:
    """Registry of instances and factories keyed by type.

    Registered instances behave as singletons. Registered factories are
    called on every lookup, so each lookup yields a fresh object.
    """

    def __init__(self) -> None:
        self._instances: dict[type, Any] = {}
        self._factories: dict[type, Factory] = {}

    def register_instance(self, service_type: type[T], instance: T) -> None:
        """Register an existing instance for a type."""
        self._instances[service_type] = instance
        logger.debug(f"Registered instance for {service_type.__qualname__}")

    def register_factory(
        self, service_type: type[T], factory: Callable[["ServiceProvider"], T]
    ) -> None:
        """Register a factory that builds instances of a type.

        Args:
            service_type: The type the factory provides.
            factory: Callable receiving this provider and returning an instance.
        """
        self._factories[service_type] = factory
        logger.debug(f"Registered factory for {service_type.__qualname__}")

    def is_registered(self, service_type: type) -> bool:
        return (
            service_type is ServiceProvider
            or service_type in self._instances
            or service_type in self._factories
        )

    def lookup(self, service_type: type[T]) -> T | None:
        """Return a registered instance for a type, or None.

        Raises:
            InstanceResolutionError: If a registered factory fails.
        """
        if service_type is ServiceProvider:
            return typing.cast(T, self)
        if service_type in self._instances:
            return self._instances[service_type]
        factory = self._factories.get(service_type)
        if factory is None:
            return None
        try:
            return factory(self)
        except Exception as e:
            raise InstanceResolutionError(
                service_type,
                f"Factory for {service_type.__qualname__} failed: {e}",
            ) from e

    def resolve_or_create(self, service_type: type[T]) -> T:
        """Return a registered instance, or construct one.

        Constructor parameters are resolved recursively by their type
        annotations. A parameter that cannot be resolved falls back to its
        default value.

        Raises:
            InstanceResolutionError: If the type or one of its dependencies
                cannot be resolved or its constructor raises.
        """
        return self._resolve(service_type, ())

    def _resolve(self, service_type: type[T], chain: tuple[type, ...]) -> T:
        instance = self.lookup(service_type)
        if instance is not None:
            return instance
        return self._construct(service_type, chain)

    def _construct(self, service_type: type[T], chain: tuple[type, ...]) -> T:
        name = service_type.__qualname__
        if service_type in chain:
            cycle = " -> ".join(t.__qualname__ for t in (*chain, service_type))
            raise InstanceResolutionError(service_type, f"Circular dependency: {cycle}")

        if inspect.isabstract(service_type):
            raise InstanceResolutionError(
                service_type, f"Cannot construct abstract class {name}"
            )

        try:
            signature = inspect.signature(service_type)
        except (TypeError, ValueError) as e:
            raise InstanceResolutionError(
                service_type, f"Cannot inspect constructor of {name}: {e}"
            ) from e

        try:
            hints = typing.get_type_hints(service_type.__init__)
        except Exception:
            hints = {}

        kwargs: dict[str, Any] = {}
        for param in signature.parameters.values():
            if param.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue

            dependency = hints.get(param.name, param.annotation)
            has_default = param.default is not inspect.Parameter.empty

            if self._is_constructible(dependency):
                if self.is_registered(dependency) or not has_default:
                    kwargs[param.name] = self._resolve(dependency, (*chain, service_type))
                continue

            if has_default:
                continue

            raise InstanceResolutionError(
                service_type,
                f"Cannot resolve parameter '{param.name}' of {name}: "
                f"no registration for {dependency!r}",
            )

        try:
            instance = service_type(**kwargs)
        except Exception as e:
            raise InstanceResolutionError(
                service_type, f"Constructor of {name} raised: {e}"
            ) from e

        logger.debug(f"Constructed {name} with dependencies {sorted(kwargs)}")
        return instance

    def _is_constructible(self, dependency: Any) -> bool:
        if not isinstance(dependency, type):
            return False
        if self.is_registered(dependency):
            return True
        # Builtins such as str or int are configuration, not services
        return dependency.__module__ != "builtins"
