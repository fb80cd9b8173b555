"""Tool providers: the registry surface handed to orchestrators.

DeclaredToolProvider scans modules for @tool declarations. CachedToolProvider
memoizes another provider's list. ToolCatalog is an explicit registration
table for tools that are not discovered by scanning.
"""

import logging
from collections.abc import Callable, Sequence
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

from toolscout.tools.builder import ToolDescriptor, build_descriptor, create_descriptor
from toolscout.tools.declaration import ToolDeclaration
from toolscout.tools.exceptions import InstanceResolutionError
from toolscout.tools.modules import enumerate_modules
from toolscout.tools.resolver import InstanceResolver
from toolscout.tools.scanner import scan_module
from toolscout.tools.services import ServiceProvider
from toolscout.tools.types import ParameterSpec, ReturnSpec

logger = logging.getLogger(__name__)


@runtime_checkable
class ToolProvider(Protocol):
    """Anything that can list tool descriptors."""

    def get_tools(self) -> list[ToolDescriptor]: ...


class DeclaredToolProvider:
    """Discovers tools declared with @tool across a set of modules.

    Each call to get_tools() is a full scan pass: modules are enumerated and
    scanned, each owning class is resolved at most once, and a fresh
    descriptor list is returned. Tool names are not deduplicated.

    Attributes:
        services: Dependency lookup used to obtain tool instances.
        modules: Explicit modules to scan. Empty or None scans every loaded
            module.
        fail_on_resolution_error: When True, an instance resolution failure
            aborts get_tools(). When False the failing class's instance methods
            are skipped and the rest of the registry is returned.
    """

    def __init__(
        self,
        services: ServiceProvider | None = None,
        modules: Sequence[ModuleType] | None = None,
        fail_on_resolution_error: bool = False,
    ) -> None:
        self.services = services or ServiceProvider()
        self.modules = list(modules) if modules else []
        self.fail_on_resolution_error = fail_on_resolution_error
        self.last_resolution_count = 0

    def get_tools(self) -> list[ToolDescriptor]:
        """Scan modules and build a descriptor for every declared tool.

        Returns:
            Descriptors in module, class, then method encounter order.

        Raises:
            InstanceResolutionError: If fail_on_resolution_error is set and a
                tool-owning class cannot be resolved.
        """
        resolver = InstanceResolver(self.services)
        tools: list[ToolDescriptor] = []
        skipped = 0

        for module in enumerate_modules(self.modules):
            for candidate in scan_module(module):
                target: Any = None
                if not candidate.is_static and candidate.owner is not None:
                    try:
                        target = resolver.resolve(candidate.owner)
                    except InstanceResolutionError as e:
                        if self.fail_on_resolution_error:
                            logger.error(f"Failed to resolve tool instance: {e}")
                            raise
                        logger.warning(f"Skipping tool {candidate.qualified_name}: {e}")
                        skipped += 1
                        continue

                tools.append(build_descriptor(candidate, target))

        self.last_resolution_count = resolver.resolution_count
        logger.info(
            f"Discovered {len(tools)} tools "
            f"({resolver.resolution_count} instances resolved, {skipped} skipped)"
        )
        return tools


class CachedToolProvider:
    """Memoizes the descriptor list of another provider.

    Wrapping a DeclaredToolProvider avoids re-running instance resolution,
    and the constructor side effects that come with it, on every call.
    """

    def __init__(self, inner: ToolProvider) -> None:
        self.inner = inner
        self._tools: list[ToolDescriptor] | None = None

    @property
    def is_loaded(self) -> bool:
        return self._tools is not None

    def get_tools(self) -> list[ToolDescriptor]:
        if self._tools is None:
            self._tools = self.inner.get_tools()
        return list(self._tools)

    def invalidate(self) -> None:
        """Drop the cached list so the next call rebuilds it."""
        self._tools = None
        logger.debug("Tool cache invalidated")


class ToolCatalog:
    """Explicit registration table of tools.

    Composition code registers each tool with its documentation parts; the
    resulting descriptors match those produced by scanning.
    """

    def __init__(self) -> None:
        self._tools: list[ToolDescriptor] = []

    def register(
        self,
        name: str,
        description: str | None,
        parameters: Sequence[ParameterSpec],
        returns: ReturnSpec,
        invoker: Callable[..., Any],
        on_failure: str | None = None,
    ) -> ToolDescriptor:
        """Register a tool and return its descriptor.

        Raises:
            ValueError: If the name is blank.
        """
        if not name or not name.strip():
            raise ValueError("Tool name cannot be empty")

        descriptor = create_descriptor(
            name=name.strip(),
            declaration=ToolDeclaration(
                name=name, description=description, on_failure=on_failure
            ),
            parameters=parameters,
            returns=returns,
            target=invoker,
            source=getattr(invoker, "__qualname__", name),
        )
        self._tools.append(descriptor)
        logger.debug(f"Registered tool {descriptor.name}")
        return descriptor

    def get_tools(self) -> list[ToolDescriptor]:
        return list(self._tools)


def get_registered_tools(services: ServiceProvider) -> list[ToolDescriptor]:
    """Return the tools of the provider registered in a service provider.

    Raises:
        LookupError: If no ToolProvider is registered.
    """
    provider = services.lookup(ToolProvider)
    if provider is None:
        raise LookupError("No ToolProvider is registered")
    return provider.get_tools()
