"""Module enumeration for tool discovery.

Provides the ordered set of modules the scanner inspects, either supplied
explicitly or taken from everything currently loaded in the interpreter.
"""

import logging
import pkgutil
import sys
from collections.abc import Iterable, Sequence
from importlib import import_module
from types import ModuleType

logger = logging.getLogger(__name__)


def _is_scannable(module: object) -> bool:
    """Check whether a loaded module is a real, named, non-dynamic module."""
    if not isinstance(module, ModuleType):
        return False
    name = getattr(module, "__name__", None)
    if not isinstance(name, str) or not name:
        return False
    if getattr(module, "__spec__", None) is not None:
        return True
    # A script run as __main__ has no spec but was loaded from a file;
    # modules fabricated at runtime via types.ModuleType() have neither
    return isinstance(getattr(module, "__file__", None), str)


def enumerate_modules(explicit: Sequence[ModuleType] | None = None) -> list[ModuleType]:
    """Return the modules to scan for tools.

    Args:
        explicit: Modules supplied by the caller. When non-empty they are
            returned verbatim in the caller's order.

    Returns:
        The explicit modules, or every loaded non-dynamic module in
        sys.modules order.
    """
    if explicit:
        return list(explicit)

    # Snapshot: scanning may import lazily and mutate sys.modules
    modules = [m for m in list(sys.modules.values()) if _is_scannable(m)]
    logger.debug(f"Enumerated {len(modules)} loaded modules for scanning")
    return modules


def discover_package_modules(package_name: str) -> list[str]:
    """List the public submodules of a package.

    Args:
        package_name: Dotted name of the package to walk.

    Returns:
        Sorted, fully qualified module names. Empty if the package cannot be
        imported or has no __path__.
    """
    try:
        package = import_module(package_name)
    except ImportError as e:
        logger.warning(f"Failed to import tool package {package_name}: {e}")
        return []

    package_path = getattr(package, "__path__", None)
    if package_path is None:
        logger.warning(f"Package {package_name} has no __path__, skipping")
        return []

    names: list[str] = []
    for module_info in pkgutil.iter_modules(list(package_path), prefix=f"{package_name}."):
        if module_info.name.rsplit(".", 1)[-1].startswith("_"):
            continue
        names.append(module_info.name)

    return sorted(names)


def import_tool_modules(
    module_names: Iterable[str] = (),
    package_names: Iterable[str] = (),
) -> list[ModuleType]:
    """Import configured tool modules.

    Each named module is imported, followed by every public submodule of each
    named package. A module that fails to import is logged and skipped so the
    remaining modules still load.

    Args:
        module_names: Dotted module names to import.
        package_names: Dotted package names whose submodules are imported.

    Returns:
        Successfully imported modules in configuration order, without
        duplicates.
    """
    names = list(module_names)
    for package_name in package_names:
        names.extend(discover_package_modules(package_name))

    modules: list[ModuleType] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        try:
            modules.append(import_module(name))
        except Exception as e:
            logger.warning(f"Failed to import tool module {name}: {e}")
            continue

    logger.info(f"Imported {len(modules)} of {len(seen)} configured tool modules")
    return modules
