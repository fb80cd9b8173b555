"""Per-scan instance resolution for tool-owning classes."""

import logging
from typing import Any

from toolscout.tools.exceptions import InstanceResolutionError
from toolscout.tools.services import ServiceProvider

logger = logging.getLogger(__name__)


class InstanceResolver:
    """Obtains at most one instance per class for a single scan pass.

    A resolver is created for each pass and discarded afterwards. Failures
    are remembered too, so a class whose construction fails is attempted only
    once per pass.

    Attributes:
        resolution_count: Number of resolution attempts made in this pass.
    """

    def __init__(self, services: ServiceProvider) -> None:
        self._services = services
        self._instances: dict[type, Any] = {}
        self._failures: dict[type, InstanceResolutionError] = {}
        self.resolution_count = 0

    def resolve(self, owner: type) -> Any:
        """Return the instance for a class, resolving it on first request.

        Prefers an instance registered with the service provider and falls
        back to dependency-resolved construction.

        Raises:
            InstanceResolutionError: If the class cannot be resolved.
        """
        if owner in self._instances:
            return self._instances[owner]
        if owner in self._failures:
            raise self._failures[owner]

        self.resolution_count += 1
        try:
            instance = self._services.lookup(owner)
            if instance is None:
                instance = self._services.resolve_or_create(owner)
        except InstanceResolutionError as e:
            self._failures[owner] = e
            raise

        logger.debug(f"Resolved tool instance for {owner.__qualname__}")
        self._instances[owner] = instance
        return instance
