"""
ServiceContainer

This module provides the runtime side of the service registry: the cache of
created service instances. While the registry describes services, the
container produces them:

- Looking up definitions in the module's registry
- Creating instances through the ServiceFactory
- Caching singleton instances (written once per name)
- Resolving tag queries to live instances

A container is created from a ready module with ``module.create_container()``.
A few infrastructure names are available from the start without any
definition behind them: ``module``, ``service_container``,
``service_registry`` and ``parameter_container``.
"""

import logging
from typing import Any, Dict, List, TYPE_CHECKING

from .definition import ServiceDefinition
from .exceptions import DuplicateInstanceError, InvalidArgumentError
from .factory import ServiceFactory

if TYPE_CHECKING:
    from .module import ServiceModule
    from .registry import ServiceRegistry

logger = logging.getLogger(__name__)

INFRASTRUCTURE_SERVICES = (
    "module",
    "service_container",
    "service_registry",
    "parameter_container",
)


class ServiceContainer:
    """Instance cache and resolution entry point.

    Attributes:
        _module: Module whose services the container produces
        _services: Created instances keyed by service name
        _factory: Factory building new instances

    Example::

        module.ready()
        container = module.create_container()

        logger = container.get("logger")
        assert container.get("logger") is logger  # singleton

        engines = container.find_by_tag("search")
    """

    def __init__(self, module: 'ServiceModule'):
        """Create a container and seed the infrastructure instances.

        Args:
            module: A ready ServiceModule

        Raises:
            InvalidArgumentError: When module is not a ServiceModule
        """
        from .module import ServiceModule

        if not isinstance(module, ServiceModule):
            raise InvalidArgumentError("the module", "an instance of ServiceModule", module)

        self._module = module
        self._services: Dict[str, Any] = {}
        self._factory = ServiceFactory(self)

        seeds = {
            "module": module,
            "service_container": self,
            "service_registry": module.registry,
            "parameter_container": module.parameters,
        }
        for name in INFRASTRUCTURE_SERVICES:
            self.set_service_instance(name, seeds[name])

    def get_module(self) -> 'ServiceModule':
        return self._module

    def get_registry(self) -> 'ServiceRegistry':
        return self._module.registry

    def get_factory(self) -> ServiceFactory:
        return self._factory

    def set_service_instance(self, name: str, instance: Any) -> None:
        """Store a created instance.

        Raises:
            DuplicateInstanceError: When an instance with that name exists
        """
        if self.is_service_created(name):
            raise DuplicateInstanceError(name)
        self._services[name] = instance

    def get_service_instance(self, name: str) -> Any:
        """Return a created instance or None."""
        return self._services.get(name)

    def is_service_created(self, name: str) -> bool:
        return name in self._services

    def get_services(self) -> Dict[str, ServiceDefinition]:
        return self.get_registry().get_services()

    def get(self, name: str) -> Any:
        """Return the instance of a service.

        Singleton services are created on first request and cached; every
        request of a non-singleton service creates a new instance.

        Args:
            name: Service name

        Returns:
            The service instance

        Raises:
            ServiceNotFoundError: When the service is not registered
            AbstractServiceError: When the service is abstract
            CircularDependencyError: When the definition has an illegal cycle
        """
        if self.is_service_created(name):
            return self._services[name]

        service = self.get_registry().get(name)
        cached = False

        def cache_singleton(definition: ServiceDefinition, instance: Any) -> None:
            nonlocal cached
            if definition.is_singleton():
                self.set_service_instance(name, instance)
                cached = True
                logger.debug("Cached singleton instance of service %s", name)

        try:
            return self._factory.create_service(service, cache_singleton)
        except Exception:
            if cached:
                del self._services[name]
            raise

    def isset(self, name: str) -> bool:
        """Check whether a service is registered, created or not."""
        return self.get_registry().isset(name)

    def find_by_tag(self, tag: str) -> List[Any]:
        """Return instances of the non-abstract services carrying a tag."""
        return [
            self.get(service.get_name())
            for service in self.get_registry().find_by_tag(tag)
        ]
