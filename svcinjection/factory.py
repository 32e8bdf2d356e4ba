"""
ServiceFactory

Creates one service instance from its definition:

1. rejects abstract definitions
2. initializes the definition (validation and cycle check, first time only)
3. loads the class named by ``className``
4. resolves the constructor arguments and instantiates the class
5. resolves and invokes the ``calls`` in declaration order
6. injects tagged services when the instance is :class:`Taggable`

The factory never caches; that is the container's job.
"""

import logging
from typing import Any, Callable, Optional, TYPE_CHECKING

from .definition import ServiceDefinition
from .exceptions import AbstractServiceError, InvalidArgumentError
from .resolver import ArgumentResolver
from .taggable import Taggable

if TYPE_CHECKING:
    from .container import ServiceContainer

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Builds fully wired service instances for a container.

    Attributes:
        _container: Container the created services belong to
        _resolver: Resolver for arguments of constructors and calls
    """

    def __init__(self, container: 'ServiceContainer'):
        from .container import ServiceContainer

        if not isinstance(container, ServiceContainer):
            raise InvalidArgumentError(
                "the service container", "an instance of ServiceContainer", container
            )
        self._container = container
        self._resolver = ArgumentResolver(container)

    def get_container(self) -> 'ServiceContainer':
        return self._container

    def get_resolver(self) -> ArgumentResolver:
        return self._resolver

    def create_service(
        self,
        service: ServiceDefinition,
        on_instantiated: Optional[Callable[[ServiceDefinition, Any], None]] = None,
    ) -> Any:
        """Create a new instance of a service.

        Args:
            service: Definition of the service
            on_instantiated: Called with the definition and the bare instance
                right after the constructor returned, before calls run

        Returns:
            The constructed and wired instance

        Raises:
            AbstractServiceError: When the definition is abstract
            InvalidServiceOptionError: When the definition is invalid
            CircularDependencyError: When the definition has an illegal cycle
            ClassNotFoundError: When the class can't be loaded
            ParameterNotFoundError: When an argument names an unknown parameter
            ServiceNotFoundError: When an argument references an unknown service
        """
        if service.get_abstract():
            raise AbstractServiceError(service.get_name())

        service.initialize()

        class_loader = service.get_registry().get_module().class_loader
        class_def = class_loader.get(service.get_class_name())

        class_arguments = service.normalize_arguments(service.get_arguments(), self._resolver)
        instance = class_def.create_instance(*class_arguments)
        logger.debug("Created instance of service %s (%s)", service.get_name(), class_def.name)

        if on_instantiated is not None:
            on_instantiated(service, instance)

        calls = service.normalize_calls(service.get_calls(), self._resolver)
        for method_name, args in calls.items():
            getattr(instance, method_name)(*args)

        if isinstance(instance, Taggable):
            tagged_services = self._container.find_by_tag(service.get_name())
            instance.process_tagged_services(tagged_services)
            logger.debug(
                "Injected %d tagged services into service %s",
                len(tagged_services), service.get_name(),
            )

        return instance
