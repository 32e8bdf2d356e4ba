"""
ServiceRegistry

This module provides the registry of service definitions owned by a module.

A registry holds the definitions registered in its own module ("private"
definitions) and exposes a flattened view that also covers the registries of
plugin modules composed into the application. In the flattened view a
definition registered locally shadows a composed definition with the same
name; among plugins, the one attached later wins.

Definitions may only change while the owning module is in its configuration
phase. Right before the module becomes ready (and whenever a plugin is
attached) the registry normalizes definitions that extend another one.
"""

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Set, TYPE_CHECKING

from .definition import ServiceDefinition
from .exceptions import (
    CircularDependencyError,
    ConfigurationClosedError,
    InvalidArgumentError,
    ServiceNotFoundError,
)
from .options import SERVICE_NAME_PATTERN

if TYPE_CHECKING:
    from .module import ServiceModule

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Registry of service definitions.

    Attributes:
        _module: Module owning the registry
        _services: Private definitions keyed by service name

    Example::

        registry = module.registry
        registry.register("search_engine", {"abstract": True, "tags": ["search"]})
        registry.register("mysql_engine", {
            "extends": "search_engine",
            "className": "app.search.MysqlEngine",
        })

        registry.normalize()
        registry.find_by_tag("search")  # [<ServiceDefinition 'mysql_engine'>]
    """

    def __init__(self, module: 'ServiceModule'):
        self._module = module
        self._services: Dict[str, ServiceDefinition] = {}

    def get_module(self) -> 'ServiceModule':
        return self._module

    def _ensure_configurable(self) -> None:
        if self._module.is_ready():
            raise ConfigurationClosedError(self._module.name)

    def register(
        self,
        name: str,
        definition: Optional[Mapping[str, Any]] = None,
    ) -> ServiceDefinition:
        """Register a new service definition.

        Registering a name twice replaces the earlier definition.

        Args:
            name: Service name
            definition: Raw service configuration

        Returns:
            The created definition

        Raises:
            ConfigurationClosedError: When the module is already ready
            InvalidArgumentError: When the name or configuration is malformed
        """
        self._ensure_configurable()

        service = ServiceDefinition(self, name, definition)
        if name in self._services:
            logger.debug("Service %s redefined in module %s", name, self._module.name)
        self._services[name] = service

        class_name = service.get_definition().get("className")
        if isinstance(class_name, str) and class_name:
            self._module.class_loader.loadable(class_name)

        logger.debug("Registered service %s in module %s", name, self._module.name)
        return service

    def get(self, name: str) -> ServiceDefinition:
        """Return a service definition from the flattened view.

        Raises:
            ServiceNotFoundError: When no visible definition has that name
        """
        services = self.get_services()
        service = services.get(name)
        if service is None:
            raise ServiceNotFoundError(name, list(services))
        return service

    get_service_definition = get

    def isset(self, name: str, private: bool = False) -> bool:
        """Check whether a service is registered.

        Args:
            name: Service name
            private: Look only at this registry's own definitions
        """
        return name in self.get_services(private)

    def get_services(
        self,
        private: bool = False,
        include_composed: bool = True,
    ) -> Dict[str, ServiceDefinition]:
        """Return definitions keyed by service name.

        Args:
            private: Return only the definitions registered in this module
            include_composed: When this module is a plugin, return the view of
                the whole composition it is attached to instead of the view
                of its own subtree

        Returns:
            A new dict; local definitions shadow composed ones
        """
        if private:
            return dict(self._services)

        module = self._module
        if include_composed and not module.is_root():
            return module.get_root().registry.get_services(False, False)

        services: Dict[str, ServiceDefinition] = {}
        for plugin in module.plugins:
            services.update(plugin.registry.get_services(False, False))
        services.update(self._services)
        return services

    def find_by_tag(self, tag: str) -> List[ServiceDefinition]:
        """Return the non-abstract definitions carrying a tag, in discovery order."""
        return [
            service for service in self.get_services().values()
            if tag in service.get_tags() and not service.get_abstract()
        ]

    def find_locations(self, name: str) -> List[str]:
        """Return the names of the modules that privately register a service.

        The whole composition is searched, starting from its root module.
        """
        locations: List[str] = []

        def collect(module: 'ServiceModule') -> None:
            if module.registry.isset(name, True) and module.name not in locations:
                locations.append(module.name)
            for plugin in module.plugins:
                collect(plugin)

        collect(self._module.get_root())
        return locations

    def rename(self, old_name: str, new_name: str) -> None:
        """Rename a service in every module that registers it.

        Raises:
            ServiceNotFoundError: When ``old_name`` is not registered
            InvalidArgumentError: When ``new_name`` is not a valid service name
            ConfigurationClosedError: When the module is already ready
        """
        if not self.isset(old_name):
            raise ServiceNotFoundError(old_name)
        if not isinstance(new_name, str) or not SERVICE_NAME_PATTERN.fullmatch(new_name):
            raise InvalidArgumentError(
                "the new service name",
                'a string matching "^[0-9_.a-zA-Z]+$"',
                new_name,
            )
        self._ensure_configurable()

        composition = self._module.composition
        for module_name in self.find_locations(old_name):
            registry = composition.find_composed_registry(module_name)
            registry._move(old_name, new_name)

        logger.debug("Renamed service %s to %s", old_name, new_name)

    def _move(self, old_name: str, new_name: str) -> None:
        service = self._services.pop(old_name)
        self._services[new_name] = service
        service._set_name(new_name)

    def normalize(self) -> None:
        """Merge every definition that extends another with its parent.

        The parent definition (normalized first) is deep-copied and the
        child options are laid over it. ``abstract`` is not inherited.
        Definitions are not initialized here.

        Raises:
            ServiceNotFoundError: When a parent service does not exist
            CircularDependencyError: When an ``extends`` chain loops
        """
        services = self.get_services()
        done: Set[str] = set()

        def normalize_service(name: str, service: ServiceDefinition, chain: List[str]) -> None:
            if name in done:
                return
            parent_name = service.get_extends()
            if parent_name and not service.is_initialized():
                if parent_name in chain:
                    raise CircularDependencyError(
                        name,
                        "Extends chain loops: " + " -> ".join(chain + [parent_name]) + ".",
                    )
                parent = services.get(parent_name)
                if parent is None:
                    raise ServiceNotFoundError(parent_name, list(services))
                normalize_service(parent_name, parent, chain + [parent_name])

                definition = service.get_definition()
                if not definition.get("abstract"):
                    definition["abstract"] = False
                merged = copy.deepcopy(parent.get_definition())
                merged.update(definition)
                service.set_definition(merged)
                logger.debug("Service %s extends %s", name, parent_name)
            done.add(name)

        for name, service in services.items():
            normalize_service(name, service, [name])
