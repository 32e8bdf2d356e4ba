"""
ServiceModule

This module provides the host of a service registry: a named module that
collects service definitions, parameters and class aliases while it is being
configured, composes plugin modules and, once ready, creates service
containers.

Key features:
- Declarative configuration: ``{"parameters": ..., "classes": ..., "services": ...}``
- Plugin composition: definitions of plugin modules are visible from the root
- Context manager support: leaving the ``with`` block makes the module ready

Example::

    app = ServiceModule("app")
    with app:
        app.parameters.set("mode", "dev")
        app.class_loader.register("LoggerClass", Logger)
        app.register_service("logger", {
            "className": "LoggerClass",
            "arguments": ["%mode%"],
            "calls": {"set_param": ["p1"]},
        })

    container = app.create_container()
    logger = container.get("logger")
"""

import copy
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .class_loader import ClassLoader
from .composition import CompositionRoot
from .container import INFRASTRUCTURE_SERVICES, ServiceContainer
from .definition import ServiceDefinition
from .exceptions import (
    ConfigurationClosedError,
    InvalidArgumentError,
    NotInitializedError,
)
from .lifecycle import ModulePhase
from .parameters import ParameterStore
from .registry import ServiceRegistry

logger = logging.getLogger(__name__)


class ServiceModule:
    """Module holding service definitions and their configuration.

    A module starts in the configuration phase. ``ready()`` on the root
    module seeds the infrastructure definitions, normalizes definitions that
    extend others, imports the requested classes and closes configuration
    for the root and all its plugins.

    Attributes:
        name: Module name, unique within a composition
        parameters: Parameter store for ``%name%`` placeholders
        class_loader: Class system used to resolve ``className``
        registry: Service definitions of this module
        plugins: Attached plugin modules, in attachment order
        composition: Directory of the modules composed with this one

    Example::

        plugin = ServiceModule("search_plugin", config={
            "services": {"solr_engine": {"extends": "engine", "className": "..."}},
        })
        app = ServiceModule("app", config=app_config, plugins=[plugin])
        app.ready()
    """

    def __init__(
        self,
        name: str,
        config: Optional[Mapping[str, Any]] = None,
        plugins: Optional[List['ServiceModule']] = None,
    ):
        """Create a module in its configuration phase.

        Args:
            name: Module name
            config: Optional configuration passed to :meth:`configure`
            plugins: Optional plugin modules passed to :meth:`add_plugin`

        Raises:
            InvalidArgumentError: When the name is empty or not a string
        """
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("the name of module", "a non-empty string", name)

        self.name: str = name
        self._phase: ModulePhase = ModulePhase.CONFIGURATION
        self._parent: Optional[ServiceModule] = None
        self.plugins: List[ServiceModule] = []
        self.parameters: ParameterStore = ParameterStore()
        self.class_loader: ClassLoader = ClassLoader()
        self.registry: ServiceRegistry = ServiceRegistry(self)
        self.composition: CompositionRoot = CompositionRoot()
        self.composition.add(self)

        if config is not None:
            self.configure(config)
        for plugin in plugins or []:
            self.add_plugin(plugin)

    def __repr__(self) -> str:
        return f"<ServiceModule {self.name!r} {self._phase.value}>"

    def __enter__(self) -> 'ServiceModule':
        """Enter a configuration block.

        Returns:
            The module instance itself
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Leave a configuration block, making the module ready on success.

        Returns:
            False (exceptions are not suppressed)
        """
        if exc_type is None:
            self.ready()
        return False

    # Composition

    def is_root(self) -> bool:
        return self._parent is None

    def get_parent(self) -> Optional['ServiceModule']:
        return self._parent

    def get_root(self) -> 'ServiceModule':
        module = self
        while module._parent is not None:
            module = module._parent
        return module

    def iter_modules(self) -> Iterator['ServiceModule']:
        """Yield this module and all its plugins, depth first."""
        yield self
        for plugin in self.plugins:
            yield from plugin.iter_modules()

    def get_module(self, name: str) -> 'ServiceModule':
        return self.composition.get_module(name)

    def add_plugin(self, plugin: 'ServiceModule') -> None:
        """Attach a plugin module.

        The plugin and its own plugins join this module's composition and
        share the root's parameter store and class loader; their parameters
        and class aliases are merged in without overriding existing ones.
        Definitions are normalized again afterwards.

        Raises:
            InvalidArgumentError: When plugin is not a detached ServiceModule
                or one of its module names is already taken
        """
        if not isinstance(plugin, ServiceModule):
            raise InvalidArgumentError("the plugin", "an instance of ServiceModule", plugin)
        if plugin is self or not plugin.is_root() or plugin is self.get_root():
            raise InvalidArgumentError("the plugin", "a module that is not attached yet", plugin.name)

        root = self.get_root()
        modules = list(plugin.iter_modules())
        for module in modules:
            if module.name in root.composition:
                raise InvalidArgumentError(
                    "the plugin", "a module with a name unique in the composition", module.name
                )

        plugin._parent = self
        self.plugins.append(plugin)

        for module in modules:
            root.composition.add(module)
            module.composition = root.composition
            root.parameters.update(module.parameters.all(), overwrite=False)
            root.class_loader.update(module.class_loader)
            module.parameters = root.parameters
            module.class_loader = root.class_loader
            if root.is_ready():
                module._phase = ModulePhase.READY

        logger.debug("Attached plugin %s to module %s", plugin.name, self.name)

        root.registry.normalize()
        if root.is_ready():
            root.class_loader.load_requested()

    # Lifecycle

    def is_ready(self) -> bool:
        return self._phase is ModulePhase.READY

    def ready(self) -> None:
        """End the configuration phase of the whole composition.

        Idempotent. Called on a plugin, it makes the root module ready.

        Raises:
            ServiceNotFoundError: When a definition extends an unknown service
            CircularDependencyError: When an ``extends`` chain loops
            ClassNotFoundError: When a requested class can't be imported
        """
        root = self.get_root()
        if root is not self:
            root.ready()
            return
        if self.is_ready():
            return

        for name in INFRASTRUCTURE_SERVICES:
            if not self.registry.isset(name):
                self.registry.register(name)

        self.registry.normalize()
        self.class_loader.load_requested()

        for module in self.iter_modules():
            module._phase = ModulePhase.READY
        logger.info("Module %s is ready", self.name)

    def create_container(self) -> ServiceContainer:
        """Create a new container producing this module's services.

        Raises:
            NotInitializedError: When the module is not ready
        """
        if not self.is_ready():
            raise NotInitializedError(
                f'Module "{self.name}" is not ready. '
                f"Call module.ready() before creating a container."
            )
        return ServiceContainer(self)

    # Configuration

    def configure(self, config: Mapping[str, Any]) -> None:
        """Apply a configuration mapping.

        Recognized keys: ``parameters`` (name -> value), ``classes``
        (alias -> class) and ``services`` (name -> service configuration).

        Raises:
            InvalidArgumentError: When config or one of its sections is not a mapping
            ConfigurationClosedError: When the module is already ready
        """
        if not isinstance(config, Mapping):
            raise InvalidArgumentError("the module configuration", "a mapping", config)
        if self.is_ready():
            raise ConfigurationClosedError(self.name)

        for key, section in config.items():
            if key not in ("parameters", "classes", "services"):
                logger.warning('Ignoring unknown section "%s" in configuration of module "%s"', key, self.name)
                continue
            if not isinstance(section, Mapping):
                raise InvalidArgumentError(f'the "{key}" configuration section', "a mapping", section)
            if key == "parameters":
                self.parameters.update(section)
            elif key == "classes":
                for alias, cls in section.items():
                    self.class_loader.register(alias, cls)
            else:
                self.register_services(section)

    def register_service(
        self,
        name: str,
        definition: Optional[Mapping[str, Any]] = None,
    ) -> ServiceDefinition:
        """Register a service definition in this module's registry."""
        return self.registry.register(name, definition)

    def register_services(self, services: Mapping[str, Mapping[str, Any]]) -> None:
        """Register several services at once.

        Raises:
            InvalidArgumentError: When services is not a mapping
            ConfigurationClosedError: When the module is already ready
        """
        if self.is_ready():
            raise ConfigurationClosedError(self.name)
        if not isinstance(services, Mapping):
            raise InvalidArgumentError("the services", "a mapping", services)
        for name, definition in services.items():
            self.registry.register(name, definition)

    def isset_service(self, name: str) -> bool:
        return self.registry.isset(name)

    def get_service_definition(self, name: str) -> ServiceDefinition:
        return self.registry.get(name)

    def get_services_config(self) -> Dict[str, Dict[str, Any]]:
        """Return a copy of every visible service configuration."""
        return {
            name: copy.deepcopy(service.get_definition())
            for name, service in self.registry.get_services().items()
        }
