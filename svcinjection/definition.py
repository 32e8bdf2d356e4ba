"""
ServiceDefinition

Declarative configuration of one service: which class to instantiate, the
arguments for its constructor, the methods to call after construction, its
lifecycle and its tags.

A definition is created from a raw configuration mapping when the service is
registered. Before the module becomes ready the registry merges it with the
definition it extends. The first time the service is resolved the definition
is initialized: every option goes through its setter (so validation runs
uniformly), the static reference graph is checked for cycles and the
definition becomes read-only.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, TYPE_CHECKING

from .exceptions import (
    CircularDependencyError,
    InvalidArgumentError,
    InvalidServiceOptionError,
    ServiceInitializedError,
)
from .lifecycle import ServiceLifeCycle
from .options import (
    OPTIONS,
    PARAMETER_PATTERN,
    SERVICE_NAME_PATTERN,
    SERVICE_REFERENCE_PATTERN,
    base_definition,
    copy_option_value,
)

if TYPE_CHECKING:
    from .registry import ServiceRegistry
    from .resolver import ArgumentResolver

logger = logging.getLogger(__name__)


class ServiceDefinition:
    """Definition of a single service.

    Attributes:
        _registry: The registry owning this definition
        _name: Service name, unique within the registry
        _definition: Option values keyed by configuration key
        _initialized: Whether the definition is frozen

    Example::

        definition = registry.register("logger", {
            "className": "app.logging.Logger",
            "arguments": ["%mode%"],
            "calls": {"set_param": ["p1"]},
        })
        definition.get_arguments()  # ["%mode%"]
    """

    def __init__(
        self,
        registry: 'ServiceRegistry',
        name: str,
        definition: Optional[Mapping[str, Any]] = None,
    ):
        """Create a definition from its raw configuration.

        Args:
            registry: Registry the definition belongs to
            name: Service name matching ``^[0-9_.a-zA-Z]+$``
            definition: Raw configuration mapping, ``None`` means empty

        Raises:
            InvalidArgumentError: When the name or the configuration is malformed
        """
        if not isinstance(name, str) or not SERVICE_NAME_PATTERN.fullmatch(name):
            raise InvalidArgumentError(
                "the name of service",
                'a string matching "^[0-9_.a-zA-Z]+$"',
                name,
            )
        self._registry = registry
        self._name = name
        self._definition: Dict[str, Any] = {}
        self._initialized = False
        self.set_definition({} if definition is None else definition)

    def __repr__(self) -> str:
        return f"<ServiceDefinition {self._name!r}>"

    def get_registry(self) -> 'ServiceRegistry':
        return self._registry

    def get_name(self) -> str:
        return self._name

    @property
    def name(self) -> str:
        return self._name

    def _set_name(self, name: str) -> None:
        # Only the registry renames definitions, it keeps its own key in sync
        self._name = name

    def rename(self, name: str) -> None:
        """Rename the service in every registry that holds it."""
        self._registry.rename(self._name, name)

    def set_definition(self, definition: Mapping[str, Any]) -> None:
        """Replace the raw configuration.

        Raises:
            ServiceInitializedError: When the definition is already initialized
            InvalidArgumentError: When the definition is not a mapping
        """
        if self._initialized:
            raise ServiceInitializedError(self._name)
        if not isinstance(definition, Mapping):
            raise InvalidArgumentError("the definition of service", "a mapping", definition)
        self._definition = dict(definition)

    def get_definition(self) -> Dict[str, Any]:
        """Return a copy of the configuration; changing it has no effect."""
        return {key: copy_option_value(value) for key, value in self._definition.items()}

    @staticmethod
    def get_base_definition() -> Dict[str, Any]:
        """Return the defaults every initialized definition starts from."""
        return base_definition()

    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Validate and freeze the definition.

        Idempotent: only the first call does any work.

        Raises:
            InvalidServiceOptionError: When an option has an invalid value
            CircularDependencyError: When the reference graph has an illegal cycle
        """
        if self._initialized:
            return
        self.process_definition()
        self.validate_definition()
        self._initialized = True
        logger.debug("Initialized service %s", self._name)

    def process_definition(self) -> None:
        """Rebuild the definition from defaults, passing each option through its setter."""
        definition = self._definition
        self._definition = base_definition()

        try:
            for key, value in definition.items():
                if key not in OPTIONS:
                    logger.warning(
                        'Ignoring unknown option "%s" in definition of service "%s"',
                        key, self._name,
                    )
                    continue
                self._set_option(key, value)

            if not self.get_abstract() and not self._definition["className"]:
                raise InvalidServiceOptionError(
                    self._name,
                    "className",
                    "a non-empty string for a non-abstract service",
                    self._definition["className"],
                )
        except Exception:
            # Raw configuration survives a failed pass
            self._definition = definition
            raise

    def _set_option(self, key: str, value: Any) -> None:
        if self._initialized:
            raise ServiceInitializedError(self._name)
        option = OPTIONS[key]
        if not option.check(value):
            raise InvalidServiceOptionError(self._name, key, option.expected, value)
        self._definition[key] = option.normalize(value)

    def _get_option(self, key: str) -> Any:
        option = OPTIONS[key]
        value = self._definition.get(key)
        if value is None:
            return option.default()
        # Raw values are read before initialize() has run the setters
        if not self._initialized and not option.check(value):
            raise InvalidServiceOptionError(self._name, key, option.expected, value)
        return copy_option_value(value)

    # Options

    def set_abstract(self, is_abstract: bool) -> None:
        self._set_option("abstract", is_abstract)

    def get_abstract(self) -> bool:
        return bool(self._get_option("abstract"))

    def set_extends(self, parent_service_name: str) -> None:
        self._set_option("extends", parent_service_name)

    def get_extends(self) -> Optional[str]:
        return self._get_option("extends")

    def set_class_name(self, class_name: str) -> None:
        self._set_option("className", class_name)

    def get_class_name(self) -> Optional[str]:
        """Return the class name with its ``%param%`` placeholder substituted."""
        return self.normalize_class_name(self._get_option("className"))

    def normalize_class_name(self, class_name: Optional[str]) -> Optional[str]:
        # Class names support a single placeholder
        if not class_name:
            return class_name
        match = PARAMETER_PATTERN.search(class_name)
        if match is None:
            return class_name
        parameters = self._registry.get_module().parameters
        value = parameters.get(match.group(1))
        return class_name[:match.start()] + str(value) + class_name[match.end():]

    def set_arguments(self, args: List[Any]) -> None:
        self._set_option("arguments", args)

    def get_arguments(self) -> List[Any]:
        return self._get_option("arguments")

    def normalize_arguments(self, args: List[Any], resolver: 'ArgumentResolver') -> List[Any]:
        """Return a new list with every argument resolved."""
        return resolver.resolve_arguments(args)

    def set_calls(self, calls: Mapping[str, List[Any]]) -> None:
        self._set_option("calls", calls)

    def get_calls(self) -> Dict[str, List[Any]]:
        return self._get_option("calls")

    def normalize_calls(
        self,
        calls: Mapping[str, List[Any]],
        resolver: 'ArgumentResolver',
    ) -> Dict[str, List[Any]]:
        """Return a new mapping with the arguments of every call resolved."""
        return resolver.resolve_calls(calls)

    def set_singleton(self, singleton: bool) -> None:
        self._set_option("singleton", singleton)

    def get_singleton(self) -> bool:
        return bool(self._get_option("singleton"))

    is_singleton = get_singleton

    @property
    def lifecycle(self) -> ServiceLifeCycle:
        return ServiceLifeCycle.from_singleton(self.get_singleton())

    def set_tags(self, tags: List[str]) -> None:
        self._set_option("tags", tags)

    def get_tags(self) -> List[str]:
        return self._get_option("tags")

    # Validation

    def validate_definition(self, chain: Optional[List[str]] = None) -> List[str]:
        """Check the static reference graph of the service.

        Walks ``arguments`` and ``calls`` looking for ``@name`` references,
        following each referenced definition. ``chain[0]`` is the service the
        walk started from.

        Args:
            chain: Names already visited, starting with the root service

        Returns:
            The chain of visited service names

        Raises:
            CircularDependencyError: When a reference would need the root
                service before it exists
            InvalidServiceOptionError: When ``calls`` names an unknown method
            ServiceNotFoundError: When a reference points to an unknown service
        """
        if not chain:
            chain = [self._name]

        calls = self.get_calls()
        self._validate_call_methods(calls)

        for arg in self.get_arguments():
            chain = self._validate_reference(arg, "arguments", chain)

        for args in calls.values():
            for arg in args:
                chain = self._validate_reference(arg, "calls", chain)

        return chain

    def _validate_call_methods(self, calls: Mapping[str, List[Any]]) -> None:
        if not calls:
            return
        class_name = self.get_class_name()
        if not class_name:
            return
        class_loader = self._registry.get_module().class_loader
        descriptor = class_loader.get(class_name)

        for method_name in calls:
            if not descriptor.has_method(method_name):
                raise InvalidServiceOptionError(
                    self._name,
                    "calls",
                    f'a mapping of methods declared by class "{class_name}"',
                    method_name,
                )

    def _validate_reference(self, arg: Any, arg_type: str, chain: List[str]) -> List[str]:
        if not isinstance(arg, str):
            return chain
        match = SERVICE_REFERENCE_PATTERN.fullmatch(arg)
        if match is None:
            return chain

        service_name = match.group(1)
        service = self._registry.get(service_name)
        singleton = service.is_singleton()
        root = chain[0]

        if not singleton and service_name in self.get_tags():
            raise CircularDependencyError(
                self._name,
                f'It is tagged with non-singleton service "{service_name}" it references.',
            )
        if arg_type == "arguments" and not singleton and service_name == root:
            raise CircularDependencyError(
                self._name,
                f'Non-singleton service "{service_name}" is referenced from constructor arguments.',
            )
        if arg_type == "arguments" and service_name == root:
            raise CircularDependencyError(
                self._name,
                f'Service "{service_name}" is referenced from constructor arguments.',
            )

        if service_name in chain:
            return chain
        return service.validate_definition(chain + [service_name])
