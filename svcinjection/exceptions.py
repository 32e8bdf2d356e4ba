"""
SvcInjection Exceptions

Custom exception hierarchy for the SvcInjection service container.

Every error carries an :class:`ErrorContext` record describing what went wrong
(service name, option name, argument, expected value description and received
value). Only the fields that make sense for a particular error kind are set.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


_MISSING = object()


def describe_value(value: Any) -> str:
    """Return a short human readable description of a received value."""
    if value is _MISSING:
        return "nothing"
    if value is None:
        return "None"
    if isinstance(value, bool):
        return f"boolean {value!r}"
    if isinstance(value, (int, float)):
        return f"number {value!r}"
    if isinstance(value, str):
        return f"string {value!r}"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__} {value!r}"
    if isinstance(value, dict):
        return f"mapping {value!r}"
    return f"instance of {type(value).__name__}"


@dataclass(frozen=True)
class ErrorContext:
    """Structured details shared by all error kinds."""
    service: Optional[str] = None
    option: Optional[str] = None
    argument: Optional[str] = None
    expected: Optional[str] = None
    received: Any = field(default=_MISSING)

    def has_received(self) -> bool:
        return self.received is not _MISSING


class SvcInjectionError(Exception):
    """
    Base exception for all SvcInjection errors.

    All SvcInjection-specific exceptions inherit from this class.
    You can catch this to handle any SvcInjection error generically.

    Example:
        >>> try:
        ...     search = container.get("search")
        ... except SvcInjectionError as e:
        ...     print(f"DI error: {e}")
    """

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.context: ErrorContext = context or ErrorContext()

    @property
    def service(self) -> Optional[str]:
        return self.context.service

    @property
    def option(self) -> Optional[str]:
        return self.context.option

    @property
    def argument(self) -> Optional[str]:
        return self.context.argument

    @property
    def expected(self) -> Optional[str]:
        return self.context.expected

    @property
    def received(self) -> Any:
        return self.context.received if self.context.has_received() else None


class InvalidArgumentError(SvcInjectionError):
    """
    Raised when a constructor-like entry point receives malformed input.

    Common causes:
        - Service name that does not match ``^[0-9_.a-zA-Z]+$``
        - Service configuration that is not a mapping
        - Empty or non-string new name passed to ``rename()``

    Solution:
        Check the argument named in the message against the expected shape::

            module.register_service("search", {"className": "Search/SearchService"})
    """

    def __init__(self, argument: str, expected: str, received: Any = _MISSING):
        context = ErrorContext(argument=argument, expected=expected, received=received)
        super().__init__(
            f"Invalid {argument}. It must be {expected}. "
            f"Received {describe_value(received)}.",
            context,
        )


class InvalidServiceOptionError(SvcInjectionError):
    """
    Raised when a service option has a value of the wrong shape.

    Common causes:
        - ``"abstract": "yes"`` instead of a boolean
        - ``"arguments"`` given as a single string instead of a list
        - ``"calls"`` whose values are not lists of arguments
        - ``"calls"`` naming a method the service class does not declare

    Solution:
        Fix the option in the service configuration::

            module.register_service("logger", {
                "className": "app.logging.Logger",
                "arguments": ["%mode%"],
                "calls": {"set_param": ["p1"]},
            })
    """

    def __init__(
        self,
        service: str,
        option: str,
        expected: str,
        received: Any = _MISSING,
    ):
        context = ErrorContext(
            service=service, option=option, expected=expected, received=received
        )
        super().__init__(
            f'Invalid value of option "{option}" in definition of service "{service}". '
            f"It must be {expected}. Received {describe_value(received)}.",
            context,
        )


class ServiceInitializedError(SvcInjectionError):
    """
    Raised when a definition is modified after it was initialized.

    A definition is initialized the first time its service is resolved.
    From that moment on its options are frozen.

    Solution:
        Configure every option before the first ``container.get()`` call.
    """

    def __init__(self, service: str):
        super().__init__(
            f'Can\'t change definition of service "{service}". '
            f"The service is already initialized.",
            ErrorContext(service=service),
        )


class AbstractServiceError(SvcInjectionError):
    """
    Raised when an abstract service is asked to produce an instance.

    Abstract definitions only exist to be extended by other definitions.

    Solution:
        Request one of the concrete services that extends it::

            module.register_service("engine", {"abstract": True, "tags": ["search"]})
            module.register_service("mysql", {"extends": "engine", "className": "..."})

            container.get("mysql")  # not container.get("engine")
    """

    def __init__(self, service: str):
        super().__init__(
            f'Can\'t create instance of abstract service "{service}".',
            ErrorContext(service=service),
        )


class ServiceNotFoundError(SvcInjectionError):
    """
    Raised when a requested service name is not registered.

    Common causes:
        - Typo in the service name or in an ``@name`` reference
        - Plugin module holding the service not attached
        - ``extends`` pointing at a service that does not exist

    Note:
        The error message includes a list of registered services
        to help identify available names.
    """

    def __init__(self, service: str, registered=None):
        message = f'Service "{service}" is not registered.'
        if registered is not None:
            message += "\nRegistered services: " + (", ".join(registered) or "None")
        super().__init__(message, ErrorContext(service=service))


class CircularDependencyError(SvcInjectionError):
    """
    Raised when the static reference graph of a service contains a cycle
    that can't be resolved.

    Illegal patterns:
        - a constructor argument referencing the service being validated
        - a service tagged with the name of a non-singleton service that it
          references
        - an ``extends`` chain that loops back on itself

    Solution:
        Move the reference from ``arguments`` to ``calls``, which run after the
        instance exists::

            module.register_service("a", {
                "className": "app.A",
                "calls": {"set_b": ["@b"]},
            })
    """

    def __init__(self, service: str, detail: Optional[str] = None):
        message = (
            f'Can\'t create instance of service "{service}". '
            f"Circular dependency injection was found."
        )
        if detail:
            message += f" {detail}"
        super().__init__(message, ErrorContext(service=service))


class ConfigurationClosedError(SvcInjectionError):
    """
    Raised when definitions are changed after the module became ready.

    Solution:
        Register and rename services before calling ``module.ready()``
        (or before leaving the ``with module:`` block).
    """

    def __init__(self, module: str):
        super().__init__(
            f'Can\'t define new services when module "{module}" is ready.',
            ErrorContext(argument=module),
        )


class DuplicateInstanceError(SvcInjectionError):
    """
    Raised when an already created instance would be replaced.

    Singleton instances are written once per container; infrastructure
    names (``module``, ``service_container``, ...) are written at creation.
    """

    def __init__(self, service: str):
        super().__init__(
            f'Trying to replace already created instance of service "{service}".',
            ErrorContext(service=service),
        )


class ParameterNotFoundError(SvcInjectionError):
    """
    Raised when a ``%name%`` placeholder names an unknown parameter.

    Solution:
        Declare the parameter before the service is resolved::

            module.parameters.set("mode", "dev")
    """

    def __init__(self, parameter: str):
        super().__init__(
            f'Parameter "{parameter}" is not defined.',
            ErrorContext(argument=parameter),
        )


class ClassNotFoundError(SvcInjectionError):
    """
    Raised when a ``className`` can't be resolved to a class.

    Common causes:
        - Alias used in configuration but never passed to ``classes.register()``
        - Import path with a typo or a module that fails to import
        - Attribute found but it is not a class
    """

    def __init__(self, class_name: str, reason: Optional[str] = None):
        message = f'Class "{class_name}" was not found.'
        if reason:
            message += f" {reason}"
        super().__init__(message, ErrorContext(argument=class_name))


class NotInitializedError(SvcInjectionError):
    """
    Raised when a container is requested from a module that is not ready.

    Solution:
        Finish configuration first::

            module.ready()
            container = module.create_container()
    """

    pass
