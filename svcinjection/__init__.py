import logging

# Public API
from .class_loader import ClassDescriptor, ClassLoader
from .composition import CompositionRoot
from .container import INFRASTRUCTURE_SERVICES, ServiceContainer
from .definition import ServiceDefinition
from .exceptions import (
    AbstractServiceError,
    CircularDependencyError,
    ClassNotFoundError,
    ConfigurationClosedError,
    DuplicateInstanceError,
    ErrorContext,
    InvalidArgumentError,
    InvalidServiceOptionError,
    NotInitializedError,
    ParameterNotFoundError,
    ServiceInitializedError,
    ServiceNotFoundError,
    SvcInjectionError,
)
from .factory import ServiceFactory
from .lifecycle import ModulePhase, ServiceLifeCycle
from .module import ServiceModule
from .parameters import ParameterStore
from .registry import ServiceRegistry
from .resolver import ArgumentResolver
from .taggable import Taggable

__all__ = [
    "ServiceModule",
    "ServiceRegistry",
    "ServiceDefinition",
    "ServiceFactory",
    "ServiceContainer",
    "ArgumentResolver",
    "CompositionRoot",
    "ParameterStore",
    "ClassLoader",
    "ClassDescriptor",
    "Taggable",
    "ServiceLifeCycle",
    "ModulePhase",
    "INFRASTRUCTURE_SERVICES",
    # Exceptions
    "SvcInjectionError",
    "ErrorContext",
    "InvalidArgumentError",
    "InvalidServiceOptionError",
    "ServiceInitializedError",
    "AbstractServiceError",
    "ServiceNotFoundError",
    "CircularDependencyError",
    "ConfigurationClosedError",
    "DuplicateInstanceError",
    "ParameterNotFoundError",
    "ClassNotFoundError",
    "NotInitializedError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Version will be dynamically set by poetry-dynamic-versioning
try:
    from ._version import __version__
except ImportError:
    # Fallback for development
    __version__ = '0.0.0'
