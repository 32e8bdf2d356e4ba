"""
CompositionRoot

Explicit directory of the modules composed into one application: the root
module and every plugin attached to it, directly or through other plugins.
Registries use it to reach each other by module name, for example when a
service is renamed in every module that registers it.
"""

from typing import Dict, Iterator, List, TYPE_CHECKING

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from .module import ServiceModule
    from .registry import ServiceRegistry


class CompositionRoot:
    """Modules of one composition keyed by module name."""

    def __init__(self):
        self._modules: Dict[str, 'ServiceModule'] = {}

    def add(self, module: 'ServiceModule') -> None:
        """Add a module to the composition.

        Raises:
            InvalidArgumentError: When another module already uses the name
        """
        existing = self._modules.get(module.name)
        if existing is not None and existing is not module:
            raise InvalidArgumentError(
                "the module name",
                "unique within the composition",
                module.name,
            )
        self._modules[module.name] = module

    def has_module(self, name: str) -> bool:
        return name in self._modules

    def get_module(self, name: str) -> 'ServiceModule':
        module = self._modules.get(name)
        if module is None:
            raise InvalidArgumentError(
                "the module name",
                f"one of: {', '.join(self._modules) or 'None'}",
                name,
            )
        return module

    def find_composed_registry(self, name: str) -> 'ServiceRegistry':
        """Return the registry of the module with the given name."""
        return self.get_module(name).registry

    def get_modules(self) -> List['ServiceModule']:
        return list(self._modules.values())

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)
