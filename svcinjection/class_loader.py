"""
ClassLoader

Turns the ``className`` of a service definition into a class that can be
instantiated. A name is either an alias registered with ``register()``
(``"Search/SearchService"``) or an import path (``"app.search.SearchService"``
or ``"app.search:SearchService"``).
"""

import inspect
import logging
from dataclasses import dataclass
from importlib import import_module
from typing import Any, Dict, List, Tuple, Type

from .exceptions import ClassNotFoundError, InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassDescriptor:
    """A loaded class and the operations the factory needs from it"""
    name: str
    cls: Type

    def create_instance(self, *args: Any) -> Any:
        return self.cls(*args)

    def has_method(self, method_name: str) -> bool:
        return callable(getattr(self.cls, method_name, None))


class ClassLoader:
    """Resolves class names to :class:`ClassDescriptor` objects.

    Example::

        classes = ClassLoader()
        classes.register("Search/SearchService", SearchService)

        classes.get("Search/SearchService").create_instance("mysql")
        classes.get("collections:OrderedDict").create_instance()
    """

    def __init__(self):
        self._aliases: Dict[str, Type] = {}
        self._descriptors: Dict[str, ClassDescriptor] = {}
        self._requested: List[str] = []

    def register(self, name: str, cls: Type) -> None:
        """Register a class under an alias."""
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("the class alias", "a non-empty string", name)
        if not inspect.isclass(cls):
            raise InvalidArgumentError(f'the class for alias "{name}"', "a class", cls)
        self._aliases[name] = cls
        self._descriptors.pop(name, None)

    def update(self, other: 'ClassLoader', overwrite: bool = False) -> None:
        """Copy aliases and pending requests of another loader."""
        for name, cls in other._aliases.items():
            if overwrite or name not in self._aliases:
                self.register(name, cls)
        for name in other._requested:
            self.loadable(name)

    def isset(self, name: str) -> bool:
        return name in self._aliases

    def loadable(self, name: str) -> None:
        """Remember that a class will be needed.

        Names that still hold a ``%param%`` placeholder can't be resolved
        before parameters are known and are skipped.
        """
        if '%' in name or name in self._aliases or name in self._requested:
            return
        self._requested.append(name)

    def load_requested(self) -> None:
        """Import every class requested with :meth:`loadable`.

        Raises:
            ClassNotFoundError: When one of the classes can't be loaded
        """
        for name in self._requested:
            self.get(name)

    def get(self, name: str) -> ClassDescriptor:
        """Return the descriptor of a class.

        Raises:
            ClassNotFoundError: When the name can't be resolved to a class
        """
        descriptor = self._descriptors.get(name)
        if descriptor is not None:
            return descriptor

        if name in self._aliases:
            cls = self._aliases[name]
        else:
            cls = self._import(name)

        descriptor = ClassDescriptor(name=name, cls=cls)
        self._descriptors[name] = descriptor
        return descriptor

    def _import(self, name: str) -> Type:
        if not isinstance(name, str) or not name:
            raise ClassNotFoundError(str(name), "Class name must be a non-empty string.")

        module_name, attr_name = self._split(name)
        if not module_name:
            raise ClassNotFoundError(
                name,
                "Register it with ClassLoader.register() or use an import path "
                "like \"package.module.ClassName\".",
            )

        try:
            module = import_module(module_name)
        except ImportError as e:
            raise ClassNotFoundError(name, f"Module \"{module_name}\" can't be imported: {e}") from e

        cls = getattr(module, attr_name, None)
        if cls is None:
            raise ClassNotFoundError(name, f"Module \"{module_name}\" does not define \"{attr_name}\".")
        if not inspect.isclass(cls):
            raise ClassNotFoundError(name, f"\"{attr_name}\" is not a class.")

        logger.debug("Loaded class %s from module %s", attr_name, module_name)
        return cls

    @staticmethod
    def _split(name: str) -> Tuple[str, str]:
        if ':' in name:
            module_name, _, attr_name = name.partition(':')
        else:
            module_name, _, attr_name = name.rpartition('.')
        return module_name, attr_name
