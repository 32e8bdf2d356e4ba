"""
ParameterStore

Named configuration values referenced from service definitions with the
``%name%`` syntax.
"""

from typing import Any, Dict, Iterator, Mapping, Optional

from .exceptions import InvalidArgumentError, ParameterNotFoundError


class ParameterStore:
    """Mapping-backed parameter store.

    Example::

        parameters = ParameterStore({"mode": "dev"})
        parameters.get("mode")  # "dev"
        parameters.get("missing")  # raises ParameterNotFoundError
    """

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None):
        self._parameters: Dict[str, Any] = {}
        if parameters is not None:
            self.update(parameters)

    def get(self, name: str) -> Any:
        """Return the value of a parameter.

        Raises:
            ParameterNotFoundError: When the parameter is not defined
        """
        try:
            return self._parameters[name]
        except KeyError:
            raise ParameterNotFoundError(name) from None

    def set(self, name: str, value: Any) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("the name of parameter", "a non-empty string", name)
        self._parameters[name] = value

    def isset(self, name: str) -> bool:
        return name in self._parameters

    def update(self, parameters: Mapping[str, Any], overwrite: bool = True) -> None:
        """Copy parameters from a mapping.

        Args:
            parameters: Parameters to copy
            overwrite: When False, parameters already defined keep their value
        """
        if not isinstance(parameters, Mapping):
            raise InvalidArgumentError("the parameters", "a mapping", parameters)
        for name, value in parameters.items():
            if overwrite or name not in self._parameters:
                self.set(name, value)

    def all(self) -> Dict[str, Any]:
        return dict(self._parameters)

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)
