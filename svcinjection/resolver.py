"""
ArgumentResolver

Turns raw argument literals of a service definition into runtime values:

- ``"@name"`` becomes the instance of service ``name``, requested from the
  container so singleton caching applies
- ``"%name%"`` becomes the value of parameter ``name``; placeholders embedded
  in a longer string are replaced by the string form of their values
- anything else is passed through unchanged

Resolution never mutates the lists and mappings it is given.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, TYPE_CHECKING

from .options import PARAMETER_PATTERN, SERVICE_REFERENCE_PATTERN

if TYPE_CHECKING:
    from .container import ServiceContainer
    from .parameters import ParameterStore


class ArgumentResolver:
    """Resolves argument literals against a live container.

    Attributes:
        container: Container used for ``@name`` references
        parameters: Parameter store used for ``%name%`` placeholders

    Example::

        resolver = ArgumentResolver(container)
        resolver.resolve("%mode%")          # "dev"
        resolver.resolve("prefix-%mode%")   # "prefix-dev"
        resolver.resolve("@logger")         # the logger instance
        resolver.resolve(42)                # 42
    """

    def __init__(
        self,
        container: 'ServiceContainer',
        parameters: Optional['ParameterStore'] = None,
    ):
        self.container = container
        self.parameters = parameters if parameters is not None else container.get_module().parameters

    def resolve(self, value: Any) -> Any:
        """Resolve a single literal."""
        if not isinstance(value, str):
            return value

        match = SERVICE_REFERENCE_PATTERN.fullmatch(value)
        if match is not None:
            return self.container.get(match.group(1))

        return self.interpolate(value)

    def interpolate(self, value: str) -> Any:
        """Replace ``%name%`` placeholders with parameter values.

        A literal made of exactly one placeholder resolves to the parameter
        value itself, keeping its type.
        """
        match = PARAMETER_PATTERN.fullmatch(value)
        if match is not None:
            return self.parameters.get(match.group(1))

        return PARAMETER_PATTERN.sub(
            lambda m: str(self.parameters.get(m.group(1))),
            value,
        )

    def resolve_arguments(self, args: Optional[Iterable[Any]]) -> List[Any]:
        """Return a new list with every literal resolved, in order."""
        if not args:
            return []
        return [self.resolve(arg) for arg in args]

    def resolve_calls(self, calls: Optional[Mapping[str, Iterable[Any]]]) -> Dict[str, List[Any]]:
        """Return a new mapping of method name to resolved arguments.

        Declaration order of the methods is preserved.
        """
        if not calls:
            return {}
        return {
            method_name: self.resolve_arguments(args)
            for method_name, args in calls.items()
        }
