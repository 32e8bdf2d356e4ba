"""
Service Options

Table of the options a service definition understands. Each entry couples
the option key used in configuration with its shape check, the description
used in error messages and its default value.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping

# Service names and "@name" references share the same alphabet; use fullmatch()
SERVICE_NAME_PATTERN = re.compile(r'[0-9_.a-zA-Z]+')
SERVICE_REFERENCE_PATTERN = re.compile(r'@([0-9_.a-zA-Z]+)')
PARAMETER_PATTERN = re.compile(r'%([^%]+)%')


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_list(value: Any) -> bool:
    return value is None or isinstance(value, (list, tuple))


def _is_optional_bool(value: Any) -> bool:
    return value is None or isinstance(value, bool)


def _is_tag_list(value: Any) -> bool:
    if value is None:
        return True
    if not isinstance(value, (list, tuple)):
        return False
    return all(isinstance(tag, str) for tag in value)


def _is_call_map(value: Any) -> bool:
    if value is None:
        return True
    if not isinstance(value, Mapping):
        return False
    return all(
        isinstance(method, str) and isinstance(args, (list, tuple))
        for method, args in value.items()
    )


@dataclass(frozen=True)
class ServiceOption:
    """One row of the option table"""
    key: str
    expected: str
    check: Callable[[Any], bool]
    default: Callable[[], Any]

    def normalize(self, value: Any) -> Any:
        """Return the value to store, replacing None with the default."""
        if value is None:
            return self.default()
        return copy_option_value(value)


def copy_option_value(value: Any) -> Any:
    """Copy the containers of an option value, leaving their items shared."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, Mapping):
        return {
            key: list(item) if isinstance(item, (list, tuple)) else item
            for key, item in value.items()
        }
    return value


OPTIONS: Dict[str, ServiceOption] = {
    option.key: option for option in (
        ServiceOption("abstract", "a boolean", _is_bool, lambda: False),
        ServiceOption("extends", "a string", _is_str, lambda: None),
        ServiceOption("className", "a string", _is_str, lambda: None),
        ServiceOption("arguments", "a list", _is_list, list),
        ServiceOption(
            "calls",
            "a mapping of method names to lists of arguments",
            _is_call_map,
            dict,
        ),
        ServiceOption("singleton", "a boolean", _is_optional_bool, lambda: True),
        ServiceOption("tags", "a list of strings", _is_tag_list, list),
    )
}


def base_definition() -> Dict[str, Any]:
    """Return a fresh definition holding the default of every option."""
    return {key: option.default() for key, option in OPTIONS.items()}
