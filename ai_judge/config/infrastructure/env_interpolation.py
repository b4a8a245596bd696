"""Recursive ${ENV_VAR} interpolation for raw YAML data.

Supports ``${NAME}`` and ``${NAME:-fallback}``. A reference with a fallback is
never reported as missing.
"""

import os
import re

_ENV_VAR_PATTERN = re.compile(
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<fallback>[^}]*))?\}"
)

type RawValue = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def collect_missing_vars(data: RawValue) -> list[str]:
    """Return the names of all referenced, unset env vars without a fallback."""
    missing: list[str] = []
    _collect(data, missing)
    return missing


def _collect(data: RawValue, missing: list[str]) -> None:
    if isinstance(data, str):
        for match in _ENV_VAR_PATTERN.finditer(data):
            name = match.group("name")
            if match.group("fallback") is not None:
                continue
            if name not in os.environ and name not in missing:
                missing.append(name)
    elif isinstance(data, list):
        for item in data:
            _collect(item, missing)
    elif isinstance(data, dict):
        for value in data.values():
            _collect(value, missing)


def _substitute(match: re.Match[str]) -> str:
    fallback = match.group("fallback")
    if fallback is None:
        return os.environ[match.group("name")]
    return os.environ.get(match.group("name"), fallback)


def interpolate(data: RawValue) -> RawValue:
    """Recursively substitute every ${ENV_VAR} reference in data.

    Call `collect_missing_vars` first; an unset variable without a fallback
    raises KeyError here.
    """
    if isinstance(data, str):
        return _ENV_VAR_PATTERN.sub(_substitute, data)
    if isinstance(data, list):
        return [interpolate(item) for item in data]
    if isinstance(data, dict):
        return {key: interpolate(value) for key, value in data.items()}
    return data
