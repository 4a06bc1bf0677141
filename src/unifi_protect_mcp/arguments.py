"""Typed extraction of tool arguments from the untyped invocation bag."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .errors import InvalidArgument, MissingArgument


class ToolArguments:
    """Read-only view over an invocation's argument mapping.

    Every accessor either returns a value of the requested type or raises
    :class:`MissingArgument` / :class:`InvalidArgument`. Nothing is coerced
    across types.
    """

    def __init__(self, raw: Optional[Mapping[str, Any]] = None) -> None:
        self._raw: Dict[str, Any] = dict(raw or {})

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._raw)

    def string(self, name: str, *, missing_message: Optional[str] = None) -> str:
        """Return a required, non-empty string argument."""
        value = self._raw.get(name)
        if value is None or value == "":
            raise MissingArgument(name, missing_message)
        if not isinstance(value, str):
            raise InvalidArgument(name, f"Invalid parameter {name}: expected string")
        return value

    def optional_string(self, name: str, default: str) -> str:
        value = self._raw.get(name)
        if value is None or value == "":
            return default
        if not isinstance(value, str):
            raise InvalidArgument(name, f"Invalid parameter {name}: expected string")
        return value

    def integer(self, name: str, default: int) -> int:
        """Return an integer argument, or ``default`` when absent.

        JSON numbers may arrive as floats; integral floats are accepted.
        """
        value = self._raw.get(name)
        if value is None:
            return default
        if isinstance(value, bool):
            raise InvalidArgument(name, f"Invalid parameter {name}: expected integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise InvalidArgument(name, f"Invalid parameter {name}: expected integer")

    def mapping(self, name: str, *, required: bool = False) -> Dict[str, Any]:
        """Return an object argument.

        When ``required`` the object must be present and non-empty; otherwise
        an absent argument yields an empty dict.
        """
        value = self._raw.get(name)
        if value is None:
            if required:
                raise MissingArgument(name)
            return {}
        if not isinstance(value, Mapping):
            if required:
                raise MissingArgument(name)
            raise InvalidArgument(name, f"Invalid parameter {name}: expected object")
        if required and not value:
            raise MissingArgument(name)
        return dict(value)


__all__ = ['ToolArguments']
