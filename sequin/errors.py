from numbers import Integral
from typing import Any


class InvalidArgumentError(ValueError):
    """raised when an operator is called with a missing or malformed argument."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"{name!r} {reason}")


def require_sequence(value: Any, name: str = 'source') -> Any:
    """fail fast unless value can produce an iterator"""
    if value is None:
        raise InvalidArgumentError(name, "is required, got None")
    # iter() looks the protocol up on the type
    kind = type(value)
    if not (hasattr(kind, '__iter__') or hasattr(kind, '__getitem__')):
        if isinstance(value, type):
            raise InvalidArgumentError(name, f"must be iterable, got the class {value.__name__}")
        raise InvalidArgumentError(name, f"must be iterable, got {kind.__name__}")
    return value


def require_callable(value: Any, name: str) -> Any:
    if value is None:
        raise InvalidArgumentError(name, "is required, got None")
    if not callable(value):
        raise InvalidArgumentError(name, f"must be callable, got {type(value).__name__}")
    return value


def optional_callable(value: Any, name: str) -> Any:
    return None if value is None else require_callable(value, name)


def require_count(value: Any, name: str = 'count') -> int:
    """validate a count argument; negative counts clamp to zero"""
    if value is None:
        raise InvalidArgumentError(name, "is required, got None")
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidArgumentError(name, f"must be an integer, got {type(value).__name__}")
    return max(int(value), 0)


def require_positive(value: Any, name: str = 'size') -> int:
    count = require_count(value, name)
    if count == 0:
        raise InvalidArgumentError(name, "must be positive")
    return count
