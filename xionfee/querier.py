"""Parameter storage for the global fee module and its query service."""

from __future__ import annotations

import copy
from typing import Any, Callable

from xionfee.params import PARAM_SET_PAIRS, Params

_KEY_TABLE: dict[bytes, tuple[str, Callable[[Any], Any]]] = {
    key: (attribute, validator) for key, attribute, validator in PARAM_SET_PAIRS
}


class ParamSubspace:
    """In-memory parameter subspace registered with the global fee key table."""

    def __init__(self) -> None:
        self._store: dict[bytes, Any] = {}

    @staticmethod
    def _check_key(key: bytes) -> bytes:
        key = bytes(key)
        if key not in _KEY_TABLE:
            raise KeyError(f"parameter {key.decode(errors='replace')} not registered")
        return key

    def has(self, key: bytes) -> bool:
        """Whether a value is stored under ``key``."""
        return bytes(key) in self._store

    def get(self, key: bytes) -> Any:
        """Return a copy of the value stored under ``key``; raise KeyError if absent."""
        key = bytes(key)
        if key not in self._store:
            raise KeyError(f"parameter {key.decode(errors='replace')} is not set")
        return copy.copy(self._store[key])

    def set(self, key: bytes, value: Any) -> None:
        """Store ``value`` under a registered ``key``."""
        self._store[self._check_key(key)] = copy.copy(value)

    def set_param_set(self, params: Params) -> None:
        """Validate and store every field of ``params``."""
        values = {}
        for key, (attribute, validator) in _KEY_TABLE.items():
            value = getattr(params, attribute)
            validator(value)
            values[key] = value
        for key, value in values.items():
            self.set(key, value)

    def get_param_set(self) -> Params:
        """Read every parameter back into a Params; raise KeyError if one is missing."""
        return Params(**{attribute: self.get(key) for key, (attribute, _) in _KEY_TABLE.items()})


class GrpcQuerier:
    """Answers parameter queries from a read-only parameter source."""

    def __init__(self, param_source: Any) -> None:
        self.param_source = param_source

    def params(self) -> Params:
        """Return the current params; fields that are not set take zero values."""
        result = Params()
        for key, (attribute, _) in _KEY_TABLE.items():
            if self.param_source.has(key):
                setattr(result, attribute, self.param_source.get(key))
        return result