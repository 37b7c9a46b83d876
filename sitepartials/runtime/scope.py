"""
Layered variable scope used during a rendering pass.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional


class ScopeError(Exception):
    """Raised when the layer stack is misused."""
    pass


_MISSING = object()


def _lookup_attribute(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name, _MISSING)
    return getattr(value, name, _MISSING)


class LayeredScope:
    """Stack of variable layers; inner layers shadow outer ones.

    The base layer can never be popped. ``get`` accepts dotted names and walks
    nested mappings or attributes, returning the caller's default for anything
    missing. A name bound to None is not missing.
    """

    def __init__(self, variables: Optional[Mapping[str, Any]] = None):
        self._layers: List[Dict[str, Any]] = [dict(variables or {})]

    @property
    def depth(self) -> int:
        return len(self._layers)

    def push_layer(self, variables: Optional[Mapping[str, Any]] = None) -> None:
        self._layers.append(dict(variables or {}))

    def pop_layer(self) -> None:
        if len(self._layers) == 1:
            raise ScopeError("Cannot pop the base scope layer")
        self._layers.pop()

    @contextmanager
    def layer(self, variables: Optional[Mapping[str, Any]] = None) -> Iterator["LayeredScope"]:
        """Push a layer for the duration of a ``with`` block."""
        self.push_layer(variables)
        try:
            yield self
        finally:
            self.pop_layer()

    def set(self, name: str, value: Any) -> None:
        self._layers[-1][name] = value

    def __contains__(self, name: str) -> bool:
        return any(name in layer for layer in self._layers)

    def get(self, name: str, default: Any = None) -> Any:
        head, _, rest = name.partition(".")
        value = None
        for layer in reversed(self._layers):
            if head in layer:
                value = layer[head]
                break
        else:
            return default

        for part in rest.split(".") if rest else ():
            if value is None:
                return default
            value = _lookup_attribute(value, part)
            if value is _MISSING:
                return default
        return value

    def flatten(self) -> Dict[str, Any]:
        """Merge all layers into one mapping, innermost winning."""
        merged: Dict[str, Any] = {}
        for layer in self._layers:
            merged.update(layer)
        return merged
