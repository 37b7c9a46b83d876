"""
Host engine interfaces consumed by the include directive core.

The core never imports a template engine directly; it talks to these
protocols. ``sitepartials.rendering.jinja_host`` provides the Jinja2
implementations used by :class:`~sitepartials.rendering.renderer.SiteRenderer`.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Tuple, Type, Union, runtime_checkable


CompiledPartial = Any


@runtime_checkable
class Scope(Protocol):
    """Nested variable environment owned by the host."""

    def push_layer(self, variables: Optional[Mapping[str, Any]] = None) -> None:
        ...

    def pop_layer(self) -> None:
        ...

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value bound to *name* (dotted paths allowed) or *default*."""
        ...

    def set(self, name: str, value: Any) -> None:
        """Bind *name* in the innermost layer."""
        ...


@runtime_checkable
class PartialCompiler(Protocol):
    """Turns raw partial source into a reusable compiled form."""

    syntax_errors: Tuple[Type[BaseException], ...]

    def compile(self, source: Union[bytes, str], name: str) -> CompiledPartial:
        ...


@runtime_checkable
class PartialRunner(Protocol):
    """Executes a compiled partial against a scope."""

    runtime_errors: Tuple[Type[BaseException], ...]

    def run(self, partial: CompiledPartial, scope: Scope) -> str:
        ...

    def undefined(self, name: str) -> Any:
        """Value bound for a bare parameter naming a variable that is not set."""
        ...
