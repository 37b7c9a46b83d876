"""
Helpers for registering the built-in include directives.

Provides an explicit entry point for wiring the default directive set into a
registry without relying on package import side effects.
"""

from __future__ import annotations

from typing import Mapping, Optional, Tuple, Type

from sitepartials.constants import INCLUDE_DIRECTIVE, INCLUDE_RELATIVE_DIRECTIVE
from sitepartials.logger import UnifiedLogger

from .base import SearchRootsStrategy
from .registry import DirectiveRegistry
from .strategies import DocumentDirectoryStrategy, IncludeRootsStrategy

logger = UnifiedLogger(tag="directive-bootstrap")

_BUILTIN_DIRECTIVES: Tuple[Tuple[str, Type[SearchRootsStrategy]], ...] = (
    (INCLUDE_DIRECTIVE, IncludeRootsStrategy),
    (INCLUDE_RELATIVE_DIRECTIVE, DocumentDirectoryStrategy),
)


def register_builtin_directives(registry: DirectiveRegistry, skip_existing: bool = False) -> None:
    """Register the built-in include directives with *registry*.

    Args:
        registry: Target registry
        skip_existing: Leave names that are already registered untouched
    """
    for name, strategy_cls in _BUILTIN_DIRECTIVES:
        if skip_existing and registry.is_directive_registered(name):
            continue

        try:
            registry.register_directive(name, strategy_cls())
        except Exception as exc:
            logger.error(
                "Failed to register directive",
                directive=name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise


def build_default_registry(deprecations: Optional[Mapping[str, str]] = None) -> DirectiveRegistry:
    """Return a fresh registry holding the built-in directives.

    Args:
        deprecations: Directive name to notice text, applied after registration
    """
    registry = DirectiveRegistry()
    register_builtin_directives(registry)
    for name, message in (deprecations or {}).items():
        registry.mark_deprecated(name, message)
    return registry
