"""Tests for the directive registry and built-in bootstrap."""

import pytest

from sitepartials.directives.bootstrap import build_default_registry, register_builtin_directives
from sitepartials.directives.registry import (
    DirectiveRegistry,
    DuplicateDirectiveError,
    InvalidDirectiveError,
)
from sitepartials.directives.strategies import DocumentDirectoryStrategy, IncludeRootsStrategy


def test_builtin_directives_registered():
    registry = build_default_registry()

    assert registry.get_registered_directives() == ["include_file", "include_relative"]
    assert isinstance(registry.get_strategy("include_file"), IncludeRootsStrategy)
    assert isinstance(registry.get_strategy("include_relative"), DocumentDirectoryStrategy)


def test_duplicate_registration_rejected():
    registry = build_default_registry()

    with pytest.raises(DuplicateDirectiveError):
        registry.register_directive("include_file", IncludeRootsStrategy())


def test_skip_existing_leaves_custom_entry():
    registry = DirectiveRegistry()
    custom = DocumentDirectoryStrategy()
    registry.register_directive("include_file", custom)

    register_builtin_directives(registry, skip_existing=True)

    assert registry.get_strategy("include_file") is custom
    assert registry.is_directive_registered("include_relative")


def test_unknown_directive():
    with pytest.raises(InvalidDirectiveError, match="include_everything"):
        DirectiveRegistry().get_entry("include_everything")


def test_deprecations_applied():
    registry = build_default_registry({"include_relative": "going away"})

    assert registry.get_deprecation("include_relative") == "going away"
    assert registry.get_deprecation("include_file") is None
    assert registry.get_all_documentation()["include_relative"] == {
        "name": "include_relative",
        "strategy": "document-directory",
        "deprecation": "going away",
    }


def test_deprecating_unknown_directive_fails():
    with pytest.raises(InvalidDirectiveError):
        build_default_registry({"include_nothing": "n/a"})
