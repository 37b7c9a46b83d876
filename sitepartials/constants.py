"""
Core system constants.

Only place true invariants here (reserved names, markers, default folder
names). Site-specific settings live in sitepartials.settings.store.
"""

from __future__ import annotations


# Directive names registered by default
INCLUDE_DIRECTIVE = "include_file"
INCLUDE_RELATIVE_DIRECTIVE = "include_relative"

# Scope key under which directive parameters are bound inside a partial
INCLUDE_NAMESPACE = "include"

# Scope key carrying the active RenderPass into nested template renders
RENDER_PASS_KEY = "__sitepartials_pass__"

# Suffix appended to a document's stored path when rendering its excerpt
EXCERPT_MARKER = "/#excerpt"

# Default site layout
DEFAULT_INCLUDES_DIR = "_includes"
DEFAULT_ENCODING = "utf-8"
DEFAULT_EXCERPT_SEPARATOR = "\n\n"

# Pseudo template name used when evaluating a templated file reference
REFERENCE_TEMPLATE_NAME = "<include reference>"
