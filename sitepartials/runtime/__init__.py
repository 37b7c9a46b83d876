"""
Project runtime package.

Import concrete functionality from explicit submodules:
- `sitepartials.runtime.site` for the site and document model
- `sitepartials.runtime.scope` for the layered variable scope
- `sitepartials.runtime.render_pass` for per-pass state
"""

__all__: list[str] = []
