"""
sitepartials: include directives for Jinja2-rendered sites.

Import specific pieces from their dedicated modules, e.g.:
- `sitepartials.rendering.renderer` (SiteRenderer)
- `sitepartials.runtime.site` (Site, Document)
- `sitepartials.directives.exceptions` (error taxonomy)
"""

__version__ = "0.1.0"

__all__: list[str] = []
