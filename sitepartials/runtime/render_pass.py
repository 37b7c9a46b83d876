"""
State owned by one rendering pass.

A pass is created by the host for a single root document render and is never
shared: concurrent renders each get their own partial cache and scope stack.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from sitepartials.directives.cache import PartialCache
from .scope import LayeredScope
from .site import Document, Site


@dataclass
class RenderPass:
    """
    Attributes:
        site: Site being rendered
        document: Document being rendered, None for global/top-level renders
        cache: Compiled partials for this pass
        scope: Variable layers for this pass
    """

    site: Site
    cache: PartialCache
    document: Optional[Document] = None
    scope: LayeredScope = field(default_factory=LayeredScope)
