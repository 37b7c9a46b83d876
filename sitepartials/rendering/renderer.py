"""
Site renderer: the host side of a rendering pass.

Each render call builds a fresh :class:`RenderPass` (partial cache and scope
stack) so that concurrent renders of different documents never share state.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from jinja2 import Environment

from sitepartials.constants import RENDER_PASS_KEY
from sitepartials.directives.bootstrap import build_default_registry
from sitepartials.directives.cache import PartialCache
from sitepartials.directives.registry import DirectiveRegistry
from sitepartials.logger import OneTimeNotice, UnifiedLogger
from sitepartials.runtime.render_pass import RenderPass
from sitepartials.runtime.scope import LayeredScope
from sitepartials.runtime.site import Document, Site
from .jinja_host import IncludeExtension

logger = UnifiedLogger(tag="site-renderer")


class SiteRenderer:
    """Renders site documents with include directives enabled.

    Args:
        site: Site whose include roots and layout are used
        registry: Directive registry; defaults to the built-in directives
            with the site's configured deprecations applied
        notice: One-time notice helper for deprecated directives
        environment: Jinja2 environment to extend; a new one is created if omitted
    """

    def __init__(
        self,
        site: Site,
        *,
        registry: Optional[DirectiveRegistry] = None,
        notice: Optional[OneTimeNotice] = None,
        environment: Optional[Environment] = None,
    ):
        self.site = site
        self.environment = environment or Environment(keep_trailing_newline=True)
        if IncludeExtension.identifier not in self.environment.extensions:
            self.environment.add_extension(IncludeExtension)

        self.notice = notice or OneTimeNotice(logger)
        self.extension.configure(
            registry=registry or build_default_registry(site.config.deprecated_directives),
            notice=self.notice,
            encoding=site.config.encoding,
        )

    @property
    def extension(self) -> IncludeExtension:
        return self.environment.extensions[IncludeExtension.identifier]

    def new_pass(self, document: Optional[Document] = None) -> RenderPass:
        """Create the isolated state for one rendering pass."""
        return RenderPass(
            site=self.site,
            cache=PartialCache(self.extension.executor.compiler),
            document=document,
            scope=LayeredScope(),
        )

    def _base_variables(
        self,
        render_pass: RenderPass,
        variables: Optional[Mapping[str, Any]],
    ) -> Dict[str, Any]:
        base: Dict[str, Any] = {
            "site": {
                "source": str(self.site.source),
                "config": self.site.config.model_dump(mode="json"),
            },
            "page": render_pass.document.to_payload() if render_pass.document else {},
        }
        base.update(variables or {})
        base[RENDER_PASS_KEY] = render_pass
        return base

    def render_string(
        self,
        source: str,
        variables: Optional[Mapping[str, Any]] = None,
        document: Optional[Document] = None,
        name: str = "<string>",
    ) -> str:
        """Render *source* in a new pass, optionally as *document*."""
        render_pass = self.new_pass(document)
        executor = self.extension.executor
        template = executor.compiler.compile(source, name)

        with logger.span("render", name=name):
            with render_pass.scope.layer(self._base_variables(render_pass, variables)):
                output = executor.runner.run(template, render_pass.scope)

        logger.debug(
            "Rendered {name}",
            name=name,
            partials_compiled=render_pass.cache.misses,
            partial_cache_hits=render_pass.cache.hits,
        )
        return output

    def render_document(
        self,
        document: Document,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a document's content in a new pass."""
        return self.render_string(
            document.content,
            variables=variables,
            document=document,
            name=document.relative_path,
        )

    def render_excerpt(
        self,
        document: Document,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render the excerpt of *document* in a new pass."""
        return self.render_document(document.excerpt(self.site.config.excerpt_separator), variables)
