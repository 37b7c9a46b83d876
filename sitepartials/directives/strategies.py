"""
Concrete search root strategies.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List

from sitepartials.constants import EXCERPT_MARKER
from .base import SearchRootsStrategy

if TYPE_CHECKING:
    from sitepartials.runtime.render_pass import RenderPass


class IncludeRootsStrategy(SearchRootsStrategy):
    """Search every configured include root, in configured order."""

    def get_strategy_name(self) -> str:
        return "include-roots"

    def candidate_roots(self, render_pass: RenderPass) -> List[Path]:
        return list(render_pass.site.includes_load_paths)


class DocumentDirectoryStrategy(SearchRootsStrategy):
    """Search only the directory holding the document being rendered.

    Collection documents store paths relative to their collection container,
    so the container directory is re-joined before taking the directory part.
    Without a current document the content-source root is searched.
    """

    def get_strategy_name(self) -> str:
        return "document-directory"

    def candidate_roots(self, render_pass: RenderPass) -> List[Path]:
        return [self.document_directory(render_pass)]

    @staticmethod
    def document_directory(render_pass: RenderPass) -> Path:
        site = render_pass.site
        document = render_pass.document
        if document is None:
            return site.source

        if document.collection is None:
            resource_path = document.relative_path
        else:
            container = site.config.collections_dir.strip("/")
            resource_path = (
                f"{container}/{document.relative_path}" if container else document.relative_path
            )

        if resource_path.endswith(EXCERPT_MARKER):
            resource_path = resource_path[: -len(EXCERPT_MARKER)]

        parent, _, _ = resource_path.rpartition("/")
        return site.in_source_dir(parent)
