"""
Site and document model seen by include directives.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from sitepartials.constants import EXCERPT_MARKER
from sitepartials.settings.store import SiteConfig, load_site_config
from sitepartials.utils.frontmatter import parse_front_matter


class Site:
    """A content source with its include roots and collection layout."""

    def __init__(self, config: SiteConfig):
        self.config = config
        self.source = Path(config.source)

    @classmethod
    def from_config_file(cls, config_path: Union[str, Path]) -> "Site":
        return cls(load_site_config(config_path))

    def in_source_dir(self, *parts: Union[str, Path]) -> Path:
        """Join *parts* under the source directory.

        Leading slashes are dropped so an absolute-looking part stays inside
        the source tree.
        """
        path = self.source
        for part in parts:
            cleaned = str(part).lstrip("/")
            if cleaned:
                path = path / cleaned
        return path

    @property
    def includes_load_paths(self) -> List[Path]:
        """Ordered include roots: configured include dirs, then extra paths."""
        roots = [self.in_source_dir(directory) for directory in self.config.includes_dirs]
        roots.extend(Path(path) for path in self.config.extra_include_paths)
        return roots

    def document_path(self, relative_path: str, collection: Optional[str] = None) -> Path:
        """Absolute location of a stored document path."""
        if collection is None:
            return self.in_source_dir(relative_path)
        return self.in_source_dir(self.config.collections_dir, relative_path)

    def load_document(self, relative_path: str, collection: Optional[str] = None) -> "Document":
        """Read a document from disk, splitting off its front matter."""
        path = self.document_path(relative_path, collection)
        text = path.read_text(encoding=self.config.encoding)
        data, content = parse_front_matter(text)
        return Document(
            relative_path=relative_path,
            collection=collection,
            data=data,
            content=content,
        )


@dataclass
class Document:
    """
    A renderable document.

    Attributes:
        relative_path: Stored path (relative to the source, or to the
            collection container for collection documents)
        collection: Collection name, None for free-standing pages
        data: Front matter mapping
        content: Template body
    """

    relative_path: str
    collection: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    content: str = ""

    @property
    def is_excerpt(self) -> bool:
        return self.relative_path.endswith(EXCERPT_MARKER)

    def excerpt(self, separator: str) -> "Document":
        """Return the excerpt of this document as its own document."""
        head, _, _ = self.content.partition(separator)
        return replace(self, relative_path=f"{self.relative_path}{EXCERPT_MARKER}", content=head)

    def to_payload(self) -> Dict[str, Any]:
        """Variables exposed to templates as ``page``."""
        payload = dict(self.data)
        payload["path"] = self.relative_path
        payload["collection"] = self.collection
        payload["content"] = self.content
        return payload
