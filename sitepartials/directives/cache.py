"""
Per-pass cache of compiled partials.

A cache belongs to exactly one rendering pass. It is keyed by the resolved
path, so two roots that resolve to the same file share one entry, and each
path is read and compiled at most once per cache instance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

from sitepartials.logger import UnifiedLogger
from .exceptions import IncludeError, PartialCompileError
from .host import CompiledPartial, PartialCompiler

logger = UnifiedLogger(tag="partial-cache")


class PartialCache:
    """Memoizes compiled partials by resolved path for one rendering pass."""

    def __init__(self, compiler: PartialCompiler):
        self._compiler = compiler
        self._entries: Dict[str, CompiledPartial] = {}
        self.hits = 0
        self.misses = 0

    def __contains__(self, path: Union[str, Path]) -> bool:
        return str(Path(path)) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compile(self, path: Union[str, Path]) -> CompiledPartial:
        """Return the compiled partial for *path*, compiling it on first use.

        Raises:
            PartialCompileError: If the host compiler rejects the file
            OSError: If the file cannot be read
        """
        key = str(Path(path))
        if key in self._entries:
            self.hits += 1
            logger.debug("Partial cache hit {path}", path=key)
            return self._entries[key]

        self.misses += 1
        source = Path(key).read_bytes()
        try:
            compiled = self._compiler.compile(source, key)
        except (IncludeError, *self._compiler.syntax_errors) as exc:
            raise PartialCompileError(key, exc) from exc

        logger.debug("Compiled partial {path}", path=key, size=len(source))
        self._entries[key] = compiled
        return compiled
