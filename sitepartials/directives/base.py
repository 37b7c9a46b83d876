"""
Base classes for include directive search strategies.

An include directive is a single executor parameterized by the strategy that
decides which directories a reference is searched in.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from sitepartials.runtime.render_pass import RenderPass


class SearchRootsStrategy(ABC):
    """Base class for search root strategies.

    Each directive variant (absolute-style, relative-style) implements this
    interface to produce the ordered candidate roots for one render call.
    """

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Return the name of this strategy.

        Returns:
            The strategy name (e.g., "include-roots", "document-directory")
        """
        pass

    @abstractmethod
    def candidate_roots(self, render_pass: "RenderPass") -> List[Path]:
        """Produce the directories to search, highest priority first.

        Args:
            render_pass: The active rendering pass (site and current document)

        Returns:
            Ordered list of absolute directory paths
        """
        pass
