"""
Directive registry mapping include directive names to search strategies.

The registry decides which tag names a template environment recognises and
which SearchRootsStrategy each name is constructed with. Registries are
plain objects owned by a renderer; there is no process-wide instance.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass

from sitepartials.logger import UnifiedLogger
from .base import SearchRootsStrategy

# Create module logger
logger = UnifiedLogger(tag="directive-registry")


#######################################################################
## Exception Classes
#######################################################################

class DirectiveRegistryError(Exception):
    """Base exception for directive registry errors."""
    pass


class InvalidDirectiveError(DirectiveRegistryError):
    """Raised when looking up an unregistered directive."""
    pass


class DuplicateDirectiveError(DirectiveRegistryError):
    """Raised when attempting to register a directive that already exists."""
    pass


#######################################################################
## Data Classes
#######################################################################

@dataclass
class DirectiveEntry:
    """A registered directive name and how it resolves files."""
    name: str
    strategy: SearchRootsStrategy
    deprecation: Optional[str] = None


#######################################################################
## Registry Implementation
#######################################################################

class DirectiveRegistry:
    """Registry for include directive names."""

    def __init__(self):
        """Initialize an empty directive registry."""
        self._entries: Dict[str, DirectiveEntry] = {}

    def register_directive(
        self,
        name: str,
        strategy: SearchRootsStrategy,
        deprecation: Optional[str] = None,
    ) -> None:
        """Register a directive name.

        Args:
            name: Tag name as written in templates
            strategy: Strategy producing the directories to search
            deprecation: Optional notice logged the first time the tag is used

        Raises:
            DuplicateDirectiveError: If the name is already registered
        """
        if name in self._entries:
            raise DuplicateDirectiveError(
                f"Directive '{name}' is already registered"
            )

        self._entries[name] = DirectiveEntry(name=name, strategy=strategy, deprecation=deprecation)
        logger.debug(
            "Registered directive {name}",
            name=name,
            strategy=strategy.get_strategy_name(),
        )

    def is_directive_registered(self, name: str) -> bool:
        return name in self._entries

    def get_entry(self, name: str) -> DirectiveEntry:
        """Get the registry entry for a directive.

        Raises:
            InvalidDirectiveError: If the directive is not registered
        """
        if name not in self._entries:
            raise InvalidDirectiveError(
                f"Unknown directive: '{name}'. "
                f"Registered directives: {list(self._entries.keys())}"
            )

        return self._entries[name]

    def get_strategy(self, name: str) -> SearchRootsStrategy:
        return self.get_entry(name).strategy

    def get_deprecation(self, name: str) -> Optional[str]:
        return self.get_entry(name).deprecation

    def mark_deprecated(self, name: str, message: str) -> None:
        """Attach a deprecation notice to an already registered directive."""
        self.get_entry(name).deprecation = message

    def get_registered_directives(self) -> List[str]:
        """Get a list of all registered directive names."""
        return list(self._entries.keys())

    def get_all_documentation(self) -> Dict[str, Dict[str, Optional[str]]]:
        """Describe every registered directive."""
        return {
            name: {
                "name": name,
                "strategy": entry.strategy.get_strategy_name(),
                "deprecation": entry.deprecation,
            }
            for name, entry in self._entries.items()
        }
