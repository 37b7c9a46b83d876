"""
Search-path resolution for include references.

Roots are a priority list: the first root holding a regular file (symlinks
followed) wins.
"""

from pathlib import Path
from typing import Sequence, Union

from sitepartials.logger import UnifiedLogger
from .exceptions import IncludeNotFoundError

logger = UnifiedLogger(tag="directive-resolver")


def join_reference(root: Union[str, Path], reference: str) -> Path:
    """Join *reference* under *root*.

    A leading ``/`` on the reference never replaces the root the way
    ``pathlib`` would for an absolute right-hand side.
    """
    return Path(root) / reference.lstrip("/")


def locate_include_file(reference: str, roots: Sequence[Union[str, Path]]) -> Path:
    """Return the first ``root / reference`` that is an existing regular file.

    Args:
        reference: A reference already accepted by the safety checker
        roots: Candidate directories, highest priority first

    Raises:
        IncludeNotFoundError: If no root contains the file
    """
    for root in roots:
        path = join_reference(root, reference)
        if path.is_file():
            return path

    logger.warning(
        "Include reference {reference} not found",
        reference=reference,
        roots=[str(root) for root in roots],
    )
    raise IncludeNotFoundError(reference, roots)
