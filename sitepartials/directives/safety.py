"""
Lexical safety checks for include file references.

This is the only guard keeping references inside the search roots: there is
no canonical-path containment check after resolution.
"""

import re

from .exceptions import UnsafeFileReferenceError
from .parser import syntax_example


VALID_FILENAME_CHARS = re.compile(r"[A-Za-z0-9_./-]+")
INVALID_SEQUENCES = re.compile(r"[./]{2,}")


def is_safe_file_reference(reference: str) -> bool:
    """Return True if *reference* passes both lexical checks."""
    if INVALID_SEQUENCES.search(reference):
        return False
    return VALID_FILENAME_CHARS.fullmatch(reference) is not None


def check_file_reference(reference: str, tag_name: str) -> None:
    """Reject traversal sequences and characters outside the allow-list.

    Raises:
        UnsafeFileReferenceError: If the reference is not safe to resolve
    """
    if not is_safe_file_reference(reference):
        raise UnsafeFileReferenceError(tag_name, reference, syntax_example(tag_name))
