"""
Error taxonomy for include directive processing.

Every error carries the template it was raised for (``template_name``) and an
optional ``markup_context`` marker so that failures inside nested inclusions
stay traceable once they reach the enclosing document's render call.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union


INCLUDED_CONTEXT = "included"


class IncludeError(Exception):
    """Base exception for include directive errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        self.template_name: Optional[str] = None
        self.markup_context: Optional[str] = None
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class MalformedArgumentsError(IncludeError):
    """Raised when a directive's parameter string fails the argument grammar."""

    def __init__(self, tag_name: str, markup: str, syntax_example: str):
        super().__init__(
            f"Invalid syntax for {tag_name} tag:\n\n"
            f"{markup}\n\n"
            f"Valid syntax:\n\n"
            f"{syntax_example}\n",
            details={"tag_name": tag_name, "markup": markup},
        )
        self.tag_name = tag_name
        self.markup = markup


class UnsafeFileReferenceError(IncludeError):
    """Raised when a file reference contains traversal sequences or disallowed characters."""

    def __init__(self, tag_name: str, reference: str, syntax_example: str):
        super().__init__(
            f"Invalid syntax for {tag_name} tag. "
            f"File contains invalid characters or sequences:\n\n"
            f"  {reference}\n\n"
            f"Valid syntax:\n\n"
            f"  {syntax_example}\n",
            details={"tag_name": tag_name, "reference": reference},
        )
        self.tag_name = tag_name
        self.reference = reference


class IncludeNotFoundError(IncludeError):
    """Raised when no search root contains the referenced file."""

    def __init__(self, reference: str, roots: Sequence[Union[str, Path]]):
        root_list = [str(root) for root in roots]
        super().__init__(
            f"Could not locate the included file '{reference}' in any of {root_list}. "
            f"Ensure it exists in one of those directories.",
            details={"reference": reference, "roots": root_list},
        )
        self.reference = reference
        self.roots = root_list


class PartialCompileError(IncludeError):
    """Raised when the host engine rejects a partial's contents."""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        super().__init__(
            f"Could not compile included file '{path}': {cause}",
            details={"path": str(path), "error_type": type(cause).__name__},
        )
        self.path = str(path)
        self.cause = cause
        self.template_name = str(path)
        self.markup_context = INCLUDED_CONTEXT


class PartialExecutionError(IncludeError):
    """Raised when a compiled partial fails while rendering.

    ``include_chain`` lists the partials the failure crossed, innermost first,
    and grows by one entry for every enclosing inclusion it propagates through.
    """

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.source_path = str(path)
        self.cause = cause
        self.include_chain: List[str] = [str(path)]
        super().__init__(
            self._build_message(),
            details={"path": str(path), "error_type": type(cause).__name__},
        )
        self.template_name = str(path)
        if isinstance(cause, IncludeError) and cause.markup_context is not None:
            self.markup_context = cause.markup_context
        else:
            self.markup_context = INCLUDED_CONTEXT

    def add_inclusion(self, path: Union[str, Path]) -> None:
        """Record that the failure propagated out of the partial at *path*."""
        self.include_chain.append(str(path))
        self.template_name = str(path)
        self.details["include_chain"] = list(self.include_chain)
        self.message = self._build_message()
        self.args = (self.message,)

    def _build_message(self) -> str:
        message = f"Error in included file '{self.source_path}': {self.cause}"
        if len(self.include_chain) > 1:
            trail = " <- ".join(self.include_chain)
            message += f"\n  include chain: {trail}"
        return message
