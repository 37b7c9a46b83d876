"""
Include directive executor.

Resolves a directive's file reference, fetches the compiled partial from the
pass cache and runs it inside one freshly pushed scope layer:

    invocation -> reference -> safety check -> search roots -> cache -> run

The layer is popped on every exit path, so the caller's visible variables are
never altered by an inclusion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from sitepartials.constants import INCLUDE_NAMESPACE, REFERENCE_TEMPLATE_NAME
from sitepartials.logger import OneTimeNotice, UnifiedLogger
from .base import SearchRootsStrategy
from .exceptions import IncludeError, PartialExecutionError
from .host import PartialCompiler, PartialRunner, Scope
from .parser import parse_parameters, split_markup, syntax_example, validate_parameters
from .registry import DirectiveRegistry
from .resolver import locate_include_file
from .safety import check_file_reference

if TYPE_CHECKING:
    from sitepartials.runtime.render_pass import RenderPass

logger = UnifiedLogger(tag="include-executor")


@dataclass(frozen=True)
class DirectiveInvocation:
    """One include directive as written in a template source."""
    tag_name: str
    file_reference: str
    raw_parameters: Optional[str]
    is_expression: bool
    strategy: SearchRootsStrategy

    @classmethod
    def from_markup(
        cls,
        tag_name: str,
        markup: str,
        strategy: SearchRootsStrategy,
    ) -> "DirectiveInvocation":
        """Build an invocation, validating its parameter string eagerly.

        Raises:
            MalformedArgumentsError: If the parameters fail the argument grammar
        """
        split = split_markup(markup)
        if split.raw_parameters is not None:
            validate_parameters(split.raw_parameters, tag_name)
        return cls(
            tag_name=tag_name,
            file_reference=split.file_reference,
            raw_parameters=split.raw_parameters,
            is_expression=split.is_expression,
            strategy=strategy,
        )

    @property
    def syntax_example(self) -> str:
        return syntax_example(self.tag_name)


class IncludeExecutor:
    """Runs include directives against a host engine.

    Args:
        compiler: Host compiler, also used for templated file references
        runner: Host runner executing compiled partials
        registry: Directive names and their search strategies
        notice: Helper announcing deprecated directives once
    """

    def __init__(
        self,
        compiler: PartialCompiler,
        runner: PartialRunner,
        registry: DirectiveRegistry,
        notice: Optional[OneTimeNotice] = None,
    ):
        self.compiler = compiler
        self.runner = runner
        self.registry = registry
        self.notice = notice

    def prepare(self, tag_name: str, markup: str) -> DirectiveInvocation:
        """Construct the invocation for *tag_name* with its raw *markup*."""
        entry = self.registry.get_entry(tag_name)
        if entry.deprecation and self.notice is not None:
            self.notice.warn(tag_name, entry.deprecation, directive=tag_name)
        return DirectiveInvocation.from_markup(tag_name, markup, entry.strategy)

    def resolve_reference(self, invocation: DirectiveInvocation, scope: Scope) -> str:
        """Return the effective file reference, evaluating it if templated."""
        if not invocation.is_expression:
            return invocation.file_reference
        compiled = self.compiler.compile(invocation.file_reference, REFERENCE_TEMPLATE_NAME)
        return self.runner.run(compiled, scope)

    def execute(self, invocation: DirectiveInvocation, render_pass: RenderPass) -> str:
        """Render the partial named by *invocation* within *render_pass*.

        Raises:
            UnsafeFileReferenceError: If the reference fails the lexical checks
            IncludeNotFoundError: If no search root holds the file
            PartialCompileError: If the partial cannot be compiled
            PartialExecutionError: If the partial fails while rendering
        """
        scope = render_pass.scope
        reference = self.resolve_reference(invocation, scope)
        check_file_reference(reference, invocation.tag_name)

        roots = invocation.strategy.candidate_roots(render_pass)
        path = locate_include_file(reference, roots)
        partial = render_pass.cache.get_or_compile(path)

        params: Optional[Dict[str, Any]] = None
        if invocation.raw_parameters is not None:
            params = parse_parameters(invocation.raw_parameters, scope, self.runner.undefined)

        with logger.span("include", tag=invocation.tag_name, reference=reference, path=str(path)):
            scope.push_layer()
            try:
                if params is not None:
                    scope.set(INCLUDE_NAMESPACE, params)
                return self._run(partial, path, scope)
            finally:
                scope.pop_layer()

    def _run(self, partial: Any, path: Any, scope: Scope) -> str:
        try:
            return self.runner.run(partial, scope)
        except PartialExecutionError as exc:
            exc.add_inclusion(path)
            raise
        except (IncludeError, *self.runner.runtime_errors) as exc:
            error = PartialExecutionError(path, exc)
            logger.error(
                "Included file {path} failed",
                path=str(path),
                error_type=type(exc).__name__,
            )
            raise error from exc
