"""
Jinja2 host bindings for include directives.

Liquid-style include tags carry free-form markup (``nav.html title="Home"``)
that the Jinja2 lexer cannot tokenize faithfully, so the extension rewrites
each tag's markup into a single string literal during ``preprocess`` and
rebuilds the directive from that literal when the tag is parsed.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional, Tuple, Union

from jinja2 import Environment, Template, TemplateError, TemplateSyntaxError, Undefined, nodes
from jinja2.ext import Extension
from jinja2.runtime import Context

from sitepartials.constants import DEFAULT_ENCODING, RENDER_PASS_KEY
from sitepartials.directives.bootstrap import build_default_registry
from sitepartials.directives.executor import DirectiveInvocation, IncludeExecutor
from sitepartials.directives.host import Scope
from sitepartials.logger import OneTimeNotice, UnifiedLogger

logger = UnifiedLogger(tag="jinja-host")


class RenderPassMissingError(TemplateError):
    """Raised when an include tag renders outside a SiteRenderer pass."""
    pass


class JinjaPartialCompiler:
    """Compiles partial source into a :class:`jinja2.Template`."""

    syntax_errors = (TemplateSyntaxError, UnicodeDecodeError)

    def __init__(self, environment: Environment, encoding: str = DEFAULT_ENCODING):
        self.environment = environment
        self.encoding = encoding

    def compile(self, source: Union[bytes, str], name: str) -> Template:
        text = source.decode(self.encoding) if isinstance(source, bytes) else source
        code = self.environment.compile(text, name=name, filename=name)
        return self.environment.template_class.from_code(
            self.environment, code, self.environment.make_globals(None)
        )


class JinjaPartialRunner:
    """Renders a compiled template with the flattened scope as its context."""

    runtime_errors = (TemplateError, ArithmeticError, LookupError, TypeError, ValueError)

    def __init__(self, environment: Environment):
        self.environment = environment

    def run(self, partial: Template, scope: Scope) -> str:
        return partial.render(scope.flatten())

    def undefined(self, name: str) -> Undefined:
        return self.environment.undefined(name=name)


class IncludeExtension(Extension):
    """Registers the include directive tags on a Jinja2 environment.

    The environment is extended with ``include_registry`` (directive names and
    strategies), ``include_notice`` (deprecation helper) and
    ``include_encoding`` (partial file encoding). Call :meth:`configure` to
    replace them after the environment is created.
    """

    def __init__(self, environment: Environment):
        super().__init__(environment)
        environment.extend(
            include_registry=build_default_registry(),
            include_notice=None,
            include_encoding=DEFAULT_ENCODING,
        )
        self._invocations: Dict[Tuple[str, str], DirectiveInvocation] = {}
        self._executor: Optional[IncludeExecutor] = None

    @property
    def tags(self):  # type: ignore[override]
        return set(self.environment.include_registry.get_registered_directives())

    def configure(
        self,
        *,
        registry=None,
        notice: Optional[OneTimeNotice] = None,
        encoding: Optional[str] = None,
    ) -> None:
        """Swap the registry, notice helper or encoding used by this environment."""
        if registry is not None:
            self.environment.include_registry = registry
        if notice is not None:
            self.environment.include_notice = notice
        if encoding is not None:
            self.environment.include_encoding = encoding
        self._invocations.clear()
        self._executor = None

    @property
    def executor(self) -> IncludeExecutor:
        if self._executor is None:
            self._executor = IncludeExecutor(
                compiler=JinjaPartialCompiler(self.environment, self.environment.include_encoding),
                runner=JinjaPartialRunner(self.environment),
                registry=self.environment.include_registry,
                notice=self.environment.include_notice,
            )
        return self._executor

    # Source rewriting ---------------------------------------------------

    def _tag_pattern(self) -> "re.Pattern[str]":
        env = self.environment
        block_start = re.escape(env.block_start_string)
        block_end = re.escape(env.block_end_string)
        comment_start = re.escape(env.comment_start_string)
        comment_end = re.escape(env.comment_end_string)
        names = "|".join(
            re.escape(name)
            for name in sorted(self.tags, key=len, reverse=True)
        )
        return re.compile(
            rf"(?P<raw>{block_start}[-+]?\s*raw\s*[-+]?{block_end}.*?"
            rf"{block_start}[-+]?\s*endraw\s*[-+]?{block_end})"
            rf"|(?P<comment>{comment_start}.*?{comment_end})"
            rf"|(?P<open>{block_start}[-+]?)\s*(?P<tag>{names})(?=\s|[-+]?{block_end})"
            rf"(?P<markup>.*?)(?P<close>[-+]?{block_end})",
            re.DOTALL,
        )

    def preprocess(self, source: str, name: Optional[str], filename: Optional[str] = None) -> str:
        if not self.tags:
            return source

        def rewrite(match: "re.Match[str]") -> str:
            if match.group("tag") is None:
                return match.group(0)
            literal = json.dumps(match.group("markup").strip(), ensure_ascii=False)
            return f"{match.group('open')} {match.group('tag')} {literal} {match.group('close')}"

        return self._tag_pattern().sub(rewrite, source)

    # Parsing and rendering ----------------------------------------------

    def _invocation(self, tag_name: str, markup: str) -> DirectiveInvocation:
        key = (tag_name, markup)
        invocation = self._invocations.get(key)
        if invocation is None:
            invocation = self.executor.prepare(tag_name, markup)
            self._invocations[key] = invocation
        return invocation

    def parse(self, parser):
        token = next(parser.stream)
        tag_name = token.value
        lineno = token.lineno

        markup = parser.parse_expression()
        if not isinstance(markup, nodes.Const) or not isinstance(markup.value, str):
            parser.fail(f"Invalid markup for '{tag_name}' tag", lineno)

        # Validates the parameter string now; malformed arguments fail compilation.
        self._invocation(tag_name, markup.value)

        call = self.call_method(
            "_render_directive",
            [nodes.Const(tag_name), nodes.Const(markup.value), nodes.DerivedContextReference()],
            lineno=lineno,
        )
        return nodes.Output([nodes.MarkSafeIfAutoescape(call)], lineno=lineno)

    def _render_directive(self, tag_name: str, markup: str, context: Context) -> Any:
        live_variables = context.get_all()
        render_pass = live_variables.get(RENDER_PASS_KEY)
        if render_pass is None:
            raise RenderPassMissingError(
                f"'{tag_name}' tag rendered outside of a render pass; "
                f"render templates through SiteRenderer"
            )

        invocation = self._invocation(tag_name, markup)
        # Call-site frame: exposes template locals (loop variables, sets) to
        # bare parameter values and templated references.
        with render_pass.scope.layer(live_variables):
            return self.executor.execute(invocation, render_pass)
