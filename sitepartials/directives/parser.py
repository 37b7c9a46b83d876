"""
Directive markup parser for include tags.

Splits raw directive markup into a file reference and a parameter string,
validates the parameter string against the full argument grammar, and
extracts ``key=value`` pairs at render time. Bare (unquoted) values are
variable names resolved against the live scope, so extraction must wait
until the directive executes.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from sitepartials.logger import UnifiedLogger
from .exceptions import MalformedArgumentsError
from .host import Scope

# Create module logger
logger = UnifiedLogger(tag="directive-parser")

_UNSET = object()


#######################################################################
## Grammar
#######################################################################

# One key=value token.
# Groups: (key, double-quoted body, single-quoted body, bare variable name)
VALID_SYNTAX = re.compile(
    r"""
    ([A-Za-z0-9_-]+)\s*=\s*
    (?:"([^"\\]*(?:\\.[^"\\]*)*)"|'([^'\\]*(?:\\.[^'\\]*)*)'|([A-Za-z0-9_.-]+))
    """,
    re.VERBOSE | re.ASCII,
)

# Zero or more tokens, each followed by whitespace or end of input
FULL_VALID_SYNTAX = re.compile(
    rf"\A\s*(?:{VALID_SYNTAX.pattern}(?=\s|\Z)\s*)*\Z",
    re.VERBOSE | re.ASCII,
)

# A file reference containing one or more {{ expression }} markers,
# followed by the (possibly empty) parameter string
VARIABLE_SYNTAX = re.compile(
    r"""
    (?P<variable>[^{]*(\{\{\s*[A-Za-z0-9_.-]+\s*(\|.*)?\}\}[^\s{}]*)+)
    (?P<params>.*)
    """,
    re.VERBOSE | re.DOTALL,
)


#######################################################################
## Data Classes
#######################################################################

@dataclass(frozen=True)
class SplitMarkup:
    """Directive markup split into its file reference and parameter string."""
    file_reference: str
    raw_parameters: Optional[str]
    is_expression: bool


#######################################################################
## Parsing Logic
#######################################################################

def syntax_example(tag_name: str) -> str:
    """Return an example of valid markup for *tag_name*."""
    return f"{{% {tag_name} file.ext param='value' param2='value' %}}"


def is_templated_reference(reference: str) -> bool:
    """Check whether a file reference embeds a ``{{ expression }}`` marker."""
    return VARIABLE_SYNTAX.match(reference) is not None


def split_markup(markup: str) -> SplitMarkup:
    """Split raw directive markup into reference and parameter string.

    Examples:
        >>> split_markup('nav.html title="Home"')
        SplitMarkup(file_reference='nav.html', raw_parameters='title="Home"', is_expression=False)
        >>> split_markup('{{ page.sidebar }} compact=true').file_reference
        '{{ page.sidebar }}'

    Note:
        An empty parameter string is reported as ``None``.
    """
    stripped = markup.strip()
    matched = VARIABLE_SYNTAX.match(stripped)
    if matched:
        reference = matched.group("variable").strip()
        params = matched.group("params").strip()
        is_expression = True
    else:
        parts = stripped.split(None, 1)
        reference = parts[0] if parts else ""
        params = parts[1].strip() if len(parts) > 1 else ""
        is_expression = False

    return SplitMarkup(
        file_reference=reference,
        raw_parameters=params or None,
        is_expression=is_expression,
    )


def validate_parameters(raw_parameters: str, tag_name: str) -> None:
    """Ensure the whole parameter string decomposes into key=value tokens.

    Raises:
        MalformedArgumentsError: If any part of the string is left unmatched
    """
    if not FULL_VALID_SYNTAX.match(raw_parameters):
        raise MalformedArgumentsError(tag_name, raw_parameters, syntax_example(tag_name))


@logger.trace("parse_parameters")
def parse_parameters(
    raw_parameters: str,
    scope: Scope,
    undefined: Optional[Callable[[str], Any]] = None,
) -> Dict[str, Any]:
    """Extract the parameter map, resolving bare values against *scope*.

    Quoted values have their escaped quote unescaped; bare values are looked
    up as variables. A variable that is not set at all is bound to
    ``undefined(name)`` when given, else ``None``. A repeated key keeps its
    last value.

    Args:
        raw_parameters: A parameter string already accepted by validate_parameters
        scope: The scope visible at the directive's call site
        undefined: Host factory for the value of an unset variable

    Returns:
        Mapping of parameter name to value
    """
    params: Dict[str, Any] = {}
    for match in VALID_SYNTAX.finditer(raw_parameters):
        key, double_quoted, single_quoted, variable = match.groups()
        if double_quoted is not None:
            value: Any = double_quoted.replace('\\"', '"')
        elif single_quoted is not None:
            value = single_quoted.replace("\\'", "'")
        else:
            value = scope.get(variable, _UNSET)
            if value is _UNSET:
                value = undefined(variable) if undefined is not None else None
        params[key] = value
    return params
