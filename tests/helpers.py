"""Fake host engine pieces and file helpers shared by the tests."""

from pathlib import Path
from typing import Any, Dict, List


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class FakeCompiler:
    """Compiler that returns decoded source and counts calls per name."""

    syntax_errors = (SyntaxError,)

    def __init__(self):
        self.calls: List[str] = []

    def compile(self, source, name):
        self.calls.append(name)
        text = source.decode("utf-8") if isinstance(source, bytes) else source
        if text.startswith("!syntax"):
            raise SyntaxError(f"bad partial {name}")
        return text


class FakeRunner:
    """Runner that formats the compiled text with the flattened scope."""

    runtime_errors = (ValueError,)

    def __init__(self):
        self.seen_scopes: List[Dict[str, Any]] = []

    def run(self, partial, scope):
        self.seen_scopes.append(scope.flatten())
        if partial.startswith("!fail"):
            raise ValueError("partial exploded")
        return partial.format_map(_Blank(scope.flatten()))

    def undefined(self, name):
        return None


class _Blank(dict):
    def __missing__(self, key):
        return ""
