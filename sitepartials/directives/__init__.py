"""
Directive package.

Import specific processors or helpers from their dedicated modules, e.g.:
- `sitepartials.directives.parser`
- `sitepartials.directives.executor`
- `sitepartials.directives.bootstrap`
"""

__all__: list[str] = []
