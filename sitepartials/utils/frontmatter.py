"""
Front matter parsing for site documents.

Documents may start with a YAML mapping between ``---`` delimiter lines.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import yaml


class FrontMatterError(ValueError):
    """Raised when a front matter block is unterminated or not a mapping."""
    pass


def parse_front_matter(content: str) -> Tuple[Dict[str, Any], str]:
    """Split *content* into (front matter mapping, remaining body).

    Content without a leading ``---`` line is returned untouched with an
    empty mapping.
    """
    if not content.startswith("---"):
        return {}, content

    lines = content.split("\n")
    if lines[0].strip() != "---":
        return {}, content

    end_idx = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() in ("---", "..."):
            end_idx = i
            break

    if end_idx is None:
        raise FrontMatterError("Front matter not properly closed with ---")

    try:
        data = yaml.safe_load("\n".join(lines[1:end_idx])) or {}
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid front matter: {exc}") from exc

    if not isinstance(data, dict):
        raise FrontMatterError("Front matter must be a mapping of key: value pairs")

    return data, "\n".join(lines[end_idx + 1:])
