"""Placeholder substitution for ``{{fieldName}}`` style templates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

__all__ = [
    "PLACEHOLDER_PATTERN",
    "TemplateRenderer",
    "TemplateRenderingError",
    "escape_js_string",
    "find_placeholders",
]


PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<field>[A-Za-z_][A-Za-z0-9_]*)\s*}}")

_MISSING_POLICIES = frozenset({"keep", "empty", "error"})

_JS_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\"": "\\\"",
    "`": "\\`",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class TemplateRenderingError(RuntimeError):
    """Raised when a placeholder has no value and ``missing="error"``."""


def find_placeholders(text: str) -> list[str]:
    """Return the field names of every placeholder still present in ``text``."""

    return [match.group("field") for match in PLACEHOLDER_PATTERN.finditer(text)]


def escape_js_string(value: str) -> str:
    """Escape ``value`` for use inside a quoted JavaScript string literal."""

    return value.translate(_JS_STRING_TRANSLATION)


_JS_STRING_TRANSLATION = str.maketrans(_JS_STRING_ESCAPES)


@dataclass(slots=True)
class TemplateRenderer:
    """Render templates with ``{{ fieldName }}`` expressions.

    Parameters
    ----------
    missing:
        Controls what happens when a placeholder cannot be resolved. The
        supported policies are ``"keep"`` (leave the placeholder unchanged),
        ``"empty"`` (replace with an empty string) and ``"error"`` (raise
        :class:`TemplateRenderingError`).
    escape:
        Optional callable applied to every substituted value, such as
        :func:`escape_js_string` for values placed inside script literals.
    """

    missing: str = "keep"
    escape: Optional[Callable[[str], str]] = None

    def __post_init__(self) -> None:
        if self.missing not in _MISSING_POLICIES:
            raise ValueError("missing must be 'keep', 'empty', or 'error'")

    def render_string(self, template: str, context: Mapping[str, Any]) -> str:
        """Render ``template`` using ``context``."""

        def substitute(match: re.Match[str]) -> str:
            key = match.group("field")
            if key in context:
                value = str(context[key])
                return self.escape(value) if self.escape else value
            if self.missing == "keep":
                return match.group(0)
            if self.missing == "empty":
                return ""
            raise TemplateRenderingError(f"missing value for '{key}'")

        return PLACEHOLDER_PATTERN.sub(substitute, template)

    def render_file(
        self,
        template_path: str | Path,
        context: Mapping[str, Any],
        *,
        target: str | Path | None = None,
        encoding: str = "utf-8",
    ) -> str:
        """Render ``template_path`` and optionally write the result to ``target``."""

        template_path = Path(template_path)
        text = template_path.read_text(encoding=encoding)
        rendered = self.render_string(text, context)

        if target is not None:
            Path(target).write_text(rendered, encoding=encoding)

        return rendered
