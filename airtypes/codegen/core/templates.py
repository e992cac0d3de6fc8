"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from typing import Any, Callable, Dict
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

# Characters that would end a string literal or line comment
_ESCAPES = (
    ("\\", "\\\\"),
    ("'", "\\'"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def escape_string(value: Any) -> str:
    """Escape a value for use inside a single-quoted string literal."""
    escaped = str(value)
    for raw, replacement in _ESCAPES:
        escaped = escaped.replace(raw, replacement)
    return escaped


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Path):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )

        # Add custom filters for code generation
        self._env.filters["escape_string"] = escape_string
        self._env.filters["quote"] = self._quote_filter
        self._env.filters["comment"] = self._comment_filter

    def add_filter(self, name: str, func: Callable[..., Any]):
        """Register an extra filter for generator-specific formatting."""
        self._env.filters[name] = func

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {str(e)}"
            ) from e

    # Template filters for code generation

    def _quote_filter(self, value: Any) -> str:
        """Render a single-quoted string literal."""
        return f"'{escape_string(value)}'"

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def create_template_engine(template_dir: Path) -> TemplateEngine:
    """Create a template engine loading from ``template_dir``."""
    return TemplateEngine(template_dir)
