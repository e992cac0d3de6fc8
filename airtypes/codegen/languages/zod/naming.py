"""
TypeScript-specific naming utilities.

Handles JavaScript reserved words for identifiers used as object keys and
declaration names in generated modules.
"""

from ...core.naming import IdentifierScope


# Words rejected as binding names in sloppy-mode JavaScript
JS_RESERVED_WORDS = {
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "let",
    "new",
    "null",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
}


def create_ts_scope() -> IdentifierScope:
    """Create an identifier scope configured for TypeScript."""
    return IdentifierScope(JS_RESERVED_WORDS)
