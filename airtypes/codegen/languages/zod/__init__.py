"""
TypeScript/Zod code generator module.

Generates Zod schemas, inferred types and table definitions from remote
table schemas.
"""

from .generator import ZodGenerator, render_spec
from .naming import JS_RESERVED_WORDS, create_ts_scope

__all__ = [
    "ZodGenerator",
    "render_spec",
    "JS_RESERVED_WORDS",
    "create_ts_scope",
]
