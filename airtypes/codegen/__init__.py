"""
airtypes code generation module.

Generates source code from remote table schemas.
"""

from .core import (
    CodeGenerator,
    GenerationOptions,
    GeneratorError,
    RemoteTable,
    apply_scope,
)
from .languages import ZodGenerator

__all__ = [
    "CodeGenerator",
    "GenerationOptions",
    "GeneratorError",
    "RemoteTable",
    "apply_scope",
    "ZodGenerator",
]
