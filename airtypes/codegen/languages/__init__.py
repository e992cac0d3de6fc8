"""
Language-specific code generators.

This module contains generators for the supported output languages.
"""

from .zod import ZodGenerator

__all__ = ["ZodGenerator"]
