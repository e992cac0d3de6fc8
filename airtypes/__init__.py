"""
airtypes: generate Zod schemas and TypeScript types from Airtable bases.

Fetches the meta-schema of each configured base, scopes it to the
configured tables and views, and renders one TypeScript module.
"""

__version__ = "0.1.0"

from .config import BaseConfig, ConfigError, ParsedConfig, load_config
from .codegen import GenerationOptions, GeneratorError, ZodGenerator
from .fetcher import FetchError, SchemaFetcher
from .pipeline import GenerateResult, generate_types

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ParsedConfig",
    "load_config",
    "GenerationOptions",
    "GeneratorError",
    "ZodGenerator",
    "FetchError",
    "SchemaFetcher",
    "GenerateResult",
    "generate_types",
]
