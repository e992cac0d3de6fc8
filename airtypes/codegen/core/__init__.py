"""
Core code generation components.

Provides the schema model, naming, type mapping, scoping and base classes
used by all language generators.
"""

from .errors import GeneratorError, RequiredFieldError, SchemaError, ScopeError
from .generator import (
    BaseTables,
    CodeGenerator,
    GenerationOptions,
    TableModelBuilder,
)
from .schema import (
    GeneratedField,
    LinkMeta,
    RemoteField,
    RemoteTable,
    RemoteView,
    SpecKind,
    TableModel,
    ValidationSpec,
)
from .naming import IdentifierScope, to_camel_case, to_pascal_case
from .types import FieldTypeMapper, TypeVariant
from .scope import apply_scope, filter_tables_by_id, filter_tables_by_view, resolve_table_ids
from .required import resolve_required_fields
from .document import Block, BlockKind, Document
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Errors
    "GeneratorError",
    "RequiredFieldError",
    "SchemaError",
    "ScopeError",
    # Base generator interface
    "BaseTables",
    "CodeGenerator",
    "GenerationOptions",
    "TableModelBuilder",
    # Schema system - core data structures
    "GeneratedField",
    "LinkMeta",
    "RemoteField",
    "RemoteTable",
    "RemoteView",
    "SpecKind",
    "TableModel",
    "ValidationSpec",
    # Naming utilities
    "IdentifierScope",
    "to_camel_case",
    "to_pascal_case",
    # Type mapping
    "FieldTypeMapper",
    "TypeVariant",
    # Scoping and overrides
    "apply_scope",
    "filter_tables_by_id",
    "filter_tables_by_view",
    "resolve_table_ids",
    "resolve_required_fields",
    # Document model
    "Block",
    "BlockKind",
    "Document",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
