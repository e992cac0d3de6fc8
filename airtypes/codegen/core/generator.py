"""
Base generator interface for all code generation targets.

Builds language-agnostic table models from scoped remote tables and
defines the contract language generators implement to turn them into a
document.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from ...config import BaseConfig
from ...logging_config import get_logger
from .document import Block, BlockKind, Document
from .errors import GeneratorError
from .naming import IdentifierScope, to_camel_case, to_pascal_case
from .required import resolve_required_fields
from .schema import (
    DERIVED_DECLARATION_SUFFIXES,
    GeneratedField,
    LinkMeta,
    RemoteTable,
    TableModel,
)
from .templates import TemplateEngine, create_template_engine
from .types import FieldTypeMapper, link_meta_target

logger = get_logger(__name__)

__all__ = [
    "BaseTables",
    "CodeGenerator",
    "GenerationOptions",
    "GeneratorError",
    "TableModelBuilder",
]

# A base config paired with its scoped tables, in configuration order
BaseTables = Tuple[BaseConfig, Sequence[RemoteTable]]


@dataclass(frozen=True)
class GenerationOptions:
    """Switches for optional parts of the generated document."""

    include_links: bool = True
    include_record_schema: bool = True


class TableModelBuilder:
    """Turn one remote table into a TableModel."""

    def __init__(
        self,
        type_mapper: FieldTypeMapper,
        scope_factory: Callable[[], IdentifierScope],
        declarations: IdentifierScope,
    ):
        """
        Initialize builder.

        Args:
            type_mapper: Maps remote field types to validation specs
            scope_factory: Creates the per-table identifier scope
            declarations: Document-wide scope for declaration names
        """
        self.type_mapper = type_mapper
        self.scope_factory = scope_factory
        self.declarations = declarations

    def build(self, base: BaseConfig, table: RemoteTable) -> TableModel:
        """
        Build the model for ``table`` of ``base``.

        Raises:
            SchemaError: A computed field lacks its nested descriptor
            RequiredFieldError: A required-field token cannot be resolved
        """
        base_pascal = to_pascal_case(base.base_name)
        base_camel = to_camel_case(base.base_name)
        table_pascal = to_pascal_case(table.name)

        type_name = self.declarations.identifier(
            f"{base_pascal}{table_pascal}", DERIVED_DECLARATION_SUFFIXES
        )
        table_const = self.declarations.identifier(
            f"{base_camel}{table_pascal}Table"
        )

        scope = self.scope_factory()
        fields: List[GeneratedField] = []
        links: List[LinkMeta] = []
        for remote_field in table.fields:
            identifier = scope.identifier(
                to_camel_case(remote_field.name) or remote_field.name
            )
            spec = self.type_mapper.map_field(remote_field)
            fields.append(GeneratedField(remote_field, identifier, spec))

            linked_table_id = link_meta_target(remote_field)
            if linked_table_id:
                links.append(LinkMeta(identifier, linked_table_id))

        fields, required = resolve_required_fields(table, fields, base.required_fields)

        logger.debug(
            f"Built model for table {table.name} ({table.id}): {len(fields)} field(s), "
            f"{len(required)} required, {len(links)} link(s)"
        )

        return TableModel(
            base_name=base.base_name,
            base_id=base.base_id,
            table_id=table.id,
            table_name=table.name,
            type_name=type_name,
            table_const=table_const,
            fields=fields,
            required_fields=required,
            links=links,
        )


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(
        self,
        options: Optional[GenerationOptions] = None,
        type_mapper: Optional[FieldTypeMapper] = None,
    ):
        """Initialize generator with optional configuration."""
        self.options = options or GenerationOptions()
        self.type_mapper = type_mapper or FieldTypeMapper()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @abstractmethod
    def get_template_directory(self) -> Path:
        """Return the directory containing templates for this generator."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def create_scope(self) -> IdentifierScope:
        """Create an empty identifier scope using the target's rules."""
        pass

    @abstractmethod
    def header_blocks(self) -> List[Block]:
        """Blocks emitted once at the top of the document."""
        pass

    @abstractmethod
    def table_blocks(self, model: TableModel) -> List[Block]:
        """Blocks emitted for one table."""
        pass

    @abstractmethod
    def render_block(self, block: Block) -> str:
        """Render a single block to text."""
        pass

    def build_document(self, bases: Sequence[BaseTables]) -> Document:
        """
        Assemble the document for all bases.

        Args:
            bases: Base configs with their scoped tables, in config order

        Returns:
            Document with header, then per base a comment and table blocks
        """
        document = Document()
        document.extend(self.header_blocks())

        builder = TableModelBuilder(
            self.type_mapper, self.create_scope, self.create_scope()
        )
        for base, tables in bases:
            document.add(BlockKind.BASE_COMMENT, base_name=base.base_name)
            for table in tables:
                document.extend(self.table_blocks(builder.build(base, table)))

        return document

    def render_document(self, document: Document) -> str:
        """Render all blocks, separated by blank lines."""
        return "\n\n".join(self.render_block(block).rstrip() for block in document)

    def generate(self, bases: Sequence[BaseTables]) -> str:
        """
        Generate the complete file for all bases.

        Args:
            bases: Base configs with their scoped tables, in config order

        Returns:
            Generated code ending with a single newline
        """
        return self.format_code(self.render_document(self.build_document(bases)))

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).rstrip() + "\n"

    def render_template(self, template_name: str, context: dict) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)
