"""
TypeScript/Zod code generator implementation.

Generates Zod object schemas, inferred types and table definitions from
remote table models using templates.
"""

from pathlib import Path
from typing import List, Optional

from ...core.document import Block, BlockKind
from ...core.generator import CodeGenerator, GenerationOptions
from ...core.naming import IdentifierScope
from ...core.schema import GeneratedField, SpecKind, TableModel, ValidationSpec
from ...core.templates import escape_string
from ...core.types import FieldTypeMapper
from .naming import create_ts_scope

TOOL_NAME = "airtypes"

_SCALAR_EXPRESSIONS = {
    SpecKind.STRING: "z.string()",
    SpecKind.NUMBER: "z.number()",
    SpecKind.BOOLEAN: "z.boolean()",
    SpecKind.RECORD: "z.record(z.string(), z.unknown())",
    SpecKind.OBJECT: "z.object({ id: z.string() }).passthrough()",
}


def render_spec(spec: ValidationSpec) -> str:
    """
    Render a validation spec as a Zod expression.

    Array elements are rendered without ``.optional()``; the outer spec gets
    it when optional.
    """
    if spec.kind is SpecKind.ARRAY:
        inner = render_spec(spec.inner.as_inner()) if spec.inner else "z.unknown()"
        expression = f"z.array({inner})"
    else:
        expression = _SCALAR_EXPRESSIONS.get(spec.kind, "z.unknown()")

    if spec.optional:
        expression = f"{expression}.optional()"
    return expression


def original_comment(field: GeneratedField) -> str:
    """Trailing comment naming the original field when it was renamed."""
    if not field.renamed:
        return ""
    return f' // Original field: "{escape_string(field.original_name)}"'


class ZodGenerator(CodeGenerator):
    """Code generator for TypeScript modules built on Zod schemas."""

    def __init__(
        self,
        options: Optional[GenerationOptions] = None,
        type_mapper: Optional[FieldTypeMapper] = None,
    ):
        """Initialize Zod generator with generation options."""
        super().__init__(options, type_mapper)
        self.template_engine.add_filter("zod", render_spec)
        self.template_engine.add_filter("original_comment", original_comment)

    def get_template_directory(self) -> Path:
        """Return the Zod templates directory."""
        return Path(__file__).parent / "templates"

    def create_scope(self) -> IdentifierScope:
        return create_ts_scope()

    def header_blocks(self) -> List[Block]:
        return [
            Block(
                BlockKind.HEADER,
                {
                    "tool_name": TOOL_NAME,
                    "include_record_schema": self.options.include_record_schema,
                    "include_links": self.options.include_links,
                },
            )
        ]

    def table_blocks(self, model: TableModel) -> List[Block]:
        """Schema, type alias, optional record schema and table definition."""
        include_record = self.options.include_record_schema
        blocks = [
            Block(
                BlockKind.SCHEMA,
                {"schema_name": model.schema_name, "fields": model.fields},
            ),
            Block(
                BlockKind.TYPE_ALIAS,
                {"type_name": model.type_name, "schema_name": model.schema_name},
            ),
        ]

        if include_record:
            blocks.append(
                Block(
                    BlockKind.RECORD_SCHEMA,
                    {
                        "record_schema_name": model.record_schema_name,
                        "record_type_name": model.record_type_name,
                        "schema_name": model.schema_name,
                    },
                )
            )

        blocks.append(
            Block(
                BlockKind.TABLE_DEFINITION,
                {
                    "table_const": model.table_const,
                    "table_name": model.table_name,
                    "base_id": model.base_id,
                    "table_id": model.table_id,
                    "fields": model.fields,
                    "required_fields": model.required_fields,
                    "schema_name": model.schema_name,
                    "record_schema_name": (
                        model.record_schema_name if include_record else None
                    ),
                    "links": model.links if self.options.include_links else [],
                    "type_name": model.type_name,
                },
            )
        )
        return blocks

    def render_block(self, block: Block) -> str:
        return self.render_template(f"{block.kind.value}.ts.j2", block.context)

