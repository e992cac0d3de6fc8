"""Tests for table models and the Zod generator."""

import re

import pytest

from airtypes.codegen.core.document import BlockKind
from airtypes.codegen.core.errors import RequiredFieldError, SchemaError
from airtypes.codegen.core.generator import GenerationOptions, TableModelBuilder
from airtypes.codegen.core.schema import (
    RemoteField,
    RemoteTable,
    SpecKind,
    ValidationSpec,
)
from airtypes.codegen.core.types import FieldTypeMapper
from airtypes.codegen.languages.zod import ZodGenerator, create_ts_scope, render_spec
from airtypes.config import BaseConfig


EXPECTED_MINIMAL = """\
/* DO NOT EDIT: this file was automatically generated by airtypes */
/* eslint-disable */
import { z } from 'zod';

export type AirtableTableDefinition<T extends Record<string, unknown>> = {
  name: string;
  baseId: string;
  tableId: string;
  mappings: {
    [K in keyof T]: T[K] extends Array<unknown> ? string | string[] : string;
  };
  requiredFields?: Array<Extract<keyof T, string>>;
  schema: z.ZodType<T>;
};

// Base: Ops

export const OpsMyTableSchema = z.object({
  status: z.string().optional(), // Original field: "Status"
  count: z.number().optional(), // Original field: "Count"
}).strict();

export type OpsMyTable = z.infer<typeof OpsMyTableSchema>;

export const opsMyTableTable = {
  name: 'MyTable',
  baseId: 'appOps',
  tableId: 'tblMy',
  mappings: {
    status: 'fld1', // Original field: "Status"
    count: 'fld2', // Original field: "Count"
  },
  schema: OpsMyTableSchema,
} satisfies AirtableTableDefinition<OpsMyTable>;
"""


@pytest.fixture
def generator():
    return ZodGenerator()


@pytest.fixture
def builder():
    return TableModelBuilder(FieldTypeMapper(), create_ts_scope, create_ts_scope())


def test_render_spec():
    assert render_spec(ValidationSpec(SpecKind.STRING)) == "z.string().optional()"
    assert render_spec(ValidationSpec(SpecKind.NUMBER, optional=False)) == "z.number()"
    assert (
        render_spec(ValidationSpec(SpecKind.RECORD, optional=False))
        == "z.record(z.string(), z.unknown())"
    )
    assert (
        render_spec(ValidationSpec(SpecKind.OBJECT))
        == "z.object({ id: z.string() }).passthrough().optional()"
    )
    array = ValidationSpec(SpecKind.ARRAY, inner=ValidationSpec(SpecKind.OBJECT))
    assert (
        render_spec(array)
        == "z.array(z.object({ id: z.string() }).passthrough()).optional()"
    )
    assert render_spec(ValidationSpec(SpecKind.ARRAY, optional=False)) == (
        "z.array(z.unknown())"
    )


def test_model_names_and_fields(builder, base_config, my_table):
    model = builder.build(base_config, my_table)

    assert model.type_name == "OpsMyTable"
    assert model.schema_name == "OpsMyTableSchema"
    assert model.record_schema_name == "OpsMyTableRecordSchema"
    assert model.table_const == "opsMyTableTable"
    assert [f.identifier for f in model.fields] == ["status", "count"]
    assert [f.spec.kind for f in model.fields] == [SpecKind.STRING, SpecKind.NUMBER]
    assert all(f.spec.optional for f in model.fields)
    assert model.required_fields == []
    assert model.links == []


def test_field_scope_is_fresh_per_table(builder, base_config):
    first = RemoteTable("tbl1", "One", [RemoteField("f1", "7", "number")])
    second = RemoteTable("tbl2", "Two", [RemoteField("f2", "7", "number")])

    assert builder.build(base_config, first).fields[0].identifier == "invalidIdentifier1"
    assert builder.build(base_config, second).fields[0].identifier == "invalidIdentifier1"


def test_declaration_names_unique_across_document(builder, base_config):
    table = RemoteTable("tbl1", "Tasks")
    first = builder.build(base_config, table)
    second = builder.build(base_config, RemoteTable("tbl2", "Tasks"))

    assert (first.type_name, second.type_name) == ("OpsTasks", "OpsTasks2")
    assert (first.table_const, second.table_const) == ("opsTasksTable", "opsTasksTable2")


def test_derived_declaration_names_do_not_collide(generator, base_config):
    tables = [RemoteTable("tbl1", "Tasks"), RemoteTable("tbl2", "Tasks Record")]

    code = generator.generate([(base_config, tables)])

    declared = re.findall(r"^export (?:const|type) (\w+)", code, re.MULTILINE)
    assert len(declared) == len(set(declared))
    assert "export const OpsTasksRecordSchema = z\n" in code
    assert "export const OpsTasksRecord2Schema = z.object({" in code
    assert "export type OpsTasksRecord2 = z.infer<typeof OpsTasksRecord2Schema>;" in code
    assert "export const opsTasksRecordTable = {" in code


def test_scenario_a_all_optional(generator, base_config, my_table):
    code = generator.generate([(base_config, [my_table])])

    assert '  status: z.string().optional(), // Original field: "Status"' in code
    assert '  count: z.number().optional(), // Original field: "Count"' in code
    assert "    status: 'fld1'," in code
    assert "    count: 'fld2'," in code
    assert "requiredFields: [" not in code


def test_scenario_b_required_field(generator, my_table):
    base = BaseConfig("Ops", "appOps", required_fields={"MyTable": ["Status"]})

    code = generator.generate([(base, [my_table])])

    assert '  status: z.string(), // Original field: "Status"' in code
    assert "  count: z.number().optional()," in code
    assert "  requiredFields: ['status']," in code


def test_scenario_c_link_metadata(generator, base_config):
    table = RemoteTable(
        "tblMy",
        "MyTable",
        [
            RemoteField(
                "fld3",
                "Related",
                "multipleRecordLinks",
                {"linkedTableId": "tblX"},
            )
        ],
    )

    code = generator.generate([(base_config, [table])])

    assert "  related: z.array(z.string()).optional()," in code
    assert "  links: {\n    related: { tableId: 'tblX' },\n  }," in code
    assert "    related: 'fld3'," in code


def test_unsupported_field_rendered_as_comment(generator, base_config):
    table = RemoteTable(
        "tblMy",
        "MyTable",
        [
            RemoteField("fld1", "Name", "singleLineText"),
            RemoteField("fld9", "Shape", "hologram"),
        ],
    )

    code = generator.generate([(base_config, [table])])

    assert '  // Unsupported field "Shape" of type hologram' in code
    assert '    // Unsupported field "Shape": fld9' in code
    assert "shape:" not in code


def test_record_schema_and_parse_helper(generator, base_config, my_table):
    code = generator.generate([(base_config, [my_table])])

    assert "export type AirtableRecord<T extends Record<string, unknown>> = {" in code
    assert "export function parseRecord<T extends Record<string, unknown>>(" in code
    assert "export const OpsMyTableRecordSchema = z\n  .object({" in code
    assert "    fields: OpsMyTableSchema,\n  })\n  .strict();" in code
    assert "export type OpsMyTableRecord = z.infer<typeof OpsMyTableRecordSchema>;" in code
    assert "  recordSchema: OpsMyTableRecordSchema," in code


def test_optional_sections_can_be_disabled(base_config, my_table, projects_table):
    generator = ZodGenerator(
        GenerationOptions(include_links=False, include_record_schema=False)
    )

    code = generator.generate([(base_config, [my_table, projects_table])])

    assert "RecordSchema" not in code
    assert "recordSchema" not in code
    assert "parseRecord" not in code
    assert "AirtableRecord" not in code
    assert "links" not in code


def test_minimal_document_exact_output(base_config, my_table):
    generator = ZodGenerator(
        GenerationOptions(include_links=False, include_record_schema=False)
    )

    assert generator.generate([(base_config, [my_table])]) == EXPECTED_MINIMAL


def test_block_order(generator, base_config, my_table, projects_table):
    document = generator.build_document([(base_config, [my_table, projects_table])])
    table_kinds = [
        BlockKind.SCHEMA,
        BlockKind.TYPE_ALIAS,
        BlockKind.RECORD_SCHEMA,
        BlockKind.TABLE_DEFINITION,
    ]

    assert [b.kind for b in document] == [
        BlockKind.HEADER,
        BlockKind.BASE_COMMENT,
        *table_kinds,
        *table_kinds,
    ]


def test_bases_and_tables_follow_configuration_order(generator, tasks_table, my_table):
    crm = BaseConfig("CRM", "appCrm")
    ops = BaseConfig("Ops", "appOps")

    code = generator.generate([(ops, [tasks_table, my_table]), (crm, [my_table])])

    positions = [
        code.index("// Base: Ops"),
        code.index("export const OpsTasksSchema"),
        code.index("export const OpsMyTableSchema"),
        code.index("// Base: CRM"),
        code.index("export const CrmMyTableSchema"),
    ]
    assert positions == sorted(positions)


def test_output_is_deterministic(base_tables, my_table):
    bases = [
        (BaseConfig("Ops", "appOps", required_fields={"Projects": ["Name"]}), base_tables),
        (BaseConfig("CRM", "appCrm"), [my_table]),
    ]

    assert ZodGenerator().generate(bases) == ZodGenerator().generate(bases)


def test_output_ends_with_single_newline(generator, base_config, my_table):
    code = generator.generate([(base_config, [my_table])])

    assert code.endswith("} satisfies AirtableTableDefinition<OpsMyTable>;\n")
    assert not code.endswith("\n\n")


def test_string_literals_are_escaped(generator):
    base = BaseConfig("Ops", "app'1")
    table = RemoteTable("tbl1", "Bob's\nTable", [RemoteField("fld'1", "It's", "email")])

    code = generator.generate([(base, [table])])

    assert "  name: 'Bob\\'s\\nTable'," in code
    assert "  baseId: 'app\\'1'," in code
    assert "    itS: 'fld\\'1', // Original field: \"It\\'s\"" in code


def test_fatal_errors_propagate(generator, base_config, my_table):
    broken = RemoteTable("tblB", "Broken", [RemoteField("fldL", "Lookup", "lookup")])
    with pytest.raises(SchemaError):
        generator.generate([(base_config, [my_table, broken])])

    strict = BaseConfig("Ops", "appOps", required_fields={"tblMy": ["Nope"]})
    with pytest.raises(RequiredFieldError):
        generator.generate([(strict, [my_table])])


def test_line_terminators_in_names_are_escaped(generator, base_config):
    table = RemoteTable("tbl1", "Notes", [RemoteField("fld1", "a\rb", "multilineText")])

    code = generator.generate([(base_config, [table])])

    assert "\r" not in code
    assert '  aB: z.string().optional(), // Original field: "a\\rb"' in code
