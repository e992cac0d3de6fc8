"""
Required-field overrides.

By default every generated field is optional. A ``required_fields`` entry
for a table turns that table into an allow-list: the listed fields become
required, all others stay optional.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import RequiredFieldError
from .schema import GeneratedField, RemoteTable


def find_required_tokens(
    table: RemoteTable, required_fields: Optional[Mapping[str, Sequence[str]]]
) -> List[str]:
    """Look up the override list by table id first, then by display name."""
    if not required_fields:
        return []
    if table.id in required_fields:
        return list(required_fields[table.id])
    if table.name in required_fields:
        return list(required_fields[table.name])
    return []


def resolve_required_fields(
    table: RemoteTable,
    fields: Sequence[GeneratedField],
    required_fields: Optional[Mapping[str, Sequence[str]]],
) -> Tuple[List[GeneratedField], List[str]]:
    """
    Apply a table's required-field override to its generated fields.

    Tokens may be a field id, the original display name or the generated
    identifier.

    Args:
        table: The table being generated
        fields: Generated fields in remote order
        required_fields: Base-level map of table key to tokens

    Returns:
        Tuple of (fields with recomputed optionality, required identifiers
        in token order)

    Raises:
        RequiredFieldError: A token matches no field of the table
    """
    tokens = find_required_tokens(table, required_fields)
    if not tokens:
        return list(fields), []

    lookup: Dict[str, str] = {}
    for generated in fields:
        lookup[generated.id] = generated.identifier
        lookup[generated.original_name] = generated.identifier
        lookup[generated.identifier] = generated.identifier

    required: Dict[str, None] = {}
    for token in tokens:
        identifier = lookup.get(token)
        if identifier is None:
            raise RequiredFieldError(token, table.name, table.id)
        required[identifier] = None

    resolved = [
        generated.with_spec(
            generated.spec.with_optional(generated.identifier not in required)
        )
        if generated.spec is not None
        else generated
        for generated in fields
    ]
    return resolved, list(required)
