"""
Remote field type system for code generation.

Maps remote field descriptors to ValidationSpec trees. Each remote type
falls into one of three variants: a scalar with a fixed spec, a computed
type whose spec comes from the nested ``options.result`` descriptor, or an
unsupported type that is reported and skipped.
"""

from enum import Enum
from typing import Any, Dict, Optional

from ...logging_config import get_logger
from .errors import SchemaError
from .schema import RemoteField, SpecKind, ValidationSpec

logger = get_logger(__name__)


class TypeVariant(Enum):
    """How a remote field type is resolved."""

    SCALAR = "scalar"
    COMPUTED = "computed"
    UNSUPPORTED = "unsupported"


_STRING = ValidationSpec(SpecKind.STRING)
_NUMBER = ValidationSpec(SpecKind.NUMBER)
_BOOLEAN = ValidationSpec(SpecKind.BOOLEAN)
_OBJECT = ValidationSpec(SpecKind.OBJECT)
_STRING_ARRAY = ValidationSpec(
    SpecKind.ARRAY, inner=ValidationSpec(SpecKind.STRING, optional=False)
)
_OBJECT_ARRAY = ValidationSpec(
    SpecKind.ARRAY, inner=ValidationSpec(SpecKind.OBJECT, optional=False)
)

SCALAR_TYPE_SPECS: Dict[str, ValidationSpec] = {
    # Text-like
    "url": _STRING,
    "email": _STRING,
    "phoneNumber": _STRING,
    "singleLineText": _STRING,
    "multilineText": _STRING,
    "richText": _STRING,
    "singleSelect": _STRING,
    "externalSyncSource": _STRING,
    "aiText": _STRING,
    # Dates are kept as ISO-8601 strings
    "date": _STRING,
    "dateTime": _STRING,
    "lastModifiedTime": _STRING,
    "createdTime": _STRING,
    # Numeric
    "number": _NUMBER,
    "rating": _NUMBER,
    "duration": _NUMBER,
    "currency": _NUMBER,
    "percent": _NUMBER,
    "count": _NUMBER,
    "autoNumber": _NUMBER,
    "checkbox": _BOOLEAN,
    # Open-ended objects carrying an id
    "singleCollaborator": _OBJECT,
    "createdBy": _OBJECT,
    "lastModifiedBy": _OBJECT,
    "barcode": _OBJECT,
    "button": _OBJECT,
    # Multi-valued
    "multipleRecordLinks": _STRING_ARRAY,
    "multipleSelects": _STRING_ARRAY,
    "multipleAttachments": _OBJECT_ARRAY,
    "multipleCollaborators": _OBJECT_ARRAY,
}

COMPUTED_TYPES = frozenset({"lookup", "multipleLookupValues", "rollup", "formula"})

LINK_FIELD_TYPE = "multipleRecordLinks"


class FieldTypeMapper:
    """Resolve remote field descriptors to validation specs."""

    def __init__(self):
        self.type_specs: Dict[str, ValidationSpec] = dict(SCALAR_TYPE_SPECS)

    def classify(self, field_type: str) -> TypeVariant:
        if field_type in COMPUTED_TYPES:
            return TypeVariant.COMPUTED
        if field_type in self.type_specs:
            return TypeVariant.SCALAR
        return TypeVariant.UNSUPPORTED

    def map_field(self, field: RemoteField) -> Optional[ValidationSpec]:
        """
        Map a remote field to its validation spec.

        Args:
            field: Remote field descriptor

        Returns:
            The spec, or None if the type cannot be represented

        Raises:
            SchemaError: A computed field has no nested result descriptor
        """
        return self._resolve(field.type, field.options, field.id)

    def _resolve(
        self, field_type: str, options: Optional[Dict[str, Any]], field_id: str
    ) -> Optional[ValidationSpec]:
        variant = self.classify(field_type)
        if variant is TypeVariant.SCALAR:
            return self.type_specs[field_type]
        if variant is TypeVariant.COMPUTED:
            return self._resolve_computed(field_type, options, field_id)

        logger.warning(
            f'Could not convert remote type "{field_type}" to a validation schema '
            f"for field {field_id}"
        )
        return None

    def _resolve_computed(
        self, field_type: str, options: Optional[Dict[str, Any]], field_id: str
    ) -> Optional[ValidationSpec]:
        result = options.get("result") if isinstance(options, dict) else None
        if not isinstance(result, dict):
            raise SchemaError(
                f"Invalid {field_type} field (no options.result): {field_id}"
            )

        inner_options = result.get("options")
        inner = self._resolve(
            str(result.get("type", "")),
            inner_options if isinstance(inner_options, dict) else None,
            field_id,
        )
        if inner is None:
            return None
        # Computed values can always be missing, whatever the result type says
        return inner.with_optional(True)


def link_meta_target(field: RemoteField) -> Optional[str]:
    """Return the linked table id of a link field, if it declares one."""
    if field.type != LINK_FIELD_TYPE or not field.options:
        return None
    linked = field.options.get("linkedTableId")
    if not isinstance(linked, str):
        return None
    return linked.strip() or None
