"""
Exceptions raised while turning remote schemas into code.

All of them are fatal for the current run.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class SchemaError(GeneratorError):
    """The remote schema is malformed (e.g. computed field without a result)."""

    pass


class ScopeError(GeneratorError):
    """A configured table or view token matches nothing in the base."""

    pass


class RequiredFieldError(GeneratorError):
    """A required-field token matches no field of its table."""

    def __init__(self, token: str, table_name: str, table_id: str):
        self.token = token
        self.table_name = table_name
        self.table_id = table_id
        super().__init__(
            f'Unknown required field "{token}" for table "{table_name}" ({table_id})'
        )
