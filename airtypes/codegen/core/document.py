"""
In-memory document model for generated files.

A document is an ordered list of typed blocks. Generators decide which
blocks to add; a single renderer decides how each kind is printed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List


class BlockKind(Enum):
    """Kinds of blocks a generated document is made of."""

    HEADER = "header"
    BASE_COMMENT = "base_comment"
    SCHEMA = "schema"
    TYPE_ALIAS = "type_alias"
    RECORD_SCHEMA = "record_schema"
    TABLE_DEFINITION = "table_definition"


@dataclass(frozen=True)
class Block:
    """One renderable unit with its template context."""

    kind: BlockKind
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Document:
    """Ordered sequence of blocks."""

    blocks: List[Block] = field(default_factory=list)

    def add(self, kind: BlockKind, **context: Any) -> Block:
        block = Block(kind, context)
        self.blocks.append(block)
        return block

    def extend(self, blocks: List[Block]) -> None:
        self.blocks.extend(blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)
