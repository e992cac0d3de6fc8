"""Generation pipeline: fetch, scope and render every configured base.

Bases are processed one at a time in configuration order. Nothing is
written until all bases rendered successfully.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from .codegen.core.generator import BaseTables, CodeGenerator, GenerationOptions
from .codegen.core.schema import RemoteTable
from .codegen.core.scope import apply_scope
from .codegen.languages.zod import ZodGenerator
from .config import ParsedConfig
from .fetcher import SchemaFetcher
from .logging_config import get_logger
from .utils import write_output

logger = get_logger(__name__)


class Fetcher(Protocol):
    def fetch(self, base_id: str) -> list[RemoteTable]: ...


@dataclass
class BaseSummary:
    name: str
    table_count: int


@dataclass
class GenerateResult:
    """Outcome of a generation run."""

    output_path: Path
    contents: str
    bases: list[BaseSummary] = field(default_factory=list)
    dry_run: bool = False

    @property
    def table_count(self) -> int:
        return sum(base.table_count for base in self.bases)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly summary, as printed by ``--json``."""
        return {
            "outputPath": str(self.output_path),
            "bases": [
                {"name": base.name, "tableCount": base.table_count}
                for base in self.bases
            ],
            "tableCount": self.table_count,
            "dryRun": self.dry_run,
        }


def collect_bases(config: ParsedConfig, fetcher: Fetcher) -> list[BaseTables]:
    """Fetch and scope the tables of every base, in configuration order."""
    collected: list[BaseTables] = []
    for base in config.bases:
        logger.debug(f"Fetching schema for {base.base_name} ({base.base_id})...")
        tables = fetcher.fetch(base.base_id)
        scoped = apply_scope(tables, base.table_ids, base.view_ids)
        logger.debug(
            f"Base {base.base_name}: {len(scoped)} of {len(tables)} table(s) in scope"
        )
        collected.append((base, scoped))
    return collected


def generate_types(
    config: ParsedConfig,
    options: GenerationOptions | None = None,
    fetcher: Fetcher | None = None,
    generator: CodeGenerator | None = None,
    dry_run: bool = False,
) -> GenerateResult:
    """Run the full pipeline for ``config``.

    Args:
        config: Validated configuration.
        options: Optional document sections.
        fetcher: Schema source; defaults to the HTTP fetcher.
        generator: Code generator; defaults to the Zod generator.
        dry_run: Render but do not write the output file.

    Returns:
        GenerateResult with the rendered contents and a per-base summary.
    """
    fetcher = fetcher or SchemaFetcher(config.api_key)
    generator = generator or ZodGenerator(options)

    logger.info(f"Generating Zod definitions for {len(config.bases)} base(s)...")

    bases = collect_bases(config, fetcher)
    contents = generator.generate(bases)

    if not dry_run:
        write_output(config.output, contents)

    suffix = " (dry-run)" if dry_run else ""
    logger.info(f"Generated types: {config.output}{suffix}")

    return GenerateResult(
        output_path=config.output,
        contents=contents,
        bases=[BaseSummary(base.base_name, len(tables)) for base, tables in bases],
        dry_run=dry_run,
    )
