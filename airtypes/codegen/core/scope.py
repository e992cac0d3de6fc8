"""
Table and view scoping of a fetched base schema.

Table scoping keeps only the configured tables; view scoping then keeps
the tables owning the configured views and, for qualifying grid views,
only the fields those views show.
"""

from typing import Dict, List, Optional, Sequence, Set, Tuple

from ...logging_config import get_logger
from .errors import ScopeError
from .schema import RemoteTable, RemoteView

logger = get_logger(__name__)

GRID_VIEW_TYPE = "grid"


def resolve_table_ids(
    tables: Sequence[RemoteTable], ids_or_names: Optional[Sequence[str]]
) -> Optional[List[str]]:
    """
    Resolve table tokens (ids or display names) to unique table ids.

    Args:
        tables: Tables of the base, in fetch order
        ids_or_names: Configured tokens; None or empty disables scoping

    Returns:
        Deduplicated table ids, or None when no scoping is configured

    Raises:
        ScopeError: A token matches no table
    """
    if not ids_or_names:
        return None

    resolved: List[str] = []
    for token in ids_or_names:
        match = next((t for t in tables if t.id == token or t.name == token), None)
        if match is None:
            raise ScopeError(f'Table "{token}" not found in base schema.')
        resolved.append(match.id)

    return list(dict.fromkeys(resolved))


def filter_tables_by_id(
    tables: Sequence[RemoteTable], table_ids: Optional[Sequence[str]]
) -> List[RemoteTable]:
    """Keep the tables whose id is listed, preserving fetch order."""
    if not table_ids:
        return list(tables)

    wanted = set(table_ids)
    return [table for table in tables if table.id in wanted]


def _find_view(
    tables: Sequence[RemoteTable], view_id: str
) -> Optional[Tuple[RemoteTable, RemoteView]]:
    for table in tables:
        for view in table.views:
            if view.id == view_id:
                return table, view
    return None


def _is_field_filtering_view(view: RemoteView) -> bool:
    return view.type == GRID_VIEW_TYPE and bool(view.visible_field_ids)


def filter_tables_by_view(
    tables: Sequence[RemoteTable], view_ids: Optional[Sequence[str]]
) -> List[RemoteTable]:
    """
    Narrow tables to those owning one of the configured views.

    A table matched by at least one grid view with visible fields keeps the
    union of those views' visible fields; otherwise it keeps all fields.

    Args:
        tables: Tables, already table-scoped
        view_ids: Configured view ids; None or empty disables view scoping

    Returns:
        Filtered tables in their original order

    Raises:
        ScopeError: A view id belongs to no table
    """
    if not view_ids:
        return list(tables)

    views_by_table: Dict[str, List[RemoteView]] = {}
    for view_id in view_ids:
        found = _find_view(tables, view_id)
        if found is None:
            raise ScopeError(
                f'View "{view_id}" not found in any table. '
                "Please check the view ID is correct."
            )
        table, view = found
        views_by_table.setdefault(table.id, []).append(view)

    filtered: List[RemoteTable] = []
    for table in tables:
        matched_views = views_by_table.get(table.id)
        if not matched_views:
            continue

        grid_views = [v for v in matched_views if _is_field_filtering_view(v)]
        if not grid_views:
            filtered.append(table)
            continue

        visible: Set[str] = set()
        for view in grid_views:
            visible.update(view.visible_field_ids or [])

        logger.debug(
            f"Restricting table {table.id} to {len(visible)} field(s) visible "
            f"in {len(grid_views)} view(s)"
        )
        filtered.append(table.with_fields([f for f in table.fields if f.id in visible]))

    return filtered


def apply_scope(
    tables: Sequence[RemoteTable],
    table_ids: Optional[Sequence[str]] = None,
    view_ids: Optional[Sequence[str]] = None,
) -> List[RemoteTable]:
    """Apply table scoping, then view scoping."""
    resolved = resolve_table_ids(tables, table_ids)
    scoped = filter_tables_by_id(tables, resolved)
    return filter_tables_by_view(scoped, view_ids)
