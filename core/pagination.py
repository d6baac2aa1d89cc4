"""Keyset pagination shared by every list endpoint.

A page is requested with an optional cursor (the key of the last item the
client saw). Items strictly after that row, in the requested order, are
returned. When the page is full a lookahead query decides whether another
page exists; a short page is terminal.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from sqlalchemy import and_, asc, desc, or_
from sqlalchemy.orm import Query

logger = logging.getLogger(__name__)

FETCH_QTY = 10
PREVIEW_QTY = 2
CURSOR_SEPARATOR = "|"

ASC = "asc"
DESC = "desc"

OrderSpec = Sequence[Tuple[Any, str]]


@dataclass
class Page:
    items: List[Any] = field(default_factory=list)
    end_cursor: Optional[str] = None
    has_next_page: bool = False
    count: Optional[int] = None
    cursors: List[str] = field(default_factory=list)


def _key_columns(key) -> list:
    if isinstance(key, (list, tuple)):
        return list(key)
    return [key]


def _full_order(order: OrderSpec, keys: list) -> List[Tuple[Any, str]]:
    """Append the key columns as tie breakers so the order is total."""
    full = list(order)
    tie_direction = full[0][1] if full else DESC
    present = {id(expr) for expr, _ in full}
    for column in keys:
        if id(column) not in present:
            full.append((column, tie_direction))
    return full


def encode_cursor(item, keys: list) -> str:
    return CURSOR_SEPARATOR.join(str(getattr(item, column.key)) for column in keys)


def _cursor_values(query: Query, keys: list, cursor: str, order) -> Optional[tuple]:
    """Order values of the cursor row, looked up by key alone."""
    parts = cursor.split(CURSOR_SEPARATOR)
    if len(parts) != len(keys):
        return None
    entity = query.column_descriptions[0]["entity"]
    return (
        query.session.query(*[expr for expr, _ in order])
        .select_from(entity)
        .filter(*[column == value for column, value in zip(keys, parts)])
        .first()
    )


def _after(order, values):
    """Rows strictly after ``values`` in ``order`` (lexicographic)."""
    branches = []
    for i, (expr, direction) in enumerate(order):
        terms = [order[j][0] == values[j] for j in range(i)]
        terms.append(expr < values[i] if direction == DESC else expr > values[i])
        branches.append(and_(*terms))
    return or_(*branches)


def _ordered(query: Query, order):
    return query.order_by(
        *[desc(expr) if direction == DESC else asc(expr) for expr, direction in order]
    )


def paginate(
    query: Query,
    *,
    key,
    order: OrderSpec,
    cursor: Optional[str] = None,
    take: int = FETCH_QTY,
    with_count: bool = False,
) -> Page:
    """Fetch one page of ``query``.

    ``key`` is the unique column (or tuple of columns) that identifies a row
    and forms the cursor. ``order`` is a sequence of ``(expression, "asc" |
    "desc")`` pairs; expressions may be correlated subqueries.
    """
    keys = _key_columns(key)
    order = _full_order(order, keys)

    count = query.order_by(None).count() if with_count else None

    filtered = query
    if cursor:
        values = _cursor_values(query, keys, cursor, order)
        if values is None:
            logger.debug("Cursor %s matched no row", cursor)
            return Page(count=count)
        filtered = query.filter(_after(order, values))

    items = _ordered(filtered, order).limit(take).all()
    cursors = [encode_cursor(item, keys) for item in items]
    if len(items) < take:
        return Page(items=items, count=count, cursors=cursors)

    end_cursor = cursors[-1]
    lookahead_values = _cursor_values(query, keys, end_cursor, order)
    has_next_page = False
    if lookahead_values is not None:
        lookahead = _ordered(query.filter(_after(order, lookahead_values)), order)
        has_next_page = len(lookahead.limit(take).all()) > 0

    return Page(
        items=items,
        end_cursor=end_cursor,
        has_next_page=has_next_page,
        count=count,
        cursors=cursors,
    )


def to_connection(page: Page, node: Optional[Callable[[Any], Any]] = None) -> dict:
    """Shape a page as ``{page_info, edges}``; ``node`` maps each item."""
    node = node or (lambda item: item)
    return {
        "page_info": {
            "end_cursor": page.end_cursor,
            "has_next_page": page.has_next_page,
            "count": page.count,
        },
        "edges": [
            {"cursor": cursor, "node": node(item)}
            for cursor, item in zip(page.cursors, page.items)
        ],
    }
