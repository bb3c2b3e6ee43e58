"""
Filtered search over opportunity field data.

Filters come in two flavours:

- ``short-text`` / ``name``: type-ahead, case-insensitive "contains" match
  on the string stored for that field id;
- ``dropdown`` / ``multi-dropdown``: exact (case-sensitive) match on the
  stored option value.

Filters of any other type add no constraint. All filters must match (AND).
Field data is JSON text, so the whole collection is read once and the
compiled predicate runs in memory.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from opportunity_api.domain.fields import (
    OPTION_TYPES,
    TEXT_TYPES,
    DropdownValue,
    MultiDropdownValue,
    parse_field_value,
    parse_opportunity_data,
)
from opportunity_api.schemas import Filter
from opportunity_api.services.workspace import load_opportunities

logger = logging.getLogger("opportunity_search")

Predicate = Callable[[Dict[str, Any]], bool]


def _stored_text(record: Any) -> Optional[str]:
    if isinstance(record, str):
        return record
    value = parse_field_value(record)
    if value is None or isinstance(value, (DropdownValue, MultiDropdownValue)):
        return None
    return value.value if isinstance(value.value, str) else None


def _stored_option_values(record: Any) -> List[Any]:
    value = parse_field_value(record)
    if value is None:
        return []
    if isinstance(value, DropdownValue):
        return [value.option.value]
    if isinstance(value, MultiDropdownValue):
        return [o.value for o in value.options]
    return [value.value]


def _contains(field_id: str, needle: str) -> Predicate:
    needle = needle.lower()

    def check(data: Dict[str, Any]) -> bool:
        text = _stored_text(data.get(field_id))
        return text is not None and needle in text.lower()

    return check


def _equals(field_id: str, expected: str) -> Predicate:
    def check(data: Dict[str, Any]) -> bool:
        return expected in _stored_option_values(data.get(field_id))

    return check


def build_predicate(filters: Sequence[Filter]) -> Predicate:
    """Compile a filter list into one predicate over decoded opportunityData."""
    checks: List[Predicate] = []
    for f in filters:
        if f.type in TEXT_TYPES:
            checks.append(_contains(f.id, f.value))
        elif f.type in OPTION_TYPES:
            checks.append(_equals(f.id, f.value))
        else:
            logger.debug("ignoring filter on %s with unsupported type %r", f.id, f.type)

    def matches(data: Dict[str, Any]) -> bool:
        return all(check(data) for check in checks)

    return matches


def apply_filters(opportunities: Iterable[Any], filters: Sequence[Filter]) -> List[Dict[str, Any]]:
    predicate = build_predicate(filters)
    out = []
    for opp in opportunities:
        data = parse_opportunity_data(opp.opportunity_data)
        if predicate(data):
            # stored JSON text goes back as-is; the decoded dict is only for matching
            out.append({"id": opp.id, "title": opp.title, "opportunityData": opp.opportunity_data})
    return out


async def filter_opportunities(db: AsyncSession, filters: Sequence[Filter]) -> List[Dict[str, Any]]:
    opportunities = await load_opportunities(db)
    matched = apply_filters(opportunities, filters)
    logger.info("filtered search: %d filters, %d/%d matched", len(filters), len(matched), len(opportunities))
    return matched
