"""
Hints: observed values per field, to drive search UI affordances.

Every opportunity's field data is scanned (custom and standard fields alike)
for ``dropdown``, ``multi-dropdown``, ``short-text`` and ``name`` values.
Dropdown-like fields accumulate the set of labels seen across all
opportunities. Text-like fields do not: each new sighting resets the entry,
so only the most recently seen value survives.

Known limitation: the text-field behaviour is kept as-is pending a product
decision on what a useful hint for free text is.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from sqlalchemy.ext.asyncio import AsyncSession

from opportunity_api.domain.fields import (
    OPTION_TYPES,
    TEXT_TYPES,
    CustomField,
    DropdownValue,
    FieldValue,
    MultiDropdownValue,
    SelectedOption,
    parse_field_value,
    parse_opportunity_data,
)
from opportunity_api.services.workspace import load_custom_fields, load_opportunities, resolve_workspace

logger = logging.getLogger("opportunity_hints")

HINT_TYPES = OPTION_TYPES + TEXT_TYPES


def _option_label(selected: SelectedOption, field: Optional[CustomField]) -> Any:
    if selected.label is not None:
        return selected.label
    if field is not None:
        option = field.option_for(selected.value)
        if option is not None and option.label is not None:
            return option.label
    return selected.value


def hint_labels(value: FieldValue, field: Optional[CustomField]) -> List[Any]:
    if isinstance(value, DropdownValue):
        return [_option_label(value.option, field)]
    if isinstance(value, MultiDropdownValue):
        return [_option_label(o, field) for o in value.options]
    return [value.value]


class HintCollector:
    def __init__(self, custom_fields: Sequence[CustomField]):
        self._fields = {cf.id: cf for cf in custom_fields}
        self._hints: Dict[str, Dict[str, Any]] = {}

    def add(self, field_id: str, ftype: str, label: Any) -> None:
        entry = self._hints.get(field_id)
        if entry is not None and entry["type"] in OPTION_TYPES:
            entry["values"].add(label)
            return
        field = self._fields.get(field_id)
        self._hints[field_id] = {
            "name": field.name if field else field_id,
            "type": ftype,
            "values": {label},
        }

    def collect(self, data: Dict[str, Any]) -> None:
        for field_id, record in data.items():
            value = parse_field_value(record)
            if value is None or value.type not in HINT_TYPES:
                continue
            for label in hint_labels(value, self._fields.get(field_id)):
                # lists/objects stored where a label belongs are skipped
                if not _is_scalar(label):
                    continue
                self.add(field_id, value.type, label)

    def result(self) -> Dict[str, Dict[str, Any]]:
        out = {}
        for field_id, entry in self._hints.items():
            out[field_id] = {
                "name": entry["name"],
                "type": entry["type"],
                "values": _sorted_values(entry["values"]),
            }
        return out


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _sorted_values(values: Set[Any]) -> List[Any]:
    # mixed/None labels sort by their string form so output stays stable
    return sorted(values, key=lambda v: (v is None, str(v)))


def build_hints(
    custom_fields: Sequence[CustomField],
    opportunity_data: Iterable[Dict[str, Any]],
) -> Dict[str, Dict[str, Any]]:
    collector = HintCollector(custom_fields)
    for data in opportunity_data:
        collector.collect(data)
    return collector.result()


async def generate_hints(
    db: AsyncSession,
    workspace_id: Optional[str] = None,
) -> Dict[str, Dict[str, Any]]:
    workspace = await resolve_workspace(db, workspace_id)
    custom_fields = load_custom_fields(workspace)
    opportunities = await load_opportunities(db)

    hints = build_hints(custom_fields, (parse_opportunity_data(o.opportunity_data) for o in opportunities))
    logger.info("hints built for %d fields from %d opportunities", len(hints), len(opportunities))
    return hints
