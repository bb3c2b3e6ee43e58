"""
Custom-field schema and per-opportunity field values.

Workspaces store their custom-field schema, and opportunities store their
field data, as JSON text. Both are parsed here, at the store boundary, so the
export/search/hint code works with typed values instead of raw dicts:

- the schema becomes a list of ``CustomField`` (pydantic),
- each ``{type, value}`` record becomes one member of the ``FieldValue``
  union (frozen dataclasses).

Nesting depth per type, as stored::

    dropdown        {"type": "dropdown", "value": {"value": "open", "label": "Open"}}
    multi-dropdown  {"type": "multi-dropdown", "value": {"value": "opt1"}}
                    {"type": "multi-dropdown", "value": [{"value": "opt1"}, ...]}
    date            {"type": "date", "value": "2021-01-01"}
    short-text      {"type": "short-text", "value": "some text"}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, TypeAdapter

DROPDOWN = "dropdown"
MULTI_DROPDOWN = "multi-dropdown"
SHORT_TEXT = "short-text"
NAME = "name"
DATE = "date"

OPTION_TYPES = (DROPDOWN, MULTI_DROPDOWN)
TEXT_TYPES = (SHORT_TEXT, NAME)


# ----------------------------------------------------------------------
# Schema (Workspace.customFieldDefinition)
# ----------------------------------------------------------------------
class FieldOption(BaseModel):
    value: Any
    label: Optional[str] = None


class CustomField(BaseModel):
    id: str
    name: str
    type: str
    options: Optional[List[FieldOption]] = None

    def option_for(self, value: Any) -> Optional[FieldOption]:
        for option in self.options or []:
            if option.value == value:
                return option
        return None


_custom_fields_adapter = TypeAdapter(List[CustomField])


def parse_custom_fields(raw: str) -> List[CustomField]:
    return _custom_fields_adapter.validate_python(json.loads(raw or "[]"))


# ----------------------------------------------------------------------
# Values (Opportunity.opportunityData)
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class SelectedOption:
    value: Any
    label: Optional[str] = None


@dataclass(frozen=True)
class DropdownValue:
    option: SelectedOption
    type: str = DROPDOWN


@dataclass(frozen=True)
class MultiDropdownValue:
    options: Tuple[SelectedOption, ...]
    # True when stored as a single nested object rather than a list
    nested: bool = True
    type: str = MULTI_DROPDOWN


@dataclass(frozen=True)
class TextValue:
    type: str
    value: str


@dataclass(frozen=True)
class DateValue:
    value: str
    type: str = DATE


@dataclass(frozen=True)
class OtherValue:
    type: str
    value: Any


FieldValue = Union[DropdownValue, MultiDropdownValue, TextValue, DateValue, OtherValue]


def _selected(raw: Any) -> SelectedOption:
    if isinstance(raw, dict):
        return SelectedOption(value=raw.get("value"), label=raw.get("label"))
    # a bare scalar is its own value
    return SelectedOption(value=raw)


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def parse_field_value(record: Any) -> Optional[FieldValue]:
    """Parse one ``{type, value}`` record; ``None`` means "no value"."""
    if not isinstance(record, dict):
        return None
    value = record.get("value")
    if is_empty(value):
        return None
    ftype = record.get("type") or ""

    if ftype == DROPDOWN:
        return DropdownValue(option=_selected(value))
    if ftype == MULTI_DROPDOWN:
        if isinstance(value, list):
            return MultiDropdownValue(options=tuple(_selected(v) for v in value), nested=False)
        return MultiDropdownValue(options=(_selected(value),))
    if ftype == DATE:
        return DateValue(value=value)
    if ftype in TEXT_TYPES and isinstance(value, str):
        return TextValue(type=ftype, value=value)
    return OtherValue(type=ftype, value=value)


def parse_opportunity_data(raw: str) -> Dict[str, Any]:
    """Decode the JSON blob. Malformed JSON propagates to the caller."""
    return json.loads(raw or "{}")
