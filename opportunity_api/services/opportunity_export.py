"""
CSV export of a workspace's opportunities.

The header is ``Title`` followed by every custom field's name, in schema
order; each opportunity contributes one row with a cell per custom field.
Only ``multi-dropdown`` and ``date`` fields are rendered; every other type
(single ``dropdown`` and text fields included) exports as ``N/A``.

By default cells are joined with bare commas and no escaping, matching the
legacy export byte for byte. Titles or labels containing commas, quotes or
newlines will break that layout; pass ``quote=True`` (or set
``CSV_QUOTE_VALUES``) to get standard CSV quoting instead. Both forms keep
the same row shape, so a schema with no custom fields still exports
``Title,``.
"""

import csv
import io
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from opportunity_api.core.settings import settings
from opportunity_api.domain.fields import (
    DATE,
    MULTI_DROPDOWN,
    CustomField,
    DateValue,
    DropdownValue,
    FieldValue,
    MultiDropdownValue,
    SelectedOption,
    parse_field_value,
    parse_opportunity_data,
)
from opportunity_api.domain.models import Opportunity
from opportunity_api.services.workspace import load_custom_fields, load_opportunities, resolve_workspace

logger = logging.getLogger("opportunity_export")

NOT_AVAILABLE = "N/A"
MULTI_VALUE_SEPARATOR = ";"


def _selected_options(value: FieldValue) -> Tuple[SelectedOption, ...]:
    # the schema decides the cell; the record's own type does not matter
    if isinstance(value, MultiDropdownValue):
        return value.options
    if isinstance(value, DropdownValue):
        return (value.option,)
    raw = getattr(value, "value", None)
    if isinstance(raw, dict):
        return (SelectedOption(value=raw.get("value")),)
    if isinstance(raw, list):
        return tuple(SelectedOption(value=item.get("value")) for item in raw if isinstance(item, dict))
    return ()


def csv_cell(field: CustomField, value: Optional[FieldValue]) -> str:
    if value is None:
        return NOT_AVAILABLE

    if field.type == MULTI_DROPDOWN:
        labels = []
        for selected in _selected_options(value):
            option = field.option_for(selected.value)
            # unmatched values leave the cell empty
            if option is not None and option.label is not None:
                labels.append(option.label)
        return MULTI_VALUE_SEPARATOR.join(labels)

    if field.type == DATE:
        # stored string goes out as-is, no date reformatting
        if isinstance(value, DateValue):
            return str(value.value)
        return str(getattr(value, "value", ""))

    return NOT_AVAILABLE


def csv_row(opportunity: Opportunity, custom_fields: Sequence[CustomField]) -> List[str]:
    data = parse_opportunity_data(opportunity.opportunity_data)
    cells = [opportunity.title]
    for field in custom_fields:
        cells.append(csv_cell(field, parse_field_value(data.get(field.id))))
    return cells


def _plain_line(cells: List[str]) -> str:
    # title is always followed by a comma, even with no custom fields
    return cells[0] + "," + ",".join(cells[1:])


def _quoted_line(cells: List[str]) -> str:
    if len(cells) == 1:
        # same row shape as the plain form: "Title,"
        cells = cells + [""]
    buf = io.StringIO()
    csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="").writerow(cells)
    return buf.getvalue()


def build_csv(
    custom_fields: Sequence[CustomField],
    opportunities: Iterable[Opportunity],
    quote: bool = False,
) -> str:
    line = _quoted_line if quote else _plain_line
    header = line(["Title"] + [field.name for field in custom_fields])
    body = "\n".join(line(csv_row(opp, custom_fields)) for opp in opportunities)
    return header + "\n" + body


async def export_workspace_opportunities_to_csv(
    db: AsyncSession,
    quote: Optional[bool] = None,
    workspace_id: Optional[str] = None,
) -> str:
    workspace = await resolve_workspace(db, workspace_id)
    custom_fields = load_custom_fields(workspace)
    opportunities = await load_opportunities(db)

    if quote is None:
        quote = settings.CSV_QUOTE_VALUES
    csv_text = build_csv(custom_fields, opportunities, quote=quote)
    logger.info(
        "exported %d opportunities x %d custom fields (workspace=%s, quoted=%s)",
        len(opportunities), len(custom_fields), workspace.id, quote,
    )
    return csv_text
