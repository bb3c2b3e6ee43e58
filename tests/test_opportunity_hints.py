"""Tests for hint generation."""

import json

import pytest

from conftest import add_opportunities, add_workspace
from opportunity_api.domain.fields import CustomField
from opportunity_api.errors import WorkspaceNotFound
from opportunity_api.services.opportunity_hints import build_hints, generate_hints


def _dropdown(value: str, label: str) -> dict:
    return {"type": "dropdown", "value": {"value": value, "label": label}}


def _text(value: str, ftype: str = "short-text") -> dict:
    return {"type": ftype, "value": value}


class TestAccumulation:
    def test_dropdown_labels_accumulate(self) -> None:
        hints = build_hints([], [{"status": _dropdown("o", "Open")}, {"status": _dropdown("c", "Closed")}])
        assert hints["status"] == {"name": "status", "type": "dropdown", "values": ["Closed", "Open"]}

    def test_repeated_labels_collapse(self) -> None:
        hints = build_hints([], [{"status": _dropdown("o", "Open")}, {"status": _dropdown("o", "Open")}])
        assert hints["status"]["values"] == ["Open"]

    def test_text_field_keeps_only_last_value(self) -> None:
        # text-like entries are reset on each sighting, not aggregated
        hints = build_hints([], [{"description": _text("first")}, {"description": _text("second")}])
        assert hints["description"] == {"name": "description", "type": "short-text", "values": ["second"]}

    def test_dropdown_entry_keeps_merging_after_type_change(self) -> None:
        hints = build_hints([], [{"f": _dropdown("o", "Open")}, {"f": _text("free text")}])
        assert hints["f"]["type"] == "dropdown"
        assert hints["f"]["values"] == ["Open", "free text"]

    def test_text_entry_is_replaced_by_later_dropdown(self) -> None:
        hints = build_hints([], [{"f": _text("free text")}, {"f": _dropdown("o", "Open")}])
        assert hints["f"] == {"name": "f", "type": "dropdown", "values": ["Open"]}

    def test_multi_dropdown_list_adds_every_label(self) -> None:
        data = {"tags": {"type": "multi-dropdown", "value": [{"value": "a", "label": "A"}, {"value": "b", "label": "B"}]}}
        assert build_hints([], [data])["tags"]["values"] == ["A", "B"]


class TestFieldSelection:
    def test_only_hintable_types_are_included(self) -> None:
        data = {
            "due": {"type": "date", "value": "2021-01-01"},
            "amount": {"type": "number", "value": 10},
            "owner": _text("Ada", "name"),
        }
        assert set(build_hints([], [data])) == {"owner"}

    def test_empty_values_are_skipped(self) -> None:
        data = {"description": _text(""), "status": {"type": "dropdown", "value": None}}
        assert build_hints([], [data]) == {}

    def test_custom_field_name_is_used(self) -> None:
        fields = [CustomField(id="cf9", name="Priority", type="dropdown")]
        hints = build_hints(fields, [{"cf9": _dropdown("h", "High"), "stage": _dropdown("s", "Scoping")}])
        assert hints["cf9"]["name"] == "Priority"
        assert hints["stage"]["name"] == "stage"

    def test_missing_label_falls_back_to_schema_option(self) -> None:
        fields = [CustomField(id="cf1", name="Custom Field 1", type="multi-dropdown",
                              options=[{"value": "opt1", "label": "Option 1"}])]
        data = [{"cf1": {"type": "multi-dropdown", "value": {"value": "opt1"}}},
                {"cf1": {"type": "multi-dropdown", "value": {"value": "unknown"}}}]
        assert build_hints(fields, data)["cf1"]["values"] == ["Option 1", "unknown"]


@pytest.mark.asyncio
async def test_generate_hints_for_reference_workspace(seeded_db) -> None:
    hints = await generate_hints(seeded_db)
    assert hints == {
        "cf1": {"name": "Custom Field 1", "type": "multi-dropdown", "values": ["Option 1", "Option 2 Changed"]},
    }


@pytest.mark.asyncio
async def test_generate_hints_is_repeatable(db) -> None:
    await add_workspace(db, [])
    await add_opportunities(
        db,
        ("One", {"status": _dropdown("z", "Zeta"), "kind": _dropdown("k", "Kilo")}),
        ("Two", {"status": _dropdown("a", "Alpha"), "kind": _dropdown("m", "Mike")}),
    )
    first = json.dumps(await generate_hints(db))
    second = json.dumps(await generate_hints(db))
    assert first == second


@pytest.mark.asyncio
async def test_generate_hints_without_workspace_raises(db) -> None:
    with pytest.raises(WorkspaceNotFound):
        await generate_hints(db)


class TestNonScalarValues:
    def test_nested_list_selection_is_skipped(self) -> None:
        data = {"cf1": {"type": "multi-dropdown", "value": {"value": ["opt1", "opt2"]}}}
        assert build_hints([], [data]) == {}

    def test_object_valued_name_field_is_skipped(self) -> None:
        data = [
            {"owner": {"type": "name", "value": {"first": "Ada"}}},
            {"status": _dropdown("o", "Open")},
        ]
        assert build_hints([], data) == {"status": {"name": "status", "type": "dropdown", "values": ["Open"]}}

    def test_other_labels_survive_a_bad_row(self) -> None:
        data = [
            {"cf1": {"type": "multi-dropdown", "value": {"value": "opt1", "label": "Option 1"}}},
            {"cf1": {"type": "multi-dropdown", "value": {"value": ["opt1", "opt2"]}}},
        ]
        assert build_hints([], data)["cf1"]["values"] == ["Option 1"]
