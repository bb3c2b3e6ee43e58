"""Service layer helpers for opportunity export, search and hints."""

from .opportunity_export import export_workspace_opportunities_to_csv
from .opportunity_hints import generate_hints
from .opportunity_search import filter_opportunities
from .workspace import load_custom_fields, load_opportunities, resolve_workspace

__all__ = [
    "export_workspace_opportunities_to_csv",
    "filter_opportunities",
    "generate_hints",
    "load_custom_fields",
    "load_opportunities",
    "resolve_workspace",
]
