"""
Reference workspace used for local development and the export tests.

Two custom fields (a multi-dropdown and a date) and three opportunities.
"""

import json
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from opportunity_api.domain.models import Opportunity, Workspace

logger = logging.getLogger("seed")

CUSTOM_FIELDS = [
    {
        "id": "cf1",
        "name": "Custom Field 1",
        "type": "multi-dropdown",
        "options": [
            {"value": "opt1", "label": "Option 1"},
            {"value": "opt2", "label": "Option 2 Changed"},
        ],
    },
    {"id": "cf2", "name": "Custom Field 2", "type": "date"},
]

OPPORTUNITIES = [
    {
        "title": "Opportunity 1",
        "opportunityData": {
            "cf1": {"type": "multi-dropdown", "value": {"value": "opt1"}},
        },
    },
    {
        "title": "Opportunity 2",
        "opportunityData": {
            "cf1": {"type": "multi-dropdown", "value": {"value": "opt2"}},
            "cf2": {"type": "date", "value": "2021-01-01"},
        },
    },
    {
        "title": "Opportunity 3",
        "opportunityData": {
            "cf1": {"type": "multi-dropdown", "value": {"value": "opt1"}},
            "cf2": {"type": "date", "value": "2023-01-01"},
        },
    },
]


async def seed_workspace(db: AsyncSession, workspace_id: str = "workspace-1") -> Workspace:
    """Insert the reference workspace and its opportunities, then commit."""
    workspace = Workspace(
        id=workspace_id,
        name="Reference Workspace",
        custom_field_definition=json.dumps(CUSTOM_FIELDS),
    )
    db.add(workspace)
    for opp in OPPORTUNITIES:
        db.add(Opportunity(title=opp["title"], opportunity_data=json.dumps(opp["opportunityData"])))
    await db.commit()
    logger.info("seeded workspace %s with %d opportunities", workspace_id, len(OPPORTUNITIES))
    return workspace


async def seed_if_empty(db: AsyncSession) -> bool:
    count = (await db.execute(select(func.count()).select_from(Workspace))).scalar() or 0
    if count:
        return False
    await seed_workspace(db)
    return True
