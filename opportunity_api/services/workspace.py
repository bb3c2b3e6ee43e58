import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from opportunity_api.core.settings import settings
from opportunity_api.domain.fields import CustomField, parse_custom_fields
from opportunity_api.domain.models import Opportunity, Workspace
from opportunity_api.errors import WorkspaceNotFound

logger = logging.getLogger("workspace")


async def resolve_workspace(db: AsyncSession, workspace_id: Optional[str] = None) -> Workspace:
    """
    Return the configured workspace, or the first one found when no id is
    configured. Raises WorkspaceNotFound if nothing matches.
    """
    workspace_id = workspace_id or settings.WORKSPACE_ID
    stmt = select(Workspace)
    if workspace_id:
        stmt = stmt.where(Workspace.id == workspace_id)
    workspace = (await db.execute(stmt.limit(1))).scalar_one_or_none()
    if workspace is None:
        raise WorkspaceNotFound(workspace_id)
    return workspace


def load_custom_fields(workspace: Workspace) -> List[CustomField]:
    return parse_custom_fields(workspace.custom_field_definition)


async def load_opportunities(db: AsyncSession) -> List[Opportunity]:
    rows = list((await db.execute(select(Opportunity))).scalars().all())
    logger.debug("loaded %d opportunities", len(rows))
    return rows
