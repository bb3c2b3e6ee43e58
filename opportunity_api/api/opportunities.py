from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from opportunity_api.core.db import get_session
from opportunity_api.schemas import FilteredSearchIn, HintOut, OpportunityOut
from opportunity_api.services import (
    export_workspace_opportunities_to_csv,
    filter_opportunities,
    generate_hints,
)

router = APIRouter(prefix="/opportunities", tags=["opportunities"])


@router.get("/export", response_class=Response)
async def export_csv(db: AsyncSession = Depends(get_session)):
    csv_text = await export_workspace_opportunities_to_csv(db)
    return Response(content=csv_text, media_type="text/csv")


@router.post("/filtered-search", response_model=list[OpportunityOut])
async def filtered_search(payload: FilteredSearchIn, db: AsyncSession = Depends(get_session)):
    """
    Dropdown / multi-dropdown filters match discrete option values;
    short-text / name filters are type-ahead (contains, case-insensitive).
    """
    return await filter_opportunities(db, payload.filters)


@router.get("/hints", response_model=dict[str, HintOut])
async def hints(db: AsyncSession = Depends(get_session)):
    return await generate_hints(db)
