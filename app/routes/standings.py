from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.standings import StandingsRow, TeamRecord
from app.routes.helpers import not_found, require_division
from app.services.standings_service import compute_standings, team_record
from app.services.state_store import load_context, save_graph
from app.utils.db_async import get_session

router = APIRouter(prefix="/api/divisions", tags=["standings"])


@router.get("/{division_id}/standings", response_model=List[StandingsRow])
async def get_standings(
    division_id: str,
    db: AsyncSession = Depends(get_session),
) -> List[StandingsRow]:
    """Ranked table for a division.

    Reading the table stores the current ranks as the new movement baseline,
    so this GET writes.
    """
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
        rows = compute_standings(ctx, division.id)
        await save_graph(db, ctx.graph)
    return rows


@router.get("/{division_id}/teams/{team_id}", response_model=TeamRecord)
async def get_team_record(
    division_id: str,
    team_id: str,
    db: AsyncSession = Depends(get_session),
) -> TeamRecord:
    async with db.begin():
        ctx = await load_context(db)
    record = team_record(ctx.active_season(), division_id, team_id)
    if record is None:
        raise not_found("Team")
    return record
