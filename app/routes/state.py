"""View state: active selection and schedule round."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.requests import RoundUpdate
from app.models.summary import RoundResponse, StateResponse, summarize
from app.services import match_service
from app.services.state_store import load_context, save_graph
from app.utils.db_async import get_session

router = APIRouter(prefix="/api/state", tags=["state"])


@router.get("", response_model=StateResponse)
async def get_state(db: AsyncSession = Depends(get_session)) -> StateResponse:
    """Return the active selection and a summary of every league."""
    async with db.begin():
        ctx = await load_context(db)
    return summarize(ctx.graph)


@router.patch("/round", response_model=RoundResponse)
async def update_round(
    payload: RoundUpdate,
    db: AsyncSession = Depends(get_session),
) -> RoundResponse:
    """Jump to a round or step by ``delta``; clamped to the schedule length."""
    async with db.begin():
        ctx = await load_context(db)
        if payload.delta is not None:
            current = match_service.step_schedule_round(ctx, payload.delta)
        else:
            current = match_service.set_schedule_round(
                ctx, payload.round or 1, payload.division_id
            )
        await save_graph(db, ctx.graph)

    division = (
        ctx.find_division(payload.division_id)
        if payload.division_id
        else ctx.active_division()
    )
    if division is None:
        return RoundResponse(round=current, max_round=1)
    return RoundResponse(
        division_id=division.id,
        round=current,
        max_round=match_service.max_round(ctx.active_season().fixtures(division.id)),
        fixtures=match_service.round_fixtures(ctx, division.id, current),
    )
