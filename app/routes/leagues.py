"""League and season routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.entities import League, Season
from app.models.requests import LeagueCreate, LeagueUpdate
from app.models.summary import StateResponse, summarize
from app.routes.helpers import not_found, validation_error
from app.services import league_service
from app.services.errors import LeagueValidationError
from app.services.state_store import load_context, save_graph
from app.utils.db_async import get_session

router = APIRouter(prefix="/api", tags=["leagues"])


@router.post("/leagues", response_model=League, status_code=201)
async def create_league(
    payload: LeagueCreate,
    db: AsyncSession = Depends(get_session),
) -> League:
    """Create a league with one season and one two-team division; make it active."""
    async with db.begin():
        ctx = await load_context(db)
        league = league_service.add_league(ctx, payload.name)
        await save_graph(db, ctx.graph)
    return league


@router.patch("/leagues/{league_id}", response_model=League)
async def update_league(
    league_id: str,
    payload: LeagueUpdate,
    db: AsyncSession = Depends(get_session),
) -> League:
    async with db.begin():
        ctx = await load_context(db)
        league = league_service.update_league(
            ctx, league_id, name=payload.name, logo_ref=payload.logo_ref
        )
        if league is None:
            raise not_found("League")
        await save_graph(db, ctx.graph)
    return league


@router.delete("/leagues/{league_id}", response_model=League)
async def delete_league(
    league_id: str,
    db: AsyncSession = Depends(get_session),
) -> League:
    """Delete a league. The last remaining league cannot be deleted."""
    async with db.begin():
        ctx = await load_context(db)
        try:
            league = league_service.remove_league(ctx, league_id)
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        if league is None:
            raise not_found("League")
        await save_graph(db, ctx.graph)
    return league


@router.post("/leagues/{league_id}/activate", response_model=StateResponse)
async def activate_league(
    league_id: str,
    db: AsyncSession = Depends(get_session),
) -> StateResponse:
    async with db.begin():
        ctx = await load_context(db)
        if league_service.switch_league(ctx, league_id) is None:
            raise not_found("League")
        await save_graph(db, ctx.graph)
    return summarize(ctx.graph)


@router.post("/seasons", response_model=Season, status_code=201)
async def create_season(db: AsyncSession = Depends(get_session)) -> Season:
    """Start the next season of the active league from the active season's setup."""
    async with db.begin():
        ctx = await load_context(db)
        season = league_service.create_season(ctx)
        await save_graph(db, ctx.graph)
    return season


@router.post("/seasons/step", response_model=StateResponse)
async def step_season(
    offset: int = Query(..., description="-1 for the previous season, 1 for the next"),
    db: AsyncSession = Depends(get_session),
) -> StateResponse:
    async with db.begin():
        ctx = await load_context(db)
        if not league_service.goto_season(ctx, offset):
            raise not_found("Season")
        await save_graph(db, ctx.graph)
    return summarize(ctx.graph)


@router.delete("/seasons/{season_id}", response_model=Season)
async def delete_season(
    season_id: str,
    db: AsyncSession = Depends(get_session),
) -> Season:
    async with db.begin():
        ctx = await load_context(db)
        try:
            season = league_service.delete_season(ctx, season_id)
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        if season is None:
            raise not_found("Season")
        await save_graph(db, ctx.graph)
    return season


@router.post("/seasons/{season_id}/activate", response_model=StateResponse)
async def activate_season(
    season_id: str,
    db: AsyncSession = Depends(get_session),
) -> StateResponse:
    async with db.begin():
        ctx = await load_context(db)
        if league_service.select_season(ctx, season_id) is None:
            raise not_found("Season")
        await save_graph(db, ctx.graph)
    return summarize(ctx.graph)
