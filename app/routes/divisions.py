"""Division and team routes (active season)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.entities import Division, Team
from app.models.requests import DivisionCreate, DivisionUpdate, TeamCreate, TeamUpdate
from app.models.summary import StateResponse, summarize
from app.routes.helpers import not_found, validation_error
from app.services import division_service, league_service
from app.services.errors import LeagueValidationError
from app.services.state_store import load_context, save_graph
from app.utils.db_async import get_session

router = APIRouter(prefix="/api/divisions", tags=["divisions"])


@router.post("", response_model=Division, status_code=201)
async def create_division(
    payload: DivisionCreate,
    db: AsyncSession = Depends(get_session),
) -> Division:
    async with db.begin():
        ctx = await load_context(db)
        division = division_service.add_division(ctx, payload.name)
        await save_graph(db, ctx.graph)
    return division


@router.patch("/{division_id}", response_model=Division)
async def rename_division(
    division_id: str,
    payload: DivisionUpdate,
    db: AsyncSession = Depends(get_session),
) -> Division:
    async with db.begin():
        ctx = await load_context(db)
        division = division_service.rename_division(ctx, division_id, payload.name)
        if division is None:
            raise not_found("Division")
        await save_graph(db, ctx.graph)
    return division


@router.delete("/{division_id}", response_model=Division)
async def delete_division(
    division_id: str,
    db: AsyncSession = Depends(get_session),
) -> Division:
    """Delete a division together with its schedule, color rules and ranks."""
    async with db.begin():
        ctx = await load_context(db)
        try:
            division = division_service.remove_division(ctx, division_id)
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        if division is None:
            raise not_found("Division")
        await save_graph(db, ctx.graph)
    return division


@router.post("/{division_id}/activate", response_model=StateResponse)
async def activate_division(
    division_id: str,
    db: AsyncSession = Depends(get_session),
) -> StateResponse:
    async with db.begin():
        ctx = await load_context(db)
        if league_service.select_division(ctx, division_id) is None:
            raise not_found("Division")
        await save_graph(db, ctx.graph)
    return summarize(ctx.graph)


@router.post("/{division_id}/teams", response_model=Team, status_code=201)
async def create_team(
    division_id: str,
    payload: TeamCreate,
    db: AsyncSession = Depends(get_session),
) -> Team:
    async with db.begin():
        ctx = await load_context(db)
        team = division_service.add_team(
            ctx, division_id, name=payload.name, logo_ref=payload.logo_ref
        )
        if team is None:
            raise not_found("Division")
        await save_graph(db, ctx.graph)
    return team


@router.patch("/{division_id}/teams/{team_id}", response_model=Team)
async def update_team(
    division_id: str,
    team_id: str,
    payload: TeamUpdate,
    db: AsyncSession = Depends(get_session),
) -> Team:
    async with db.begin():
        ctx = await load_context(db)
        try:
            team = division_service.update_team(
                ctx, division_id, team_id, payload.name, logo_ref=payload.logo_ref
            )
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        if team is None:
            raise not_found("Team")
        await save_graph(db, ctx.graph)
    return team


@router.delete("/{division_id}/teams/{team_id}", response_model=Team)
async def delete_team(
    division_id: str,
    team_id: str,
    db: AsyncSession = Depends(get_session),
) -> Team:
    """Remove a team along with every fixture it plays in."""
    async with db.begin():
        ctx = await load_context(db)
        try:
            team = division_service.remove_team(ctx, division_id, team_id)
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        if team is None:
            raise not_found("Team")
        await save_graph(db, ctx.graph)
    return team
