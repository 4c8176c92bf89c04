"""Rank color rules per division."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.entities import RankColorRule
from app.models.requests import RankColorRuleInput
from app.models.standings import RankBand
from app.routes.helpers import not_found, require_division, validation_error
from app.services import rank_color_service
from app.services.errors import LeagueValidationError
from app.services.state_store import load_context, save_graph
from app.utils.db_async import get_session

router = APIRouter(prefix="/api/divisions", tags=["rank-colors"])


def _to_rule(payload: RankColorRuleInput) -> RankColorRule:
    return RankColorRule(
        from_rank=payload.from_rank,
        to_rank=payload.to_rank,
        color=payload.color,
        label=payload.label,
    )


@router.get("/{division_id}/rank-colors", response_model=List[RankColorRule])
async def list_rules(
    division_id: str,
    db: AsyncSession = Depends(get_session),
) -> List[RankColorRule]:
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
    return rank_color_service.rules_for(ctx.active_season(), division.id)


@router.get("/{division_id}/rank-colors/classify", response_model=Optional[RankBand])
async def classify(
    division_id: str,
    rank: int = Query(..., ge=1),
    db: AsyncSession = Depends(get_session),
) -> Optional[RankBand]:
    """Band for ``rank``, or null when no rule covers it."""
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
    return rank_color_service.classify_rank(ctx, division.id, rank)


@router.post(
    "/{division_id}/rank-colors", response_model=RankColorRule, status_code=201
)
async def create_rule(
    division_id: str,
    payload: RankColorRuleInput,
    db: AsyncSession = Depends(get_session),
) -> RankColorRule:
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
        try:
            rule = rank_color_service.upsert_rule(ctx, division.id, _to_rule(payload))
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        if rule is None:
            raise not_found("Division")
        await save_graph(db, ctx.graph)
    return rule


@router.put("/{division_id}/rank-colors/{index}", response_model=RankColorRule)
async def replace_rule(
    division_id: str,
    index: int,
    payload: RankColorRuleInput,
    db: AsyncSession = Depends(get_session),
) -> RankColorRule:
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
        try:
            rule = rank_color_service.upsert_rule(
                ctx, division.id, _to_rule(payload), index=index
            )
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        if rule is None:
            raise not_found("Rank color rule")
        await save_graph(db, ctx.graph)
    return rule


@router.delete("/{division_id}/rank-colors/{index}", response_model=RankColorRule)
async def delete_rule(
    division_id: str,
    index: int,
    db: AsyncSession = Depends(get_session),
) -> RankColorRule:
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
        rule = rank_color_service.remove_rule(ctx, division.id, index)
        if rule is None:
            raise not_found("Rank color rule")
        await save_graph(db, ctx.graph)
    return rule
