"""Shared helpers for the league API routes."""

from __future__ import annotations

from fastapi import HTTPException

from app.models.entities import Division
from app.services.context import LeagueContext
from app.services.errors import LeagueValidationError


def validation_error(exc: LeagueValidationError) -> HTTPException:
    """Translate a rejected operation into a 422 carrying its code and field."""
    return HTTPException(status_code=422, detail=exc.as_detail())


def not_found(what: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{what} not found")


def require_division(ctx: LeagueContext, division_id: str) -> Division:
    """Resolve a division in the active season or raise 404."""
    division = ctx.find_division(division_id)
    if division is None:
        raise not_found("Division")
    return division
