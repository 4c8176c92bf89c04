"""Shared fixtures: deterministic league contexts for service tests."""

import itertools
from typing import Callable, Sequence

import pytest

from app.models.entities import LeagueGraph
from app.services.context import LeagueContext, make_teams, seed_graph


def build_context(
    team_names: Sequence[str] = ("Alpha", "Bravo", "Charlie", "Delta"),
    clock_start: int = 1_000,
) -> LeagueContext:
    """Seeded context whose active division holds ``team_names`` and no rules.

    Ids are ``id1, id2, ...`` and the clock ticks by one per read.
    """
    ids = itertools.count(1)
    ticks = itertools.count(clock_start)
    ctx = LeagueContext(
        graph=LeagueGraph(),
        id_factory=lambda: f"id{next(ids)}",
        clock_ms=lambda: next(ticks),
    )
    seed_graph(ctx)
    division = ctx.active_division()
    assert division is not None
    division.teams = make_teams(ctx, list(team_names))
    ctx.active_season().rank_color_rules[division.id] = []
    return ctx


@pytest.fixture
def league_factory() -> Callable[..., LeagueContext]:
    return build_context


@pytest.fixture
def ctx() -> LeagueContext:
    """Four-team division: Alpha, Bravo, Charlie, Delta."""
    return build_context()


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Ensure HTTPX uses asyncio backend during tests."""
    return "asyncio"
