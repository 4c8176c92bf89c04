"""Round-robin fixture generation (circle method)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from app.models.entities import Match
from app.models.fields import ErrorCode
from app.services.context import LeagueContext
from app.services.errors import LeagueValidationError

logger = logging.getLogger(__name__)

BYE = "BYE"


@dataclass(frozen=True)
class ScheduleOptions:
    cycles: int = 1
    alternate_home_away: bool = True


def round_robin_rounds(team_ids: Sequence[str]) -> list[list[tuple[str, str]]]:
    """Pair every team with every other once using the circle method.

    Slot 0 stays fixed while the others rotate one step per round. With an
    odd field a bye placeholder is added and any pair touching it is dropped,
    so those rounds hold one fixture fewer.

    Args:
        team_ids: Ordered team identifiers (at least two)

    Returns:
        One list of (a, b) pairs per round, ``n - 1`` rounds for ``n`` slots
    """
    slots = list(team_ids)
    if len(slots) % 2 == 1:
        slots.append(BYE)

    n = len(slots)
    half = n // 2
    rounds: list[list[tuple[str, str]]] = []

    for _ in range(n - 1):
        pairs = []
        for i in range(half):
            a, b = slots[i], slots[n - 1 - i]
            if a != BYE and b != BYE:
                pairs.append((a, b))
        rounds.append(pairs)

        # Fixed anchor; the last slot moves up behind it.
        slots = [slots[0], slots[-1]] + slots[1:-1]

    return rounds


def assign_venue(
    a: str, b: str, round_index: int, cycle: int, alternate_home_away: bool
) -> tuple[str, str]:
    """Return (home, away) for a pair.

    ``round_index`` is 0-based within the pass and ``cycle`` is the 1-based
    pass number.
    """
    home, away = a, b
    if (round_index + cycle) % 2 == 1:
        home, away = b, a
    if alternate_home_away and cycle % 2 == 0:
        home, away = away, home
    return home, away


def build_fixtures(
    division_id: str,
    team_ids: Sequence[str],
    options: ScheduleOptions,
    ctx: LeagueContext,
) -> list[Match]:
    """Build the full fixture list for ``options.cycles`` passes."""
    if len(team_ids) < 2:
        raise LeagueValidationError(ErrorCode.needs_at_least_two_teams)

    base_rounds = round_robin_rounds(team_ids)
    cycles = max(1, int(options.cycles))
    started_at = ctx.now()

    fixtures: list[Match] = []
    round_no = 1
    for cycle in range(1, cycles + 1):
        for round_index, pairs in enumerate(base_rounds):
            for a, b in pairs:
                home, away = assign_venue(
                    a, b, round_index, cycle, options.alternate_home_away
                )
                fixtures.append(
                    Match(
                        id=ctx.next_id(),
                        division_id=division_id,
                        round=round_no,
                        home_team_id=home,
                        away_team_id=away,
                        created_at=started_at + len(fixtures),
                    )
                )
            round_no += 1

    return fixtures


def generate_schedule(
    ctx: LeagueContext,
    division_id: str,
    options: Optional[ScheduleOptions] = None,
) -> list[Match]:
    """Replace a division's fixture list with a freshly generated one.

    Destructive: every previous fixture and recorded score for the division
    is discarded. The active schedule round is rewound to 1.

    Args:
        ctx: League context
        division_id: Division in the active season
        options: Pass count and home/away alternation

    Returns:
        The new fixture list, or an empty list for an unknown division

    Raises:
        LeagueValidationError: NEEDS_AT_LEAST_TWO_TEAMS
    """
    options = options or ScheduleOptions()
    season = ctx.active_season()
    division = season.find_division(division_id)
    if division is None:
        logger.debug(f"generate_schedule: unknown division {division_id}")
        return []

    fixtures = build_fixtures(division.id, division.team_ids(), options, ctx)

    previous = season.schedule_by_div.get(division.id, [])
    # Single reference swap so readers never see a half-built list.
    season.schedule_by_div[division.id] = fixtures
    ctx.graph.view.schedule_round = 1

    logger.info(
        f"Generated {len(fixtures)} fixtures for division {division.name!r} "
        f"({options.cycles} cycle(s), replaced {len(previous)})"
    )
    return fixtures
