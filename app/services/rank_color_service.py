"""Rank-to-color bands (promotion, play-off, relegation zones, ...).

Rules are kept as an ordered list per division. Ranges may overlap; the
first rule containing a rank wins.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from app.models.entities import RankColorRule, Season
from app.models.fields import ErrorCode
from app.models.standings import RankBand
from app.services.context import LeagueContext
from app.services.errors import LeagueValidationError

logger = logging.getLogger(__name__)

NO_BAND: Optional[RankBand] = None
DEFAULT_RULE_COLOR = "#33D17A"


def rules_for(season: Season, division_id: str) -> list[RankColorRule]:
    return season.rank_color_rules.get(division_id, [])


def band_for(rules: Sequence[RankColorRule], rank: int) -> Optional[RankBand]:
    for rule in rules:
        if rule.covers(rank):
            return RankBand(color=rule.color, label=rule.label)
    return NO_BAND


def classify_rank(
    ctx: LeagueContext, division_id: str, rank: int
) -> Optional[RankBand]:
    """Return the color/label of the first rule covering ``rank``."""
    return band_for(rules_for(ctx.active_season(), division_id), rank)


def validate_rule(rule: RankColorRule, team_count: int) -> None:
    """Check a rule's bounds against the division's current team count.

    Raises:
        LeagueValidationError: RANGE_INVALID or RANGE_EXCEEDS_TEAM_COUNT
    """
    if rule.from_rank < 1:
        raise LeagueValidationError(ErrorCode.range_invalid, "from")
    if rule.to_rank < 1:
        raise LeagueValidationError(ErrorCode.range_invalid, "to")
    if rule.from_rank > rule.to_rank:
        raise LeagueValidationError(ErrorCode.range_invalid, "to")
    if rule.from_rank > team_count:
        raise LeagueValidationError(ErrorCode.range_exceeds_team_count, "from")
    if rule.to_rank > team_count:
        raise LeagueValidationError(ErrorCode.range_exceeds_team_count, "to")


def _division_rules(
    ctx: LeagueContext, division_id: str, rule: Optional[RankColorRule] = None
) -> Optional[list[RankColorRule]]:
    season = ctx.active_season()
    division = season.find_division(division_id)
    if division is None:
        logger.debug(f"rank colors: unknown division {division_id}")
        return None
    if rule is not None:
        validate_rule(rule, len(division.teams))
    return season.rank_color_rules.setdefault(division.id, [])


def append_rule(
    ctx: LeagueContext, division_id: str, rule: RankColorRule
) -> Optional[RankColorRule]:
    rules = _division_rules(ctx, division_id, rule)
    if rules is None:
        return None
    rules.append(rule)
    return rule


def replace_rule(
    ctx: LeagueContext, division_id: str, index: int, rule: RankColorRule
) -> Optional[RankColorRule]:
    rules = _division_rules(ctx, division_id, rule)
    if rules is None or not 0 <= index < len(rules):
        return None
    rules[index] = rule
    return rule


def upsert_rule(
    ctx: LeagueContext,
    division_id: str,
    rule: RankColorRule,
    index: Optional[int] = None,
) -> Optional[RankColorRule]:
    """Replace the rule at ``index``, or append when no index is given."""
    if index is None:
        return append_rule(ctx, division_id, rule)
    return replace_rule(ctx, division_id, index, rule)


def remove_rule(
    ctx: LeagueContext, division_id: str, index: int
) -> Optional[RankColorRule]:
    rules = _division_rules(ctx, division_id)
    if rules is None or not 0 <= index < len(rules):
        return None
    return rules.pop(index)
