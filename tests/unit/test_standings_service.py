"""Unit tests for standings aggregation, ordering and form."""

import pytest

from app.models.entities import Division, Match, RankColorRule, Score, Team
from app.models.fields import FormResult, Movement
from app.models.standings import StandingsRow
from app.services.division_service import remove_team
from app.services.schedule_service import generate_schedule
from app.services.standings_service import (
    collation_key,
    compute_standings,
    last_five,
    rank_rows,
    rank_table,
    sort_key,
    team_record,
)


def _team_id(ctx, name):
    return next(t.id for t in ctx.active_division().teams if t.name == name)


def _fixture(fixtures, ctx, home_name, away_name):
    """The first fixture between two teams, regardless of venue."""
    a, b = _team_id(ctx, home_name), _team_id(ctx, away_name)
    return next(m for m in fixtures if {m.home_team_id, m.away_team_id} == {a, b})


def _set_result(ctx, match, winner_goals, loser_goals, winner_name):
    winner = _team_id(ctx, winner_name)
    if match.home_team_id == winner:
        match.score = Score(home=winner_goals, away=loser_goals)
    else:
        match.score = Score(home=loser_goals, away=winner_goals)


def _by_name(rows):
    return {row.team_name: row for row in rows}


class TestCollation:
    def test_case_insensitive(self):
        assert collation_key("bravo") < collation_key("Charlie")
        assert collation_key("Alpha") < collation_key("bravo")

    def test_width_folding(self):
        assert collation_key("ＡＢＣ")[0] == collation_key("abc")[0]

    def test_accented_names_sort_with_their_base_letter(self):
        rows = [
            StandingsRow(team_id=f"t{i}", team_name=name)
            for i, name in enumerate(["Zeta", "Élan", "Arsenal"])
        ]
        ranked = rank_rows(rows)
        assert [r.team_name for r in ranked] == ["Arsenal", "Élan", "Zeta"]

    def test_accent_only_difference_is_still_ordered(self):
        assert collation_key("Elan")[0] == collation_key("élan")[0]
        assert collation_key("Elan") != collation_key("élan")


class TestAggregation:
    """Tests for points, goals and ordering."""

    def test_win_draw_loss_accumulate(self, ctx):
        division = ctx.active_division()
        fixtures = generate_schedule(ctx, division.id)
        _set_result(ctx, _fixture(fixtures, ctx, "Alpha", "Bravo"), 3, 1, "Alpha")
        draw = _fixture(fixtures, ctx, "Charlie", "Delta")
        draw.score = Score(home=2, away=2)

        rows = _by_name(compute_standings(ctx, division.id))

        alpha = rows["Alpha"]
        assert (alpha.played, alpha.w, alpha.d, alpha.l) == (1, 1, 0, 0)
        assert (alpha.gf, alpha.ga, alpha.gd, alpha.pts) == (3, 1, 2, 3)
        bravo = rows["Bravo"]
        assert (bravo.played, bravo.l, bravo.gd, bravo.pts) == (1, 1, -2, 0)
        assert rows["Charlie"].pts == rows["Delta"].pts == 1
        assert rows["Charlie"].d == 1

    def test_unplayed_division_gives_zero_rows(self, ctx):
        rows = compute_standings(ctx, ctx.active_division().id)
        assert len(rows) == 4
        assert all(r.played == 0 and r.pts == 0 for r in rows)
        assert [r.rank for r in rows] == [1, 2, 3, 4]

    def test_all_draws_fall_through_to_name(self, league_factory):
        ctx = league_factory(["delta", "Charlie", "bravo", "Alpha"])
        division = ctx.active_division()
        for match in generate_schedule(ctx, division.id):
            match.score = Score(home=2, away=2)

        rows = compute_standings(ctx, division.id)

        assert {r.pts for r in rows} == {3}
        assert {r.gd for r in rows} == {0}
        assert {r.gf for r in rows} == {6}
        assert [r.team_name for r in rows] == ["Alpha", "bravo", "Charlie", "delta"]

    def test_goal_difference_before_goals_for(self, ctx):
        division = ctx.active_division()
        fixtures = generate_schedule(ctx, division.id)
        # Alpha and Charlie both win once; Charlie by more, Alpha scores more.
        _set_result(ctx, _fixture(fixtures, ctx, "Alpha", "Bravo"), 5, 4, "Alpha")
        _set_result(ctx, _fixture(fixtures, ctx, "Charlie", "Delta"), 3, 0, "Charlie")

        rows = compute_standings(ctx, division.id)

        assert [r.team_name for r in rows[:2]] == ["Charlie", "Alpha"]

    def test_identical_names_ordered_by_id(self):
        division = Division(
            id="d",
            name="Div",
            teams=[Team(id="t2", name="Rovers"), Team(id="t1", name="Rovers")],
        )
        rows = rank_table(division, [])
        assert [r.team_id for r in rows] == ["t1", "t2"]
        assert sort_key(rows[0]) != sort_key(rows[1])

    def test_sort_is_strict_total_order(self):
        rows = [
            StandingsRow(team_id=f"t{i}", team_name=name, pts=3, gd=0, gf=1)
            for i, name in enumerate(["Same", "same", "Same", "Other"])
        ]
        keys = [sort_key(r) for r in rows]
        assert len(set(keys)) == len(keys)
        assert [r.rank for r in rank_rows(rows)] == [1, 2, 3, 4]

    def test_matches_with_removed_teams_are_skipped(self, ctx):
        division = ctx.active_division()
        stray = Match(
            id="m-stray",
            division_id=division.id,
            round=1,
            home_team_id=_team_id(ctx, "Alpha"),
            away_team_id="gone",
            score=Score(home=9, away=0),
            created_at=1,
        )
        rows = _by_name(rank_table(division, [stray]))
        assert rows["Alpha"].played == 0

    def test_remove_team_leaves_other_results(self, ctx):
        division = ctx.active_division()
        fixtures = generate_schedule(ctx, division.id)
        _set_result(ctx, _fixture(fixtures, ctx, "Alpha", "Bravo"), 2, 0, "Alpha")
        _set_result(ctx, _fixture(fixtures, ctx, "Charlie", "Delta"), 1, 0, "Charlie")
        _set_result(ctx, _fixture(fixtures, ctx, "Alpha", "Delta"), 4, 0, "Delta")
        compute_standings(ctx, division.id)

        remove_team(ctx, division.id, _team_id(ctx, "Delta"))
        rows = _by_name(compute_standings(ctx, division.id))

        assert "Delta" not in rows
        assert (rows["Alpha"].played, rows["Alpha"].pts, rows["Alpha"].gd) == (1, 3, 2)
        assert (rows["Charlie"].played, rows["Charlie"].pts) == (0, 0)
        assert rows["Bravo"].l == 1

    def test_unknown_division(self, ctx):
        assert compute_standings(ctx, "missing") == []


class TestComputeStandings:
    def test_repeat_read_is_idempotent_apart_from_movement(self, ctx):
        division = ctx.active_division()
        fixtures = generate_schedule(ctx, division.id)
        compute_standings(ctx, division.id)
        _set_result(ctx, _fixture(fixtures, ctx, "Delta", "Alpha"), 1, 0, "Delta")

        first = compute_standings(ctx, division.id)
        second = compute_standings(ctx, division.id)

        assert _by_name(first)["Delta"].movement is Movement.up
        assert _by_name(first)["Alpha"].movement is Movement.down
        assert all(r.movement is Movement.flat for r in second)
        assert [r.model_dump(exclude={"movement"}) for r in first] == [
            r.model_dump(exclude={"movement"}) for r in second
        ]

    def test_bands_follow_rules(self, ctx):
        division = ctx.active_division()
        ctx.active_season().rank_color_rules[division.id] = [
            RankColorRule(from_rank=1, to_rank=1, color="#FFD54A", label="Champions"),
            RankColorRule(from_rank=4, to_rank=4, color="#FF4D4D", label="Relegation"),
        ]
        rows = compute_standings(ctx, division.id)
        assert rows[0].band is not None and rows[0].band.label == "Champions"
        assert rows[1].band is None and rows[2].band is None
        assert rows[3].band is not None and rows[3].band.color == "#FF4D4D"

    def test_rows_carry_form(self, ctx):
        division = ctx.active_division()
        generate_schedule(ctx, division.id)
        rows = compute_standings(ctx, division.id)
        assert all(r.form == [FormResult.pending] * 5 for r in rows)


class TestLastFive:
    """Tests for last_five()."""

    def _match(self, round_no, home, away, score=None):
        return Match(
            id=f"m{round_no}{home}",
            division_id="d",
            round=round_no,
            home_team_id=home,
            away_team_id=away,
            score=score,
            created_at=round_no,
        )

    def test_pads_and_orders_oldest_first(self):
        fixtures = [
            self._match(1, "a", "b", Score(home=2, away=0)),
            self._match(2, "c", "a", Score(home=1, away=1)),
            self._match(3, "a", "d", Score(home=0, away=3)),
        ]
        assert last_five(fixtures, "a") == [
            FormResult.pending,
            FormResult.pending,
            FormResult.win,
            FormResult.draw,
            FormResult.loss,
        ]

    def test_keeps_latest_five_including_unplayed(self):
        fixtures = [self._match(r, "a", "b", Score(home=1, away=0)) for r in range(1, 6)]
        fixtures.append(self._match(6, "b", "a"))
        form = last_five(fixtures, "a")
        assert form == [FormResult.win] * 4 + [FormResult.pending]

    def test_uninvolved_team(self):
        assert last_five([self._match(1, "a", "b")], "z") == [FormResult.pending] * 5


class TestTeamRecord:
    def test_record_and_matches_newest_first(self, ctx):
        division = ctx.active_division()
        fixtures = generate_schedule(ctx, division.id)
        _set_result(ctx, _fixture(fixtures, ctx, "Alpha", "Bravo"), 2, 1, "Alpha")
        _set_result(ctx, _fixture(fixtures, ctx, "Alpha", "Charlie"), 3, 0, "Charlie")

        record = team_record(ctx.active_season(), division.id, _team_id(ctx, "Alpha"))

        assert record is not None
        assert (record.played, record.w, record.l, record.pts) == (2, 1, 1, 3)
        assert (record.gf, record.ga, record.gd) == (2, 4, -2)
        assert len(record.matches) == 3
        rounds = [m.round for m in record.matches]
        assert rounds == sorted(rounds, reverse=True)

    @pytest.mark.parametrize("division_id,team_id", [("missing", "x"), (None, "missing")])
    def test_misses_return_none(self, ctx, division_id, team_id):
        division_id = division_id or ctx.active_division().id
        assert team_record(ctx.active_season(), division_id, team_id) is None
