"""Unit tests for movement indicators between standings reads."""

from app.models.entities import Season
from app.models.fields import Movement
from app.models.standings import StandingsRow
from app.services.rank_history_service import (
    commit_ranks,
    forget_team,
    movement_for,
    track_movement,
)


def _season():
    return Season(id="s1", number=1, created_at=0)


def _rows(*ranked_ids):
    return [
        StandingsRow(rank=position, team_id=team_id)
        for position, team_id in enumerate(ranked_ids, start=1)
    ]


class TestMovementFor:
    def test_improving_is_up(self):
        assert movement_for(3, 1) is Movement.up

    def test_worsening_is_down(self):
        assert movement_for(1, 3) is Movement.down

    def test_unchanged_is_flat(self):
        assert movement_for(2, 2) is Movement.flat

    def test_first_appearance_is_flat(self):
        assert movement_for(None, 5) is Movement.flat


class TestTrackMovement:
    """Tests for track_movement() and its snapshot commit."""

    def test_first_read_is_flat_and_commits(self):
        season = _season()
        rows = track_movement(season, "d1", _rows("a", "b", "c"))
        assert [r.movement for r in rows] == [Movement.flat] * 3
        assert season.last_rank_by_div_team["d1"] == {"a": 1, "b": 2, "c": 3}

    def test_movement_since_previous_read(self):
        season = _season()
        track_movement(season, "d1", _rows("a", "b", "c"))

        rows = track_movement(season, "d1", _rows("c", "a", "b"))

        assert {r.team_id: r.movement for r in rows} == {
            "c": Movement.up,
            "a": Movement.down,
            "b": Movement.down,
        }

    def test_snapshot_overwritten_on_every_read(self):
        season = _season()
        track_movement(season, "d1", _rows("a", "b"))
        track_movement(season, "d1", _rows("b", "a"))

        rows = track_movement(season, "d1", _rows("b", "a"))

        assert all(r.movement is Movement.flat for r in rows)

    def test_divisions_tracked_separately(self):
        season = _season()
        commit_ranks(season, "d1", _rows("a", "b"))
        rows = track_movement(season, "d2", _rows("b", "a"))
        assert all(r.movement is Movement.flat for r in rows)

    def test_new_team_is_flat(self):
        season = _season()
        track_movement(season, "d1", _rows("a", "b"))
        rows = track_movement(season, "d1", _rows("z", "a", "b"))
        assert rows[0].movement is Movement.flat


class TestForgetTeam:
    def test_removes_only_that_team(self):
        season = _season()
        commit_ranks(season, "d1", _rows("a", "b"))
        forget_team(season, "d1", "a")
        assert season.last_rank_by_div_team["d1"] == {"b": 2}

    def test_unknown_division_is_noop(self):
        season = _season()
        forget_team(season, "nope", "a")
        assert season.last_rank_by_div_team == {}
