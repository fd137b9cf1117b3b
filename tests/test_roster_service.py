"""Tests for the roster source and the 4-3-1 distribution of starters."""
import json
from datetime import date

import pytest

from champions315 import settings
from champions315.errors import LineupNotFoundError, RosterDataError
from champions315.models import Position
from champions315.services import RosterService, distribute_by_formation

from factories import make_player, roster_document


@pytest.fixture
def sample_roster() -> RosterService:
    return RosterService.load_roster_file(str(settings.DEFAULT_ROSTER_FILE))


def test_sample_roster_loads(sample_roster):
    assert sample_roster.team.name == "Esquadrão Veteranos"
    assert len(sample_roster.players) == 15
    assert sample_roster.default_lineup_id() == "lineup-1"
    assert [o["id"] for o in sample_roster.lineup_options()] == ["lineup-1", "lineup-2"]


def test_build_lineup_data_keeps_registered_positions(sample_roster):
    data = sample_roster.build_lineup_data("lineup-1")
    assert data.team_name == "Esquadrão Veteranos"
    assert data.formation == "4-3-1"
    assert data.players.gk.id == "p-01"
    assert [p.id for p in data.players.defenders] == ["p-03", "p-04", "p-05", "p-06"]
    assert [p.id for p in data.players.midfielders] == ["p-08", "p-09", "p-10"]
    assert [p.id for p in data.players.attackers] == ["p-13"]
    assert [p.id for p in data.bench] == ["p-02", "p-07", "p-11", "p-12", "p-14", "p-15"]
    assert sample_roster.lineup_warnings("lineup-1") == []


def test_unknown_lineup_raises(sample_roster):
    with pytest.raises(LineupNotFoundError) as excinfo:
        sample_roster.build_lineup_data("lineup-99")
    assert excinfo.value.lineup_id == "lineup-99"


def test_goalkeeper_is_found_anywhere_in_starters():
    starters = [make_player(f"p-{i}", 30, Position.MID) for i in range(1, 9)]
    starters.insert(3, make_player("p-9", 30, Position.GK))
    players = distribute_by_formation(starters)
    assert players.gk.id == "p-9"
    assert [p.id for p in players.defenders] == ["p-1", "p-2", "p-3", "p-4"]
    assert [p.id for p in players.midfielders] == ["p-5", "p-6", "p-7"]
    assert [p.id for p in players.attackers] == ["p-8"]


def test_first_starter_keeps_goal_without_registered_goalkeeper():
    starters = [make_player(f"p-{i}", 30, Position.FWD) for i in range(1, 10)]
    players = distribute_by_formation(starters)
    assert players.gk.id == "p-1"
    assert len(players.on_field()) == 9


def test_empty_starters_give_empty_lineup():
    assert distribute_by_formation([]).on_field() == []


def test_lineup_warnings_report_problems_without_blocking():
    doc = roster_document([30] * 9, [30], date.today().year)
    lineup = doc["lineups"][0]
    lineup["starterIds"] = lineup["starterIds"][1:] + ["p-10", "ghost"]
    roster = RosterService.from_dict(doc)

    warnings = roster.lineup_warnings("lineup-1")
    assert "Expected 9 starters, found 10" in warnings
    assert "Players both starting and on the bench: p-10" in warnings
    assert "Unknown player ids: ghost" in warnings
    assert "No registered goalkeeper among the starters" in warnings

    data = roster.build_lineup_data("lineup-1")
    assert data.players.gk.id == "p-2"


def test_build_logs_lineup_warnings(caplog):
    doc = roster_document([30] * 8, [], date.today().year)
    roster = RosterService.from_dict(doc)
    with caplog.at_level("WARNING", logger="champions315.services.roster_service"):
        roster.build_lineup_data("lineup-1")
    assert "Expected 9 starters, found 8" in caplog.text


def test_malformed_roster_raises():
    with pytest.raises(RosterDataError):
        RosterService.from_dict({"players": []})
    with pytest.raises(RosterDataError):
        RosterService.from_dict({
            "team": {"id": "t", "name": "T"},
            "players": [{"id": "p", "number": 1, "name": "X", "birthDate": "31/12/1980"}],
        })


def test_load_roster_file(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps(roster_document([35] * 9, [40], 2026)), encoding="utf-8")
    roster = RosterService.load_roster_file(str(path))
    assert roster.get_player("p-10").birth_date == date(1986, 3, 1)
    assert roster.get_player("missing") is None


def test_missing_roster_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        RosterService.load_roster_file(str(tmp_path / "nope.json"))
