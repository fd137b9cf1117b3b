"""Tests for the live match controller: click routing, finish and save."""
import pytest

from champions315.errors import MatchValidationError
from champions315.models import GkReplacementPhase, LineupData
from champions315.services import (
    InMemoryMatchRecorder, LineupSession, LiveMatch, TimerService
)

from factories import (
    BENCH_AGES, REFERENCE_YEAR, STARTERS_315, FakeTicker, make_bench, make_lineup
)


@pytest.fixture
def recorder():
    return InMemoryMatchRecorder()


@pytest.fixture
def match(recorder):
    players = make_lineup(STARTERS_315)
    bench = tuple(make_bench(BENCH_AGES))
    lineup = LineupData(
        formation="4-3-1", team_name="Veteranos", players=players, bench=bench,
        team_color="#123456", sponsor_logo="sponsor.png",
    )
    session = LineupSession(players, bench, reference_year=REFERENCE_YEAR)
    timer = TimerService(ticker_factory=FakeTicker)
    return LiveMatch("lineup-1", lineup, recorder, session=session, timer=timer)


def test_field_and_bench_clicks_substitute(match):
    assert match.field_click("midfielders", 1)
    assert match.bench_click(1)
    assert match.session.state.players.midfielders[1].id == "p-11"
    assert match.session.metrics.total_age == 330


def test_pending_substitution_through_actions(match):
    match.field_click("defenders", 0)
    assert match.bench_click(0)
    snapshot = match.snapshot()
    assert snapshot["pendingSub"]["projectedTotalAge"] == 290
    assert snapshot["selectedPlayer"]["id"] == "p-2"

    assert match.perform("cancel-substitution")
    assert match.session.state.pending_sub is None
    assert match.session.state.selection is None

    match.field_click("defenders", 0)
    match.bench_click(0)
    assert match.perform("confirm-substitution")
    assert match.session.metrics.total_age == 290


def test_goalkeeper_replacement_routing(match):
    match.field_click("gk", -1)
    assert match.perform("red-card")
    snapshot = match.snapshot()
    assert snapshot["gkPhase"] == "choose-replacement"
    assert snapshot["highlightBench"] is True
    assert snapshot["highlightField"] is True

    assert match.bench_click(1)
    assert match.session.gk_phase is GkReplacementPhase.CHOOSE_OUTFIELDER_TO_REMOVE
    assert match.snapshot()["highlightBench"] is False
    # bench clicks are ignored while an outfielder must be removed
    assert not match.bench_click(0)

    assert match.field_click("attackers", 0)
    assert match.session.gk_phase is None
    assert match.session.state.players.gk.id == "p-11"
    assert match.session.state.players.attackers == (None,)


def test_goalkeeper_replaced_from_field(match):
    match.field_click("gk", 0)
    match.perform("red-card")
    assert match.field_click("defenders", 2)
    state = match.session.state
    assert state.players.gk.id == "p-4"
    assert state.players.defenders[2] is None
    assert state.gk_phase is None


def test_yellow_card_snapshot(match):
    match.field_click("midfielders", 0)
    assert match.perform("yellow-card")
    match.field_click("midfielders", 0)
    snapshot = match.snapshot()
    assert snapshot["selectedPlayerHasYellow"] is True
    assert snapshot["yellowCards"] == [
        {"playerId": "p-6", "playerNumber": 6, "playerName": "Player p-6"}
    ]


def test_undo_redo_actions(match):
    match.field_click("defenders", 1)
    assert match.snapshot()["canUndo"] is True
    assert match.perform("undo")
    assert match.session.state.selection is None
    assert match.snapshot()["canRedo"] is True
    assert match.perform("redo")
    assert match.session.state.selection is not None


def test_unknown_action_raises(match):
    with pytest.raises(ValueError):
        match.perform("offside")


def test_snapshot_contents(match):
    snapshot = match.snapshot()
    assert snapshot["lineupId"] == "lineup-1"
    assert snapshot["teamName"] == "Veteranos"
    assert snapshot["sponsorLogo"] == "sponsor.png"
    assert snapshot["formation"] == "4-3-1"
    assert snapshot["ageLimit"] == 315
    assert snapshot["avgAgeLimit"] == 35
    assert snapshot["metrics"]["totalAge"] == 315
    assert snapshot["metrics"]["isBelowThreshold"] is False
    assert snapshot["timer"]["period"] == 1
    assert snapshot["finished"] is False
    assert snapshot["selectedPlayer"] is None


def test_finish_freezes_the_session(match):
    match.timer.start()
    match.finish()
    assert match.finished
    assert not match.timer.running
    assert not match.field_click("defenders", 0)
    assert not match.bench_click(0)
    assert not match.perform("cancel")
    assert not match.control_clock("start")
    assert not match.timer.running
    assert not match.control_clock("period", 2)
    assert match.timer.clock.period == 1

    match.resume()
    assert match.field_click("defenders", 0)
    assert match.control_clock("next-period")
    assert match.timer.clock.period == 2


def test_save_requires_finish(match):
    with pytest.raises(MatchValidationError):
        match.save_result("Rivals FC", 1, 0)


def test_save_validates_input(match):
    match.finish()
    with pytest.raises(MatchValidationError):
        match.save_result("   ", 1, 0)
    with pytest.raises(MatchValidationError):
        match.save_result("Rivals FC", "two", 0)


def test_save_records_cards_and_expulsions(match, recorder):
    match.field_click("midfielders", 2)
    match.perform("yellow-card")
    match.field_click("attackers", 0)
    match.perform("red-card")
    match.finish()

    result = match.save_result(" Rivals FC ", "3", -1, game_date="2026-03-14")

    assert recorder.results == [result]
    assert match.saved_result is result
    assert result.opponent_name == "Rivals FC"
    assert result.score_home == 3
    assert result.score_away == 0
    assert result.game_date == "2026-03-14"
    assert [c.player_id for c in result.yellow_cards] == ["p-8"]
    assert [p.player_id for p in result.expelled_players] == ["p-9"]
    assert result.summary_line("Veteranos") == "Veteranos 3 × 0 Rivals FC"


def test_save_defaults_to_today(match, recorder):
    match.finish()
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr("champions315.services.live_match.today_iso", lambda: "2026-10-19")
        result = match.save_result("Rivals FC", 0, 0)
    assert result.game_date == "2026-10-19"


def test_unknown_clock_control_raises(match):
    with pytest.raises(ValueError):
        match.control_clock("overtime")
    with pytest.raises(ValueError):
        match.control_clock("period")
