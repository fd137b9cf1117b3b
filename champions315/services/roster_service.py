"""
Roster service for the Champions 315 live lineup manager.

This module provides the read-only lineup source: the team, its players
and the saved lineups, and turns a saved lineup into the 4-3-1
arrangement a live session starts from.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..errors import LineupNotFoundError, RosterDataError
from ..models import LineupData, LineupPlayers, Player, Position, SavedLineup, Team
from ..utils import GROUP_SIZES, PLAYERS_ON_FIELD
from .persistence_service import PersistenceService

logger = logging.getLogger(__name__)


def distribute_by_formation(starters: List[Player]) -> LineupPlayers:
    """
    Arrange starters into goalkeeper + 4-3-1.

    The goalkeeper is the first registered GK (or the first starter). When
    the remaining positions are exactly 4 DEF, 3 MID and 1 FWD they are
    kept; otherwise the outfielders fill the groups in order.

    Args:
        starters: Starting players in saved order

    Returns:
        LineupPlayers for the session
    """
    if not starters:
        return LineupPlayers()

    gk = next((p for p in starters if p.position is Position.GK), starters[0])
    outfield = [p for p in starters if p.id != gk.id]

    defs = [p for p in outfield if p.position is Position.DEF]
    mids = [p for p in outfield if p.position is Position.MID]
    fwds = [p for p in outfield if p.position is Position.FWD]

    n_def = GROUP_SIZES["defenders"]
    n_mid = GROUP_SIZES["midfielders"]
    n_att = GROUP_SIZES["attackers"]

    if len(defs) == n_def and len(mids) == n_mid and len(fwds) == n_att:
        defenders, midfielders, attackers = defs, mids, fwds
    else:
        defenders = outfield[:n_def]
        midfielders = outfield[n_def:n_def + n_mid]
        attackers = outfield[n_def + n_mid:n_def + n_mid + n_att]

    return LineupPlayers(
        gk=gk,
        defenders=tuple(defenders),
        midfielders=tuple(midfielders),
        attackers=tuple(attackers),
    )


class RosterService:
    """
    Holds the team, its players and saved lineups.

    Provides lineup options for the match screen and builds the data that
    seeds a live session.
    """

    def __init__(
        self,
        team: Team,
        players: Iterable[Player],
        lineups: Iterable[SavedLineup],
    ):
        self.team = team
        self._players: Dict[str, Player] = {p.id: p for p in players}
        self._lineups: Dict[str, SavedLineup] = {l.id: l for l in lineups}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RosterService':
        """
        Build the service from a roster document.

        Args:
            data: Dictionary with ``team``, ``players`` and ``lineups`` keys

        Raises:
            RosterDataError: If the document is missing data or malformed
        """
        try:
            team = Team.from_dict(data["team"])
            players = [Player.from_dict(p) for p in data.get("players", [])]
            lineups = [SavedLineup.from_dict(l) for l in data.get("lineups", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise RosterDataError(f"Invalid roster data: {e}") from e
        return cls(team, players, lineups)

    @classmethod
    def load_roster_file(cls, file_path: str) -> 'RosterService':
        """
        Load the roster from a JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file contains invalid JSON
            RosterDataError: If the roster is malformed
        """
        data = PersistenceService.load_json(file_path)
        service = cls.from_dict(data)
        logger.info(
            "Loaded roster for %s: %d players, %d lineups",
            service.team.name, len(service._players), len(service._lineups),
        )
        return service

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def players(self) -> List[Player]:
        return list(self._players.values())

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def lineup_options(self) -> List[Dict[str, str]]:
        """Return ``[{id, name}]`` for every saved lineup."""
        return [{"id": l.id, "name": l.name} for l in self._lineups.values()]

    def default_lineup_id(self) -> Optional[str]:
        return next(iter(self._lineups), None)

    def get_lineup(self, lineup_id: str) -> SavedLineup:
        try:
            return self._lineups[lineup_id]
        except KeyError:
            raise LineupNotFoundError(lineup_id) from None

    def build_lineup_data(self, lineup_id: str) -> LineupData:
        """
        Resolve a saved lineup into session seed data.

        Unknown player ids are skipped.

        Raises:
            LineupNotFoundError: If the lineup id is unknown
        """
        lineup = self.get_lineup(lineup_id)
        starters = self._resolve(lineup.starter_ids)
        bench = self._resolve(lineup.bench_ids)

        for warning in self.lineup_warnings(lineup_id):
            logger.warning("Lineup %s: %s", lineup_id, warning)

        return LineupData(
            formation=lineup.formation,
            team_name=self.team.name,
            team_color=self.team.color,
            sponsor_logo=self.team.sponsor_logo,
            players=distribute_by_formation(starters),
            bench=tuple(bench),
        )

    def lineup_warnings(self, lineup_id: str) -> List[str]:
        """
        Report shape problems of a saved lineup without blocking it.

        Returns:
            Human-readable warnings (empty when the lineup is sound)
        """
        lineup = self.get_lineup(lineup_id)
        warnings = []

        if len(lineup.starter_ids) != PLAYERS_ON_FIELD:
            warnings.append(
                f"Expected {PLAYERS_ON_FIELD} starters, found {len(lineup.starter_ids)}"
            )

        overlap = set(lineup.starter_ids) & set(lineup.bench_ids)
        if overlap:
            warnings.append(f"Players both starting and on the bench: {', '.join(sorted(overlap))}")

        unknown = [i for i in lineup.starter_ids + lineup.bench_ids if i not in self._players]
        if unknown:
            warnings.append(f"Unknown player ids: {', '.join(unknown)}")

        starters = self._resolve(lineup.starter_ids)
        if starters and not any(p.position is Position.GK for p in starters):
            warnings.append("No registered goalkeeper among the starters")

        return warnings

    def _resolve(self, player_ids: Iterable[str]) -> List[Player]:
        return [self._players[i] for i in player_ids if i in self._players]
