"""Dataclasses representing the result of a finished match."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .lineup_state import YellowCard
from .player import Player


@dataclass(frozen=True)
class ExpelledPlayer:
    """A player sent off during the match."""

    player_id: str
    player_number: int
    player_name: str

    @classmethod
    def for_player(cls, player: Player) -> 'ExpelledPlayer':
        return cls(player_id=player.id, player_number=player.number, player_name=player.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "playerNumber": self.player_number,
            "playerName": self.player_name,
        }


@dataclass
class GameResult:
    """Result payload handed to the match-recording sink on finish."""

    opponent_name: str
    game_date: str
    score_home: int
    score_away: int
    yellow_cards: List[YellowCard] = field(default_factory=list)
    expelled_players: List[ExpelledPlayer] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "opponentName": self.opponent_name,
            "gameDate": self.game_date,
            "scoreHome": self.score_home,
            "scoreAway": self.score_away,
            "yellowCards": [c.to_dict() for c in self.yellow_cards],
            "expelledPlayers": [p.to_dict() for p in self.expelled_players],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameResult':
        return cls(
            opponent_name=data["opponentName"],
            game_date=data["gameDate"],
            score_home=int(data.get("scoreHome", 0)),
            score_away=int(data.get("scoreAway", 0)),
            yellow_cards=[
                YellowCard(c["playerId"], int(c["playerNumber"]), c["playerName"])
                for c in data.get("yellowCards", [])
            ],
            expelled_players=[
                ExpelledPlayer(p["playerId"], int(p["playerNumber"]), p["playerName"])
                for p in data.get("expelledPlayers", [])
            ],
        )

    def to_match_create(self) -> Dict[str, Any]:
        """Build the backend's match-create body, with cards flattened."""
        cards = [{"playerId": c.player_id, "type": "YELLOW"} for c in self.yellow_cards]
        cards += [{"playerId": p.player_id, "type": "RED"} for p in self.expelled_players]
        return {
            "opponentName": self.opponent_name,
            "teamScore": self.score_home,
            "opponentScore": self.score_away,
            "date": self.game_date,
            "cards": cards,
        }

    def summary_line(self, team_name: str) -> str:
        """Return ``Team 2 × 1 Opponent``."""
        return f"{team_name} {self.score_home} × {self.score_away} {self.opponent_name}"
