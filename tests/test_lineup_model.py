"""Unit tests for slot addressing and the on-field arrangement."""
import unittest

from champions315.models import LineupPlayers, SavedLineup, SlotGroup, SlotRef

from factories import STARTERS_362, make_lineup, make_player


class SlotRefTests(unittest.TestCase):
    def test_goalkeeper_index_is_always_zero(self) -> None:
        self.assertEqual(SlotRef.of("gk", -1), SlotRef(SlotGroup.GK, 0))
        self.assertEqual(SlotRef.of(SlotGroup.GK, 5).index, 0)

    def test_outfield_index_is_kept(self) -> None:
        ref = SlotRef.of("midfielders", "2")
        self.assertEqual(ref, SlotRef(SlotGroup.MIDFIELDERS, 2))
        self.assertEqual(ref.to_dict(), {"group": "midfielders", "index": 2})

    def test_unknown_group_raises(self) -> None:
        with self.assertRaises(ValueError):
            SlotRef.of("wingers", 0)


class LineupPlayersTests(unittest.TestCase):
    def setUp(self) -> None:
        self.players = make_lineup(STARTERS_362)

    def test_get_and_contains(self) -> None:
        self.assertEqual(self.players.get(SlotRef.of("gk")).id, "p-1")
        self.assertEqual(self.players.get(SlotRef.of("attackers", 0)).id, "p-9")
        self.assertIsNone(self.players.get(SlotRef.of("defenders", 4)))
        self.assertFalse(self.players.contains(SlotRef.of("attackers", 1)))

    def test_replace_returns_new_arrangement(self) -> None:
        sub = make_player("p-20", 30)
        updated = self.players.replace(SlotRef.of("defenders", 1), sub)
        self.assertEqual(updated.defenders[1].id, "p-20")
        self.assertEqual(self.players.defenders[1].id, "p-3")

    def test_vacate_keeps_group_size(self) -> None:
        updated = self.players.vacate(SlotRef.of("midfielders", 0))
        self.assertEqual(len(updated.midfielders), 3)
        self.assertIsNone(updated.midfielders[0])
        self.assertEqual(len(updated.on_field()), 8)

    def test_remove_splices_outfield_and_empties_goal(self) -> None:
        updated = self.players.remove(SlotRef.of("defenders", 0))
        self.assertEqual([p.id for p in updated.defenders], ["p-3", "p-4", "p-5"])
        updated = updated.remove(SlotRef.of("gk"))
        self.assertIsNone(updated.gk)
        self.assertEqual(len(updated.on_field()), 7)

    def test_to_dict_keeps_empty_slots(self) -> None:
        data = self.players.vacate(SlotRef.of("attackers", 0)).to_dict()
        self.assertEqual(data["gk"]["id"], "p-1")
        self.assertEqual(data["attackers"], [None])
        self.assertEqual(len(data["defenders"]), 4)

    def test_empty_lineup(self) -> None:
        self.assertEqual(LineupPlayers().on_field(), [])


class SavedLineupTests(unittest.TestCase):
    def test_from_dict_accepts_camel_case(self) -> None:
        lineup = SavedLineup.from_dict({
            "id": "lineup-1", "teamId": "team-1", "name": "Main",
            "starterIds": ["p-01", "p-02"], "benchIds": ["p-03"],
        })
        self.assertEqual(lineup.formation, "4-3-1")
        self.assertEqual(lineup.starter_ids, ["p-01", "p-02"])
        self.assertEqual(lineup.bench_ids, ["p-03"])
        self.assertEqual(lineup.team_id, "team-1")


if __name__ == "__main__":
    unittest.main()
