"""
Unit tests for the Player model and the league age helpers.

Tests year-only age calculation and serialization in both the backend's
camelCase shape and snake_case.
"""
import unittest
from datetime import date

from champions315.models import Player, Position
from champions315.utils import calc_age


class AgeTests(unittest.TestCase):
    def test_only_the_birth_year_counts(self) -> None:
        self.assertEqual(calc_age("1984-12-31", 2026), 42)
        self.assertEqual(calc_age("1984-01-01", 2026), 42)
        self.assertEqual(calc_age(date(1984, 6, 15), 2026), 42)

    def test_invalid_date_raises(self) -> None:
        with self.assertRaises(ValueError):
            calc_age("not-a-date", 2026)


class PlayerModelTests(unittest.TestCase):
    def setUp(self) -> None:
        self.player = Player(
            id="p-13",
            number=9,
            name="Ronaldo",
            birth_date=date(1985, 2, 1),
            position=Position.FWD,
            field_role="ST",
        )

    def test_age_and_label(self) -> None:
        self.assertEqual(self.player.age(2026), 41)
        self.assertEqual(self.player.label(), "Ronaldo (#9)")
        self.assertFalse(self.player.is_goalkeeper)

    def test_to_dict_uses_camel_case(self) -> None:
        data = self.player.to_dict()
        self.assertEqual(data["birthDate"], "1985-02-01")
        self.assertEqual(data["position"], "FWD")
        self.assertEqual(data["fieldRole"], "ST")
        self.assertIsNone(data["avatar"])

    def test_from_dict_round_trip(self) -> None:
        self.assertEqual(Player.from_dict(self.player.to_dict()), self.player)

    def test_from_dict_accepts_snake_case_and_defaults(self) -> None:
        player = Player.from_dict({
            "id": 7, "number": "13", "name": " Belletti ", "birth_date": "1989-01-20",
        })
        self.assertEqual(player.id, "7")
        self.assertEqual(player.number, 13)
        self.assertEqual(player.name, "Belletti")
        self.assertEqual(player.position, Position.MID)
        self.assertIsNone(player.field_role)

    def test_from_dict_rejects_bad_data(self) -> None:
        with self.assertRaises(KeyError):
            Player.from_dict({"id": "x", "number": 1, "name": "No Birth"})
        with self.assertRaises(ValueError):
            Player.from_dict({
                "id": "x", "number": 1, "name": "Bad", "birthDate": "1990-01-01",
                "position": "LIBERO",
            })


if __name__ == "__main__":
    unittest.main()
