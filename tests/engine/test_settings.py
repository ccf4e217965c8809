import unittest

from ludo_universe.errors import ConfigurationError
from ludo_universe.settings import GameSettings
from ludo_universe.types import PlayerColor


class TestGameSettings(unittest.TestCase):
    def test_defaults_are_valid(self):
        settings = GameSettings().validate()
        self.assertEqual(settings.player_names[0], "Player 1")
        self.assertEqual(
            settings.player_colors,
            [PlayerColor.RED, PlayerColor.BLUE, PlayerColor.GREEN, PlayerColor.YELLOW],
        )
        self.assertEqual(settings.bot_count, 0)

    def test_bots_take_trailing_seats(self):
        settings = GameSettings(bot_count=2)
        self.assertEqual([settings.is_bot(i) for i in range(4)], [False, False, True, True])
        self.assertEqual(settings.human_count, 2)

    def test_all_bots_rejected(self):
        with self.assertRaises(ConfigurationError) as ctx:
            GameSettings(bot_count=4).validate()
        self.assertIn("At least one human player is required", ctx.exception.problems)

    def test_bot_count_out_of_range(self):
        for count in (-1, 5):
            with self.assertRaises(ConfigurationError):
                GameSettings(bot_count=count).validate()

    def test_duplicate_colors(self):
        colors = [PlayerColor.RED, PlayerColor.RED, PlayerColor.GREEN, PlayerColor.YELLOW]
        with self.assertRaises(ConfigurationError) as ctx:
            GameSettings(player_colors=colors).validate()
        self.assertIn("Each player must have a unique color", ctx.exception.problems)

    def test_colors_outside_palette(self):
        with self.assertRaises(ConfigurationError) as ctx:
            colors = [PlayerColor.RED, PlayerColor.BLUE, PlayerColor.GREEN, "purple"]
            GameSettings(player_colors=colors).validate()
        self.assertEqual(len(ctx.exception.problems), 1)
        self.assertIn("Unknown color 'purple' for Player 4", ctx.exception.problems[0])

    def test_blank_human_name(self):
        with self.assertRaises(ConfigurationError) as ctx:
            GameSettings(player_names=["Ana", "  ", "C", "D"]).validate()
        self.assertEqual(ctx.exception.problems, ["Please enter a name for Player 2"])

    def test_collects_every_problem(self):
        colors = [PlayerColor.BLUE] * 4
        with self.assertRaises(ConfigurationError) as ctx:
            GameSettings(player_names=[""] * 4, player_colors=colors, bot_count=0).validate()
        self.assertEqual(len(ctx.exception.problems), 5)


class TestSettingsBlob(unittest.TestCase):
    def test_empty_blob_uses_defaults(self):
        settings = GameSettings.from_mapping({})
        self.assertEqual(settings, GameSettings())

    def test_bot_names_are_filled_in(self):
        blob = {
            "playerNames": ["Ana", "Bo"],
            "playerColors": ["green", "yellow", "red", "blue"],
            "botCount": 2,
        }
        settings = GameSettings.from_mapping(blob).validate()
        self.assertEqual(settings.player_names, ["Ana", "Bo", "Player 3", "Player 4"])
        self.assertEqual(settings.player_colors[0], PlayerColor.GREEN)
        self.assertEqual(settings.to_mapping()["playerNames"], ["Ana", "Bo"])

    def test_string_bot_count(self):
        self.assertEqual(GameSettings.from_mapping({"botCount": "3"}).bot_count, 3)

    def test_unknown_color(self):
        with self.assertRaises(ConfigurationError):
            GameSettings.from_mapping({"playerColors": ["red", "blue", "green", "purple"]})

    def test_non_numeric_bot_count(self):
        settings = GameSettings.from_mapping({"botCount": "many"})
        with self.assertRaises(ConfigurationError):
            settings.validate()


if __name__ == "__main__":
    unittest.main()
