import unittest

from ludo_universe.piece import Piece
from ludo_universe.player import Player
from ludo_universe.types import Location, PieceState, PlayerColor


class TestPiece(unittest.TestCase):
    def test_starts_at_home(self):
        pc = Piece(player_index=2, piece_id=1)
        self.assertTrue(pc.is_home())
        self.assertEqual(pc.state, PieceState.AT_HOME)
        self.assertEqual(pc.location, Location.home())

    def test_move_to_puts_piece_on_path(self):
        pc = Piece(player_index=0, piece_id=0)
        pc.move_to(14)
        self.assertEqual(pc.state, PieceState.ON_PATH)
        self.assertEqual(pc.location, Location.on_path(14))
        self.assertEqual(
            pc.to_dict(), {"piece_id": 0, "state": "on_path", "position": 14}
        )

    def test_location_str(self):
        self.assertEqual(str(Location.home()), "home")
        self.assertEqual(str(Location.on_path(5)), "cell 5")


class TestPlayer(unittest.TestCase):
    def test_has_four_pieces_in_order(self):
        pl = Player(index=1, name="Ana", color=PlayerColor.BLUE)
        self.assertEqual([p.piece_id for p in pl.pieces], [0, 1, 2, 3])
        self.assertTrue(all(p.player_index == 1 for p in pl.pieces))
        self.assertEqual(pl.pieces_at_home(), 4)
        self.assertEqual(pl.pieces_on_path(), 0)

    def test_display_name_marks_bots(self):
        human = Player(index=0, name="Ana", color=PlayerColor.RED)
        bot = Player(index=3, name="Player 4", color=PlayerColor.YELLOW, is_bot=True)
        self.assertEqual(human.display_name, "Ana")
        self.assertEqual(bot.display_name, "Player 4 (Bot)")

    def test_to_dict(self):
        pl = Player(index=0, name="Ana", color=PlayerColor.GREEN)
        pl.pieces[3].move_to(7)
        data = pl.to_dict()
        self.assertEqual(data["color"], "green")
        self.assertFalse(data["is_bot"])
        self.assertEqual(data["pieces"][3]["position"], 7)


if __name__ == "__main__":
    unittest.main()
