"""Tests for the ray explorer (without the interactive key loop)."""

from rich.panel import Panel

from grid_parser import parse_grid
from grid_types import EAST, NORTH, NORTH_EAST, SOUTH, SOUTH_EAST, Position
from interactive_demo import RayExplorer, main


def explorer() -> RayExplorer:
    return RayExplorer(parse_grid("abc\ndef\nghi\n"))


class TestRayExplorer:
    """Tests for cursor movement and ray direction."""

    def test_initial_state(self) -> None:
        ex = explorer()
        assert ex.cursor == Position(0, 0)
        assert ex.direction == EAST
        assert ex.ray_positions() == [Position(0, 0), Position(1, 0), Position(2, 0)]

    def test_move_cursor(self) -> None:
        ex = explorer()
        ex.move_cursor(SOUTH)
        ex.move_cursor(EAST)
        assert ex.cursor == Position(1, 1)
        assert "Cursor at (1, 1)" in ex.status_message

    def test_move_blocked_at_edge(self) -> None:
        """Moving off the grid leaves the cursor in place."""
        ex = explorer()
        ex.move_cursor(NORTH)
        assert ex.cursor == Position(0, 0)
        assert "Edge reached" in ex.status_message

    def test_move_blocked_at_far_edge(self) -> None:
        ex = explorer()
        ex.move_cursor(EAST)
        ex.move_cursor(EAST)
        ex.move_cursor(EAST)
        assert ex.cursor == Position(2, 0)

    def test_turn(self) -> None:
        ex = explorer()
        ex.turn()
        assert ex.direction == SOUTH_EAST
        assert ex.ray_positions() == [Position(0, 0), Position(1, 1), Position(2, 2)]
        ex.turn(clockwise=False)
        ex.turn(clockwise=False)
        assert ex.direction == NORTH_EAST

    def test_reset(self) -> None:
        ex = explorer()
        ex.move_cursor(SOUTH)
        ex.turn()
        ex.reset()
        assert ex.cursor == Position(0, 0)
        assert ex.direction == EAST

    def test_handle_key(self) -> None:
        ex = explorer()
        assert ex.handle_key("s") is True
        assert ex.handle_key("D") is True
        assert ex.cursor == Position(1, 1)
        assert ex.handle_key("?") is True
        assert "Unknown key" in ex.status_message
        assert ex.handle_key("x") is False

    def test_generate_display(self) -> None:
        panel = explorer().generate_display()
        assert isinstance(panel, Panel)
        assert "'abc'" in panel.renderable.plain


class TestMain:
    """Tests for the command-line entry point."""

    def test_plain_output(self, tmp_path, capsys) -> None:
        path = tmp_path / "grid.txt"
        path.write_text("ab\ncd\n")
        assert main([str(path), "--plain"]) == 0
        out = capsys.readouterr().out
        assert "│ab│" in out
        assert "│cd│" in out

    def test_malformed_input(self, tmp_path, capsys) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("ab\ncde\n")
        assert main([str(path), "--plain"]) == 1
        assert "Row 1: 3 columns" in capsys.readouterr().err
