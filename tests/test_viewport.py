from __future__ import annotations

import itertools

import pytest

from hexnav.core.viewport import Viewport

# A 12 column pane holds 4 bytes per line
WIDTH_4 = 12

MOVE_KEYS = ["up", "down", "left", "right", "k", "j", "h", "l", "ctrl+d", "ctrl+u", "G"]


def state(vp: Viewport) -> tuple[int, int, int]:
    return vp.row, vp.col, vp.scroll


def test_jump_to_ragged_last_row() -> None:
    vp = Viewport(10, WIDTH_4, 3)
    vp.move_cursor_offset(9)
    assert state(vp) == (2, 3, 2)
    assert vp.get_byte_idx() == 9


def test_move_cursor_offset_clamps() -> None:
    vp = Viewport(10, WIDTH_4, 3)
    vp.move_cursor_offset(1000)
    assert vp.get_byte_idx() == 9
    vp.move_cursor_offset(-5)
    assert vp.get_byte_idx() == 0


def test_empty_buffer_is_inert() -> None:
    vp = Viewport(0, WIDTH_4, 5)
    for key in MOVE_KEYS:
        assert vp.move_by_key(key) is True
        assert state(vp) == (0, 0, 0)
    vp.move_cursor_offset(100)
    assert state(vp) == (0, 0, 0)
    assert vp.get_byte_idx() == 0


def test_unknown_key_not_consumed() -> None:
    vp = Viewport(100, WIDTH_4, 5)
    assert vp.move_by_key("x") is False
    assert state(vp) == (0, 0, 0)


def test_right_skips_gaps() -> None:
    vp = Viewport(16, WIDTH_4, 10)
    cols = []
    for _ in range(10):
        vp.move_by_key("l")
        cols.append(vp.col)
    # Stops on the second digit of the last byte
    assert cols == [1, 3, 4, 6, 7, 9, 10, 10, 10, 10]
    assert vp.get_byte_idx() == 3


def test_left_skips_gaps() -> None:
    vp = Viewport(16, WIDTH_4, 10)
    vp.move_cursor_offset(3)
    assert vp.col == 9
    cols = []
    for _ in range(7):
        vp.move_by_key("h")
        cols.append(vp.col)
    assert cols == [7, 6, 4, 3, 1, 0, 0]


def test_right_stops_on_ragged_last_row() -> None:
    vp = Viewport(10, WIDTH_4, 10)
    vp.move_cursor_offset(9)
    vp.move_by_key("right")
    assert vp.col == 4
    vp.move_by_key("right")
    assert vp.col == 4
    assert vp.get_byte_idx() == 9


def test_right_on_full_last_row() -> None:
    vp = Viewport(8, WIDTH_4, 10)
    vp.move_cursor_offset(6)
    vp.move_by_key("right")
    vp.move_by_key("right")
    assert vp.col == 9
    vp.move_by_key("right")
    assert vp.col == 10
    assert vp.get_byte_idx() == 7


def test_down_clamps_column_on_ragged_row() -> None:
    vp = Viewport(10, WIDTH_4, 10)
    vp.move_cursor_offset(7)
    assert state(vp) == (1, 9, 0)
    vp.move_by_key("down")
    assert vp.row == 2
    assert vp.col == 4
    assert vp.get_byte_idx() == 9


def test_down_keeps_margin_and_stops_at_end() -> None:
    # 20 rows, 5 visible
    vp = Viewport(80, WIDTH_4, 5)
    for _ in range(3):
        vp.move_by_key("j")
    assert state(vp) == (3, 0, 1)
    for _ in range(30):
        vp.move_by_key("j")
    assert state(vp) == (19, 0, 15)


def test_up_keeps_margin() -> None:
    vp = Viewport(80, WIDTH_4, 5)
    for _ in range(30):
        vp.move_by_key("down")
    for _ in range(3):
        vp.move_by_key("up")
    assert state(vp) == (16, 0, 14)
    for _ in range(30):
        vp.move_by_key("k")
    assert state(vp) == (0, 0, 0)


def test_page_down_and_up() -> None:
    vp = Viewport(400, WIDTH_4, 20)
    vp.move_by_key("ctrl+d")
    assert vp.get_byte_idx() == 40
    assert state(vp) == (10, 0, 0)
    vp.move_by_key("ctrl+u")
    assert vp.get_byte_idx() == 0
    vp.move_by_key("ctrl+u")
    assert vp.get_byte_idx() == 0


def test_page_down_clamps_to_last_byte() -> None:
    vp = Viewport(400, WIDTH_4, 20)
    vp.move_cursor_offset(398)
    vp.move_by_key("pagedown")
    assert vp.get_byte_idx() == 399
    assert state(vp)[:2] == (99, 9)


def test_page_lines_setting() -> None:
    vp = Viewport(400, WIDTH_4, 20, page_lines=3)
    vp.move_by_key("ctrl+d")
    assert vp.get_byte_idx() == 12


def test_end_key() -> None:
    vp = Viewport(10, WIDTH_4, 3)
    vp.move_by_key("G")
    assert vp.get_byte_idx() == 9


def test_jump_scrolls_as_little_as_possible() -> None:
    vp = Viewport(400, WIDTH_4, 20)
    vp.move_cursor_offset(200)
    assert state(vp) == (50, 0, 33)
    # Already visible with margins: keep the scroll
    vp.move_cursor_offset(180)
    assert state(vp) == (45, 0, 33)
    vp.move_cursor_offset(0)
    assert state(vp) == (0, 0, 0)


def test_center_scroll() -> None:
    vp = Viewport(400, WIDTH_4, 20)
    vp.move_cursor_offset(200)
    vp.try_center_scroll()
    assert vp.scroll == 40
    vp.move_cursor_offset(20)
    scroll = vp.scroll
    vp.try_center_scroll()
    # Row 5 can't be centred in a 20 line pane
    assert vp.scroll == scroll


def test_on_change_reports_offset_and_scroll() -> None:
    seen: list[tuple[int, int]] = []
    vp = Viewport(400, WIDTH_4, 20, on_change=lambda off, scroll: seen.append((off, scroll)))
    vp.move_cursor_offset(200)
    vp.move_by_key("l")
    vp.move_by_key("l")
    assert seen == [(200, 33), (200, 33), (201, 33)]


def test_resize_keeps_byte() -> None:
    vp = Viewport(100, WIDTH_4, 10)
    vp.move_cursor_offset(50)
    vp.resize(24, 10)
    assert vp.bytes_per_line == 8
    assert vp.get_byte_idx() == 50
    assert (vp.row, vp.col) == (6, 6)


@pytest.mark.parametrize(("size", "width", "height"), [(1, 12, 3), (10, 12, 3), (37, 11, 4), (300, 48, 7), (64, 2, 1)])
def test_cursor_always_visible_and_in_range(size: int, width: int, height: int) -> None:
    vp = Viewport(size, width, height)
    for offset in range(size):
        vp.move_cursor_offset(offset)
        assert vp.get_byte_idx() == offset
        assert vp.scroll <= vp.row <= vp.scroll + height - 1


@pytest.mark.parametrize(("size", "height"), [(10, 3), (37, 4), (101, 8)])
def test_key_sequences_keep_invariants(size: int, height: int) -> None:
    vp = Viewport(size, 11, height, page_lines=2)
    layout = vp.layout
    for key in itertools.islice(itertools.cycle(["j", "l", "l", "G", "h", "k", "ctrl+u", "l", "j", "ctrl+d"]), 200):
        vp.move_by_key(key)
        offset = vp.get_byte_idx()
        assert 0 <= offset < size
        assert 0 <= vp.row <= layout.last_row
        assert vp.col % 3 != 2
        assert vp.col <= layout.last_col(vp.row)
        assert vp.scroll <= vp.row <= vp.scroll + height - 1

        row, col = vp.row, vp.col
        vp.move_cursor_offset(offset)
        assert vp.get_byte_idx() == offset
        assert (vp.row, vp.col // 3) == (row, col // 3)
