from __future__ import annotations

import pytest

from gridsketch.render.canvas import TextCanvas


def test_new_canvas_is_blank() -> None:
    c = TextCanvas(8, 3)
    assert c.size() == (8, 3)
    assert c.render() == ("        ",) * 3
    assert c.is_blank()


def test_plot_and_render_rows() -> None:
    c = TextCanvas(4, 2)
    c.plot(0, 0, "*")
    c.plot(3, 1, "R")
    assert c.render() == ("*   ", "   R")
    assert c.to_text() == "*   \n   R"
    assert c.cell(3, 1) == "R"


def test_plot_outside_is_dropped() -> None:
    c = TextCanvas(4, 2)
    for x, y in [(-1, 0), (4, 0), (0, -1), (0, 2), (100, 100)]:
        c.plot(x, y, "*")
    assert c.is_blank()


def test_cell_outside_raises() -> None:
    c = TextCanvas(4, 2)
    with pytest.raises(IndexError):
        c.cell(4, 0)


def test_clear_resets_cells() -> None:
    c = TextCanvas(3, 3, blank=".")
    c.plot(1, 1, "*")
    c.clear()
    assert c.render() == ("...",) * 3


def test_render_is_pure() -> None:
    c = TextCanvas(5, 2)
    c.plot(2, 1, "B")
    assert c.render() == c.render()


@pytest.mark.parametrize("w,h,blank", [(0, 5, " "), (5, -1, " "), (5, 5, "ab")])
def test_invalid_construction(w: int, h: int, blank: str) -> None:
    with pytest.raises(ValueError):
        TextCanvas(w, h, blank)
