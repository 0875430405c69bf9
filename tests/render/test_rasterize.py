from __future__ import annotations

import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from gridsketch.core.shapes import Circle, Geometry, Line, Square, Triangle
from gridsketch.render.rasterize import (
    circle_distance,
    interior_cells,
    outline_cells,
)

BOUNDS = (80, 80)


def test_circle_outline_ring() -> None:
    cells = outline_cells(Circle(3), (10, 10), BOUNDS)
    assert cells == {(7, 10), (13, 10), (8, 9), (12, 9), (8, 11), (12, 11)}
    for x, y in cells:
        assert abs(circle_distance(x - 10, y - 10, 2.0) - 3) <= 0.5


def test_circle_interior_strictly_inside() -> None:
    inner = interior_cells(Circle(3), (10, 10), BOUNDS)
    assert (10, 10) in inner
    assert len(inner) == 11
    for x, y in inner:
        assert circle_distance(x - 10, y - 10, 2.0) < 3


def test_circle_scale_one_is_round() -> None:
    cells = outline_cells(Circle(2), (5, 5), BOUNDS, scale=1.0)
    assert {(3, 5), (7, 5), (5, 3), (5, 7)} <= cells


def test_square_rows_compressed() -> None:
    out = outline_cells(Square(6), (10, 10), BOUNDS)
    inner = interior_cells(Square(6), (10, 10), BOUNDS)
    # six block rows collapse onto three canvas rows
    assert {y for _x, y in out} == {10, 11, 12}
    assert {(x, 10) for x in range(10, 16)} <= out
    assert {(x, 12) for x in range(10, 16)} <= out
    assert (10, 11) in out and (15, 11) in out
    assert inner == {(x, 11) for x in range(11, 15)}


def test_square_scale_one_keeps_rows() -> None:
    out = outline_cells(Square(3), (0, 0), BOUNDS, scale=1.0)
    inner = interior_cells(Square(3), (0, 0), BOUNDS, scale=1.0)
    assert len(out) == 8
    assert inner == {(1, 1)}


def test_single_cell_square() -> None:
    assert outline_cells(Square(1), (4, 4), BOUNDS) == {(4, 4)}
    assert interior_cells(Square(1), (4, 4), BOUNDS) == set()


def test_triangle_outline() -> None:
    out = outline_cells(Triangle(4), (5, 5), BOUNDS)
    expected = {(5, 5), (4, 6), (6, 6), (3, 7), (7, 7)}
    expected |= {(x, 8) for x in range(2, 9)}
    assert out == expected


def test_triangle_fill_rows() -> None:
    inner = interior_cells(Triangle(4), (5, 5), BOUNDS)
    assert inner == {(5, 6), (4, 7), (5, 7), (6, 7)}


def test_triangle_height_one_is_single_cell() -> None:
    assert outline_cells(Triangle(1), (3, 3), BOUNDS) == {(3, 3)}


def test_line_cells() -> None:
    assert outline_cells(Line(5), (2, 7), BOUNDS) == {(x, 7) for x in range(2, 7)}
    assert interior_cells(Line(5), (2, 7), BOUNDS) == set()


def test_cells_are_clipped() -> None:
    out = outline_cells(Line(10), (75, 3), BOUNDS)
    assert out == {(x, 3) for x in range(75, 80)}
    out = outline_cells(Circle(4), (0, 0), BOUNDS)
    assert out and all(x >= 0 and y >= 0 for x, y in out)


@pytest.mark.parametrize(
    "geom", [Circle(0), Square(0), Triangle(-1), Line(0), Circle(-3)]
)
def test_degenerate_sizes_are_empty(geom: Geometry) -> None:
    assert outline_cells(geom, (10, 10), BOUNDS) == set()
    assert interior_cells(geom, (10, 10), BOUNDS) == set()


def test_unknown_geometry_rejected() -> None:
    with pytest.raises(TypeError):
        outline_cells(object(), (0, 0), BOUNDS)  # type: ignore[arg-type]


geom_strat = st.one_of(
    st.builds(Circle, st.integers(min_value=-2, max_value=12)),
    st.builds(Square, st.integers(min_value=-2, max_value=12)),
    st.builds(Triangle, st.integers(min_value=-2, max_value=12)),
    st.builds(Line, st.integers(min_value=-2, max_value=30)),
)
coord_strat = st.integers(min_value=-20, max_value=40)


@settings(deadline=None, max_examples=150)
@given(
    geom=geom_strat,
    x=coord_strat,
    y=coord_strat,
    scale=st.sampled_from([1.0, 2.0, 2.5]),
)
def test_outline_and_interior_disjoint_and_clipped(
    geom: Geometry, x: int, y: int, scale: float
) -> None:
    bounds = (30, 20)
    out = outline_cells(geom, (x, y), bounds, scale)
    inner = interior_cells(geom, (x, y), bounds, scale)
    assert not (out & inner)
    for cx, cy in out | inner:
        assert 0 <= cx < 30 and 0 <= cy < 20
