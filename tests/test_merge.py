import pytest

from drawtopology.merge import build_endpoint_map, merge_connected_lines, merge_pair
from drawtopology.objects import Endpoint, LineStyle, Point, make_points

from helpers import line


@pytest.mark.parametrize(
    'a_coords, b_coords, expected',
    [
        # end <-> start
        (((0, 0), (5, 0)), ((5, 0), (5, 5)), ((0, 0), (5, 0), (5, 5))),
        # end <-> end
        (((0, 0), (5, 0)), ((5, 5), (5, 0)), ((0, 0), (5, 0), (5, 5))),
        # start <-> start
        (((5, 0), (10, 0)), ((5, 0), (5, 5)), ((5, 5), (5, 0), (10, 0))),
        # start <-> end
        (((5, 0), (10, 0)), ((5, 5), (5, 0)), ((5, 5), (5, 0), (10, 0))),
    ],
)
def test_two_lines_sharing_an_endpoint_merge(a_coords, b_coords, expected):
    a = line('A', *a_coords)
    b = line('B', *b_coords)

    merged = merge_connected_lines([a, b])

    assert len(merged) == 1
    assert merged[0].points == make_points(*expected)
    assert merged[0].id not in ('A', 'B')


def test_merged_line_keeps_first_operand_fields():
    a = line('A', (0, 0), (5, 0), style=LineStyle.DOUBLE)
    b = line('B', (5, 0), (5, 5), style=LineStyle.THICK)

    (merged,) = merge_connected_lines([a, b])

    assert merged.style is LineStyle.DOUBLE
    assert merged.start_cap == a.start_cap


def test_merge_id_is_reproducible():
    a = line('A', (0, 0), (5, 0))
    b = line('B', (5, 0), (5, 5))

    assert merge_connected_lines([a, b]) == merge_connected_lines([a, b])


def test_three_lines_at_one_point_do_not_merge():
    lines = [
        line('A', (0, 0), (5, 0)),
        line('B', (0, 0), (0, 5)),
        line('C', (0, 0), (-5, 0)),
    ]

    assert merge_connected_lines(lines) == lines


def test_closed_line_is_not_merged_with_itself():
    loop = line('L', (0, 0), (5, 0), (5, 5), (0, 5), (0, 0))

    assert merge_connected_lines([loop]) == [loop]


def test_chain_merges_to_fixpoint():
    lines = [
        line('A', (0, 0), (5, 0)),
        line('B', (5, 0), (10, 0)),
        line('C', (10, 0), (10, 5)),
    ]

    merged = merge_connected_lines(lines)

    assert len(merged) == 1
    assert merged[0].points == make_points((0, 0), (5, 0), (10, 0), (10, 5))


def test_interior_vertex_is_not_a_merge_point():
    lines = [
        line('A', (0, 0), (5, 0), (5, 5)),
        line('B', (5, 0), (10, 0)),
    ]

    assert merge_connected_lines(lines) == lines


def test_input_is_not_modified():
    lines = [line('A', (0, 0), (5, 0)), line('B', (5, 0), (5, 5))]
    snapshot = list(lines)

    merge_connected_lines(lines)

    assert lines == snapshot


def test_endpoint_map_only_holds_line_ends():
    a = line('A', (0, 0), (5, 0), (5, 5))

    endpoint_map = build_endpoint_map([a])

    assert set(endpoint_map) == {Point(0, 0), Point(5, 5)}
    assert endpoint_map[Point(0, 0)] == [(a, Endpoint.START)]


def test_merge_pair_end_to_end():
    a = line('A', (0, 0), (5, 0))
    b = line('B', (5, 5), (5, 0))

    merged = merge_pair(a, Endpoint.END, b, Endpoint.END)

    assert merged.points == make_points((0, 0), (5, 0), (5, 5))


def test_diagonal_segment_ends_still_merge():
    a = line('A', (0, 0), (5, 5))
    b = line('B', (5, 5), (10, 5))

    (merged,) = merge_connected_lines([a, b])

    assert merged.points == make_points((0, 0), (5, 5), (10, 5))
