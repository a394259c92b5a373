import logging

import pytest

from drawtopology.junctions import (
    build_line_point_map,
    compute_line_junctions,
    compute_wire_junctions,
    compute_wire_noconnects,
    resolve_style,
)
from drawtopology.objects import Binding, Endpoint, LineStyle, Point

from helpers import line, wire


def test_no_junction_for_single_line():
    assert compute_line_junctions([line('A', (0, 0), (10, 0))]) == []


def test_t_junction_records_endpoint_flags():
    a = line('A', (0, 0), (10, 0))
    b = line('B', (5, 0), (5, 5))

    refs = build_line_point_map([a, b])[Point(5, 0)]
    flags = {r.owner_id: r.is_endpoint for r in refs}

    assert flags == {'B': True, 'A': False}

    (junction,) = compute_line_junctions([a, b])
    assert (junction.x, junction.y) == (5, 0)
    assert set(junction.connected_lines) == {'A', 'B'}
    assert junction.derived is True
    assert junction.selectable is False


def test_crossing_lines_create_junction():
    a = line('A', (0, 0), (10, 0))
    b = line('B', (5, -5), (5, 5))

    refs = build_line_point_map([a, b])[Point(5, 0)]
    assert [r.is_endpoint for r in refs] == [False, False]

    junctions = compute_line_junctions([a, b])
    assert len(junctions) == 1
    assert (junctions[0].x, junctions[0].y) == (5, 0)
    assert junctions[0].connected_lines == ('A', 'B')


def test_two_shared_endpoints_are_not_a_junction():
    a = line('A', (0, 0), (5, 0))
    b = line('B', (5, 0), (5, 5))

    assert compute_line_junctions([a, b]) == []


def test_three_line_ends_make_one_junction():
    lines = [
        line('A', (0, 0), (5, 0)),
        line('B', (0, 0), (0, 5)),
        line('C', (0, 0), (-5, 0)),
    ]

    junctions = compute_line_junctions(lines)

    assert len(junctions) == 1
    assert junctions[0].connected_lines == ('A', 'B', 'C')


def test_diagonal_segments_never_connect():
    a = line('A', (0, 0), (10, 10))
    b = line('B', (5, 5), (5, 20))

    assert compute_line_junctions([a, b]) == []


def test_short_lines_are_ignored():
    a = line('A', (0, 0), (10, 0))
    stub = line('S', (5, 0))

    assert compute_line_junctions([a, stub]) == []


@pytest.mark.parametrize(
    'styles, expected',
    [
        ((LineStyle.SINGLE, LineStyle.SINGLE), LineStyle.SINGLE),
        ((LineStyle.SINGLE, LineStyle.THICK), LineStyle.THICK),
        ((LineStyle.SINGLE, LineStyle.DOUBLE), LineStyle.DOUBLE),
        ((LineStyle.DOUBLE, LineStyle.THICK), LineStyle.THICK),
    ],
)
def test_junction_style_dominance(styles, expected):
    a = line('A', (0, 0), (10, 0), style=styles[0])
    b = line('B', (5, 0), (5, 5), style=styles[1])

    (junction,) = compute_line_junctions([a, b])

    assert junction.style is expected


def test_resolve_style_of_nothing_is_single():
    assert resolve_style([]) is LineStyle.SINGLE


def test_three_wire_ends_make_one_wire_junction():
    wires = [
        wire('W1', (0, 0), (5, 0)),
        wire('W2', (0, 0), (0, 5)),
        wire('W3', (0, 0), (-5, 0)),
    ]

    junctions = compute_wire_junctions(wires)

    assert len(junctions) == 1
    assert junctions[0].connected_wires == ('W1', 'W2', 'W3')
    assert junctions[0].id == 'wjunc-0-0'


def test_two_wire_ends_make_a_wire_junction():
    wires = [wire('W1', (0, 0), (5, 0)), wire('W2', (5, 0), (5, 5))]

    (junction,) = compute_wire_junctions(wires)

    assert (junction.x, junction.y) == (5, 0)


def test_first_non_empty_net_wins(caplog):
    wires = [
        wire('W1', (0, 0), (5, 0), net=''),
        wire('W2', (0, 0), (0, 5), net='VCC'),
        wire('W3', (0, 0), (-5, 0), net='GND'),
    ]

    with caplog.at_level(logging.WARNING, logger='drawtopology.junctions'):
        (junction,) = compute_wire_junctions(wires)

    assert junction.net == 'VCC'
    assert 'GND' in caplog.text


def test_net_is_empty_without_named_wires():
    wires = [wire('W1', (0, 0), (10, 0)), wire('W2', (5, 0), (5, 5))]

    (junction,) = compute_wire_junctions(wires)

    assert junction.net == ''


def test_t_wire_junction_propagates_net():
    wires = [wire('W1', (0, 0), (10, 0)), wire('W2', (5, 0), (5, 5), net='SIG')]

    (junction,) = compute_wire_junctions(wires)

    assert junction.net == 'SIG'
    assert set(junction.connected_wires) == {'W1', 'W2'}


def test_crossing_wires_are_not_connected():
    wires = [wire('W1', (0, 0), (10, 0)), wire('W2', (5, -5), (5, 5))]

    assert compute_wire_junctions(wires) == []


def test_wire_junction_style_dominance():
    wires = [
        wire('W1', (0, 0), (10, 0), style=LineStyle.DOUBLE),
        wire('W2', (5, 0), (5, 5)),
    ]

    (junction,) = compute_wire_junctions(wires)

    assert junction.style is LineStyle.DOUBLE


def test_noconnects_for_floating_wire():
    w = wire('W1', (0, 0), (10, 0))

    noconnects = compute_wire_noconnects([w], [])

    assert [(n.id, n.endpoint) for n in noconnects] == [
        ('wnc-W1-start', Endpoint.START),
        ('wnc-W1-end', Endpoint.END),
    ]
    assert all(n.wire_id == 'W1' and not n.selectable for n in noconnects)


def test_bound_endpoint_has_no_noconnect():
    w = wire('W1', (0, 0), (10, 0), start_binding=Binding('U1', 'p1'))

    noconnects = compute_wire_noconnects([w], [])

    assert [n.endpoint for n in noconnects] == [Endpoint.END]
    assert (noconnects[0].x, noconnects[0].y) == (10, 0)


def test_no_noconnect_at_connected_ends():
    wires = [wire('W1', (0, 0), (5, 0)), wire('W2', (5, 0), (5, 5))]
    junctions = compute_wire_junctions(wires)

    noconnects = compute_wire_noconnects(wires, junctions)

    assert {(n.x, n.y) for n in noconnects} == {(0, 0), (5, 5)}


def test_no_noconnect_at_t_junction():
    wires = [wire('W1', (0, 0), (10, 0)), wire('W2', (5, 0), (5, 5))]
    junctions = compute_wire_junctions(wires)

    noconnects = compute_wire_noconnects(wires, junctions)

    assert {n.id for n in noconnects} == {'wnc-W1-start', 'wnc-W1-end', 'wnc-W2-end'}
