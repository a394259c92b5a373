"""
Junction detection for lines and wires.

Both detectors share the same two passes over a coordinate map:

1. every vertex of every polyline is recorded, flagged when it is one of the
   polyline's two ends;
2. every vertex that lands on another polyline's segment (away from that
   segment's own ends) records the other polyline at that coordinate as a
   mid-segment hit.

Lines additionally treat a plain crossing of two segments as a connection.
Wires do not: crossing wires without a shared vertex are not connected.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Sequence, Tuple, Union

from .geometry import point_inside_segment, segment_crossing, segments
from .objects import (
    Endpoint,
    Junction,
    Line,
    LineStyle,
    NoConnect,
    Point,
    Wire,
    WireJunction,
    has_geometry,
)

logger = logging.getLogger(__name__)

Polyline = Union[Line, Wire]


@dataclass(frozen=True)
class PointRef:
    """One polyline's presence at a coordinate."""

    owner_id: str
    style: LineStyle
    is_endpoint: bool
    net: str = ""


PointMap = Dict[Point, List[PointRef]]


def _ref(owner: Polyline, is_endpoint: bool) -> PointRef:
    net = owner.net if isinstance(owner, Wire) else ""
    return PointRef(owner.id, owner.style, is_endpoint, net or "")


def _add_once(refs: List[PointRef], owner: Polyline) -> bool:
    if any(r.owner_id == owner.id for r in refs):
        return False
    refs.append(_ref(owner, is_endpoint=False))
    return True


def collect_vertices(polylines: Sequence[Polyline]) -> PointMap:
    """First pass: record every vertex of every polyline."""
    point_map: PointMap = defaultdict(list)
    for owner in polylines:
        last = len(owner.points) - 1
        for i, point in enumerate(owner.points):
            point_map[point].append(_ref(owner, is_endpoint=i in (0, last)))
    return point_map


def add_segment_hits(polylines: Sequence[Polyline], point_map: PointMap) -> None:
    """Second pass: record polylines whose segment interior holds another polyline's vertex."""
    for owner in polylines:
        for p1, p2 in segments(owner.points):
            for other in polylines:
                if other.id == owner.id:
                    continue
                for point in other.points:
                    if not point_inside_segment(point, p1, p2):
                        continue
                    if _add_once(point_map[point], owner):
                        logger.debug(
                            "%s vertex %s lands on a segment of %s",
                            other.id, point.as_tuple(), owner.id,
                        )


def add_segment_crossings(polylines: Sequence[Polyline], point_map: PointMap) -> None:
    """Record both polylines where two of their segments cross mid-span."""
    for first, second in combinations(polylines, 2):
        if first.id == second.id:
            continue
        for a1, a2 in segments(first.points):
            for b1, b2 in segments(second.points):
                crossing = segment_crossing(a1, a2, b1, b2)
                if crossing is None:
                    continue
                if not (point_inside_segment(crossing, a1, a2) and point_inside_segment(crossing, b1, b2)):
                    continue
                refs = point_map[crossing]
                _add_once(refs, first)
                _add_once(refs, second)


def resolve_style(refs: Sequence[PointRef]) -> LineStyle:
    """Thick beats double, double beats single."""
    styles = {r.style for r in refs}
    style = LineStyle.SINGLE
    if LineStyle.DOUBLE in styles:
        style = LineStyle.DOUBLE
    if LineStyle.THICK in styles:
        style = LineStyle.THICK
    return style


def resolve_net(refs: Sequence[PointRef], point: Point) -> str:
    """
    Pick the first non-empty net in scan order.

    Two different nets touching is left unresolved; it is only reported.
    """
    nets = [r.net for r in refs if r.net]
    if not nets:
        return ""
    conflicting = sorted(set(nets) - {nets[0]})
    if conflicting:
        logger.warning(
            "Wire junction at %s joins nets %r and %s; keeping %r",
            point.as_tuple(), nets[0], conflicting, nets[0],
        )
    return nets[0]


def _owner_ids(refs: Sequence[PointRef]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(r.owner_id for r in refs))


def build_line_point_map(lines: Sequence[Line]) -> PointMap:
    usable = [line for line in lines if has_geometry(line)]
    point_map = collect_vertices(usable)
    add_segment_hits(usable, point_map)
    add_segment_crossings(usable, point_map)
    return point_map


def build_wire_point_map(wires: Sequence[Wire]) -> PointMap:
    usable = [wire for wire in wires if has_geometry(wire)]
    point_map = collect_vertices(usable)
    add_segment_hits(usable, point_map)
    return point_map


def compute_line_junctions(lines: Sequence[Line]) -> List[Junction]:
    """
    Compute junctions where two or more lines meet.

    A point where exactly two line ends meet and nothing else passes is a
    shared endpoint, not a junction: the merge resolver fuses those. Three or
    more ends meeting stay separate lines and get a junction.

    Args:
        lines: Line objects, normally already merged

    Returns:
        List of Junction objects
    """
    junctions: List[Junction] = []
    for point, refs in build_line_point_map(lines).items():
        connected = _owner_ids(refs)
        if len(connected) < 2:
            continue
        if len(refs) == 2 and all(r.is_endpoint for r in refs):
            logger.debug("Skipping shared endpoint at %s", point.as_tuple())
            continue

        junction = Junction(
            id=f"junc-{point.x}-{point.y}",
            x=point.x,
            y=point.y,
            connected_lines=connected,
            style=resolve_style(refs),
        )
        junctions.append(junction)
        logger.debug("Created junction %s for %s", junction.id, connected)
    return junctions


def compute_wire_junctions(wires: Sequence[Wire]) -> List[WireJunction]:
    """
    Compute wire junctions and propagate net names.

    Unlike lines, wires are never merged, so a point where two or more wires
    only share ends is a junction too.
    """
    junctions: List[WireJunction] = []
    for point, refs in build_wire_point_map(wires).items():
        connected = _owner_ids(refs)
        if len(connected) < 2:
            continue

        junction = WireJunction(
            id=f"wjunc-{point.x}-{point.y}",
            x=point.x,
            y=point.y,
            connected_wires=connected,
            net=resolve_net(refs, point),
            style=resolve_style(refs),
        )
        junctions.append(junction)
        logger.debug("Created wire junction %s on net %r", junction.id, junction.net)
    return junctions


def compute_wire_noconnects(wires: Sequence[Wire], wire_junctions: Sequence[WireJunction]) -> List[NoConnect]:
    """
    Mark floating wire ends.

    An end is floating when it is not bound to a pin, is not at a wire
    junction and no other wire end sits on it.
    """
    usable = [wire for wire in wires if has_geometry(wire)]
    junction_points = {Point(j.x, j.y) for j in wire_junctions}

    end_counts: Dict[Point, int] = defaultdict(int)
    for wire in usable:
        end_counts[wire.start] += 1
        end_counts[wire.end] += 1

    noconnects: List[NoConnect] = []
    for wire in usable:
        for endpoint, point in ((Endpoint.START, wire.start), (Endpoint.END, wire.end)):
            if wire.binding(endpoint) is not None:
                continue
            if point in junction_points or end_counts[point] != 1:
                continue
            noconnects.append(NoConnect(
                id=f"wnc-{wire.id}-{endpoint.value}",
                x=point.x,
                y=point.y,
                wire_id=wire.id,
                endpoint=endpoint,
            ))
    return noconnects
