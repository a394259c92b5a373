"""
Orthogonal grid geometry.

Coordinates are integer grid cells, so every comparison here is exact.
Segments that are neither horizontal nor vertical never match anything.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from .objects import Point

Segment = Tuple[Point, Point]


def point_on_segment(point: Point, p1: Point, p2: Point) -> bool:
    """
    Check whether a point lies on an orthogonal segment (ends included).

    Returns False for diagonal segments.
    """
    # Horizontal segment
    if p1.y == p2.y and point.y == p1.y:
        return min(p1.x, p2.x) <= point.x <= max(p1.x, p2.x)
    # Vertical segment
    if p1.x == p2.x and point.x == p1.x:
        return min(p1.y, p2.y) <= point.y <= max(p1.y, p2.y)
    return False


def point_inside_segment(point: Point, p1: Point, p2: Point) -> bool:
    """Check whether a point lies on a segment without being one of its ends."""
    if point == p1 or point == p2:
        return False
    return point_on_segment(point, p1, p2)


def segment_orientation(p1: Point, p2: Point) -> str:
    if p1.y == p2.y:
        return "horizontal"
    if p1.x == p2.x:
        return "vertical"
    return "diagonal"


def segments(points: Sequence[Point]) -> Iterator[Segment]:
    """Yield consecutive point pairs of a polyline."""
    for i in range(len(points) - 1):
        yield points[i], points[i + 1]


def segment_crossing(a1: Point, a2: Point, b1: Point, b2: Point) -> Optional[Point]:
    """
    Find where a horizontal and a vertical segment cross.

    Parallel, degenerate and diagonal pairs have no crossing and return None.
    """
    a_orient = segment_orientation(a1, a2)
    b_orient = segment_orientation(b1, b2)
    if a1 == a2 or b1 == b2 or "diagonal" in (a_orient, b_orient) or a_orient == b_orient:
        return None

    if a_orient == "horizontal":
        (h1, h2), (v1, v2) = (a1, a2), (b1, b2)
    else:
        (h1, h2), (v1, v2) = (b1, b2), (a1, a2)

    candidate = Point(v1.x, h1.y)
    if point_on_segment(candidate, h1, h2) and point_on_segment(candidate, v1, v2):
        return candidate
    return None


def simplify_points(points: Sequence[Point]) -> List[Point]:
    """
    Remove interior vertices lying between their neighbours, keeping corners
    and reversals.

    Consecutive duplicates are dropped as well.
    """
    deduped: List[Point] = []
    for point in points:
        if not deduped or deduped[-1] != point:
            deduped.append(point)
    if len(deduped) < 3:
        return deduped

    result = [deduped[0]]
    for i in range(1, len(deduped) - 1):
        prev = result[-1]
        curr = deduped[i]
        nxt = deduped[i + 1]
        # A vertex where the path doubles back is a real turn
        if not point_inside_segment(curr, prev, nxt):
            result.append(curr)
    result.append(deduped[-1])
    return result
