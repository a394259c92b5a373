"""
Line merge resolver.

Fuses lines that meet end-to-end into single polylines. Only a coordinate
touched by exactly two line ends, belonging to two different lines, is an
unambiguous merge point; three or more ends meeting are left for the
junction detector.
"""

import hashlib
import logging
from collections import defaultdict
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from .objects import Endpoint, Line, Point

logger = logging.getLogger(__name__)

# Type aliases
EndRef = Tuple[Line, Endpoint]
EndpointMap = Dict[Point, List[EndRef]]


def merged_line_id(first: Line, second: Line) -> str:
    """Derive a fresh, reproducible id for the line replacing ``first`` and ``second``."""
    digest = hashlib.sha1(f"{first.id}\x00{second.id}".encode("utf-8")).hexdigest()
    return f"line-{digest[:12]}"


def build_endpoint_map(lines: Sequence[Line]) -> EndpointMap:
    """
    Map every line end coordinate to the (line, end) pairs touching it.

    Interior vertices are not considered.
    """
    endpoint_map: EndpointMap = defaultdict(list)
    for line in lines:
        endpoint_map[line.start].append((line, Endpoint.START))
        endpoint_map[line.end].append((line, Endpoint.END))
    return endpoint_map


def merge_pair(first: Line, first_end: Endpoint, second: Line, second_end: Endpoint) -> Line:
    """
    Join two lines at the ends that coincide.

    The result keeps every non-geometric field of ``first`` and gets a fresh id.
    """
    a = list(first.points)
    b = list(second.points)

    if first_end is Endpoint.END and second_end is Endpoint.START:
        points = a + b[1:]
    elif first_end is Endpoint.END and second_end is Endpoint.END:
        points = a + b[::-1][1:]
    elif first_end is Endpoint.START and second_end is Endpoint.START:
        points = b[::-1][:-1] + a
    else:
        points = b[:-1] + a

    return replace(first, id=merged_line_id(first, second), points=tuple(points))


def find_merge_candidate(endpoint_map: EndpointMap) -> Optional[Tuple[EndRef, EndRef]]:
    """Return the first pair of distinct line ends meeting alone at a coordinate."""
    for refs in endpoint_map.values():
        if len(refs) != 2:
            continue
        (line1, _), (line2, _) = refs
        # Both ends of one closed line
        if line1.id == line2.id:
            continue
        return refs[0], refs[1]
    return None


def merge_connected_lines(lines: Sequence[Line]) -> List[Line]:
    """
    Merge lines sharing an unambiguous endpoint until nothing more qualifies.

    Every merge removes one line, so the loop runs at most ``len(lines) - 1`` times.

    Args:
        lines: Lines with at least two points each

    Returns:
        New list of lines; the input is left unchanged
    """
    result = list(lines)

    while True:
        candidate = find_merge_candidate(build_endpoint_map(result))
        if candidate is None:
            break

        (line1, end1), (line2, end2) = candidate
        merged = merge_pair(line1, end1, line2, end2)
        logger.debug(
            "Merged %s (%s) with %s (%s) into %s, %d points",
            line1.id, end1.value, line2.id, end2.value, merged.id, len(merged.points),
        )

        result = [line for line in result if line is not line1 and line is not line2]
        result.append(merged)

    return result
