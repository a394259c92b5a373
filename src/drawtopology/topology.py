"""
Topology recompute for one page.

``recompute_topology`` is the single entry point the editing layer calls after
any change to line or wire geometry. It throws away stale derived objects,
merges lines, and rebuilds junctions, wire junctions and no-connects from
scratch. The input collection is never modified.
"""

import logging
from typing import Dict, Iterable, List, Sequence

from .junctions import compute_line_junctions, compute_wire_junctions, compute_wire_noconnects
from .merge import merge_connected_lines
from .objects import (
    Junction,
    Line,
    NoConnect,
    PageObject,
    Wire,
    WireJunction,
    has_geometry,
    is_derived,
)

logger = logging.getLogger(__name__)


def derive_objects(objects: Iterable[PageObject]) -> List[PageObject]:
    """
    Compute the derived objects for a collection as it stands, without merging.

    Useful when primary state is kept apart from what gets displayed.
    """
    primary = [obj for obj in objects if not is_derived(obj)]
    lines = [obj for obj in primary if isinstance(obj, Line)]
    wires = [obj for obj in primary if isinstance(obj, Wire)]

    wire_junctions = compute_wire_junctions(wires)
    return [
        *compute_line_junctions(lines),
        *wire_junctions,
        *compute_wire_noconnects(wires, wire_junctions),
    ]


def recompute_topology(objects: Iterable[PageObject]) -> List[PageObject]:
    """
    Merge connected lines and rebuild every derived object of a page.

    Args:
        objects: All objects on the page, derived ones included

    Returns:
        New list: lines first, then the other primary objects in their
        original order, then junctions, wire junctions and no-connects
    """
    objects = list(objects)
    primary = [obj for obj in objects if not is_derived(obj)]

    lines = [obj for obj in primary if isinstance(obj, Line)]
    mergeable = [line for line in lines if has_geometry(line)]
    # Too short to connect to anything; kept as they are
    degenerate = [line for line in lines if not has_geometry(line)]
    others = [obj for obj in primary if not isinstance(obj, Line)]
    wires = [obj for obj in others if isinstance(obj, Wire)]

    merged_lines = merge_connected_lines(mergeable)
    junctions = compute_line_junctions(merged_lines)
    wire_junctions = compute_wire_junctions(wires)
    noconnects = compute_wire_noconnects(wires, wire_junctions)

    result: List[PageObject] = [
        *merged_lines,
        *degenerate,
        *others,
        *junctions,
        *wire_junctions,
        *noconnects,
    ]
    logger.debug("Recomputed topology: %s", topology_stats(objects, result))
    return result


def topology_stats(before: Sequence[PageObject], after: Sequence[PageObject]) -> Dict[str, int]:
    """Summarise what a recompute changed."""
    def count(objs: Sequence[PageObject], kind: type) -> int:
        return sum(1 for obj in objs if isinstance(obj, kind))

    return {
        "original_object_count": len(before),
        "original_line_count": count(before, Line),
        "line_count": count(after, Line),
        "merged_away": count(before, Line) - count(after, Line),
        "wire_count": count(after, Wire),
        "junctions": count(after, Junction),
        "wire_junctions": count(after, WireJunction),
        "noconnects": count(after, NoConnect),
        "object_count": len(after),
    }
