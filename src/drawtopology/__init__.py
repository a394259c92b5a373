"""
Draw Topology - connectivity for grid line and wire drawings.

This package merges lines that meet end-to-end into single polylines, finds
junctions where lines or wires meet, and carries net names across wire
junctions. The web service lives in ``drawtopology.app``.
"""

from .objects import (
    Binding,
    Box,
    Endpoint,
    Junction,
    Line,
    LineStyle,
    NoConnect,
    PageObject,
    Point,
    Symbol,
    Wire,
    WireJunction,
)
from .geometry import point_on_segment
from .merge import merge_connected_lines
from .junctions import compute_line_junctions, compute_wire_junctions, compute_wire_noconnects
from .topology import derive_objects, recompute_topology
from .serialize import DocumentError, dump_page, load_page
from .converter import page_from_dxf, page_to_dxf

__version__ = "0.1.0"
__all__ = [
    "Binding",
    "Box",
    "Endpoint",
    "Junction",
    "Line",
    "LineStyle",
    "NoConnect",
    "PageObject",
    "Point",
    "Symbol",
    "Wire",
    "WireJunction",
    "point_on_segment",
    "merge_connected_lines",
    "compute_line_junctions",
    "compute_wire_junctions",
    "compute_wire_noconnects",
    "derive_objects",
    "recompute_topology",
    "DocumentError",
    "dump_page",
    "load_page",
    "page_from_dxf",
    "page_to_dxf",
]
