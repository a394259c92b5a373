"""
DXF interchange for page objects.

Lines and wires are written as LWPOLYLINE entities (lines on one layer per
style, wires on the wire layer with their net in XDATA); junctions become small
circles on their own layers. Reading accepts any DXF with LINE or LWPOLYLINE
entities and rebuilds the page topology from them.

Grid rows grow downwards while DXF Y grows upwards, so Y is negated both ways.
"""

from io import StringIO
from typing import List, Optional, Sequence, Tuple

import ezdxf

from . import config
from .geometry import simplify_points
from .objects import Junction, Line, LineStyle, PageObject, Point, Wire, WireJunction
from .topology import recompute_topology

# Type aliases
DxfPoint = Tuple[float, float]


def _to_dxf(point: Point) -> DxfPoint:
    return (float(point.x), float(-point.y))


def _from_dxf(x: float, y: float) -> Point:
    return Point(int(round(x)), int(round(-y)))


def line_layer(style: LineStyle) -> str:
    return f"{config.LINE_LAYER_PREFIX}{style.value.upper()}"


def style_from_layer(layer: str) -> LineStyle:
    """Recover a line style from its layer name; foreign layers read as single."""
    if layer.upper().startswith(config.LINE_LAYER_PREFIX):
        return LineStyle.parse(layer[len(config.LINE_LAYER_PREFIX):].lower())
    return LineStyle.SINGLE


def page_to_dxf(objects: Sequence[PageObject]) -> bytes:
    """
    Convert page objects to DXF.

    Args:
        objects: Page objects; boxes and symbols are not exported

    Returns:
        DXF file content as bytes
    """
    doc = ezdxf.new(dxfversion=config.DXF_VERSION)
    doc.appids.new(config.XDATA_APPID)
    for style in LineStyle:
        doc.layers.new(line_layer(style))
    for name in (config.WIRE_LAYER, config.JUNCTION_LAYER, config.WIRE_JUNCTION_LAYER):
        doc.layers.new(name)

    msp = doc.modelspace()

    for obj in objects:
        if isinstance(obj, Line) and len(obj.points) >= 2:
            msp.add_lwpolyline([_to_dxf(p) for p in obj.points], dxfattribs={"layer": line_layer(obj.style)})
        elif isinstance(obj, Wire) and len(obj.points) >= 2:
            polyline = msp.add_lwpolyline([_to_dxf(p) for p in obj.points], dxfattribs={"layer": config.WIRE_LAYER})
            if obj.net:
                polyline.set_xdata(config.XDATA_APPID, [(1000, obj.net)])
        elif isinstance(obj, (Junction, WireJunction)):
            layer = config.JUNCTION_LAYER if isinstance(obj, Junction) else config.WIRE_JUNCTION_LAYER
            msp.add_circle(
                _to_dxf(Point(obj.x, obj.y)),
                config.JUNCTION_RADIUS,
                dxfattribs={"layer": layer},
            )

    # ezdxf writes strings, so we use StringIO and encode
    output_stream = StringIO()
    doc.write(output_stream)
    return output_stream.getvalue().encode("utf-8")


def _wire_net(entity) -> str:
    if not entity.has_xdata(config.XDATA_APPID):
        return ""
    for code, value in entity.get_xdata(config.XDATA_APPID):
        if code == 1000:
            return str(value)
    return ""


def _polyline_points(raw: Sequence[DxfPoint], closed: bool = False) -> Optional[Tuple[Point, ...]]:
    points = [_from_dxf(x, y) for x, y in raw]
    if closed and points:
        points.append(points[0])
    points = simplify_points(points)
    # Zero-length after snapping to the grid
    if len(points) < 2:
        return None
    return tuple(points)


def extract_objects_from_dxf(dxf_bytes: bytes) -> List[PageObject]:
    """
    Read lines and wires from a DXF file without touching their topology.

    Ids are derived from the entity handles. Junction circles are ignored.

    Raises:
        ValueError: If the content is not a readable DXF file
    """
    # ezdxf expects text stream, so decode bytes first
    input_stream = StringIO(dxf_bytes.decode("utf-8", errors="ignore"))
    try:
        doc = ezdxf.read(input_stream)
    except ezdxf.DXFError as e:
        raise ValueError(f"Invalid DXF structure: {e}")

    msp = doc.modelspace()
    objects: List[PageObject] = []

    for entity in msp.query("LWPOLYLINE"):
        points = _polyline_points(entity.get_points(format="xy"), closed=entity.closed)
        if points is None:
            continue
        layer = entity.dxf.layer
        if layer.upper() == config.WIRE_LAYER:
            objects.append(Wire(id=f"wire-{entity.dxf.handle}", points=points, net=_wire_net(entity)))
        else:
            objects.append(Line(id=f"line-{entity.dxf.handle}", points=points, style=style_from_layer(layer)))

    for entity in msp.query("LINE"):
        start = (entity.dxf.start.x, entity.dxf.start.y)
        end = (entity.dxf.end.x, entity.dxf.end.y)
        points = _polyline_points([start, end])
        if points is None:
            continue
        layer = entity.dxf.layer
        if layer.upper() == config.WIRE_LAYER:
            objects.append(Wire(id=f"wire-{entity.dxf.handle}", points=points, net=_wire_net(entity)))
        else:
            objects.append(Line(id=f"line-{entity.dxf.handle}", points=points, style=style_from_layer(layer)))

    return objects


def import_objects_from_dxf(dxf_bytes: bytes) -> List[PageObject]:
    """
    Read lines and wires from a DXF file that is about to become a page.

    Raises:
        ValueError: If the file is unreadable or holds no line geometry
    """
    objects = extract_objects_from_dxf(dxf_bytes)
    if not objects:
        raise ValueError("No LINE or LWPOLYLINE entities found. Nothing to import.")
    return objects


def page_from_dxf(dxf_bytes: bytes) -> List[PageObject]:
    """
    Load a page from DXF and recompute its topology.

    Consecutive LINE segments come back merged into polylines.

    Raises:
        ValueError: If the file is unreadable or holds no line geometry
    """
    return recompute_topology(import_objects_from_dxf(dxf_bytes))
