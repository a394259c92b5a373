"""
Page document codec.

Reads and writes page objects in the editor's JSON document format: one
mapping per object with a ``type`` discriminator and camelCase keys, e.g.

    {"id": "l1", "type": "line", "points": [{"x": 0, "y": 0}, ...], "style": "single"}

Derived objects can be written out or dropped; either way they are rebuilt by
``recompute_topology`` after loading.
"""

import json
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .objects import (
    Binding,
    Box,
    Endpoint,
    Junction,
    Line,
    LineStyle,
    NoConnect,
    PageObject,
    Pin,
    Point,
    Symbol,
    Wire,
    WireJunction,
    is_derived,
)


class DocumentError(ValueError):
    """Raised for page documents that cannot be read."""


def _int(data: Mapping[str, Any], key: str, default: Optional[int] = None) -> int:
    value = data.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DocumentError(f"Invalid value for '{key}': {value!r}")


def _points(data: Mapping[str, Any]) -> Tuple[Point, ...]:
    raw = data.get("points") or []
    if not isinstance(raw, list):
        raise DocumentError(f"Invalid points: {raw!r}")
    points = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise DocumentError(f"Invalid point: {entry!r}")
        points.append(Point(_int(entry, "x"), _int(entry, "y")))
    return tuple(points)


def _binding(data: Optional[Mapping[str, Any]]) -> Optional[Binding]:
    if not data:
        return None
    if not isinstance(data, Mapping):
        raise DocumentError(f"Invalid binding: {data!r}")
    return Binding(symbol_id=str(data.get("symbolId", "")), pin_id=str(data.get("pinId", "")))


def _binding_dict(binding: Optional[Binding]) -> Optional[Dict[str, str]]:
    if binding is None:
        return None
    return {"symbolId": binding.symbol_id, "pinId": binding.pin_id}


def _point_dicts(points: Iterable[Point]) -> List[Dict[str, int]]:
    return [{"x": p.x, "y": p.y} for p in points]


# ---------------------------------------------------------------
# Readers
# ---------------------------------------------------------------

def _read_line(data: Mapping[str, Any]) -> Line:
    return Line(
        id=str(data["id"]),
        points=_points(data),
        style=LineStyle.parse(data.get("style")),
        start_cap=data.get("startCap", "none"),
        end_cap=data.get("endCap", "none"),
    )


def _read_wire(data: Mapping[str, Any]) -> Wire:
    return Wire(
        id=str(data["id"]),
        points=_points(data),
        style=LineStyle.parse(data.get("style")),
        net=data.get("net") or "",
        start_binding=_binding(data.get("startBinding")),
        end_binding=_binding(data.get("endBinding")),
    )


def _read_box(data: Mapping[str, Any]) -> Box:
    return Box(
        id=str(data["id"]),
        x=_int(data, "x", 0),
        y=_int(data, "y", 0),
        width=_int(data, "width", 0),
        height=_int(data, "height", 0),
        style=LineStyle.parse(data.get("style")),
        text=data.get("text", ""),
    )


def _pin(data: Any) -> Pin:
    if not isinstance(data, Mapping):
        raise DocumentError(f"Invalid pin: {data!r}")
    offset = data.get("offset", 0.5)
    try:
        offset = float(offset)
    except (TypeError, ValueError):
        raise DocumentError(f"Invalid value for 'offset': {offset!r}")
    return Pin(id=str(data.get("id", "")), edge=data.get("edge", "left"), offset=offset, name=data.get("name", ""))


def _read_symbol(data: Mapping[str, Any]) -> Symbol:
    raw = data.get("pins") or []
    if not isinstance(raw, list):
        raise DocumentError(f"Invalid pins: {raw!r}")
    pins = tuple(_pin(p) for p in raw)
    return Symbol(
        id=str(data["id"]),
        x=_int(data, "x", 0),
        y=_int(data, "y", 0),
        width=_int(data, "width", 0),
        height=_int(data, "height", 0),
        designator=data.get("designator", ""),
        pins=pins,
    )


def _read_junction(data: Mapping[str, Any]) -> Junction:
    return Junction(
        id=str(data["id"]),
        x=_int(data, "x"),
        y=_int(data, "y"),
        connected_lines=tuple(data.get("connectedLines") or ()),
        style=LineStyle.parse(data.get("style")),
    )


def _read_wire_junction(data: Mapping[str, Any]) -> WireJunction:
    return WireJunction(
        id=str(data["id"]),
        x=_int(data, "x"),
        y=_int(data, "y"),
        connected_wires=tuple(data.get("connectedWires") or ()),
        net=data.get("net") or "",
        style=LineStyle.parse(data.get("style")),
    )


def _read_noconnect(data: Mapping[str, Any]) -> NoConnect:
    try:
        endpoint = Endpoint(data.get("endpoint"))
    except ValueError:
        raise DocumentError(f"Invalid no-connect endpoint: {data.get('endpoint')!r}")
    return NoConnect(
        id=str(data["id"]),
        x=_int(data, "x"),
        y=_int(data, "y"),
        wire_id=str(data.get("wireId", "")),
        endpoint=endpoint,
    )


READERS: Dict[str, Callable[[Mapping[str, Any]], PageObject]] = {
    Line.kind: _read_line,
    Wire.kind: _read_wire,
    Box.kind: _read_box,
    Symbol.kind: _read_symbol,
    Junction.kind: _read_junction,
    WireJunction.kind: _read_wire_junction,
    NoConnect.kind: _read_noconnect,
}


def object_from_dict(data: Mapping[str, Any]) -> PageObject:
    """
    Build a page object from its document mapping.

    Raises:
        DocumentError: If the mapping has no id, no known type or bad coordinates
    """
    if not isinstance(data, Mapping):
        raise DocumentError(f"Page object must be a mapping, got {type(data).__name__}")

    kind = data.get("type")
    reader = READERS.get(kind)
    if reader is None:
        raise DocumentError(f"Unknown object type: {kind!r}")
    if "id" not in data:
        raise DocumentError(f"Object of type '{kind}' has no id")
    return reader(data)


# ---------------------------------------------------------------
# Writers
# ---------------------------------------------------------------

def object_to_dict(obj: PageObject) -> Dict[str, Any]:
    """Convert a page object to its document mapping."""
    data: Dict[str, Any] = {"id": obj.id, "type": obj.kind}

    if isinstance(obj, Line):
        data.update(
            points=_point_dicts(obj.points),
            style=obj.style.value,
            startCap=obj.start_cap,
            endCap=obj.end_cap,
        )
    elif isinstance(obj, Wire):
        data.update(
            points=_point_dicts(obj.points),
            style=obj.style.value,
            net=obj.net,
            startBinding=_binding_dict(obj.start_binding),
            endBinding=_binding_dict(obj.end_binding),
        )
    elif isinstance(obj, Box):
        data.update(x=obj.x, y=obj.y, width=obj.width, height=obj.height, style=obj.style.value, text=obj.text)
    elif isinstance(obj, Symbol):
        data.update(
            x=obj.x,
            y=obj.y,
            width=obj.width,
            height=obj.height,
            designator=obj.designator,
            pins=[{"id": p.id, "edge": p.edge, "offset": p.offset, "name": p.name} for p in obj.pins],
        )
    elif isinstance(obj, Junction):
        data.update(x=obj.x, y=obj.y, connectedLines=list(obj.connected_lines), style=obj.style.value)
    elif isinstance(obj, WireJunction):
        data.update(
            x=obj.x, y=obj.y, connectedWires=list(obj.connected_wires), net=obj.net, style=obj.style.value
        )
    elif isinstance(obj, NoConnect):
        data.update(x=obj.x, y=obj.y, wireId=obj.wire_id, endpoint=obj.endpoint.value)
    else:
        raise TypeError(f"Not a page object: {obj!r}")

    if is_derived(obj):
        data.update(derived=True, selectable=False)
    return data


def objects_from_dicts(entries: Iterable[Mapping[str, Any]]) -> List[PageObject]:
    return [object_from_dict(entry) for entry in entries]


def objects_to_dicts(objects: Iterable[PageObject], include_derived: bool = True) -> List[Dict[str, Any]]:
    return [object_to_dict(obj) for obj in objects if include_derived or not is_derived(obj)]


def load_page(text: str) -> List[PageObject]:
    """
    Read page objects from a JSON document.

    Accepts either a bare list of objects or a page mapping with ``objects``.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid page document: {e}")

    if isinstance(document, Mapping):
        document = document.get("objects", [])
    if not isinstance(document, list):
        raise DocumentError("Page document must be a list of objects")
    return objects_from_dicts(document)


def dump_page(objects: Iterable[PageObject], include_derived: bool = True, indent: Optional[int] = 2) -> str:
    """Write page objects as a JSON document."""
    return json.dumps({"objects": objects_to_dicts(objects, include_derived)}, indent=indent)
