"""
Page object model.

Every object that can live on a page is one of the frozen dataclasses below.
``PageObject`` is the tagged union of them; the ``kind`` class attribute is the
discriminator used by the document codec.

Lines and wires are authored by the user. Junctions, wire junctions and
no-connects are derived: they are recomputed from line/wire geometry on every
recompute and are never selectable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union


@dataclass(frozen=True)
class Point:
    """A grid cell coordinate."""

    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


class LineStyle(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    THICK = "thick"

    @classmethod
    def parse(cls, value: Optional[str]) -> "LineStyle":
        """Resolve a style name, falling back to single for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.SINGLE


class Endpoint(str, Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Binding:
    """Attachment of a wire endpoint to a symbol pin."""

    symbol_id: str
    pin_id: str


@dataclass(frozen=True)
class Line:
    id: str
    points: Tuple[Point, ...]
    style: LineStyle = LineStyle.SINGLE
    start_cap: str = "none"
    end_cap: str = "none"

    kind: ClassVar[str] = "line"

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]


@dataclass(frozen=True)
class Wire:
    id: str
    points: Tuple[Point, ...]
    style: LineStyle = LineStyle.SINGLE
    net: str = ""
    start_binding: Optional[Binding] = None
    end_binding: Optional[Binding] = None

    kind: ClassVar[str] = "wire"

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    def binding(self, endpoint: Endpoint) -> Optional[Binding]:
        if endpoint is Endpoint.START:
            return self.start_binding
        return self.end_binding


@dataclass(frozen=True)
class Box:
    id: str
    x: int
    y: int
    width: int
    height: int
    style: LineStyle = LineStyle.SINGLE
    text: str = ""

    kind: ClassVar[str] = "box"


@dataclass(frozen=True)
class Pin:
    id: str
    edge: str
    offset: float
    name: str = ""


@dataclass(frozen=True)
class Symbol:
    id: str
    x: int
    y: int
    width: int
    height: int
    designator: str = ""
    pins: Tuple[Pin, ...] = ()

    kind: ClassVar[str] = "symbol"


@dataclass(frozen=True)
class Junction:
    id: str
    x: int
    y: int
    connected_lines: Tuple[str, ...]
    style: LineStyle = LineStyle.SINGLE
    derived: bool = field(default=True, init=False)
    selectable: bool = field(default=False, init=False)

    kind: ClassVar[str] = "junction"


@dataclass(frozen=True)
class WireJunction:
    id: str
    x: int
    y: int
    connected_wires: Tuple[str, ...]
    net: str = ""
    style: LineStyle = LineStyle.SINGLE
    derived: bool = field(default=True, init=False)
    selectable: bool = field(default=False, init=False)

    kind: ClassVar[str] = "wire-junction"


@dataclass(frozen=True)
class NoConnect:
    id: str
    x: int
    y: int
    wire_id: str
    endpoint: Endpoint
    derived: bool = field(default=True, init=False)
    selectable: bool = field(default=False, init=False)

    kind: ClassVar[str] = "wire-noconnect"


PageObject = Union[Line, Wire, Box, Symbol, Junction, WireJunction, NoConnect]

DERIVED_KINDS = (Junction, WireJunction, NoConnect)


def is_derived(obj: PageObject) -> bool:
    return isinstance(obj, DERIVED_KINDS)


def has_geometry(obj: Union[Line, Wire]) -> bool:
    """True when a line or wire has enough points to take part in connectivity."""
    return len(obj.points) >= 2


def make_points(*coords: Tuple[int, int]) -> Tuple[Point, ...]:
    """Build a point tuple from ``(x, y)`` pairs."""
    return tuple(Point(x, y) for x, y in coords)
