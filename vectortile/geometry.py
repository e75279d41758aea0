from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple, Union

import numpy as np
from shapely.geometry import (
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from .commands import ClosePath, DrawOp, LineTo, MoveTo
from .errors import MalformedGeometryPart


Vertex = Tuple[int, int]


class GeometryCategory(Enum):
    POINT = "point"
    LINE = "line"
    POLYGON = "polygon"


@dataclass(frozen=True)
class Single:
    geometry: BaseGeometry


@dataclass(frozen=True)
class Multi:
    geometry: BaseGeometry


GeometryResult = Union[Single, Multi]


# -------------------------------------------------------------------
# Parts and rings
# -------------------------------------------------------------------

def split_parts(ops: Sequence[DrawOp]) -> List[List[DrawOp]]:
    """Group draw ops into parts; every MoveTo starts a new part."""
    parts: List[List[DrawOp]] = []
    for op in ops:
        if isinstance(op, MoveTo):
            parts.append([op])
        elif not parts:
            raise MalformedGeometryPart(f"Geometry starts with {type(op).__name__} instead of MoveTo")
        else:
            parts[-1].append(op)
    return parts


def signed_area(vertices: Sequence[Vertex]) -> float:
    """
    Shoelace area of a ring in tile coordinates.

    Tile coordinates have y pointing down, so the sum is taken with y flipped:
    a ring that runs clockwise on screen comes out negative.
    """
    pts = np.asarray(vertices, dtype=np.float64)
    xs, ys = pts[:, 0], pts[:, 1]
    xn, yn = np.roll(xs, -1), np.roll(ys, -1)
    return 0.5 * float(np.sum(xn * ys - xs * yn))


def _ring_vertices(part: List[DrawOp], index: int) -> List[Vertex]:
    if not isinstance(part[-1], ClosePath):
        raise MalformedGeometryPart(f"Polygon ring {index} is not terminated by ClosePath")
    body = part[:-1]
    if any(not isinstance(op, (MoveTo, LineTo)) for op in body):
        raise MalformedGeometryPart(f"Polygon ring {index} has ClosePath before its last command")

    vertices = [(op.x, op.y) for op in body]
    if len(set(vertices)) < 3:
        raise MalformedGeometryPart(
            f"Polygon ring {index} has {len(set(vertices))} distinct vertices, need at least 3"
        )
    return vertices


# -------------------------------------------------------------------
# One assembler per category
# -------------------------------------------------------------------

def assemble_points(ops: Sequence[DrawOp]) -> GeometryResult:
    parts = split_parts(ops)
    if not parts:
        raise MalformedGeometryPart("Point geometry has no MoveTo")

    points = []
    for i, part in enumerate(parts):
        if len(part) != 1:
            raise MalformedGeometryPart(
                f"Point part {i} is followed by {type(part[1]).__name__}"
            )
        points.append((part[0].x, part[0].y))

    if len(points) == 1:
        return Single(Point(points[0]))
    return Multi(MultiPoint(points))


def assemble_lines(ops: Sequence[DrawOp]) -> GeometryResult:
    parts = split_parts(ops)
    if not parts:
        raise MalformedGeometryPart("Line geometry has no MoveTo")

    lines = []
    for i, part in enumerate(parts):
        if len(part) < 2:
            raise MalformedGeometryPart(f"Line part {i} has a MoveTo but no LineTo")
        if any(isinstance(op, ClosePath) for op in part):
            raise MalformedGeometryPart(f"Line part {i} contains ClosePath")
        lines.append([(op.x, op.y) for op in part])

    if len(lines) == 1:
        return Single(LineString(lines[0]))
    return Multi(MultiLineString(lines))


def assemble_polygons(ops: Sequence[DrawOp]) -> GeometryResult:
    parts = split_parts(ops)
    if not parts:
        raise MalformedGeometryPart("Polygon geometry has no MoveTo")

    # (exterior, holes) in ring order
    polygons: List[Tuple[List[Vertex], List[List[Vertex]]]] = []
    for i, part in enumerate(parts):
        ring = _ring_vertices(part, i)
        area = signed_area(ring)
        if area < 0:
            polygons.append((ring, []))
        elif area > 0:
            if not polygons:
                raise MalformedGeometryPart(f"Interior ring {i} appears before any exterior ring")
            polygons[-1][1].append(ring)
        else:
            raise MalformedGeometryPart(f"Polygon ring {i} has zero area")

    if len(polygons) == 1:
        exterior, holes = polygons[0]
        return Single(Polygon(exterior, holes))
    return Multi(MultiPolygon([Polygon(exterior, holes) for exterior, holes in polygons]))


_ASSEMBLERS: Dict[GeometryCategory, Callable[[Sequence[DrawOp]], GeometryResult]] = {
    GeometryCategory.POINT: assemble_points,
    GeometryCategory.LINE: assemble_lines,
    GeometryCategory.POLYGON: assemble_polygons,
}


def assemble(category: GeometryCategory, ops: Sequence[DrawOp]) -> GeometryResult:
    return _ASSEMBLERS[category](ops)
