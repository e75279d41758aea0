from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import chain
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from google.protobuf.message import DecodeError
from mapbox_vector_tile.Mapbox import vector_tile_pb2
from shapely.geometry.base import BaseGeometry

from .commands import decode_commands
from .errors import MalformedMessage
from .geometry import GeometryCategory, GeometryResult, Multi, Single, assemble
from .lazy import LazySequence
from .tags import resolve_tags
from .values import Value, parse_value

logger = logging.getLogger(__name__)

DEFAULT_EXTENT = 4096
DEFAULT_VERSION = 1

Buffer = Union[bytes, bytearray, memoryview]


class GeomType(IntEnum):
    UNKNOWN = vector_tile_pb2.tile.Unknown
    POINT = vector_tile_pb2.tile.Point
    LINESTRING = vector_tile_pb2.tile.LineString
    POLYGON = vector_tile_pb2.tile.Polygon


@dataclass(frozen=True)
class RawFeature:
    """
    A feature exactly as it sits in the layer, before any geometry or tag work.

    `id` is carried along but nothing relies on it; writers are free to
    renumber features.
    """

    geom_type: Union[GeomType, int]
    geometry: Tuple[int, ...] = ()
    tags: Tuple[int, ...] = ()
    id: Optional[int] = None

    @classmethod
    def from_message(cls, msg: vector_tile_pb2.tile.feature) -> "RawFeature":
        # the schema's GeomType is a closed enum: numbers it does not know
        # are parked in unknown fields and `type` reads as UNKNOWN
        return cls(
            geom_type=GeomType(msg.type),
            geometry=tuple(msg.geometry),
            tags=tuple(msg.tags),
            id=msg.id if msg.HasField("id") else None,
        )


@dataclass(frozen=True)
class Feature:
    geometry: BaseGeometry
    properties: Dict[str, Value] = field(default_factory=dict)

    def attributes(self) -> Dict[str, object]:
        return {k: v.to_python() for k, v in self.properties.items()}


# -------------------------------------------------------------------
# Per-feature decode
# -------------------------------------------------------------------

def decode_feature_geometry(category: GeometryCategory, raw: RawFeature) -> GeometryResult:
    return assemble(category, decode_commands(raw.geometry))


def segregate(
    features: Sequence[RawFeature],
) -> Tuple[List[RawFeature], List[RawFeature], List[RawFeature]]:
    """
    Split raw features into point, line and polygon buckets, keeping their
    order. UNKNOWN and unrecognized geometry types go into no bucket.
    """
    points: List[RawFeature] = []
    lines: List[RawFeature] = []
    polys: List[RawFeature] = []

    for f in features:
        if f.geom_type == GeomType.POINT:
            points.append(f)
        elif f.geom_type == GeomType.LINESTRING:
            lines.append(f)
        elif f.geom_type == GeomType.POLYGON:
            polys.append(f)
        else:
            logger.debug(f"Skipping feature id={f.id} with geometry type {f.geom_type!r}")

    return points, lines, polys


class ProtobufLayer:
    """
    One decoded layer of a vector tile.

    The header (name, extent, dictionaries, raw features) is read up front.
    Geometries and attributes are decoded feature by feature, the first time
    one of the six typed sequences reaches that feature, and cached for the
    life of the layer.
    """

    def __init__(
        self,
        name: str,
        extent: int = DEFAULT_EXTENT,
        keys: Sequence[str] = (),
        values: Sequence[Value] = (),
        raw_features: Sequence[RawFeature] = (),
        version: int = DEFAULT_VERSION,
    ):
        if extent <= 0:
            raise MalformedMessage(f"Layer {name!r} has non-positive extent {extent}")
        self.name = name
        self.extent = extent
        self.version = version
        self.keys: Tuple[str, ...] = tuple(keys)
        self.values: Tuple[Value, ...] = tuple(values)
        self.raw_features: Tuple[RawFeature, ...] = tuple(raw_features)

        point_fs, line_fs, poly_fs = segregate(self.raw_features)

        self._point_stream = self._geom_stream(GeometryCategory.POINT, point_fs)
        self._line_stream = self._geom_stream(GeometryCategory.LINE, line_fs)
        self._poly_stream = self._geom_stream(GeometryCategory.POLYGON, poly_fs)

        self.points = self._project(self._point_stream, Single)
        self.multi_points = self._project(self._point_stream, Multi)
        self.lines = self._project(self._line_stream, Single)
        self.multi_lines = self._project(self._line_stream, Multi)
        self.polygons = self._project(self._poly_stream, Single)
        self.multi_polygons = self._project(self._poly_stream, Multi)

    # ---------------- construction from protobuf ---------------- #
    @classmethod
    def from_message(cls, msg: vector_tile_pb2.tile.layer) -> "ProtobufLayer":
        if not msg.HasField("name"):
            raise MalformedMessage("Layer missing name, but name is required")

        keys = list(msg.keys)
        values = [parse_value(v) for v in msg.values]
        raw_features = [RawFeature.from_message(f) for f in msg.features]

        logger.debug(
            f"Parsed layer {msg.name!r}: extent={msg.extent}, version={msg.version}, "
            f"{len(raw_features)} features, {len(keys)} keys, {len(values)} values"
        )
        return cls(msg.name, msg.extent, keys, values, raw_features, msg.version)

    @classmethod
    def from_bytes(cls, buf: Buffer) -> "ProtobufLayer":
        msg = vector_tile_pb2.tile.layer()
        try:
            msg.ParseFromString(bytes(buf))
        except DecodeError as e:
            raise MalformedMessage(f"Cannot parse layer message: {e}") from e
        return cls.from_message(msg)

    # ---------------- lazy decode ---------------- #
    def _geom_stream(
        self, category: GeometryCategory, feats: List[RawFeature]
    ) -> LazySequence[Tuple[GeometryResult, Dict[str, Value]]]:
        def loop():
            for raw in feats:
                logger.debug(f"Decoding {category.value} feature id={raw.id} in layer {self.name!r}")
                geom = decode_feature_geometry(category, raw)
                yield geom, resolve_tags(raw.tags, self.keys, self.values)

        return LazySequence(loop())

    @staticmethod
    def _project(stream: LazySequence, kind: type) -> LazySequence[Feature]:
        return LazySequence(
            Feature(geom.geometry, meta) for geom, meta in stream if isinstance(geom, kind)
        )

    # ---------------- accessors ---------------- #
    @property
    def feature_count(self) -> int:
        return len(self.raw_features)

    def sequences(self) -> Dict[str, LazySequence[Feature]]:
        return {
            "points": self.points,
            "multi_points": self.multi_points,
            "lines": self.lines,
            "multi_lines": self.multi_lines,
            "polygons": self.polygons,
            "multi_polygons": self.multi_polygons,
        }

    @property
    def features(self) -> Iterator[Feature]:
        """Every decoded feature, sequence by sequence in the order of `sequences()`."""
        return chain.from_iterable(self.sequences().values())

    def decoded_counts(self) -> Dict[str, int]:
        return {name: len(seq) for name, seq in self.sequences().items()}

    def force(self) -> "ProtobufLayer":
        """
        Decode every feature now. The first decode error, in sequence order,
        is raised. Call this before letting go of the tile bytes.
        """
        for seq in self.sequences().values():
            seq.force()
        return self

    def __repr__(self) -> str:
        return f"ProtobufLayer(name={self.name!r}, extent={self.extent}, features={self.feature_count})"
