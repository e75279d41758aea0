from .tile import ProtobufTile, decode
from .layer import ProtobufLayer, RawFeature, Feature, GeomType, segregate
from .geometry import GeometryCategory, Single, Multi, assemble, signed_area
from .commands import MoveTo, LineTo, ClosePath, decode_commands, zigzag_decode, zigzag_encode
from .tags import resolve_tags
from .values import Value, ValueKind
from .lazy import LazySequence
from .bounds import TileBounds
from .geojson import tile_to_geojson
from .errors import (
    VectorTileError,
    MalformedMessage,
    MalformedCommand,
    MalformedGeometryPart,
    OutOfRangeTagIndex,
)

__all__ = [
    "ProtobufTile",
    "decode",
    "ProtobufLayer",
    "RawFeature",
    "Feature",
    "GeomType",
    "segregate",
    "GeometryCategory",
    "Single",
    "Multi",
    "assemble",
    "signed_area",
    "MoveTo",
    "LineTo",
    "ClosePath",
    "decode_commands",
    "zigzag_decode",
    "zigzag_encode",
    "resolve_tags",
    "Value",
    "ValueKind",
    "LazySequence",
    "TileBounds",
    "tile_to_geojson",
    "VectorTileError",
    "MalformedMessage",
    "MalformedCommand",
    "MalformedGeometryPart",
    "OutOfRangeTagIndex",
]
