"""Build vector tile fixtures through the generated protobuf classes."""
from mapbox_vector_tile.Mapbox import vector_tile_pb2

from vectortile.commands import (
    CMD_CLOSE_PATH,
    CMD_LINE_TO,
    CMD_MOVE_TO,
    command_integer,
    zigzag_encode,
)

UNKNOWN = vector_tile_pb2.tile.Unknown
POINT = vector_tile_pb2.tile.Point
LINESTRING = vector_tile_pb2.tile.LineString
POLYGON = vector_tile_pb2.tile.Polygon


def value_msg(v):
    val = vector_tile_pb2.tile.value()
    if isinstance(v, bool):
        val.bool_value = v
    elif isinstance(v, str):
        val.string_value = v
    elif isinstance(v, float):
        val.double_value = v
    elif v < 0:
        val.sint_value = v
    else:
        val.uint_value = v
    return val


def geometry(*ops):
    """
    Encode draw ops given in absolute coordinates:
    ("M", [(x, y), ...]), ("L", [(x, y), ...]) or ("Z",).
    """
    out = []
    cx = cy = 0
    for op in ops:
        if op[0] == "Z":
            out.append(command_integer(CMD_CLOSE_PATH, 1))
            continue
        cmd = CMD_MOVE_TO if op[0] == "M" else CMD_LINE_TO
        pts = op[1]
        out.append(command_integer(cmd, len(pts)))
        for x, y in pts:
            out.append(zigzag_encode(x - cx))
            out.append(zigzag_encode(y - cy))
            cx, cy = x, y
    return out


def ring(*pts):
    """MoveTo the first point, LineTo the rest, then ClosePath."""
    return [("M", [pts[0]]), ("L", list(pts[1:])), ("Z",)]


def feature_msg(geom_type, geom, tags=(), fid=None):
    f = vector_tile_pb2.tile.feature()
    if fid is not None:
        f.id = fid
    f.tags.extend(tags)
    f.type = geom_type
    f.geometry.extend(geom)
    return f


def layer_msg(name, features=(), keys=(), values=(), extent=4096, version=2):
    """A serialized Layer message."""
    layer = vector_tile_pb2.tile.layer()
    layer.version = version
    layer.name = name
    for f in features:
        layer.features.add().CopyFrom(f)
    layer.keys.extend(keys)
    for v in values:
        layer.values.add().CopyFrom(value_msg(v))
    layer.extent = extent
    return layer.SerializeToString()


def tile_msg(*layers):
    """A serialized Tile message from serialized layers."""
    tile = vector_tile_pb2.tile()
    for data in layers:
        tile.layers.add().MergeFromString(data)
    return tile.SerializeToString()
