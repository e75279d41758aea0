class VectorTileError(ValueError):
    """Base class for everything that can go wrong while decoding a tile."""


class MalformedMessage(VectorTileError):
    """The protobuf payload itself is broken (truncated, bad wire type, missing fields)."""


class MalformedCommand(VectorTileError):
    """A geometry command integer has a bad id or count, or a parameter pair is cut short."""


class MalformedGeometryPart(VectorTileError):
    """A geometry part does not have the shape its geometry type requires."""


class OutOfRangeTagIndex(VectorTileError):
    """A feature tag points past the end of the layer's key or value dictionary."""
