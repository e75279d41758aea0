from __future__ import annotations

import gzip
import zlib
import logging
from typing import Dict, Iterator, Mapping

from google.protobuf.message import DecodeError
from mapbox_vector_tile.Mapbox import vector_tile_pb2

from .errors import MalformedMessage
from .layer import Buffer, ProtobufLayer

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class ProtobufTile(Mapping[str, ProtobufLayer]):
    """
    A vector tile: its layers, keyed by name.

    Two layers with the same name cannot both be reached; the later one in the
    message replaces the earlier.
    """

    def __init__(self, layers: Dict[str, ProtobufLayer]):
        self.layers = dict(layers)

    @classmethod
    def from_bytes(cls, data: Buffer) -> "ProtobufTile":
        data = bytes(data)
        if data[:2] == GZIP_MAGIC:
            try:
                data = gzip.decompress(data)
            except (OSError, EOFError, zlib.error) as e:
                raise MalformedMessage(f"Tile looks gzipped but does not decompress: {e}") from e
            logger.debug(f"Decompressed gzipped tile to {len(data)} bytes")

        msg = vector_tile_pb2.tile()
        try:
            msg.ParseFromString(data)
        except DecodeError as e:
            raise MalformedMessage(f"Cannot parse tile message: {e}") from e

        layers: Dict[str, ProtobufLayer] = {}
        for layer_msg in msg.layers:
            layer = ProtobufLayer.from_message(layer_msg)
            if layer.name in layers:
                logger.warning(f"Duplicate layer name {layer.name!r}; keeping the later layer")
            layers[layer.name] = layer

        logger.info(
            f"Decoded tile with {len(layers)} layers: "
            + ", ".join(f"{name}({layer.feature_count})" for name, layer in layers.items())
        )
        return cls(layers)

    def force(self) -> "ProtobufTile":
        for layer in self.layers.values():
            layer.force()
        return self

    def __getitem__(self, name: str) -> ProtobufLayer:
        return self.layers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)

    def __repr__(self) -> str:
        return f"ProtobufTile(layers={list(self.layers)})"


def decode(data: Buffer) -> ProtobufTile:
    return ProtobufTile.from_bytes(data)
