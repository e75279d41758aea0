from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from mapbox_vector_tile.Mapbox import vector_tile_pb2

from .errors import MalformedMessage


class ValueKind(IntEnum):
    """Field numbers of the Value message; only one of them is expected per value."""

    STRING = 1
    FLOAT = 2
    DOUBLE = 3
    INT64 = 4
    UINT64 = 5
    SINT64 = 6
    BOOL = 7


@dataclass(frozen=True)
class Value:
    kind: ValueKind
    value: Union[str, float, int, bool]

    def to_python(self):
        return self.value


_KINDS = {k.value for k in ValueKind}


def parse_value(msg: vector_tile_pb2.tile.value) -> Value:
    """
    Turn a layer's Value message into a `Value`.

    The schema declares the seven typed fields as plain optionals, so a writer
    can set several. `ListFields` reports them by field number and the
    highest-numbered one wins.
    """
    fields = [(fd, v) for fd, v in msg.ListFields() if fd.number in _KINDS]
    if not fields:
        raise MalformedMessage("Value message carries no typed field")
    fd, v = fields[-1]
    return Value(ValueKind(fd.number), v)
