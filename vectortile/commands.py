import logging
from dataclasses import dataclass
from typing import Iterable, List, Union

from .errors import MalformedCommand

logger = logging.getLogger(__name__)

CMD_MOVE_TO = 1
CMD_LINE_TO = 2
CMD_CLOSE_PATH = 7


@dataclass(frozen=True)
class MoveTo:
    x: int
    y: int


@dataclass(frozen=True)
class LineTo:
    x: int
    y: int


@dataclass(frozen=True)
class ClosePath:
    pass


DrawOp = Union[MoveTo, LineTo, ClosePath]


def zigzag_decode(n: int) -> int:
    return (n >> 1) ^ -(n & 1)


def zigzag_encode(n: int) -> int:
    return ((n << 1) ^ (n >> 63)) & 0xFFFFFFFFFFFFFFFF


def command_integer(cmd_id: int, count: int) -> int:
    return (cmd_id & 0x7) | (count << 3)


def decode_commands(geometry: Iterable[int]) -> List[DrawOp]:
    """
    Expand a feature's packed geometry integers into absolute draw operations.

    The cursor starts at the origin for every feature and carries over from one
    command to the next, so each MoveTo/LineTo holds the running sum of all
    deltas seen so far.
    """
    ints = list(geometry)
    ops: List[DrawOp] = []
    x = y = 0
    i = 0
    n = len(ints)

    while i < n:
        cmd = ints[i]
        i += 1
        cmd_id = cmd & 0x7
        count = cmd >> 3

        if cmd_id == CMD_CLOSE_PATH:
            if count != 1:
                raise MalformedCommand(f"ClosePath with count {count} at index {i - 1}, expected 1")
            ops.append(ClosePath())
            continue

        if cmd_id not in (CMD_MOVE_TO, CMD_LINE_TO):
            raise MalformedCommand(f"Unknown command id {cmd_id} at index {i - 1}")
        if count == 0:
            raise MalformedCommand(f"Command {cmd_id} with zero count at index {i - 1}")
        if i + 2 * count > n:
            raise MalformedCommand(
                f"Command {cmd_id} at index {i - 1} needs {count} parameter pairs "
                f"but only {n - i} integers remain"
            )

        op = MoveTo if cmd_id == CMD_MOVE_TO else LineTo
        for _ in range(count):
            x += zigzag_decode(ints[i])
            y += zigzag_decode(ints[i + 1])
            i += 2
            ops.append(op(x, y))

    logger.debug(f"Decoded {n} geometry integers into {len(ops)} draw ops")
    return ops
