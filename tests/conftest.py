import pytest

from tile_builder import (
    LINESTRING,
    POINT,
    POLYGON,
    UNKNOWN,
    feature_msg,
    geometry,
    layer_msg,
    ring,
    tile_msg,
)


@pytest.fixture
def mixed_layer_bytes():
    """One layer holding every geometry kind, plus an UNKNOWN feature."""
    square = ring((0, 0), (10, 0), (10, 10), (0, 10))
    hole = ring((2, 2), (2, 8), (8, 8), (8, 2))
    other = ring((20, 20), (30, 20), (30, 30), (20, 30))
    features = [
        feature_msg(POINT, geometry(("M", [(1, 2)])), tags=[0, 0], fid=1),
        feature_msg(POINT, geometry(("M", [(1, 2), (3, 4)])), tags=[0, 1], fid=2),
        feature_msg(UNKNOWN, geometry(("M", [(5, 5)])), fid=3),
        feature_msg(LINESTRING, geometry(("M", [(0, 0)]), ("L", [(5, 5)])), tags=[1, 2], fid=4),
        feature_msg(
            LINESTRING,
            geometry(("M", [(0, 0)]), ("L", [(5, 5)]), ("M", [(6, 6)]), ("L", [(9, 9), (9, 0)])),
            fid=5,
        ),
        feature_msg(POLYGON, geometry(*square, *hole), tags=[0, 0, 1, 2], fid=6),
        feature_msg(POLYGON, geometry(*square, *other), fid=7),
    ]
    return layer_msg(
        "mixed",
        features,
        keys=["name", "rank"],
        values=["a", "b", 7],
    )


@pytest.fixture
def mixed_tile_bytes(mixed_layer_bytes):
    return tile_msg(mixed_layer_bytes)
