from pyproj import Transformer

from .layer import DEFAULT_EXTENT

LIM = 20037508.342789244

tf_3857_to_4326 = Transformer.from_crs(3857, 4326, always_xy=True)


class TileBounds:
    """Where tile z/x/y sits on the Web-Mercator grid (XYZ scheme, y counted from the top)."""

    def __init__(self, z, x, y):
        n = 2 ** z
        if not (0 <= x < n and 0 <= y < n):
            raise ValueError(f"Tile {z}/{x}/{y} is outside the zoom {z} grid")
        self.z = z
        self.x = x
        self.y = y
        self.bbox_3857 = self.compute_mercator_bounds()
        self.bbox_4326 = self.compute_wgs84_bounds()

    @classmethod
    def parse(cls, zxy: str) -> "TileBounds":
        try:
            z, x, y = (int(p) for p in zxy.strip("/").split("/"))
        except ValueError:
            raise ValueError(f"Expected Z/X/Y, got {zxy!r}") from None
        return cls(z, x, y)

    def compute_mercator_bounds(self):
        n = 2 ** self.z
        tile_size = (2 * LIM) / n

        minx = -LIM + self.x * tile_size
        maxx = -LIM + (self.x + 1) * tile_size
        maxy = LIM - self.y * tile_size
        miny = LIM - (self.y + 1) * tile_size
        return minx, miny, maxx, maxy

    def compute_wgs84_bounds(self):
        minx, miny, maxx, maxy = self.bbox_3857
        lon1, lat1 = tf_3857_to_4326.transform(minx, miny)
        lon2, lat2 = tf_3857_to_4326.transform(maxx, maxy)
        return lon1, lat1, lon2, lat2

    def tile_to_mercator(self, xx, yy, extent=DEFAULT_EXTENT):
        # tile y grows downwards, mercator y grows upwards
        minx, miny, maxx, maxy = self.bbox_3857
        xs = minx + (xx / extent) * (maxx - minx)
        ys = maxy - (yy / extent) * (maxy - miny)
        return xs, ys

    def tile_to_wgs84(self, xx, yy, extent=DEFAULT_EXTENT):
        return tf_3857_to_4326.transform(*self.tile_to_mercator(xx, yy, extent))
