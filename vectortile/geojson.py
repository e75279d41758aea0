import logging
from typing import Optional

from shapely.geometry import mapping
from shapely.ops import transform

from .bounds import TileBounds
from .tile import ProtobufTile

logger = logging.getLogger(__name__)

SUPPORTED_CRS = ("EPSG:3857", "EPSG:4326")


def tile_to_geojson(tile: ProtobufTile, bounds: Optional[TileBounds] = None, crs: str = "EPSG:3857") -> dict:
    """
    Decode every layer of `tile` into a GeoJSON FeatureCollection.

    Without `bounds` the coordinates stay in tile-local space (0..extent,
    y down). With `bounds` they are placed on the map in `crs`. Each feature's
    properties get a `_layer` entry naming the layer it came from.
    """
    if crs not in SUPPORTED_CRS:
        raise ValueError(f"Unsupported crs {crs!r}, expected one of {SUPPORTED_CRS}")

    features = []
    for layer_name, layer in tile.items():
        to_map = None
        if bounds is not None:
            project = bounds.tile_to_wgs84 if crs == "EPSG:4326" else bounds.tile_to_mercator

            def to_map(xx, yy, zz=None, _project=project, _extent=layer.extent):
                return _project(xx, yy, _extent)

        count = 0
        for feat in layer.features:
            geom = feat.geometry if to_map is None else transform(to_map, feat.geometry)
            properties = feat.attributes()
            properties["_layer"] = layer_name
            features.append({
                "type": "Feature",
                "geometry": mapping(geom),
                "properties": properties,
            })
            count += 1
        logger.debug(f"Layer {layer_name!r}: exported {count} features")

    return {"type": "FeatureCollection", "features": features}
