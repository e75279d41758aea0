from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter

from .bounds import TileBounds
from .errors import VectorTileError
from .geojson import SUPPORTED_CRS, tile_to_geojson
from .tile import ProtobufTile

logger = logging.getLogger(__name__)


def _parse_zxy(s: str) -> TileBounds:
    try:
        return TileBounds.parse(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def summarize(tile: ProtobufTile) -> dict:
    out = {}
    for name, layer in tile.items():
        out[name] = {
            "extent": layer.extent,
            "version": layer.version,
            "raw_features": layer.feature_count,
            "keys": len(layer.keys),
            "values": len(layer.values),
            **layer.decoded_counts(),
        }
    return out


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Decode a Mapbox vector tile (.mvt/.pbf) and report its layers."
    )
    ap.add_argument("tile", help="Path to the tile file (raw or gzipped).")
    ap.add_argument("--geojson", help="Write the decoded features as a GeoJSON FeatureCollection here.")
    ap.add_argument("--zxy", type=_parse_zxy, default=None,
                    help="Tile address Z/X/Y; places GeoJSON output on the map instead of tile space.")
    ap.add_argument("--crs", choices=SUPPORTED_CRS, default="EPSG:3857",
                    help="Output CRS for --geojson when --zxy is given (default: EPSG:3857).")
    ap.add_argument("--no-force", dest="force", action="store_false",
                    help="Only parse layer headers; skip decoding every feature.")
    ap.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = getattr(logging, args.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    path = Path(args.tile)
    if not path.is_file():
        logger.error(f"Tile file not found: {path}")
        return 1

    logger.info(f"Reading tile {path}")
    start = perf_counter()
    try:
        tile = ProtobufTile.from_bytes(path.read_bytes())
        if args.force or args.geojson:
            tile.force()
            print(json.dumps(summarize(tile), indent=2))
        else:
            print(json.dumps({name: layer.feature_count for name, layer in tile.items()}, indent=2))

        if args.geojson:
            fc = tile_to_geojson(tile, bounds=args.zxy, crs=args.crs)
            with open(args.geojson, "w", encoding="utf-8") as f:
                json.dump(fc, f, ensure_ascii=False)
            logger.info(f"Wrote {len(fc['features'])} features to {args.geojson}")
    except VectorTileError as e:
        logger.error(f"Could not decode {path}: {e}")
        return 1

    logger.info("Decoded %s in %.3f seconds", path, perf_counter() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
