import json

from vectortile.cli import main

from tile_builder import POINT, feature_msg, layer_msg, tile_msg


def test_summary_and_geojson(tmp_path, capsys, mixed_tile_bytes):
    tile_path = tmp_path / "0.mvt"
    tile_path.write_bytes(mixed_tile_bytes)
    out_path = tmp_path / "out.geojson"

    assert main([str(tile_path), "--geojson", str(out_path), "--zxy", "0/0/0"]) == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["mixed"]["raw_features"] == 7
    assert summary["mixed"]["polygons"] == 1
    assert summary["mixed"]["multi_polygons"] == 1

    fc = json.loads(out_path.read_text(encoding="utf-8"))
    assert len(fc["features"]) == 6


def test_no_force_only_counts(tmp_path, capsys, mixed_tile_bytes):
    tile_path = tmp_path / "0.mvt"
    tile_path.write_bytes(mixed_tile_bytes)

    assert main([str(tile_path), "--no-force"]) == 0
    assert json.loads(capsys.readouterr().out) == {"mixed": 7}


def test_decode_error_exit_code(tmp_path):
    tile_path = tmp_path / "bad.mvt"
    tile_path.write_bytes(tile_msg(layer_msg("bad", [feature_msg(POINT, [9, 0])])))
    assert main([str(tile_path)]) == 1


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.mvt")]) == 1
