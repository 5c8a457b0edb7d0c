"""Command line access to the geo engine for offline point files.

Examples::

    python -m geo_engine.cli cluster --in markers.json --radius 250
    python -m geo_engine.cli simplify --in track.json --tolerance 5 --out slim.json
    python -m geo_engine.cli geohash --lat 39.9042 --lon 116.4074 --precision 7

Point files hold a JSON list of ``[lon, lat]`` pairs or ``{"lat", "lon"}``
objects, or an object with a ``points`` list.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .cluster import cluster_points
from .coords import normalize_lat_lng_list
from .encoding import encode_geohash, parse_polyline
from .heatmap import generate_heatmap_grid
from .paths import path_length, simplify_polyline
from .types import ClusterPoint, GeoPoint, HeatmapPoint

LOGGER = logging.getLogger("geo_engine.cli")


def _read_payload(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _load_points(source: str) -> List[GeoPoint]:
    payload = _read_payload(source)
    if isinstance(payload, dict):
        payload = payload.get("points", [])
    if isinstance(payload, str):
        return parse_polyline(payload)
    if not isinstance(payload, list):
        raise ValueError("point file must contain a list of coordinates")
    return normalize_lat_lng_list(payload)


def _write_result(result: Dict[str, Any], out: str | None) -> None:
    text = json.dumps(result, indent=2)
    if out:
        Path(out).write_text(text + "\n", encoding="utf-8")
        LOGGER.info("Wrote %s", out)
    else:
        print(text)


def _cmd_cluster(args: argparse.Namespace) -> Dict[str, Any]:
    points = _load_points(args.input)
    clusters = cluster_points(
        [ClusterPoint(p.lat, p.lon, i) for i, p in enumerate(points)], args.radius
    )
    LOGGER.info("Clustered %d points into %d clusters", len(points), len(clusters))
    return {
        "radiusM": args.radius,
        "clusters": [
            {"center": c.center_index, "indices": c.indices} for c in clusters
        ],
    }


def _cmd_simplify(args: argparse.Namespace) -> Dict[str, Any]:
    points = _load_points(args.input)
    simplified = simplify_polyline(points, args.tolerance)
    LOGGER.info("Simplified %d -> %d points", len(points), len(simplified))
    return {
        "toleranceM": args.tolerance,
        "lengthM": path_length(simplified),
        "points": [[p.lon, p.lat] for p in simplified],
    }


def _cmd_geohash(args: argparse.Namespace) -> Dict[str, Any]:
    return {"geohash": encode_geohash(args.lat, args.lon, args.precision)}


def _cmd_heatmap(args: argparse.Namespace) -> Dict[str, Any]:
    points = _load_points(args.input)
    cells = generate_heatmap_grid(
        [HeatmapPoint(p.lat, p.lon, 1.0) for p in points], args.grid
    )
    return {
        "gridSizeM": args.grid,
        "cells": [
            {"lat": c.lat, "lon": c.lon, "intensity": c.intensity} for c in cells
        ],
    }


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Geo engine utilities")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    cluster = sub.add_parser("cluster", help="Greedy radius clustering")
    cluster.add_argument("--in", dest="input", required=True, help="Point file or -")
    cluster.add_argument("--radius", type=float, default=100.0, help="Radius in meters")
    cluster.add_argument("--out", help="Write JSON here instead of stdout")
    cluster.set_defaults(handler=_cmd_cluster)

    simplify = sub.add_parser("simplify", help="RDP polyline simplification")
    simplify.add_argument("--in", dest="input", required=True, help="Point file or -")
    simplify.add_argument(
        "--tolerance", type=float, default=5.0, help="Tolerance in meters"
    )
    simplify.add_argument("--out", help="Write JSON here instead of stdout")
    simplify.set_defaults(handler=_cmd_simplify)

    geohash = sub.add_parser("geohash", help="Encode a coordinate")
    geohash.add_argument("--lat", type=float, required=True)
    geohash.add_argument("--lon", type=float, required=True)
    geohash.add_argument("--precision", type=int, default=7)
    geohash.add_argument("--out", help="Write JSON here instead of stdout")
    geohash.set_defaults(handler=_cmd_geohash)

    heatmap = sub.add_parser("heatmap", help="Grid aggregation with unit weights")
    heatmap.add_argument("--in", dest="input", required=True, help="Point file or -")
    heatmap.add_argument("--grid", type=float, default=500.0, help="Cell size in meters")
    heatmap.add_argument("--out", help="Write JSON here instead of stdout")
    heatmap.set_defaults(handler=_cmd_heatmap)

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO)
    )

    try:
        result = args.handler(args)
    except (OSError, ValueError) as exc:
        LOGGER.error("Failed to run %s: %s", args.command, exc)
        return 1

    _write_result(result, args.out)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    sys.exit(main())
