"""Generate a random point-of-interest data set as JSON lines.

Points are spread over rough bounding boxes of the major land masses so
that the cluster view has some visible structure.

Usage:
    python -m src.generate_data COUNT PATH [--regions N] [--seed S]
"""

from __future__ import annotations

import argparse
import json
import random
from pathlib import Path
from typing import Iterator

from src.domain.models import GeoPoint

# (lon_min, lat_min), (lon_max, lat_max)
REGIONS: tuple[tuple[tuple[float, float], tuple[float, float]], ...] = (
    ((-81.0, -54.0), (-38.0, 5.0)),  # South America
    ((-128.0, 14.0), (-70.0, 62.0)),  # North America
    ((-9.0, 15.0), (144.0, 67.0)),  # Eurasia
    ((114.0, -39.0), (154.0, -10.0)),  # Australia
    ((-11.0, -32.0), (46.0, 34.0)),  # Africa
)


def _between(rng: random.Random, lo: float, hi: float) -> float:
    # Whole degrees are enough for the general area.
    return float(rng.randint(int(lo), int(hi)))


def generate_points(
    count: int, *, regions: int = len(REGIONS), rng: random.Random
) -> Iterator[GeoPoint]:
    if not 1 <= regions <= len(REGIONS):
        raise ValueError(f"regions must be between 1 and {len(REGIONS)}, got {regions}")

    chosen = REGIONS[:regions]
    for i in range(count):
        (lon_min, lat_min), (lon_max, lat_max) = rng.choice(chosen)
        yield GeoPoint(
            name=f"Point-{i}",
            longitude=_between(rng, lon_min, lon_max),
            latitude=_between(rng, lat_min, lat_max),
        )


def write_jsonl(points: Iterator[GeoPoint], path: Path) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with path.open("w", encoding="utf-8") as fp:
        for p in points:
            fp.write(
                json.dumps(
                    {"name": p.name, "longitude": p.longitude, "latitude": p.latitude}
                )
            )
            fp.write("\n")
            written += 1
    return written


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("count", type=int, help="number of points to generate")
    parser.add_argument("path", type=Path, help="output .jsonl file")
    parser.add_argument(
        "--regions",
        type=int,
        default=len(REGIONS),
        help=f"number of land-mass regions to use (1-{len(REGIONS)})",
    )
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    written = write_jsonl(
        generate_points(args.count, regions=args.regions, rng=rng), args.path
    )
    print(f"Wrote {written} points to {args.path}")


if __name__ == "__main__":
    main()
