from __future__ import annotations

import csv
import gzip
import io
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from src.app.ports.output import IPointSource
from src.domain.exceptions import LoadError
from src.domain.models import GeoPoint

JSONL_SUFFIXES = {".jsonl", ".ndjson"}
CSV_SUFFIXES = {".csv"}


def _data_suffix(name: str) -> str:
    """Return the format suffix, looking through a trailing ``.gz``."""

    path = Path(name)
    suffix = path.suffix.lower()
    if suffix == ".gz":
        suffix = Path(path.stem).suffix.lower()
    return suffix


def _to_point(row: Mapping[str, Any], where: str) -> GeoPoint:
    try:
        return GeoPoint(
            name=str(row["name"]),
            longitude=float(row["longitude"]),
            latitude=float(row["latitude"]),
        )
    except KeyError as exc:
        raise LoadError(f"{where}: missing field {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise LoadError(f"{where}: {exc}") from exc


def iter_jsonl_points(lines: Iterable[str], origin: str) -> Iterator[GeoPoint]:
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        where = f"{origin}:{lineno}"
        try:
            row = json.loads(line)
        except json.JSONDecodeError as exc:
            raise LoadError(f"{where}: invalid JSON ({exc.msg})") from exc
        if not isinstance(row, dict):
            raise LoadError(f"{where}: expected an object, got {type(row).__name__}")
        yield _to_point(row, where)


def iter_csv_points(lines: Iterable[str], origin: str) -> Iterator[GeoPoint]:
    reader = csv.DictReader(lines)
    for row in reader:
        # DictReader line_num counts the header.
        yield _to_point(row, f"{origin}:{reader.line_num}")


def decode_points(body: bytes, name: str) -> tuple[GeoPoint, ...]:
    """Decode an in-memory data blob; the format follows ``name``'s suffix."""

    suffix = _data_suffix(name)
    if name.lower().endswith(".gz"):
        try:
            body = gzip.decompress(body)
        except (OSError, EOFError) as exc:
            raise LoadError(f"{name}: {exc}") from exc
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LoadError(f"{name}: {exc}") from exc

    lines = io.StringIO(text, newline="")
    if suffix in JSONL_SUFFIXES:
        return tuple(iter_jsonl_points(lines, name))
    if suffix in CSV_SUFFIXES:
        return tuple(iter_csv_points(lines, name))
    raise LoadError(f"Unsupported data format for {name!r}")


@dataclass(slots=True)
class LocalPointSource(IPointSource):
    """Loads points from a local JSON-lines or CSV file (optionally gzipped).

    Env vars:
      - POI_DATA_PATH: path to the data file (default: data/poi.jsonl)
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("POI_DATA_PATH") or "data/poi.jsonl"
        return Path(value)

    def describe(self) -> str:
        return str(self._path())

    def load_points(self) -> Iterable[GeoPoint]:
        path = self._path()
        if _data_suffix(path.name) not in JSONL_SUFFIXES | CSV_SUFFIXES:
            raise LoadError(f"Unsupported data format for {str(path)!r}")
        try:
            body = path.read_bytes()
        except OSError as exc:
            raise LoadError(f"Unable to read {path}: {exc}") from exc
        return decode_points(body, str(path))
