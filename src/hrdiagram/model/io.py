"""
Star Table Input/Output
=======================
Reads the star catalog (CSV) and turns its rows into plotted points.

Two stages:
1. Fetch: `read_star_table` reads the whole file into plain dict rows. It may
   run on a worker thread (see controller/workers.py).
2. Build: `load_and_plot` validates the rows lazily and emits PlotPoints,
   registering each one with the SceneContext for picking.
"""
from __future__ import annotations

import csv
import logging
import math
import os
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from hrdiagram.model.axis import AxisConfig, position_for
from hrdiagram.model.colors import color_for
from hrdiagram.model.state import SceneContext
from hrdiagram.model.stars import PlotPoint, StarRecord

# Get module logger
logger = logging.getLogger(__name__)

ID_COLUMN = "hip"
TEMPERATURE_COLUMN = "temperature"
LUMINOSITY_COLUMN = "luminosity"
REQUIRED_COLUMNS = (ID_COLUMN, TEMPERATURE_COLUMN, LUMINOSITY_COLUMN)


class StarTableError(Exception):
    """The star table could not be read as a whole."""


def read_star_table(filepath: str) -> List[Dict[str, str]]:
    """
    Read a comma-separated star table with a header row.

    Args:
        filepath: Path to the CSV file.

    Returns:
        One dict per data row, keyed by the header names.

    Raises:
        StarTableError: If the file is missing, unreadable, has no header or
            lacks one of the required columns.
    """
    logger.info(f"Reading star table: {filepath}")
    if not os.path.isfile(filepath):
        raise StarTableError(f"Star table not found: {filepath}")

    try:
        with open(filepath, mode='r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f)
            header = reader.fieldnames
            if not header:
                raise StarTableError(f"Star table has no header row: {filepath}")

            columns = [name.strip() for name in header]
            missing = [c for c in REQUIRED_COLUMNS if c not in columns]
            if missing:
                raise StarTableError(f"Star table is missing columns {missing}: {filepath}")

            reader.fieldnames = columns
            rows = [dict(row) for row in reader]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise StarTableError(f"Failed to read star table '{filepath}': {e}") from e

    logger.info(f"Read {len(rows)} rows from {os.path.basename(filepath)}.")
    return rows


def _parse_number(value: Any) -> Optional[float]:
    """Float value of a cell, or None for empty/non-numeric/non-finite input."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        # float() accepts digit separators ("5_000"); a catalog cell never has them
        if not value or "_" in value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_star(row: Mapping[str, Any], config: AxisConfig) -> Optional[StarRecord]:
    """
    Validate one raw row.

    Returns:
        StarRecord, or None if temperature or luminosity is missing,
        non-numeric or outside the configured ranges.
    """
    temperature = _parse_number(row.get(TEMPERATURE_COLUMN))
    luminosity = _parse_number(row.get(LUMINOSITY_COLUMN))

    if temperature is None or luminosity is None:
        logger.debug(f"Invalid data for star: {dict(row)}")
        return None

    if not config.temperature_in_range(temperature) or not config.luminosity_in_range(luminosity):
        logger.debug(f"Star out of plot range: T={temperature}, L={luminosity}")
        return None

    hip = row.get(ID_COLUMN)
    hip = "" if hip is None else str(hip).strip()
    return StarRecord(hip=hip, temperature=temperature, luminosity=luminosity)


def make_plot_point(record: StarRecord, config: AxisConfig) -> PlotPoint:
    x, y = position_for(record.temperature, record.luminosity, config)
    return PlotPoint(position=(x, y, 0.0), color=color_for(record.temperature), record=record)


def load_and_plot(
    rows: Iterable[Mapping[str, Any]],
    context: SceneContext,
    config: Optional[AxisConfig] = None
) -> Iterator[PlotPoint]:
    """
    Lazily convert raw rows into PlotPoints.

    Invalid rows are skipped. Every emitted point is registered with
    `context.pickable_points` before it is yielded.

    Args:
        rows: Raw records, e.g. from `read_star_table` or csv.DictReader.
        context: Scene state receiving the pickable points.
        config: Axis constants. Defaults to the context's config.

    Yields:
        PlotPoint per accepted row.
    """
    config = config or context.axis_config
    accepted = 0
    skipped = 0

    for row in rows:
        record = parse_star(row, config)
        if record is None:
            skipped += 1
            continue

        point = make_plot_point(record, config)
        context.register_point(point)
        accepted += 1
        yield point

    logger.info(f"Plotted {accepted} stars, skipped {skipped} rows.")
