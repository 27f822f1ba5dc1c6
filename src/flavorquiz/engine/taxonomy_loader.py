"""Taxonomy file loader (CSV/TSV or YAML) for reverse-question grading."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import yaml

from flavorquiz.engine.taxonomy import ProductCategoryEntry, canonical_field

logger = logging.getLogger(__name__)

TABULAR_SUFFIXES = {".csv", ".tsv", ".txt"}
YAML_SUFFIXES = {".yaml", ".yml"}


def detect_delimiter(header_line: str) -> str:
    """Tab if the header has more tabs than commas, else comma."""
    return "\t" if header_line.count("\t") > header_line.count(",") else ","


def _load_tabular(path: Path) -> list[ProductCategoryEntry]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        header_line = f.readline()
        f.seek(0)
        reader = csv.reader(f, delimiter=detect_delimiter(header_line))
        rows = list(reader)

    if not rows:
        raise ValueError(f"Taxonomy file is empty: {path}")

    columns = [canonical_field(h) for h in rows[0]]
    if "name" not in columns:
        raise ValueError(f"Taxonomy file has no product name column: {path}")

    unknown = [h for h, c in zip(rows[0], columns) if c is None and h.strip()]
    if unknown:
        logger.warning("Ignoring unknown taxonomy columns in %s: %s", path, ", ".join(unknown))

    entries: list[ProductCategoryEntry] = []
    for row_number, row in enumerate(rows[1:], start=2):
        if not any(cell.strip() for cell in row):
            continue
        data: dict[str, str] = {}
        for column, value in zip(columns, row):
            if column is not None:
                data.setdefault(column, value)
        if not (data.get("name") or "").strip():
            logger.warning("Skipping taxonomy row %d in %s: missing product name", row_number, path)
            continue
        entries.append(ProductCategoryEntry.from_dict(data))
    return entries


def _load_yaml(path: Path) -> list[ProductCategoryEntry]:
    with open(path) as f:
        raw = yaml.safe_load(f) or []

    if isinstance(raw, dict):
        raw = raw.get("products", [])
    if not isinstance(raw, list):
        raise ValueError(f"Taxonomy YAML must be a list of products: {path}")

    entries: list[ProductCategoryEntry] = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning("Skipping taxonomy item %d in %s: not a mapping", idx, path)
            continue
        try:
            entries.append(ProductCategoryEntry.from_dict(item))
        except ValueError as e:
            logger.warning("Skipping taxonomy item %d in %s: %s", idx, path, e)
    return entries


def load_taxonomy(path: Path) -> list[ProductCategoryEntry]:
    """Load product category entries from a tabular or YAML file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in TABULAR_SUFFIXES:
        entries = _load_tabular(path)
    elif suffix in YAML_SUFFIXES:
        entries = _load_yaml(path)
    else:
        raise ValueError(f"Unsupported taxonomy file type: {path.suffix or path.name}")

    logger.info("Loaded %d taxonomy entries from %s", len(entries), path)
    return entries
