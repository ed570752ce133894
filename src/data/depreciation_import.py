"""Depreciation schedule import from spreadsheet rows.

Rows use the column headings of a quantity surveyor's depreciation report
export: Description, Cost, Rate (% per year, optional) and StartDate
(ISO date, optional).
"""

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Mapping

from pydantic import ValidationError

from src.config import settings
from src.models.inputs import DepreciationItemInput
from src.models.scenario import DepreciationItem

logger = logging.getLogger(__name__)


def row_to_item(row: Mapping[str, object], default_start: date) -> DepreciationItem | None:
    """Map one spreadsheet row to a DepreciationItem; None if unusable."""
    try:
        parsed = DepreciationItemInput(
            description=(str(row.get("Description") or "").strip() or None),
            cost=row.get("Cost"),
            rate_percent=row.get("Rate"),
            start_date=row.get("StartDate"),
        )
    except ValidationError as e:
        logger.warning("Skipping depreciation row with invalid start date %r: %s", row.get("StartDate"), e)
        return None

    if not parsed.description or parsed.cost is None:
        logger.debug("Skipping depreciation row without description or cost: %s", dict(row))
        return None

    return DepreciationItem(
        description=parsed.description,
        cost_basis=parsed.cost,
        annual_rate_percent=(
            parsed.rate_percent
            if parsed.rate_percent is not None
            else settings.default_depreciation_rate_percent
        ),
        start_date=parsed.start_date or default_start,
    )


def items_from_rows(
    rows: Iterable[Mapping[str, object]],
    default_start: date | None = None,
) -> list[DepreciationItem]:
    """Convert imported rows, dropping any without a description or cost.

    Args:
        rows: Dict-like rows keyed by column heading.
        default_start: Start date for rows that omit one (defaults to today).
    """
    default_start = default_start or date.today()
    items = [item for item in (row_to_item(r, default_start) for r in rows) if item is not None]
    logger.info("Imported %d depreciation items", len(items))
    return items


def load_depreciation_csv(path: str | Path, default_start: date | None = None) -> list[DepreciationItem]:
    """Read a CSV export with a header row into DepreciationItems."""
    with open(path, newline="", encoding="utf-8-sig") as f:
        return items_from_rows(csv.DictReader(f), default_start)
