"""
Per-column conversion of raw CSV cells into typed values.

Text cells pass through verbatim. Numeric cells become exact Decimals;
anything that is not a finite number (including an empty cell) becomes 0.
The primary Date cell goes through the date validator; a failed date is
reported on the CoercedRow, not raised.
"""
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from .date_validator import parse_date
from .header_resolver import ColumnMap

logger = logging.getLogger(__name__)

TEXT_FIELDS = (
    "supplier", "order_no", "ref_no", "due_date", "branch", "requisition_type",
    "item_ledger_group", "item", "unit", "delivery_date", "last_supplier",
    "broker", "status", "delivery_type", "open_po", "open_po_no",
)

NUMERIC_FIELDS = (
    "min_qty", "max_qty", "rate", "cgst", "sgst", "igst", "vat",
    "last_approved_rate", "total_amount",
)

# Only coerced when the column exists in the header
OPTIONAL_NUMERIC_FIELDS = ("weight", "pending_weight")

ZERO = Decimal(0)

# Whole cell must be a plain signed decimal; no underscores, units or suffixes
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@dataclass
class CoercedRow:
    """Typed values for one data row, prior to the acceptance decision."""
    raw_date: str
    date: Optional[date]
    values: dict = field(default_factory=dict)

    @property
    def date_valid(self) -> bool:
        return self.date is not None


def coerce_text(raw: Optional[str]) -> str:
    return raw if raw is not None else ""


def coerce_number(raw: Optional[str]) -> Decimal:
    """
    Parse a signed decimal number exactly.

    Thousands separators are dropped ("1,000" -> 1000). The remaining cell
    must be a plain number as a whole: "1_000" and "100 INR" are unparsable.
    Empty, unparsable and non-finite values (NaN, Infinity) give 0.
    """
    if not raw:
        return ZERO
    cleaned = raw.replace(",", "").strip()
    if not cleaned:
        return ZERO
    if not _NUMBER_RE.fullmatch(cleaned):
        logger.debug("Non-numeric value %r treated as 0", raw)
        return ZERO
    return Decimal(cleaned)


def _cell(raw: Sequence[str], index: Optional[int]) -> str:
    # Short rows: cells past the end are empty
    if index is None or index >= len(raw):
        return ""
    return raw[index]


def coerce_row(columns: ColumnMap, raw: Sequence[str]) -> CoercedRow:
    """Apply the column map to one tokenized data row."""
    raw_date = _cell(raw, columns.index_of("date"))
    values: dict = {}
    for name in TEXT_FIELDS:
        values[name] = coerce_text(_cell(raw, columns.index_of(name)))
    for name in NUMERIC_FIELDS:
        values[name] = coerce_number(_cell(raw, columns.index_of(name)))
    for name in OPTIONAL_NUMERIC_FIELDS:
        index = columns.index_of(name)
        values[name] = coerce_number(_cell(raw, index)) if index is not None else None
    return CoercedRow(raw_date=raw_date, date=parse_date(raw_date), values=values)
