"""
Header resolution for purchase-order extracts.

The first tokenized row names the columns. Every required header must be
present (exact match after trimming surrounding whitespace); positions are
looked up by name so vendors may reorder columns freely.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

# Logical field name -> header text in the vendor extract
REQUIRED_COLUMNS: dict[str, str] = {
    "date":               "Date",
    "supplier":           "Supplier",
    "order_no":           "Order No.",
    "ref_no":             "Ref No.",
    "due_date":           "Due Date",
    "branch":             "Branch",
    "requisition_type":   "Requisition Type",
    "item_ledger_group":  "Item/Ledger Group",
    "item":               "Item",
    "min_qty":            "Min Qty",
    "max_qty":            "Max Qty",
    "unit":               "Unit",
    "rate":               "Rate",
    "delivery_date":      "Delivery Date",
    "cgst":               "CGST",
    "sgst":               "SGST",
    "igst":               "IGST",
    "vat":                "VAT",
    "last_approved_rate": "Last Approved Rate",
    "last_supplier":      "Last Supplier",
    "broker":             "Broker",
    "total_amount":       "Total Amount",
    "status":             "Status",
    "delivery_type":      "Delivery Type",
    "open_po":            "Open PO",
    "open_po_no":         "Open PO No.",
}

# Extra columns of the weighted layout; used when present, never required
OPTIONAL_COLUMNS: dict[str, str] = {
    "weight":         "Weight",
    "pending_weight": "Pending Wt.",
}


class MissingColumnsError(ValueError):
    """The header row lacks one or more required columns. Aborts the whole parse."""

    def __init__(self, missing: Sequence[str], required: Sequence[str]):
        self.missing = list(missing)
        self.required = list(required)
        super().__init__(
            f"Missing required columns: {', '.join(self.missing)}. "
            f"Required columns are: {', '.join(self.required)}"
        )


@dataclass
class ColumnMap:
    """Logical field name -> column index for one parse call."""
    positions: dict[str, int] = field(default_factory=dict)

    def index_of(self, name: str) -> Optional[int]:
        return self.positions.get(name)

    @property
    def layout(self) -> str:
        if all(name in self.positions for name in OPTIONAL_COLUMNS):
            return "weighted"
        return "standard"


def resolve_header(header_row: Sequence[str]) -> ColumnMap:
    """
    Map every known column to its position in header_row.

    Raises:
        MissingColumnsError: if any required header is absent
    """
    first_seen: dict[str, int] = {}
    for idx, cell in enumerate(header_row):
        first_seen.setdefault(cell.strip(), idx)

    missing = [h for h in REQUIRED_COLUMNS.values() if h not in first_seen]
    if missing:
        logger.error("CSV header is missing %d required column(s): %s",
                     len(missing), ", ".join(missing))
        raise MissingColumnsError(missing, list(REQUIRED_COLUMNS.values()))

    positions = {name: first_seen[header] for name, header in REQUIRED_COLUMNS.items()}
    for name, header in OPTIONAL_COLUMNS.items():
        if header in first_seen:
            positions[name] = first_seen[header]

    column_map = ColumnMap(positions)
    logger.debug("Resolved %d columns (%s layout)", len(positions), column_map.layout)
    return column_map
