from pydantic import BaseModel, Field
from typing import List, Literal

from .purchase_order import PurchaseOrder


SkipReason = Literal[
    "invalid_date",     # primary Date cell missing, malformed or not on the calendar
]

Layout = Literal["standard", "weighted"]


class RowSkipped(BaseModel):
    """A data row that was dropped under the row-skip policy."""
    row_number: int                         # 1-based, header excluded
    reason: SkipReason
    value: str = ""                         # The raw cell that caused the skip


class ParseReport(BaseModel):
    """
    The complete outcome of one ingestion call.
    records preserves the order of the accepted input rows.
    """
    records: List[PurchaseOrder] = Field(default_factory=list)
    skipped: List[RowSkipped] = Field(default_factory=list)
    data_rows: int = 0                      # Tokenized rows after the header
    layout: Layout = "standard"

    @property
    def accepted_count(self) -> int:
        return len(self.records)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def summary(self) -> str:
        """One-line human-readable summary, e.g. for CLI output."""
        return (
            f"{self.data_rows} data rows produced {self.accepted_count} purchase orders"
            f" ({self.skipped_count} skipped)"
        )
