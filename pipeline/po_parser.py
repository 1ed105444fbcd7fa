"""
Purchase-order CSV ingestion entry point.

PurchaseOrderParser ties the stages together into a single parse() call:
  1. tokenize              -- text (BOM dropped) -> rows of raw cells
  2. resolve_header        -- first row -> column map (fatal if incomplete)
  3. coerce_row            -- raw cells -> typed values
  4. RowAssembler          -- accept as a PurchaseOrder or skip the row

Only MissingColumnsError escapes; every row-level defect becomes a skipped
row. The parser does no I/O and keeps no state between calls. Without an
explicit Config it uses the fixed dialect below; the environment- and
file-backed Config is built by the CLI, never here.
"""
import logging
from datetime import date
from typing import List, Optional

from config import Config
from models.purchase_order import PurchaseOrder
from models.result import ParseReport, RowSkipped
from .date_validator import parse_date as _parse_date
from .field_coercion import coerce_row
from .header_resolver import resolve_header
from .identity import Clock, IdGenerator
from .row_assembler import RowAssembler
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","


class PurchaseOrderParser:
    """
    Parses vendor purchase-order extracts.

    Usage:
        parser = PurchaseOrderParser()
        orders = parser.parse(csv_text)
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        self.config = config
        if config is None:
            self.delimiter = DEFAULT_DELIMITER
            self.carry_forward_supplier = False
        else:
            self.delimiter = config.csv_delimiter
            self.carry_forward_supplier = config.carry_forward_supplier
        self.clock = clock
        self.id_generator = id_generator

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str) -> List[PurchaseOrder]:
        """Return the accepted records in input row order."""
        return self.parse_with_report(text).records

    def parse_with_report(self, text: str) -> ParseReport:
        """
        Parse text and return the records together with the skipped rows.

        Raises:
            MissingColumnsError: if the header lacks a required column
        """
        # tokenize() drops a leading BOM itself
        rows = tokenize(text, delimiter=self.delimiter)
        if len(rows) < 2:
            logger.info("CSV contains no data rows")
            return ParseReport()

        columns = resolve_header(rows[0])
        assembler = RowAssembler(
            clock=self.clock,
            id_generator=self.id_generator,
            carry_forward_supplier=self.carry_forward_supplier,
        )

        records: List[PurchaseOrder] = []
        skipped: List[RowSkipped] = []
        for row_number, raw in enumerate(rows[1:], start=1):
            outcome = assembler.assemble(coerce_row(columns, raw), row_number)
            if isinstance(outcome, RowSkipped):
                skipped.append(outcome)
            else:
                records.append(outcome)

        report = ParseReport(
            records=records,
            skipped=skipped,
            data_rows=len(rows) - 1,
            layout=columns.layout,
        )
        logger.info("Parsed CSV (%s layout): %s", report.layout, report.summary())
        if skipped:
            logger.warning("Skipped %d row(s) with an invalid date", len(skipped))
        return report


def parse(
    text: str,
    clock: Optional[Clock] = None,
    id_generator: Optional[IdGenerator] = None,
) -> List[PurchaseOrder]:
    """Parse CSV text with the default dialect (comma, no carry-forward)."""
    return PurchaseOrderParser(clock=clock, id_generator=id_generator).parse(text)


def parse_date(text: Optional[str]) -> Optional[date]:
    """Standalone date check, same rules as the ingestion path."""
    return _parse_date(text)
