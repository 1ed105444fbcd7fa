"""
Row acceptance and record assembly.

A row with an invalid primary date is dropped: assemble() returns a
RowSkipped value instead of raising. Every other row becomes a frozen
PurchaseOrder stamped with a fresh id and the ingestion time.
"""
import logging
from datetime import datetime
from typing import Optional, Union

from models.purchase_order import PurchaseOrder
from models.result import RowSkipped
from .field_coercion import CoercedRow
from .identity import Clock, IdGenerator, RandomIdGenerator, SystemClock

logger = logging.getLogger(__name__)

RowOutcome = Union[PurchaseOrder, RowSkipped]


class RowAssembler:
    """
    Turns coerced rows into records for a single parse call.

    Usage:
        assembler = RowAssembler(clock, id_generator)
        outcome = assembler.assemble(coerced, row_number)
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
        carry_forward_supplier: bool = False,
    ):
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or RandomIdGenerator()
        self.carry_forward_supplier = carry_forward_supplier
        # One ingestion timestamp for the whole call keeps uploaded_at ordered with rows
        self.uploaded_at: datetime = self.clock.now()
        self._last_supplier = ""

    def assemble(self, coerced: CoercedRow, row_number: int) -> RowOutcome:
        values = dict(coerced.values)

        if self.carry_forward_supplier:
            if values["supplier"].strip():
                self._last_supplier = values["supplier"]
            else:
                values["supplier"] = self._last_supplier

        if not coerced.date_valid:
            logger.debug("Skipping row %d: invalid date %r", row_number, coerced.raw_date)
            return RowSkipped(row_number=row_number, reason="invalid_date", value=coerced.raw_date)

        return PurchaseOrder(
            id=self.id_generator.next_id(row_number, self.uploaded_at),
            date=coerced.date,
            is_approved=False,
            uploaded_at=self.uploaded_at,
            **values,
        )
