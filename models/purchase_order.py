from datetime import date as Date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

NUMERIC_FIELDS = (
    "min_qty", "max_qty", "weight", "rate", "pending_weight", "cgst", "sgst",
    "igst", "vat", "last_approved_rate", "total_amount",
)


class PurchaseOrder(BaseModel):
    """
    A single purchase-order line accepted from a vendor CSV extract.

    Attribute names are snake_case; the camelCase aliases match the JSON
    shape consumed by the dashboard and the storage API.
    Records are frozen: collaborators that toggle approval work on a copy
    made with model_copy(update=...).
    Numeric fields hold exact Decimals; in JSON output they are written as
    numbers (integral values as ints), not strings.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    date: Date

    supplier: str = ""
    order_no: str = Field(default="", alias="orderNo")
    ref_no: str = Field(default="", alias="refNo")
    due_date: str = Field(default="", alias="dueDate")           # free text, not validated
    branch: str = ""
    requisition_type: str = Field(default="", alias="requisitionType")
    item_ledger_group: str = Field(default="", alias="itemLedgerGroup")
    item: str = ""
    min_qty: Decimal = Field(default=Decimal(0), alias="minQty")
    max_qty: Decimal = Field(default=Decimal(0), alias="maxQty")
    weight: Optional[Decimal] = None                               # weighted layout only
    unit: str = ""
    rate: Decimal = Decimal(0)
    pending_weight: Optional[Decimal] = Field(default=None, alias="pendingWeight")
    delivery_date: str = Field(default="", alias="deliveryDate")  # free text, not validated
    cgst: Decimal = Decimal(0)
    sgst: Decimal = Decimal(0)
    igst: Decimal = Decimal(0)
    vat: Decimal = Decimal(0)
    last_approved_rate: Decimal = Field(default=Decimal(0), alias="lastApprovedRate")
    last_supplier: str = Field(default="", alias="lastSupplier")
    broker: str = ""
    total_amount: Decimal = Field(default=Decimal(0), alias="totalAmount")
    status: str = ""
    delivery_type: str = Field(default="", alias="deliveryType")
    open_po: str = Field(default="", alias="openPO")
    open_po_no: str = Field(default="", alias="openPONo")

    is_approved: bool = Field(default=False, alias="isApproved")
    approval_notes: Optional[str] = Field(default=None, alias="approvalNotes")
    uploaded_at: datetime = Field(alias="uploadedAt")

    @field_serializer(*NUMERIC_FIELDS, when_used="json-unless-none")
    def _number_to_json(self, value: Decimal) -> Union[int, float]:
        if value == value.to_integral_value():
            return int(value)
        return float(value)
