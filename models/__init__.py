from .purchase_order import PurchaseOrder
from .result import ParseReport, RowSkipped

__all__ = [
    "PurchaseOrder",
    "ParseReport", "RowSkipped",
]
