from .tokenizer import TokenizerState, strip_bom, tokenize
from .date_validator import parse_date
from .header_resolver import ColumnMap, MissingColumnsError, resolve_header
from .field_coercion import CoercedRow, coerce_row
from .identity import FixedClock, RandomIdGenerator, SequentialIdGenerator, SystemClock
from .row_assembler import RowAssembler
from .po_parser import PurchaseOrderParser, parse

__all__ = [
    "TokenizerState", "strip_bom", "tokenize",
    "parse_date",
    "ColumnMap", "MissingColumnsError", "resolve_header",
    "CoercedRow", "coerce_row",
    "FixedClock", "RandomIdGenerator", "SequentialIdGenerator", "SystemClock",
    "RowAssembler",
    "PurchaseOrderParser", "parse",
]
