"""
CSV tokenizer for vendor purchase-order extracts.

A single pass over the text with an explicit four-state machine:

  FIELD_START      -- at the first character of a field
  UNQUOTED         -- inside a plain field
  QUOTED           -- inside a "..." field; delimiters and newlines are content
  QUOTE_IN_QUOTED  -- just saw a quote inside a quoted field

Rows end on \n, \r\n or a lone \r. A doubled quote inside a quoted field is
one literal quote. The tokenizer never rejects input: an unterminated quoted
field is closed at end of text, and stray quotes are kept as content.
"""
import enum
from typing import List

BOM = "\ufeff"
QUOTE = '"'

Row = List[str]


class TokenizerState(enum.Enum):
    FIELD_START = "field_start"
    UNQUOTED = "unquoted"
    QUOTED = "quoted"
    QUOTE_IN_QUOTED = "quote_in_quoted"


def strip_bom(text: str) -> str:
    """Drop a single leading byte-order mark, if any."""
    if text.startswith(BOM):
        return text[1:]
    return text


def tokenize(text: str, delimiter: str = ",") -> List[Row]:
    """
    Split CSV text into rows of raw field strings.

    Blank lines produce no row. A last row without a line terminator is
    still returned.
    """
    if len(delimiter) != 1 or delimiter in (QUOTE, "\r", "\n"):
        raise ValueError(f"Invalid CSV delimiter: {delimiter!r}")

    text = strip_bom(text)
    rows: List[Row] = []
    row: Row = []
    field: List[str] = []
    state = TokenizerState.FIELD_START
    # True once the current row has consumed any character (content, quote or delimiter)
    row_started = False

    def end_field() -> None:
        row.append("".join(field))
        field.clear()

    def end_row() -> None:
        nonlocal row, row_started
        if row_started:
            end_field()
            rows.append(row)
        row = []
        field.clear()
        row_started = False

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        i += 1

        if state is TokenizerState.QUOTED:
            if ch == QUOTE:
                state = TokenizerState.QUOTE_IN_QUOTED
            else:
                field.append(ch)
            continue

        if state is TokenizerState.QUOTE_IN_QUOTED:
            if ch == QUOTE:
                field.append(QUOTE)
                state = TokenizerState.QUOTED
                continue
            if ch != delimiter and ch not in "\r\n":
                # Text after a closing quote: keep it, carry on unquoted
                field.append(ch)
                state = TokenizerState.UNQUOTED
                continue
            # Delimiter or terminator: fall through to the structural handling below

        if ch == delimiter:
            row_started = True
            end_field()
            state = TokenizerState.FIELD_START
        elif ch == "\n" or ch == "\r":
            if ch == "\r" and i < n and text[i] == "\n":
                i += 1
            end_row()
            state = TokenizerState.FIELD_START
        elif state is TokenizerState.FIELD_START and ch == QUOTE:
            row_started = True
            state = TokenizerState.QUOTED
        else:
            row_started = True
            field.append(ch)
            state = TokenizerState.UNQUOTED

    # End of input closes any open field, quoted or not
    end_row()
    return rows
