"""
Pytest configuration and shared fixtures for the PO ingestion test suite.
"""
import os
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
os.chdir(PROJECT_ROOT)

HEADER = (
    "Date,Supplier,Order No.,Ref No.,Due Date,Branch,Requisition Type,"
    "Item/Ledger Group,Item,Min Qty,Max Qty,Unit,Rate,Delivery Date,CGST,SGST,"
    "IGST,VAT,Last Approved Rate,Last Supplier,Broker,Total Amount,Status,"
    "Delivery Type,Open PO,Open PO No."
)

WEIGHTED_HEADER = (
    "Date,Supplier,Order No.,Ref No.,Due Date,Branch,Requisition Type,"
    "Item/Ledger Group,Item,Min Qty,Max Qty,Weight,Unit,Rate,Pending Wt.,"
    "Delivery Date,CGST,SGST,IGST,VAT,Last Approved Rate,Last Supplier,Broker,"
    "Total Amount,Status,Delivery Type,Open PO,Open PO No."
)

# Values in HEADER order
DEFAULT_ROW = {
    "Date": "15/03/24",
    "Supplier": "ABC Corp",
    "Order No.": "PO-001",
    "Ref No.": "REF-001",
    "Due Date": "20/03/24",
    "Branch": "Branch A",
    "Requisition Type": "Type A",
    "Item/Ledger Group": "Group A",
    "Item": "Item A",
    "Min Qty": "10",
    "Max Qty": "20",
    "Unit": "KG",
    "Rate": "100.50",
    "Delivery Date": "25/03/24",
    "CGST": "9",
    "SGST": "9",
    "IGST": "0",
    "VAT": "0",
    "Last Approved Rate": "95.50",
    "Last Supplier": "ABC Corp",
    "Broker": "Broker A",
    "Total Amount": "2000.00",
    "Status": "Pending",
    "Delivery Type": "Type A",
    "Open PO": "Yes",
    "Open PO No.": "PO-001",
}


def make_row(**overrides: str) -> str:
    """
    Build one CSV data line in HEADER order.

    Keyword names are the header names with spaces, dots and slashes
    replaced by underscores, e.g. Order_No_="PO-9", Total_Amount="-5".
    Values are written as given, so callers quote cells themselves.
    """
    values = dict(DEFAULT_ROW)
    for key, value in overrides.items():
        header = next(h for h in values if _kwarg_name(h) == key)
        values[header] = value
    return ",".join(values.values())


def _kwarg_name(header: str) -> str:
    return header.replace(" ", "_").replace(".", "_").replace("/", "_")


def make_csv(*rows: str, header: str = HEADER, newline: str = "\n") -> str:
    return newline.join((header,) + rows)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files."""
    tmp_path = tempfile.mkdtemp(prefix="po_ingest_test_")
    yield Path(tmp_path)
    shutil.rmtree(tmp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_settings(temp_dir: Path, monkeypatch) -> None:
    """Keep a developer's config/ingest_settings.json and PO_* env vars out of tests."""
    monkeypatch.setenv("CONFIG_DIR", str(temp_dir / "config"))
    for name in ("PO_CSV_DELIMITER", "PO_FILE_ENCODING", "PO_CARRY_FORWARD_SUPPLIER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixed_instant() -> datetime:
    return datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(fixed_instant):
    from pipeline.identity import FixedClock
    return FixedClock(fixed_instant)


@pytest.fixture
def parser(fixed_clock):
    """A parser with a pinned clock and deterministic ids."""
    from pipeline.identity import SequentialIdGenerator
    from pipeline.po_parser import PurchaseOrderParser
    return PurchaseOrderParser(clock=fixed_clock, id_generator=SequentialIdGenerator())


@pytest.fixture
def sample_csv() -> str:
    """A small, well-formed extract with two valid rows."""
    return make_csv(
        make_row(),
        make_row(Supplier="XYZ Ltd", Order_No_="PO-002", Rate="200.75", Total_Amount="4000.50"),
    )


@pytest.fixture
def sample_csv_file(temp_dir: Path, sample_csv: str) -> Path:
    csv_path = temp_dir / "purchase_orders.csv"
    csv_path.write_text(sample_csv, encoding="utf-8")
    return csv_path


# Configure pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
