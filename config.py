"""
Central configuration for the purchase-order ingestion pipeline.

Override via environment variables or by passing a Config instance directly.

Settings priority (highest wins):
  1. Environment variables
  2. config/ingest_settings.json  (admin-editable, persisted)
  3. Hardcoded defaults in this file
"""
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# Project root (directory containing this file)
PROJECT_ROOT = Path(__file__).parent

SETTINGS_FILENAME = "ingest_settings.json"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class Config:
    # --- CSV dialect ---
    csv_delimiter: str = field(
        default_factory=lambda: os.getenv("PO_CSV_DELIMITER", ",")
    )
    file_encoding: str = field(
        default_factory=lambda: os.getenv("PO_FILE_ENCODING", "utf-8")
    )

    # --- Row handling ---
    carry_forward_supplier: bool = field(
        default_factory=lambda: _env_flag("PO_CARRY_FORWARD_SUPPLIER")
    )
    # carry_forward_supplier=True → an empty Supplier cell inherits the previous
    # row's supplier (vendor extracts that only name the supplier once per block)

    # --- Output settings ---
    pretty_json: bool = True       # Indent JSON output for human readability

    def __post_init__(self) -> None:
        """Overlay runtime-tunable settings from ingest_settings.json if present."""
        config_dir = Path(os.getenv("CONFIG_DIR", str(PROJECT_ROOT / "config")))
        settings_file = config_dir / SETTINGS_FILENAME
        if not settings_file.exists():
            return
        _type_map: dict[str, type] = {
            "csv_delimiter":          str,
            "file_encoding":          str,
            "carry_forward_supplier": bool,
            "pretty_json":            bool,
        }
        try:
            with open(settings_file, encoding="utf-8") as f:
                overrides = {k: v for k, v in json.load(f).items() if not k.startswith("_")}
            for key, val in overrides.items():
                # Environment variables win over the settings file
                if key in _type_map and hasattr(self, key) and not _env_overridden(key):
                    setattr(self, key, _type_map[key](val))
        except Exception as exc:
            logger.warning("Failed to load %s: %s", SETTINGS_FILENAME, exc)


_ENV_NAMES = {
    "csv_delimiter":          "PO_CSV_DELIMITER",
    "file_encoding":          "PO_FILE_ENCODING",
    "carry_forward_supplier": "PO_CARRY_FORWARD_SUPPLIER",
}


def _env_overridden(key: str) -> bool:
    env_name = _ENV_NAMES.get(key)
    return env_name is not None and env_name in os.environ
