#!/usr/bin/env python3
"""
Purchase-order ingestion - CLI entry point.

Usage examples:
  python main.py parse export.csv                       # Print records as JSON
  python main.py parse export.csv -o output/pos.json    # Write records to a file
  python main.py parse export.csv --report              # Include skipped rows
  python main.py parse export.csv --delimiter ";"       # Semicolon extracts
  python main.py check-date 29/02/2024                  # Validate a single date
"""
import json
import logging
import sys
from pathlib import Path

import click

from config import Config
from pipeline.header_resolver import MissingColumnsError
from pipeline.po_parser import PurchaseOrderParser, parse_date


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Purchase-order ingestion: turn vendor CSV extracts into validated records."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _setup_logging(verbose)


# --------------------------------------------------------------------
# parse command
# --------------------------------------------------------------------

@cli.command()
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False),
              help="Write JSON here instead of stdout")
@click.option("--no-pretty", is_flag=True, help="Output compact (non-indented) JSON")
@click.option("--delimiter", default=None, help="Field delimiter (default: PO_CSV_DELIMITER or ',')")
@click.option("--carry-forward-supplier", is_flag=True,
              help="Fill empty Supplier cells from the previous row")
@click.option("--report", is_flag=True, help="Emit the full parse report, including skipped rows")
@click.pass_context
def parse(
    ctx: click.Context,
    csv_file: str,
    output: str | None,
    no_pretty: bool,
    delimiter: str | None,
    carry_forward_supplier: bool,
    report: bool,
) -> None:
    """Parse a purchase-order CSV_FILE and emit the accepted records as JSON."""
    config = Config()
    if delimiter:
        config.csv_delimiter = delimiter
    if carry_forward_supplier:
        config.carry_forward_supplier = True
    if no_pretty:
        config.pretty_json = False

    try:
        # newline="" keeps \r\n inside quoted cells as written
        with open(csv_file, encoding=config.file_encoding, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Could not read {csv_file}: {e}") from e

    try:
        result = PurchaseOrderParser(config).parse_with_report(text)
    except MissingColumnsError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        # Unusable dialect settings, e.g. a quote character as delimiter
        raise click.ClickException(f"Invalid CSV settings: {e}") from e

    if report:
        payload = result.model_dump(mode="json", by_alias=True)
    else:
        payload = [po.model_dump(mode="json", by_alias=True) for po in result.records]
    body = json.dumps(payload, indent=2 if config.pretty_json else None, ensure_ascii=False)

    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(body + "\n", encoding="utf-8")
        click.echo(f"Results written to: {out_path}", err=True)
    else:
        click.echo(body)

    click.echo(result.summary(), err=True)


# --------------------------------------------------------------------
# check-date command
# --------------------------------------------------------------------

@cli.command("check-date")
@click.argument("value")
def check_date(value: str) -> None:
    """Validate a D/M/Y date VALUE and print it in ISO form."""
    parsed = parse_date(value)
    if parsed is None:
        click.echo(f"✗ Invalid date: {value}", err=True)
        sys.exit(1)
    click.echo(parsed.isoformat())


if __name__ == "__main__":
    cli()
