#!/usr/bin/env python3
"""
SpendLens CLI - Statement analysis from the command line.

Usage:
    spendlens analyze statement.csv
    spendlens analyze statement.pdf --apr 24.99 --json
    spendlens analyze statement.csv --export report.xlsx --store ~/.spendlens/store.json
    spendlens reload --store ~/.spendlens/store.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from spendlens.core.exceptions import SpendLensError
from spendlens.core.preferences import AnalyzerPreferences, CONFIG_DIR_ENV
from spendlens.core.store import JsonFileStore
from spendlens.services.ingestion import AnalysisResult, StatementAnalyzer


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def print_result(result: AnalysisResult, prefs: AnalyzerPreferences) -> None:
    """Print a human-readable analysis summary."""
    fmt = prefs.display.format_currency

    if result.status_message:
        print(f"\n{result.status_message}")
    if result.error_message:
        print(f"\n{result.error_message}")

    if not result.transactions:
        return

    summary = result.summary
    print(f"\nSummary:")
    print(f"  Transactions:        {result.transaction_count}")
    print(f"  Skipped rows:        {result.skipped_rows}")
    print(f"  Total spend:         {fmt(summary.total_spend)}")
    print(f"  Outstanding balance: {fmt(summary.balance)}")
    print(f"  Monthly interest:    {fmt(result.monthly_interest)} at {result.apr}% APR")
    if result.rewards.total > 0:
        print(f"  Extra rewards:       {fmt(result.rewards.total)} with category cards")

    print(f"\nSpend by category:")
    for category, amount in summary.top_categories(limit=10):
        print(f"  {category:<20} {fmt(amount):>14}")

    print(f"\nTop merchants:")
    for merchant, amount in summary.top_merchants(limit=5):
        print(f"  {merchant[:30]:<30} {fmt(amount):>14}")

    if result.subscriptions:
        print(f"\nLikely subscriptions:")
        for sub in result.subscriptions:
            print(
                f"  {sub.merchant[:30]:<30} {fmt(sub.average_amount):>10} "
                f"x{sub.occurrences} (last {sub.last_date.isoformat()})"
            )

    for warning in result.warnings:
        print(f"\nWarning: {warning}")


def emit(result: AnalysisResult, args, prefs: AnalyzerPreferences) -> None:
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result, prefs)


# ============================================================================
# Command Handlers
# ============================================================================

def cmd_analyze(args, analyzer: StatementAnalyzer, prefs: AnalyzerPreferences) -> int:
    """Handle analyze command - parse one statement file."""
    file_path = Path(args.file)
    if not file_path.exists():
        print(f"File not found: {file_path}")
        return 1

    result = analyzer.ingest(file_path.name, file_path.read_bytes(), apr=args.apr)
    emit(result, args, prefs)

    if not result.success:
        return 1

    if args.store:
        analyzer.persist(result, JsonFileStore(Path(args.store).expanduser()), key=args.key)

    if args.export:
        from spendlens.reports import StatementReportGenerator

        try:
            output = StatementReportGenerator(result).export(Path(args.export))
        except ValueError as e:
            print(f"Export failed: {e}")
            return 1
        if not args.json:
            print(f"\nExported to {output}")

    return 0


def cmd_reload(args, analyzer: StatementAnalyzer, prefs: AnalyzerPreferences) -> int:
    """Handle reload command - rebuild insights from a stored transaction list."""
    store = JsonFileStore(Path(args.store).expanduser())
    result = analyzer.reload(store, key=args.key, apr=args.apr)
    if result.transactions:
        result.status_message = f"Loaded {result.transaction_count} stored transactions."
    else:
        result.error_message = "No stored transactions found."
    emit(result, args, prefs)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='spendlens',
        description='SpendLens - statement ingestion and spend insights',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  spendlens analyze statement.csv
  spendlens analyze statement.pdf --apr 24.99 --json
  spendlens analyze statement.csv --export report.xlsx --store store.json
  spendlens reload --store store.json

Configuration is read from <config-dir>/preferences.json; the config dir
defaults to ${CONFIG_DIR_ENV}.
        """
    )

    # Global arguments
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    parser.add_argument('--debug', action='store_true', help='Debug output')
    parser.add_argument('--config-dir', help='Directory containing preferences.json')

    subparsers = parser.add_subparsers(dest='command', help='Command')

    # analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Analyze a CSV or PDF statement')
    analyze_parser.add_argument('file', help='Statement file (.csv or .pdf)')
    analyze_parser.add_argument('--apr', type=float, help='APR in percent (default: from preferences)')
    analyze_parser.add_argument('--json', action='store_true', help='Print the full result as JSON')
    analyze_parser.add_argument('--export', '-e', help='Export to .xlsx or .csv')
    analyze_parser.add_argument('--store', '-s', help='JSON store file to save transactions to')
    analyze_parser.add_argument('--key', help='Store key (default: from preferences)')

    # reload command
    reload_parser = subparsers.add_parser('reload', help='Summarize previously stored transactions')
    reload_parser.add_argument('--store', '-s', required=True, help='JSON store file')
    reload_parser.add_argument('--key', help='Store key (default: from preferences)')
    reload_parser.add_argument('--apr', type=float, help='APR in percent (default: from preferences)')
    reload_parser.add_argument('--json', action='store_true', help='Print the full result as JSON')

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose, args.debug)

    config_dir = Path(args.config_dir) if args.config_dir else None
    prefs = AnalyzerPreferences.load(config_dir)
    analyzer = StatementAnalyzer(preferences=prefs)

    handlers = {
        'analyze': cmd_analyze,
        'reload': cmd_reload,
    }

    try:
        return handlers[args.command](args, analyzer, prefs)
    except SpendLensError as e:
        print(f"Error: {e.message}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
