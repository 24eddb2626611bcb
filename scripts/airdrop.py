#!/usr/bin/env python3
"""
Solana Token Airdrop Script
Distributes the configured SPL token to the recipients listed in a CSV file
(columns: address, amount) and writes per-run CSV reports.
"""

import argparse
import csv
import logging
import os
import sys
import time

from solairdrop.config import load_settings
from solairdrop.csv_input import read_recipients_csv
from solairdrop.errors import AirdropError
from solairdrop.logging_setup import setup_logging
from solairdrop.models import AirdropResult
from solairdrop.service import build_service

logger = logging.getLogger("airdrop")

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Solana SPL Token Airdrop Script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables Required:
  WALLET_PRIVATE_KEY     Base58-encoded private key of source wallet
  TOKEN_MINT_ADDRESS     SPL token mint address

Optional Environment Variables:
  RPC_ENDPOINT           Solana RPC endpoint (default: devnet)
  HELIUS_API_KEY         Bulk transfer provider API key (needed for 10+ recipients)
  BULK_TRANSFER_URL      Bulk transfer provider endpoint
  TOKEN_DECIMALS         Override the decimals read from the mint
  AGGREGATION_THRESHOLD  Batch size from which the bulk provider is used (default: 10)
  JOURNAL_FILE           Append every transfer outcome to this JSON-lines file
  LOG_LEVEL              Logging level (default: INFO)
  LOG_DIR                Also write logs to a timestamped file in this directory

Examples:
  # Dry run mode
  python scripts/airdrop.py --csv data/recipients.csv --dry-run

  # Live execution (after testing with dry run)
  python scripts/airdrop.py --csv data/recipients.csv
        """
    )

    parser.add_argument(
        '--csv',
        dest='csv_file_path',
        required=True,
        help='CSV file with address and amount columns'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Validate recipients and show the transfer plan without sending anything'
    )

    parser.add_argument(
        '--yes',
        action='store_true',
        help='Skip the live-mode confirmation prompt'
    )

    parser.add_argument(
        '--reports-dir',
        default=os.path.join(BASE_DIR, 'reports'),
        help='Directory for per-run CSV reports (default: reports/)'
    )

    return parser.parse_args(argv)


def generate_report(result: AirdropResult, reports_dir: str, dry_run: bool = False) -> str:
    """Log a summary of the run and write successful/failed/summary CSVs. Returns the run directory."""
    total_recipients = len(result.successful) + len(result.failed)
    successful_tokens = sum(o.amount for o in result.successful)
    failed_tokens = sum(o.amount for o in result.failed)
    total_tokens = successful_tokens + failed_tokens
    success_rate = (len(result.successful) / total_recipients * 100) if total_recipients > 0 else 0

    logger.info("=" * 50)
    logger.info("         SOLANA AIRDROP FINAL REPORT")
    logger.info("=" * 50)
    logger.info(f"Method: {result.method.value}")
    if result.aggregate_tx_ref:
        logger.info(f"Aggregate transaction: {result.aggregate_tx_ref}")
    logger.info(f"Total Recipients: {total_recipients:,}")
    logger.info(f"Successful Transfers: {len(result.successful):,}")
    logger.info(f"Failed Transfers: {len(result.failed):,}")
    logger.info("-" * 50)
    logger.info(f"Total Tokens Distributed: {successful_tokens:,.2f}")
    logger.info(f"Tokens Failed to Distribute: {failed_tokens:,.2f}")
    logger.info(f"Transfer Success Rate: {success_rate:.2f}%")
    logger.info("=" * 50)

    for outcome in result.failed:
        logger.warning(f"  {outcome.address}: {outcome.amount:,.2f} tokens ({outcome.failure_reason})")

    timestamp = int(time.time())
    run_prefix = "run_dry" if dry_run else "run_live"
    run_dir = os.path.join(reports_dir, f"{run_prefix}_{timestamp}")
    os.makedirs(run_dir, exist_ok=True)

    if result.successful:
        with open(os.path.join(run_dir, "airdrop_successful.csv"), 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['address', 'amount', 'signature'])
            for outcome in result.successful:
                writer.writerow([outcome.address, outcome.amount, outcome.signature or ""])

    if result.failed:
        with open(os.path.join(run_dir, "airdrop_failed.csv"), 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['address', 'amount', 'reason'])
            for outcome in result.failed:
                writer.writerow([outcome.address, outcome.amount, outcome.failure_reason or ""])

    with open(os.path.join(run_dir, "airdrop_summary.csv"), 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['metric', 'value'])
        writer.writerow(['timestamp', timestamp])
        writer.writerow(['method', result.method.value])
        writer.writerow(['aggregate_tx_ref', result.aggregate_tx_ref or ""])
        writer.writerow(['total_recipients', total_recipients])
        writer.writerow(['successful_transfers', len(result.successful)])
        writer.writerow(['failed_transfers', len(result.failed)])
        writer.writerow(['successful_tokens', successful_tokens])
        writer.writerow(['failed_tokens', failed_tokens])
        writer.writerow(['total_tokens', total_tokens])
        writer.writerow(['transfer_success_rate_percent', f"{success_rate:.2f}"])

    logger.info(f"Reports written to: {run_dir}")
    return run_dir


def main(argv=None):
    """Main entry point for the airdrop script."""
    args = parse_arguments(argv)
    try:
        settings = load_settings(os.path.join(BASE_DIR, '.env'))
    except AirdropError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    setup_logging(settings.log_level, settings.log_dir)

    try:
        service = build_service(settings)

        recipients = read_recipients_csv(args.csv_file_path)
        validation = service.validate_recipients(recipients)
        if validation.errors:
            for error in validation.errors:
                logger.error(error)
            logger.error(f"{len(validation.errors)} invalid recipients; nothing was sent")
            return 1

        recipients = validation.validated_recipients
        method = service.orchestrator.select_method(len(recipients))
        total_tokens = sum(r.amount for r in recipients)
        logger.info(f"Recipients: {len(recipients):,}")
        logger.info(f"Total tokens to distribute: {total_tokens:,.2f}")
        logger.info(f"Transfer method: {method.value}")

        if args.dry_run:
            logger.info("DRY RUN: no transfers were sent")
            return 0

        if not args.yes:
            confirmation = input("LIVE MODE: This will execute real token transfers. Continue? (yes/no): ")
            if confirmation.lower() not in ['yes', 'y']:
                print("Operation cancelled.")
                return 0

        result = service.process_airdrop(recipients)
        generate_report(result, args.reports_dir)
        return 0 if not result.failed else 1

    except FileNotFoundError as e:
        logger.error(f"CSV file not found: {e.filename}")
        return 1
    except AirdropError as e:
        logger.error(f"Airdrop failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user")
        if settings.journal_file:
            logger.warning(f"Completed transfers are listed in {settings.journal_file}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
