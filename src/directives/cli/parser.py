"""
Command-line argument parser configuration.

Sets up the argument parser for the dlp-directives CLI, which runs the
redact and mask directives over JSON Lines files.
"""

import argparse


def _add_common_run_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--column',
        required=True,
        help='Column whose text is checked for sensitive data'
    )
    parser.add_argument(
        '--info-type',
        required=True,
        help='Comma-separated list of DLP info types (e.g. EMAIL_ADDRESS,PHONE_NUMBER)'
    )
    parser.add_argument(
        '--input',
        default='-',
        help='JSON Lines file with one row object per line (default: stdin)'
    )
    parser.add_argument(
        '--output',
        default='-',
        help='JSON Lines output file (default: stdout)'
    )
    parser.add_argument(
        '--batch-size',
        type=int,
        default=100,
        help='Rows passed to the directive per batch (default: 100)'
    )
    parser.add_argument(
        '--max-retries',
        type=int,
        default=0,
        help='Retries for transient DLP failures (default: 0, no retry)'
    )


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='dlp-directives',
        description='Redact or mask sensitive data in JSON Lines rows with Cloud DLP',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Redact e-mail addresses in the body column
  dlp-directives redact --column body --info-type EMAIL_ADDRESS --input rows.jsonl

  # Redact outside GCP with an explicit project and service account
  dlp-directives redact --column body --info-type EMAIL_ADDRESS,PHONE_NUMBER \\
      --project-id my-project --service-account-file-path sa.json

  # Mask all but the last four digits of credit card numbers
  dlp-directives mask --column card --info-type CREDIT_CARD_NUMBER --mask-char '#' --count 12

  # List available directives and their arguments
  dlp-directives list
        """
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: LOG_LEVEL env var, else INFO)'
    )
    parser.add_argument(
        '--log-json',
        action='store_true',
        default=None,
        help='Emit logs as JSON (default: LOG_JSON env var)'
    )
    parser.add_argument(
        '--otlp-endpoint',
        help='OTLP collector endpoint for traces (default: OTLP_ENDPOINT env var)'
    )
    parser.add_argument(
        '--trace-console',
        action='store_true',
        help='Also print spans to the console (default: TRACE_CONSOLE env var)'
    )
    parser.add_argument(
        '--trace-sampling-rate',
        type=float,
        default=1.0,
        help='Fraction of traces to sample, 0.0-1.0 (default: 1.0)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ========== Redact command ==========
    redact_parser = subparsers.add_parser('redact', help='Remove sensitive data from a column')
    _add_common_run_arguments(redact_parser)
    redact_parser.add_argument(
        '--project-id',
        help='GCP project id (default: resolved from credentials or environment)'
    )
    redact_parser.add_argument(
        '--service-account-file-path',
        help='Service account JSON file (default: application default credentials)'
    )

    # ========== Mask command ==========
    mask_parser = subparsers.add_parser('mask', help='Mask sensitive data in a column')
    _add_common_run_arguments(mask_parser)
    mask_parser.add_argument(
        '--mask-char',
        default='#',
        help='Masking character (default: #)'
    )
    mask_parser.add_argument(
        '--count',
        type=int,
        help='Characters to mask per finding (default: the whole finding)'
    )
    mask_parser.add_argument(
        '--reverse',
        action='store_true',
        help='Mask from the end of each finding instead of the start'
    )

    # ========== List command ==========
    subparsers.add_parser('list', help='List available directives')

    return parser
