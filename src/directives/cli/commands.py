"""
CLI command implementations.

- redact / mask: run a directive over JSON Lines rows in batches
- list: show registered directives and their usage
"""

import argparse
import contextlib
import json
import logging
import sys
from collections.abc import Iterable, Iterator
from itertools import islice
from typing import IO, Any

from dlp import TransformError

from ..base import Directive, Row
from ..errors import DirectiveError
from ..mask import MaskDirective
from ..redact import RedactDirective
from ..registry import DIRECTIVES

logger = logging.getLogger(__name__)

COMMAND_DIRECTIVES: dict[str, type[Directive]] = {
    'redact': RedactDirective,
    'mask': MaskDirective,
}


def directive_values(args: argparse.Namespace) -> dict[str, Any]:
    """Map parsed CLI options onto directive argument names."""
    values = {
        'column': args.column,
        'info-type': args.info_type,
    }
    if args.command == 'redact':
        values['project-id'] = args.project_id
        values['service-account-file-path'] = args.service_account_file_path
    else:
        values['mask-char'] = args.mask_char
        values['count'] = args.count
        values['reverse'] = args.reverse
    return values


def _open(path: str, mode: str) -> contextlib.AbstractContextManager[IO[str]]:
    if path == '-':
        return contextlib.nullcontext(sys.stdin if 'r' in mode else sys.stdout)
    return open(path, mode, encoding='utf-8')


def read_rows(stream: IO[str]) -> Iterator[Row]:
    """
    Yield one row per non-blank line.

    Raises:
        ValueError: If a line is not a JSON object
    """
    for line_number, line in enumerate(stream, 1):
        if not line.strip():
            continue
        row = json.loads(line)
        if not isinstance(row, dict):
            raise ValueError(f"Line {line_number} is not a JSON object")
        yield row


def batched(rows: Iterable[Row], size: int) -> Iterator[list[Row]]:
    iterator = iter(rows)
    while True:
        batch = list(islice(iterator, size))
        if not batch:
            return
        yield batch


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run the redact or mask directive over the input rows

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code
    """
    if args.batch_size < 1:
        logger.error("--batch-size must be at least 1")
        return 1

    directive = COMMAND_DIRECTIVES[args.command](max_retries=args.max_retries)
    total = 0

    try:
        directive.initialize(directive_values(args))

        with _open(args.input, 'r') as source, _open(args.output, 'w') as sink:
            for batch in batched(read_rows(source), args.batch_size):
                for row in directive.execute(batch):
                    sink.write(json.dumps(row, default=str) + '\n')
                total += len(batch)

    except (DirectiveError, TransformError) as e:
        logger.error(f"{directive.NAME} failed after {total} row(s): {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Unable to process rows: {e}")
        return 1
    finally:
        directive.destroy()

    logger.info(f"{directive.NAME} processed {total} row(s)")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Print every registered directive with its usage."""
    for name in sorted(DIRECTIVES):
        directive = DIRECTIVES[name]()
        print(f"{name}: {directive.DESCRIPTION}")
        print(f"  usage: {directive.define()}")
        print(f"  categories: {', '.join(directive.CATEGORIES)}")
    return 0
