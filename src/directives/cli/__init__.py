"""
Command-line interface for the DLP directives.

Available commands:
- redact: remove sensitive data from a column of JSON Lines rows
- mask: mask sensitive data in a column of JSON Lines rows
- list: show registered directives
"""

import sys

from utils.logging import configure_from_env, shutdown_logging
from utils.tracing import initialize_tracing, shutdown_tracing, tracing_requested

from .commands import cmd_list, cmd_run
from .parser import create_parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the dlp-directives CLI"""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Flags override LOG_* environment variables
    configure_from_env(level=args.log_level, json_format=args.log_json)

    try:
        if args.command in ('redact', 'mask'):
            if tracing_requested(args.otlp_endpoint, args.trace_console):
                initialize_tracing(
                    otlp_endpoint=args.otlp_endpoint,
                    console_export=args.trace_console,
                    sampling_rate=args.trace_sampling_rate,
                )
            try:
                code = cmd_run(args)
            finally:
                shutdown_tracing()
        elif args.command == 'list':
            code = cmd_list(args)
        else:
            parser.print_help()
            code = 1
    finally:
        shutdown_logging()

    sys.exit(code)


__all__ = [
    'main',
    'cmd_run',
    'cmd_list',
    'create_parser',
]


if __name__ == '__main__':
    main()
