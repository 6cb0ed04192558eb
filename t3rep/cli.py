"""
t3rep - Monthly CSV report extractor (command line)

Examples:
  # Generate missing reports, one system at a time
  t3rep reports.json

  # Four systems in parallel, show progress messages
  t3rep --parallel 4 --verbose reports.json

  # Month boundaries in a given timezone, log to file as well
  t3rep --timezone "Asia/Singapore" --log-file t3rep.log reports.json
"""

import argparse
import sys
from datetime import datetime

import pytz

from t3rep.config import load_config
from t3rep.dispatch import run
from t3rep.errors import ConfigurationError
from t3rep.logs import setup_logging


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='t3rep',
        description='Generate monthly CSV reports from SQL Server databases.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split('\n', 2)[2],
    )
    parser.add_argument(
        'config',
        help='JSON configuration file'
    )
    parser.add_argument(
        '--parallel',
        type=int,
        default=1,
        help='Number of concurrent report creations (default: 1, values below 1 count as 1)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show information messages for debugging'
    )
    parser.add_argument(
        '--timezone',
        help='IANA timezone used for month boundaries (e.g., "Europe/London"). Default: local time'
    )
    parser.add_argument(
        '--log-file',
        help='Also write all log messages to this file'
    )

    args = parser.parse_args(argv)

    if args.timezone:
        try:
            pytz.timezone(args.timezone)
        except pytz.exceptions.UnknownTimeZoneError:
            parser.error(f'Invalid timezone: {args.timezone}. Use IANA timezone names like "Europe/London" or "UTC"')

    return args


def current_time(timezone=None):
    """Wall-clock now, in the given IANA timezone or in local time."""
    if timezone:
        return datetime.now(pytz.timezone(timezone)).replace(tzinfo=None)
    return datetime.now()


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    logs = setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        cf = load_config(args.config)
    except ConfigurationError as e:
        logs.err.error(f'fatal: cannot start: {e}')
        sys.exit(1)

    now = current_time(args.timezone)
    logs.info.info(f'Generating {cf.months} monthly reports for {len(cf.systems)} systems '
                   f'(parallel: {max(1, args.parallel)})')
    summary = run(cf, logs, now, parallel=args.parallel)
    logs.info.info(summary.report())


if __name__ == '__main__':
    main()
