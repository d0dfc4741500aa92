"""
Command-line interface for SBET files.

Usage:
    sbet to-csv INPUT OUTPUT [--decimate N] [--include-time]
    sbet filter INPUT OUTPUT [--start-time T] [--stop-time T]
    sbet interpolate INPUT TIME [TIME ...]
    sbet info INPUT

Use '-' for INPUT or OUTPUT to read from stdin or write to stdout.
"""

import argparse
import csv
import logging
import sys
from typing import List, Optional, Tuple

from .config import Config
from .errors import SbetError
from .export import filter_time_range, write_csv
from .interpolate import TrajectoryInterpolator
from .point import FIELD_NAMES, Point
from .reader import Reader, estimate_point_count, read_endpoints
from .writer import Writer

STDIO = '-'

logger = logging.getLogger(__name__)


def setup_logging(level: str = 'INFO') -> None:
    """Configure logging. Records go to stderr, stdout may carry data."""
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()],
        force=True,
    )


def _open_reader(path: str) -> Reader:
    if path == STDIO:
        return Reader(sys.stdin.buffer)
    return Reader.from_path(path)


def _open_writer(path: str) -> Writer:
    if path == STDIO:
        return Writer(sys.stdout.buffer)
    return Writer.from_path(path)


def cmd_to_csv(args: argparse.Namespace, config: Config) -> int:
    decimate = args.decimate if args.decimate is not None else config.csv.decimate
    include_time = args.include_time or config.csv.include_time

    with _open_reader(args.input) as reader:
        points = (result.unwrap() for result in reader.decimate(decimate))
        if args.output == STDIO:
            rows = write_csv(points, sys.stdout, include_time=include_time)
            sys.stdout.flush()
        else:
            with open(args.output, 'w', newline='') as f:
                rows = write_csv(points, f, include_time=include_time)

    logger.info(f"Converted {rows} points (decimation {decimate}) to {args.output}")
    return 0


def cmd_filter(args: argparse.Namespace, config: Config) -> int:
    start_time = args.start_time if args.start_time is not None else config.filter.start_time
    stop_time = args.stop_time if args.stop_time is not None else config.filter.stop_time

    with _open_reader(args.input) as reader, _open_writer(args.output) as writer:
        kept = writer.write_all(filter_time_range(reader.points(), start_time, stop_time))
        if args.output == STDIO:
            writer.sink.flush()
        read = reader.records_read

    logger.info(f"Kept {kept} of {read} points in [{start_time}, {stop_time}]")
    return 0


def cmd_interpolate(args: argparse.Namespace, config: Config) -> int:
    with _open_reader(args.input) as reader:
        interpolator = TrajectoryInterpolator.from_reader(reader)

    # Fail before any output is written
    points = interpolator.interpolate_many(args.times)

    writer = csv.writer(sys.stdout, lineterminator='\n')
    writer.writerow(FIELD_NAMES)
    for point in points:
        writer.writerow(point.values())
    sys.stdout.flush()
    return 0


def _stream_endpoints(reader: Reader) -> Tuple[int, Optional[Point], Optional[Point]]:
    count, first, last = 0, None, None
    for result in reader:
        if not result.ok:
            logger.warning(f"Stopped after {count} points: {result.error}")
            break
        if first is None:
            first = result.point
        last = result.point
        count += 1
    return count, first, last


def cmd_info(args: argparse.Namespace, config: Config) -> int:
    if args.input == STDIO:
        count, first, last = _stream_endpoints(Reader(sys.stdin.buffer))
    else:
        count = estimate_point_count(args.input)
        endpoints = read_endpoints(args.input)
        first, last = endpoints if endpoints else (None, None)

    print(f"points:     {count}")
    if first is not None:
        print(f"start time: {first.time}")
        print(f"end time:   {last.time}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sbet',
        description='Read, convert and interpolate SBET trajectory files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
    # Every 100th point with time, as CSV
    sbet to-csv flight.sbet flight.csv --decimate 100 --include-time

    # Cut a time window, writing to stdout
    sbet filter flight.sbet - --start-time 380000 --stop-time 381000

    # Pose at two image capture times
    sbet interpolate flight.sbet 380123.25 380124.75
'''
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='Path to YAML configuration file with default options'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    to_csv = subparsers.add_parser('to-csv', help='Convert SBET to CSV')
    to_csv.add_argument('input', help="SBET file to read, '-' for stdin")
    to_csv.add_argument('output', help="CSV file to write, '-' for stdout")
    to_csv.add_argument(
        '--decimate', '-d',
        type=int,
        default=None,
        help='Keep every Nth point (default: 1)'
    )
    to_csv.add_argument(
        '--include-time', '-t',
        action='store_true',
        help='Append a time column'
    )
    to_csv.set_defaults(func=cmd_to_csv)

    filt = subparsers.add_parser('filter', help='Keep points within a time window')
    filt.add_argument('input', help="SBET file to read, '-' for stdin")
    filt.add_argument('output', help="SBET file to write, '-' for stdout")
    filt.add_argument(
        '--start-time',
        type=float,
        default=None,
        help='Inclusive start time (default: -inf)'
    )
    filt.add_argument(
        '--stop-time',
        type=float,
        default=None,
        help='Inclusive stop time (default: inf)'
    )
    filt.set_defaults(func=cmd_filter)

    interp = subparsers.add_parser('interpolate', help='Interpolate points at given times')
    interp.add_argument('input', help="SBET file to read, '-' for stdin")
    interp.add_argument('times', type=float, nargs='+', metavar='TIME', help='Query times')
    interp.set_defaults(func=cmd_interpolate)

    info = subparsers.add_parser('info', help='Show point count and time range')
    info.add_argument('input', help="SBET file to read, '-' for stdin")
    info.set_defaults(func=cmd_info)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging('DEBUG' if args.verbose else 'INFO')

    try:
        config = Config.from_yaml(args.config) if args.config else Config()
        if not args.verbose:
            logging.getLogger().setLevel(config.log_level)

        if args.command == 'to-csv' and args.decimate is not None and args.decimate < 1:
            raise ValueError(f"--decimate must be >= 1, got {args.decimate}")

        return args.func(args, config)

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except SbetError as e:
        logger.error(f"SBET error: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
