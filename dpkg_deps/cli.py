"""
Command-line interface for the dpkg dependency tool.
"""

import argparse
import logging
import sys
from pathlib import Path

from .database import DEFAULT_STATUS_PATH, PackageDatabase
from .dependencies import MalformedDependencyError
from .reporting import (
    build_results,
    export_requires_csv,
    export_worksheets,
    print_summary,
    save_results_json,
)


LOG_FORMAT = "[%(levelname)s] %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show the dependencies of a package installed on a dpkg-based system"
    )

    parser.add_argument(
        "package",
        nargs="?",
        default=None,
        help="Installed package to show. Without it, installed packages are listed"
    )

    parser.add_argument(
        "--status-file",
        default=DEFAULT_STATUS_PATH,
        help=f"Path to the dpkg status database. Default: {DEFAULT_STATUS_PATH}"
    )

    parser.add_argument(
        "--field",
        default="Depends",
        help="Relationship field to show (Depends, Pre-Depends, Recommends, ...). Default: Depends"
    )

    parser.add_argument(
        "--save-json",
        action="store_true",
        help="Save the parsed dependency list as JSON"
    )

    parser.add_argument(
        "--get-csv",
        action="store_true",
        help="Export the dependency table as CSV"
    )

    parser.add_argument(
        "--get-worksheets",
        action="store_true",
        help="Export package and dependency tables to an Excel file"
    )

    parser.add_argument(
        "--output-dir",
        default="./output",
        help="Output directory for exported files. Default: ./output"
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: WARNING"
    )

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    try:
        packages = PackageDatabase.parse(args.status_file)
    except OSError as e:
        print(f"Error: cannot read {args.status_file}: {e}", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir)

    if args.package is None:
        for name in sorted(packages):
            print(f"{name} {packages[name].version or ''}".rstrip())
        if args.get_worksheets:
            try:
                excel_file = export_worksheets(packages, output_dir, "installed", args.field)
            except MalformedDependencyError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
            print(f"Worksheets saved to: {excel_file}")
        return 0

    package = packages.get(args.package)
    if package is None:
        print(f"Error: package {args.package} is not installed", file=sys.stderr)
        return 1

    try:
        groups = package.relationship(args.field)
    except MalformedDependencyError as e:
        print(f"Error: {args.package}: {e}", file=sys.stderr)
        return 1

    print_summary(package, args.field, groups)
    for group in groups:
        print(group)

    if args.save_json:
        results_file = save_results_json(build_results(package, args.field), output_dir, package.name)
        print(f"\nResults saved to: {results_file}")

    if args.get_csv:
        csv_file = export_requires_csv(package, output_dir, args.field)
        print(f"Dependency table saved to: {csv_file}")

    if args.get_worksheets:
        try:
            excel_file = export_worksheets({package.name: package}, output_dir, package.name, args.field)
        except MalformedDependencyError as e:
            print(f"Error: {args.package}: {e}", file=sys.stderr)
            return 1
        print(f"Worksheets saved to: {excel_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
