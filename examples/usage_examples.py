#!/usr/bin/env python3
"""
Example script showing how to use the dpkg dependency reader.
"""

from pathlib import Path

from dpkg_deps import DEFAULT_STATUS_PATH, PackageDatabase
from dpkg_deps.reporting import export_requires_csv, packages_frame


def example_show_requires(package_name="apache2-bin"):
    """Example: Show the Depends field of one installed package."""
    print("="*60)
    print("Example 1: Dependencies of an installed package")
    print("="*60)

    packages = PackageDatabase.parse(DEFAULT_STATUS_PATH)
    package = packages[package_name]

    print(f"\nPackage: {package.name}")
    print(f"Version: {package.version}")
    for group in package.requires:
        print(f"  {group}")


def example_package_table():
    """Example: Summarize installed packages with pandas."""
    print("\n" + "="*60)
    print("Example 2: Installed package table")
    print("="*60)

    packages = PackageDatabase.parse(DEFAULT_STATUS_PATH)
    df = packages_frame(packages)

    print(f"\nInstalled packages: {len(df)}")
    print(df.sort_values("num_dependency_groups", ascending=False).head(10))


def example_export_csv(package_name="apache2-bin"):
    """Example: Export one package's dependency table."""
    print("\n" + "="*60)
    print("Example 3: Export dependency table")
    print("="*60)

    packages = PackageDatabase.parse(DEFAULT_STATUS_PATH)
    csv_file = export_requires_csv(packages[package_name], Path("./output/example3"))
    print(f"\nSaved to: {csv_file}")


if __name__ == "__main__":
    import sys

    print("dpkg status dependencies - Example Usage")
    print("="*60)
    print("\nNOTE: These examples read the local dpkg status database.")

    try:
        example_show_requires()
        example_package_table()
        example_export_csv()
    except (OSError, KeyError) as e:
        print(f"\nError running examples: {e}", file=sys.stderr)
        sys.exit(1)
