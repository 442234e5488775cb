"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping

import pandas as pd

from .models import DependencyAlternatives
from .stanza import PackageStanza


logger = logging.getLogger(__name__)

PACKAGE_COLUMNS = ["package", "version", "status", "num_dependency_groups"]
REQUIRES_COLUMNS = ["package", "group", "position", "dependency", "operator", "version"]
SHEET_NAME_LIMIT = 31


def packages_frame(packages: Mapping[str, PackageStanza], field: str = "Depends") -> pd.DataFrame:
    """One row per installed package, sorted by name.

    ``num_dependency_groups`` counts the groups of ``field``.
    """
    rows = []
    for name in sorted(packages):
        stanza = packages[name]
        rows.append({
            "package": name,
            "version": stanza.version,
            "status": stanza.status,
            "num_dependency_groups": len(stanza.relationship(field)),
        })
    return pd.DataFrame(rows, columns=PACKAGE_COLUMNS)


def requires_frame(package: PackageStanza, field: str = "Depends") -> pd.DataFrame:
    """One row per alternative of each group in ``field``.

    ``group`` numbers the AND-list entries and ``position`` the preference
    order inside a group, both starting at 0.
    """
    rows = []
    for group_index, group in enumerate(package.relationship(field)):
        for position, spec in enumerate(group):
            rows.append({
                "package": package.name,
                "group": group_index,
                "position": position,
                "dependency": spec.name,
                "operator": spec.operator.value if spec.operator else None,
                "version": spec.version,
            })
    return pd.DataFrame(rows, columns=REQUIRES_COLUMNS)


def print_summary(package: PackageStanza, field: str, groups: List[DependencyAlternatives]) -> None:
    logger.info("=" * 60)
    logger.info("Package: %s", package.name)
    logger.info("Version: %s", package.version)
    logger.info("Status: %s", package.status)
    logger.info("-" * 60)
    logger.info("%s: %d groups", field, len(groups))
    for group in groups:
        logger.info("  %s", group)
    logger.info("=" * 60)


def build_results(package: PackageStanza, field: str = "Depends") -> Dict:
    groups = package.relationship(field)
    return {
        "package": package.name,
        "version": package.version,
        "status": package.status,
        "field": field,
        "groups": [
            [
                {
                    "name": spec.name,
                    "operator": spec.operator.value if spec.operator else None,
                    "version": spec.version,
                }
                for spec in group
            ]
            for group in groups
        ],
    }


def save_results_json(results: Dict, output_dir: Path, name: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / f"{name}_results.json"
    with open(results_file, 'w') as f:
        json.dump(results, f, indent=2, default=str)
    logger.info("Results saved to: %s", results_file)
    return results_file


def export_requires_csv(package: PackageStanza, output_dir: Path, field: str = "Depends") -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / f"{package.name}_{field.lower()}.csv"
    requires_frame(package, field).to_csv(csv_file, index=False)
    logger.info("Dependency table saved to: %s", csv_file)
    return csv_file


def sheet_names(names: List[str], reserved: str = "packages") -> Dict[str, str]:
    """Map each name to a distinct Excel sheet name.

    Excel limits sheet names to 31 characters and compares them without
    case. Names that collide after truncation, or with ``reserved``, get a
    ``~N`` suffix.
    """
    taken = {reserved.lower()}
    result = {}
    for name in names:
        sheet_name = name[:SHEET_NAME_LIMIT]
        counter = 1
        while sheet_name.lower() in taken:
            suffix = f"~{counter}"
            sheet_name = name[:SHEET_NAME_LIMIT - len(suffix)] + suffix
            counter += 1
        taken.add(sheet_name.lower())
        result[name] = sheet_name
    return result


def export_worksheets(
    packages: Mapping[str, PackageStanza],
    output_dir: Path,
    name: str,
    field: str = "Depends",
) -> Path:
    """Write an Excel workbook with a package sheet and one sheet per requested package.

    Only the packages in ``packages`` are written; pass a subset to keep the
    workbook small. All tables are built before the file is opened, so a
    malformed relationship field leaves no workbook behind.
    """
    ordered = sorted(packages)
    summary = packages_frame(packages, field)
    frames = {pkg_name: requires_frame(packages[pkg_name], field) for pkg_name in ordered}
    names = sheet_names(ordered)

    output_dir.mkdir(parents=True, exist_ok=True)
    excel_file = output_dir / f"{name}_worksheets.xlsx"
    with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
        summary.to_excel(writer, sheet_name="packages", index=False)
        for pkg_name in ordered:
            frames[pkg_name].to_excel(writer, sheet_name=names[pkg_name], index=False)
    logger.info("Worksheets saved to: %s", excel_file)
    return excel_file
