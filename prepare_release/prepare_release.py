#!/usr/bin/env python3
# ==============================================================================
# prepare_release.py - Devcode Release Preparation Script
# ==============================================================================
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# SPDX-License-Identifier: BSD-3-Clause
# See LICENSE file in the project root.
#
# Purpose:
#   Move a devcode project ("private": true in package.json, placeholder
#   name) to its public release configuration. Only managed locations are
#   rewritten; every other occurrence of the devcode is reported for
#   manual review and left untouched.
#
# Usage:
#   devcode-release prepare-release <publish-name> [--target-dir DIR]
#   python -m prepare_release prepare-release <publish-name> [--dry-run]
#
# Examples:
#   devcode-release prepare-release @scope/package
#   devcode-release prepare-release my-package -t ../my-devcode --dry-run
#
# Design Notes:
#   Stages run strictly in order:
#     detect -> managed rewrites -> unmanaged scan -> report
#   Detection failures abort before any file is touched. A failing
#   managed rewrite is recorded and the remaining locations still run.
#   Unmanaged occurrences are advisory and never fail the run.
#
# ==============================================================================

import argparse
import traceback
from pathlib import Path
from typing import List, Optional

from common import (
    print_banner, print_detail, print_error, print_info, print_section,
    print_success, print_warning
)

from .adapters import ManagedLocationRegistry, default_registry
from .detector import detect_devcode
from .models import (
    LocationResult,
    PreparationReport,
    PreparationStage,
    PrepareReleaseError,
    ReleaseConfig,
    RewriteOutcome,
)
from .scanner import find_unmanaged_occurrences


VERSION = '0.1.0'

# Static operator checklist for the tagpr credential
PAT_INSTRUCTIONS = """\
  1. Create a Personal Access Token (classic) at:
       https://github.com/settings/tokens/new
  2. Required permissions:
       • repo (Full control of private repositories)
           - or for public repos: public_repo
       • workflow (Update GitHub Action workflows)
  3. Add the token as a repository secret named PAT_FOR_TAGPR:
       Settings → Secrets and variables → Actions → New repository secret"""

OUTCOME_LABELS = {
    RewriteOutcome.UPDATED: 'updated',
    RewriteOutcome.UNCHANGED: 'already up to date',
    RewriteOutcome.MISSING: 'not present, nothing to do',
}


def run_managed_rewrites(
    config: ReleaseConfig,
    registry: ManagedLocationRegistry,
    devcode: str
) -> List[LocationResult]:
    """
    Apply every managed rewrite in registry order.

    Args:
        config: ReleaseConfig instance
        registry: Managed locations to process
        devcode: Detected devcode identifier

    Returns:
        One LocationResult per registry entry, in registry order
    """
    results = []
    for adapter in registry:
        try:
            outcome = adapter.rewrite(
                config.target_dir, devcode, config.publish_name, dry_run=config.dry_run
            )
            results.append(LocationResult(adapter.file, adapter.description, outcome))
        except Exception as e:
            results.append(LocationResult(
                adapter.file, adapter.description, RewriteOutcome.FAILED, error=str(e)
            ))
    return results


def render_report(report: PreparationReport, verbose: bool = False) -> None:
    """Print the preparation report."""
    prefix = "[DRY RUN] " if report.dry_run else ""

    print_section("\nManaged replacements:")
    for result in report.locations:
        if not result.succeeded:
            print_warning(f"  {result.file}: {result.error}")
            continue
        if report.dry_run and result.outcome is RewriteOutcome.UPDATED:
            print_success(f"  {result.file} ({result.description}) - would update")
        else:
            print_success(f"  {result.file} ({result.description})")
        if verbose:
            print_detail(OUTCOME_LABELS[result.outcome], indent=6)

    if report.occurrences:
        print_warning(
            f"\nFound {len(report.occurrences)} unmanaged occurrence(s) of \"{report.devcode}\":"
        )
        print_info("  These were NOT automatically replaced. Please review manually:")
        for occurrence in report.occurrences:
            print_detail(f"- {occurrence}")
            print_detail(occurrence.content, indent=4)
    elif verbose:
        print_info(f"\nNo unmanaged occurrences of \"{report.devcode}\" found")

    if report.failed_locations:
        print_warning(
            f"\n{len(report.failed_locations)} managed location(s) could not be updated; "
            "fix them by hand"
        )

    print_success(f"\n{prefix}Release preparation complete!")
    print_detail(f"Package renamed: {report.devcode} → {report.publish_name}")
    print_detail("Private flag removed")
    print_detail("Workflows updated to use PAT_FOR_TAGPR")

    print_warning("\nAction required: Set up PAT_FOR_TAGPR secret")
    print(PAT_INSTRUCTIONS)


def prepare_release(
    config: ReleaseConfig,
    registry: Optional[ManagedLocationRegistry] = None
) -> PreparationReport:
    """
    Execute the complete release preparation.

    Args:
        config: ReleaseConfig instance
        registry: Managed locations (default: default_registry())

    Returns:
        The rendered PreparationReport

    Raises:
        PrepareReleaseError: Detection failed; no file was modified
    """
    if registry is None:
        registry = default_registry()

    # Stage 1: Detect devcode (fatal on failure)
    devcode = detect_devcode(config.target_dir)
    report = PreparationReport(
        devcode=devcode,
        publish_name=config.publish_name,
        dry_run=config.dry_run,
        stage=PreparationStage.DETECTING,
    )

    dry_run_prefix = "[DRY RUN] " if config.dry_run else ""
    print_banner(f"{dry_run_prefix}Release Preparation")
    print_info(f"Detected devcode project: {devcode}")
    print_info(f"Preparing release: {devcode} → {config.publish_name}")
    if config.verbose:
        print_info(f"Target:  {config.target_dir}")

    # Stage 2: Managed rewrites (per-location failures are recorded)
    report.stage = PreparationStage.REWRITING
    report.locations = run_managed_rewrites(config, registry, devcode)

    # Stage 3: Unmanaged scan (always runs)
    report.stage = PreparationStage.SCANNING
    report.occurrences = find_unmanaged_occurrences(
        config.target_dir, devcode, registry.managed_files, config.excluded_dirs
    )

    # Stage 4: Report
    report.stage = PreparationStage.REPORTING
    render_report(report, verbose=config.verbose)

    report.stage = PreparationStage.DONE
    return report


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog='devcode-release',
        description='Release tooling for devcode projects',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s prepare-release @scope/package
  %(prog)s prepare-release @scope/package --target-dir ../my-devcode
  %(prog)s prepare-release @scope/package --dry-run -v

prepare-release will:
  1. Detect the devcode name from package.json ("private": true)
  2. Rename the package and remove the private flag
  3. Update the CodeQL config name field
  4. Switch the tagpr workflow to PAT_FOR_TAGPR
  5. Report remaining occurrences of the devcode for manual review
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    prepare = subparsers.add_parser(
        'prepare-release',
        help='Prepare a devcode project for release (auto-detects devcode from package.json)',
        description='Prepare a devcode project for release (auto-detects devcode from package.json)',
    )
    prepare.add_argument(
        'publish_name',
        metavar='publish-name',
        help='Package name to release under (e.g., @scope/package)'
    )
    prepare.add_argument(
        '--target-dir', '-t',
        type=Path,
        default=None,
        help='Target directory (default: current directory)'
    )
    prepare.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be done without making changes'
    )
    prepare.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed progress'
    )
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    target_dir = (args.target_dir or Path.cwd()).resolve()
    if not target_dir.is_dir():
        print_error(f"Failed to prepare release: target directory does not exist: {target_dir}")
        return 1

    try:
        config = ReleaseConfig(
            target_dir=target_dir,
            publish_name=args.publish_name,
            dry_run=args.dry_run,
            verbose=args.verbose,
        )
    except ValueError as e:
        print_error(f"Failed to prepare release: {e}")
        return 1

    try:
        prepare_release(config)
        return 0

    except PrepareReleaseError as e:
        print_error(f"Failed to prepare release: {e}")
        return e.exit_code
    except KeyboardInterrupt:
        print("\n\nRelease preparation interrupted by user")
        return 1
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        traceback.print_exc()
        return 1
