#!/usr/bin/env python3
"""
clonesweep CLI — Command line interface for duplicate file detection and removal.
Uses the same engine as the GUI workers but with console-based interaction.
All operations are safe: deletion moves files to system trash, never permanent erase.
"""
from __future__ import annotations
import argparse
import json
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

from clonesweep.core.models import DuplicateGroup, ScanParams, ScanMode
from clonesweep.core.coordinator import ScanCoordinator
from clonesweep.core.errors import ScanError
from clonesweep.services.duplicate_service import DuplicateService
from clonesweep.services.file_service import DeletionService
from clonesweep.utils.convert_utils import ConvertUtils
from clonesweep.aliases import SCAN_MODE_ALIASES, SCAN_MODE_CHOICES, SCAN_MODE_HELP_TEXT, EPILOG_TEXT

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self, coordinator: Optional[ScanCoordinator] = None,
                 deletion_service: Optional[DeletionService] = None):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.coordinator = coordinator or ScanCoordinator()
        self.deletion_service = deletion_service or DeletionService()

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="clonesweep",
            description="clonesweep — duplicate file finder with safe deletion",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Input directory to scan for duplicates"
        )
        parser.add_argument(
            "--mode",
            choices=SCAN_MODE_CHOICES,
            default="strict",
            type=str,
            help=SCAN_MODE_HELP_TEXT
        )
        parser.add_argument(
            "--min-size", "-m",
            default="0",
            type=str,
            metavar='',
            help="Ignore files smaller than this (e.g., 500KB, 1MB). Default: 0"
        )
        parser.add_argument(
            "--excluded-dirs", "-e",
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Excluded/ignored directories (space separated)"
        )
        parser.add_argument(
            "--workers", "-w",
            type=int,
            default=None,
            metavar='',
            help="Number of hashing threads. Default: number of CPUs"
        )

        # Actions
        parser.add_argument(
            "--keep-largest",
            action="store_true",
            help="Keep the largest file of each duplicate group and move the rest to trash.\n"
                 "Always shows a preview before deletion."
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --keep-largest (for automation/scripts)"
        )

        # Output options
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print duplicate groups as JSON"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress, statistics and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.keep_largest:
            self.error_exit("--force can only be used with --keep-largest")

        if args.keep_largest and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        if args.workers is not None and args.workers < 1:
            self.error_exit("--workers must be at least 1")

        for excl_dir in args.excluded_dirs:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_human_readable(
                root_dir=str(Path(args.input).resolve()),
                mode=SCAN_MODE_ALIASES.get(args.mode, ScanMode.STRICT),
                min_size_str=args.min_size,
                excluded_dirs=args.excluded_dirs,
                max_workers=args.workers,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    def run_scan(self, params: ScanParams) -> List[DuplicateGroup]:
        """Execute the scan; scan-fatal errors end the program."""
        if self.verbose:
            print(f"Finding duplicates (mode: {params.mode.display_name})...")

        try:
            groups = self.coordinator.run(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except ScanError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
            print()
            print(self.coordinator.stats.summary())
        return groups

    def output_results(self, groups: List[DuplicateGroup], as_json: bool = False) -> None:
        """Output duplicate groups as plain text or JSON."""
        if as_json:
            print(json.dumps([g.to_dict() for g in groups], indent=2, ensure_ascii=False))
            return

        if self.quiet:
            return

        if not groups:
            print("No duplicate groups found.")
            return

        total_files = sum(len(g.files) for g in groups)
        print(f"\nFound {len(groups)} duplicate groups ({total_files} files)")

        for idx, group in enumerate(groups, 1):
            size_str = ConvertUtils.bytes_to_human(group.size)
            verified = "" if group.is_verified else " | not content-verified"
            print(f"\nGroup {idx} | Size: {size_str} | Files: {len(group.files)}{verified}")
            for file in group.files:
                print(f"   {file.path}")

    def execute_keep_largest(self, groups: List[DuplicateGroup], force: bool = False) -> None:
        """Keep the largest file per group, trash the rest. Always shows preview before deletion."""
        files_to_delete = DuplicateService.select_all_but_largest(groups)
        if not files_to_delete:
            if not self.quiet:
                print("No duplicate groups found.")
            return

        space_saved = DuplicateService.total_reclaimable_bytes(groups, files_to_delete)
        space_saved_str = ConvertUtils.bytes_to_human(space_saved)

        print()
        for idx, group in enumerate(groups, 1):
            keep = group.largest_file()
            verified = "" if group.is_verified else " | not content-verified"
            print(f"Group {idx} | Size: {ConvertUtils.bytes_to_human(group.size)} | Files: {len(group.files)}{verified}")
            print("-" * 60)
            print(f"   [KEEP] {keep.path}")
            for file in group.files:
                if file is not keep:
                    print(f"   [DEL]  {file.path}")
            print()

        print("=" * 60)
        print(f"Summary: {len(groups)} files preserved, {len(files_to_delete)} files to move to trash")
        print(f"Total space saved: {space_saved_str}")
        print()

        if not all(group.is_verified for group in groups):
            print("WARNING: size-only groups were not compared by content; "
                  "files marked [DEL] may differ from the kept file.")

        if force:
            print("WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )
            response = input(f"Are you sure you want to move {len(files_to_delete)} files to trash? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return

        print(f"\nMoving {len(files_to_delete)} files to trash...")
        outcome = self.deletion_service.delete(files_to_delete)

        if outcome.failed:
            print(f"\nPartial success: {len(outcome.deleted)}/{len(files_to_delete)} files moved to trash.")
            print(f"Failed to delete {len(outcome.failed)} file(s):")
            for path, error in list(outcome.failed.items())[:5]:
                print(f"  • {os.path.basename(path)}: {error}")
            if len(outcome.failed) > 5:
                print(f"  ...and {len(outcome.failed) - 5} more files")
        else:
            print(f"Successfully moved {len(outcome.deleted)} files to trash.")
            print(f"Total space saved: {space_saved_str}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet and not args.json:
            print(f"Scanning directory: {params.root_dir}")

        groups = self.run_scan(params)

        if args.keep_largest:
            self.execute_keep_largest(groups, force=args.force)
        else:
            self.output_results(groups, as_json=args.json)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\nCompleted in {elapsed:.2f} seconds")


def main(argv=None) -> None:
    """Application entry point."""
    logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        app.coordinator.cancel()
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
