"""
CLI interface for the setup package.

Provides command-line argument parsing and main entry point.
"""

import argparse
import os
import sys
from typing import List, Optional

from hudu_setup import __version__
from hudu_setup.errors import (
    ConfigFileError,
    EntropySourceUnavailable,
    InputCancelled,
)
from hudu_setup.ui.console import Console
from hudu_setup.utils.logger import configure_logging, json_logs_requested, logger
from hudu_setup.wizard import SetupWizard


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hudu-setup",
        description="Hudu Self-Hosted .env Wizard - generate a production .env file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hudu-setup                          # Interactive wizard, writes ./.env
  hudu-setup -o /opt/hudu/.env        # Write somewhere else
  hudu-setup --config answers.yaml    # Non-interactive from answers file
  hudu-setup --dry-run                # Preview the file with secrets masked
  hudu-setup --check                  # Audit an existing .env
  hudu-setup --list-steps             # List all setup steps
""",
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        metavar="PATH",
        default=".env",
        help="Path of the .env file to write (default: .env)",
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        metavar="FILE",
        help="Path to an answers file (YAML or JSON) for non-interactive setup",
    )

    # Execution modes
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite an existing .env file without asking",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview the file without writing it",
    )

    parser.add_argument(
        "--check",
        nargs="?",
        const="",
        metavar="PATH",
        help="Audit an existing .env file (defaults to --output)",
    )

    parser.add_argument(
        "--list-steps",
        action="store_true",
        help="List all setup steps",
    )

    # Output options
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Minimal output",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Increase verbosity (debug logs on stderr)",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.verbose:
        configure_logging("DEBUG", json_output=json_logs_requested())

    console = Console(no_color=parsed_args.no_color, quiet=parsed_args.quiet)

    if parsed_args.list_steps:
        return list_steps(console)

    if parsed_args.check is not None:
        return check_env_file(console, parsed_args.check or parsed_args.output)

    try:
        wizard = SetupWizard(
            config_file=parsed_args.config,
            output_path=parsed_args.output,
            force=parsed_args.force,
            dry_run=parsed_args.dry_run,
            quiet=parsed_args.quiet,
            console=console,
        )
        return wizard.run()

    except KeyboardInterrupt:
        console.print()
        console.error("Setup interrupted. No file was written.")
        return 130
    except InputCancelled:
        console.print()
        console.error("Cancelled.")
        return 1
    except EntropySourceUnavailable as e:
        logger.critical("entropy_source_unavailable", error=str(e))
        console.error(f"{e}. Refusing to write weak secrets.")
        return 1
    except ConfigFileError as e:
        console.error(str(e))
        return 1
    except Exception as e:
        console.error(f"An unexpected error occurred: {e}")
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def list_steps(console: Console) -> int:
    """List all setup steps."""
    console.print("\nSetup steps:\n")
    for step_class in SetupWizard.STEP_CLASSES:
        console.print(f"  {step_class.name:12} - {step_class.display_name}")
        if step_class.config_keys:
            console.dim(", ".join(step_class.config_keys))
    return 0


def check_env_file(console: Console, path: str) -> int:
    """Audit an existing .env file."""
    from hudu_setup.config.loader import ConfigLoader
    from hudu_setup.validators.env_file import check_env_values, check_file_mode

    if not os.path.exists(path):
        console.error(f"{path} does not exist.")
        return 1

    try:
        values = ConfigLoader().parse_env_file(path)
    except ConfigFileError as e:
        console.error(str(e))
        return 1

    report = check_env_values(values)
    mode_error = check_file_mode(path)
    if mode_error:
        report.errors.append(mode_error)

    console.print(f"\nChecking {path}:\n")

    if report.missing_keys:
        console.error("Missing keys:")
        for key in report.missing_keys:
            console.print(f"  - {key}")
    for error in report.errors:
        console.error(error)
    for key in report.unknown_keys:
        console.warning(f"Unrecognized key {key}")
    for warning in report.warnings:
        console.warning(warning)

    if not report.ok:
        return 1

    console.success(f"{len(values)} keys present, file permissions are restricted.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
