"""Main CLI entry point for the md-to-notion command.

This module provides the Typer application that serves as the entry point
for the md-to-notion command-line tool. Positional arguments are the input
paths followed by the destination page ID.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.errors import UsageError
from src.cli.import_command import ImportCommand
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.sync.models import ImportOptions

app = typer.Typer(
    name="md-to-notion",
    help="""Import markdown files and folders into a Notion page.

EXAMPLES:
  md-to-notion ./notes <destination_page_id>                # Import a folder
  md-to-notion a.md b.md <destination_page_id> --verbose    # Import several paths
  md-to-notion ./notes <destination_page_id> --dry-run      # Preview changes

Requires NOTION_API_KEY in the environment or a .env file.""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool, logdir: Optional[str] = None) -> None:
    """Configure logging for the 'src' namespace logger.

    The root logger is left unchanged so third-party libraries (notion-client,
    httpx) keep their own levels.

    Args:
        verbose: INFO level when True, WARNING otherwise
        logdir: Optional directory for log files (creates timestamped log file)
    """
    level = logging.INFO if verbose else logging.WARNING

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"md-to-notion_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=date_format,
        )
        # File log captures debug detail regardless of console verbosity
        app_logger.setLevel(logging.DEBUG)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    arguments: Optional[List[str]] = typer.Argument(
        None,
        help="Input paths (files or directories) followed by the destination page ID",
        metavar="PATH... DESTINATION_PAGE_ID",
        show_default=False,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Re-import documents even if their content is unchanged",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "--dryrun",
        help="Preview changes without calling Notion or writing state",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print per-document progress",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Import markdown files and folders into a Notion page."""
    output = OutputHandler(verbose=verbose, no_color=no_color)

    arguments = arguments or []
    if len(arguments) < 2:
        output.error(str(UsageError()))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _configure_logging(verbose, logdir)

    *input_paths, destination_page_id = arguments
    options = ImportOptions(force=force, dry_run=dry_run, verbose=verbose)

    exit_code = ImportCommand(output_handler=output).run(input_paths, destination_page_id, options)
    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
