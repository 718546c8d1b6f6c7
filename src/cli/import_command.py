"""Import command orchestration for CLI.

This module provides the ImportCommand class that wires the scanner, the
Notion API wrapper and the sync engine together and translates exceptions
into exit codes and a single error line on stderr.
"""

import logging
from typing import List, Optional

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.file_mapper.scanner import scan_multiple_inputs
from src.notion_api.api_wrapper import APIWrapper
from src.notion_api.auth import Authenticator
from src.notion_api.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    MissingCredentialsError,
    SyncError,
)
from src.sync.errors import DocumentProcessingError
from src.sync.models import ImportOptions
from src.sync.sync_engine import SyncEngine

logger = logging.getLogger(__name__)

COMPLETION_MESSAGE = "Import complete."


class ImportCommand:
    """Runs one import from the command line.

    The workflow:
        1. Load the Notion token (fails before any filesystem work)
        2. Scan the input paths
        3. Run the sync engine against the destination page
        4. Return an exit code

    Example:
        >>> cmd = ImportCommand(output_handler=OutputHandler(verbose=True))
        >>> exit_code = cmd.run(["./notes"], "abc123", ImportOptions(verbose=True))
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        api_wrapper: Optional[APIWrapper] = None,
        state_path: Optional[str] = None,
    ):
        """Initialize import command with dependencies.

        Args:
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for the Notion token (optional)
            api_wrapper: Pre-built APIWrapper, used by tests (optional)
            state_path: State file path (defaults to ./.notion-sync.json)
        """
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.api_wrapper = api_wrapper
        self.state_path = state_path

    def run(self, input_paths: List[str], destination_page_id: str, options: ImportOptions) -> ExitCode:
        """Execute the import.

        Args:
            input_paths: Files and/or directories to import
            destination_page_id: Notion page to import under
            options: Force, dry-run and verbose flags

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            if not self.authenticator:
                self.authenticator = Authenticator()
            # Validate the token up front so no work happens without it
            self.authenticator.get_credentials()

            if not self.api_wrapper:
                self.api_wrapper = APIWrapper(self.authenticator)

            with self.output_handler.spinner("Scanning inputs..."):
                scan = scan_multiple_inputs(input_paths)
            logger.info(f"Importing {len(scan.md_files)} file(s) from {scan.root_dir}")

            engine = SyncEngine(
                self.api_wrapper,
                output=self.output_handler,
                state_path=self.state_path,
            )
            summary = engine.import_markdown(scan, destination_page_id, options)

            if options.verbose:
                self.output_handler.print_summary(summary)
                self.output_handler.print(COMPLETION_MESSAGE)
            return ExitCode.SUCCESS

        except MissingCredentialsError as e:
            logger.debug(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except DocumentProcessingError as e:
            logger.debug(str(e))
            self.output_handler.error(str(e))
            return self._exit_code_for(e.original)

        except (InvalidCredentialsError, APIUnreachableError, APIAccessError) as e:
            logger.debug(f"API error: {e}")
            self.output_handler.error(str(e))
            return self._exit_code_for(e)

        except SyncError as e:
            logger.debug(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during import")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

    @staticmethod
    def _exit_code_for(error: Exception) -> ExitCode:
        if isinstance(error, InvalidCredentialsError):
            return ExitCode.AUTH_ERROR
        if isinstance(error, (APIUnreachableError, APIAccessError)):
            return ExitCode.NETWORK_ERROR
        return ExitCode.GENERAL_ERROR
