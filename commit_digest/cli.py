"""Command-line interface for Commit Digest."""
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

import click
import pyperclip

from commit_digest.errors import CommitDigestError, ConfigError
from commit_digest.loader import (
    config_file_path,
    describe_config,
    load_config,
    write_config_file,
)
from commit_digest.pipeline import CommitMessagePipeline
from commit_digest.schemas import CommitDigestConfig
from commit_digest.settings import commit_digest_logger, set_commit_digest_log_level
from commit_digest.utils import sanitize_commit_message

logger = commit_digest_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_INPUT = 2


class CommitDigestCLI:
    """Read a diff from stdin and print a commit message for it."""

    def __init__(
        self,
        stdin: TextIO = sys.stdin,
        config_loader: Optional[Callable[[], CommitDigestConfig]] = None,
        pipeline_factory: Optional[
            Callable[[CommitDigestConfig], CommitMessagePipeline]
        ] = None,
        clipboard_copy: Callable[[str], None] = pyperclip.copy,
        echo: Callable[..., None] = click.echo,
        echo_err: Optional[Callable[[str], None]] = None,
        *,
        copy_to_clipboard: bool = False,
    ) -> None:
        """Create a CLI handler with injectable dependencies for easy testing."""

        self._stdin = stdin
        self._config_loader = config_loader or load_config
        self._pipeline_factory = pipeline_factory or CommitMessagePipeline
        self._clipboard_copy = clipboard_copy
        self._echo = echo
        self._echo_err = echo_err or (lambda message: self._echo(message, err=True))
        self._copy_to_clipboard = copy_to_clipboard

    # --- Public API -----------------------------------------------------
    def run(self) -> int:
        """Execute the CLI workflow and return an exit code."""

        logger.debug("Starting CLI run")

        config = self._load_config()
        if config is None:
            return EXIT_ERROR

        diff = self._read_diff()
        if not diff.strip():
            logger.debug("No diff on stdin")
            self._echo_err("No diff on stdin")
            return EXIT_NO_INPUT

        try:
            commit_message = self._pipeline_factory(config).run(diff)
        except CommitDigestError as exc:
            logger.debug("Commit message generation failed", exc_info=True)
            self._echo_err(f"Error generating commit message: {exc}")
            return EXIT_ERROR

        self._display_commit(sanitize_commit_message(commit_message))
        return EXIT_OK

    def store_config(self, path: Optional[Path] = None) -> int:
        """Write the effective configuration to the config file."""

        config = self._load_config()
        if config is None:
            return EXIT_ERROR

        try:
            written = write_config_file(config, path or config_file_path())
        except ConfigError as exc:
            self._echo_err(f"Error writing config file: {exc}")
            return EXIT_ERROR

        self._echo(f"Configuration file has been updated: {written}")
        return EXIT_OK

    def show_config(self, path: Optional[Path] = None) -> int:
        """Print where configuration is read from and its effective values."""

        config = self._load_config()
        if config is None:
            return EXIT_ERROR

        self._echo(f"Configuration file: {path or config_file_path()}")
        self._echo("Current configuration:")
        self._echo(describe_config(config))
        return EXIT_OK

    # --- Internal helpers ----------------------------------------------
    def _load_config(self) -> Optional[CommitDigestConfig]:
        try:
            return self._config_loader()
        except ConfigError as exc:
            logger.debug("Configuration could not be loaded", exc_info=True)
            self._echo_err(f"Error loading config: {exc}")
            return None

    def _read_diff(self) -> str:
        """Read the whole diff from stdin."""

        logger.debug("Reading diff from stdin")
        diff = self._stdin.read()
        logger.debug("Diff length: %d", len(diff))
        return diff

    def _display_commit(self, commit_message: str) -> None:
        """Print the commit message and optionally copy it."""

        logger.debug("Displaying commit message")
        self._echo(commit_message)

        if self._copy_to_clipboard:
            logger.debug("Copying commit message to clipboard")
            try:
                self._clipboard_copy(commit_message)
            except pyperclip.PyperclipException as exc:
                logger.warning("Could not copy to clipboard: %s", exc)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--copy", is_flag=True, help="Also copy the commit message to the clipboard.")
@click.option(
    "--store-config",
    is_flag=True,
    help="Write the effective configuration to the config file and exit.",
)
@click.option(
    "--show-config",
    is_flag=True,
    help="Print the config file location and effective configuration and exit.",
)
@click.version_option(package_name="commit-digest")
def main(debug: bool, copy: bool, store_config: bool, show_config: bool) -> None:
    """Generate a commit message from a diff piped to stdin.

    \b
    Workflow:
      1. The whole diff is read from stdin.
      2. Diffs longer than 2000 characters are split into chunks
         (one file per chunk where possible), each chunk is summarized
         by Ollama, and summaries are summarized again until they fit
         the context length.
      3. Ollama writes the commit message, which is printed to stdout.

    Usage:
      git diff --staged | commit-digest [--debug] [--copy]
      commit-digest --store-config
      commit-digest --show-config

    \b
    Exit status:
      0  commit message printed
      1  configuration or generation error
      2  nothing on stdin

    \b
    Environment:
      OLLAMA_BASE_URL, OLLAMA_MODEL, OLLAMA_CONTEXT_LENGTH,
      OLLAMA_TEMPERATURE, OLLAMA_REQUEST_TIMEOUT, SYSTEM_PROMPT,
      SUMMARY_PROMPT, COMMIT_MESSAGE_PROMPT (also read from a .env file
      and from ~/.config/commit-digest/commit-digest.ini).
    """
    if debug:
        set_commit_digest_log_level("DEBUG")
        logger.debug("Debug logging enabled via --debug flag")

    if store_config and show_config:
        raise click.UsageError("--store-config and --show-config cannot be combined.")

    cli = CommitDigestCLI(stdin=sys.stdin, copy_to_clipboard=copy)

    if store_config:
        sys.exit(cli.store_config())
    if show_config:
        sys.exit(cli.show_config())

    sys.exit(cli.run())


if __name__ == "__main__":
    main()
