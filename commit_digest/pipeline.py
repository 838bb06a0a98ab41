"""Turn a diff into a commit message: reduce it if needed, then generate."""

import logging
from typing import Optional

from commit_digest.backend import OllamaClient, TextBackend
from commit_digest.prompts import PromptTemplate
from commit_digest.reducer import DiffReducer
from commit_digest.schemas import CommitDigestConfig
from commit_digest.settings import commit_digest_logger
from commit_digest.summarizer import SummarizerClient


class CommitMessagePipeline:
    """Run the full diff-to-commit-message flow for one diff.

    Attributes:
        config (CommitDigestConfig): Effective settings for the run.
        summarizer (SummarizerClient): Makes every backend call.
        reducer (DiffReducer): Shrinks oversized diffs before generation.
    """

    def __init__(
        self,
        config: CommitDigestConfig,
        backend: Optional[TextBackend] = None,
        reducer: Optional[DiffReducer] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Wire the pipeline together.

        Args:
            config: Effective configuration.
            backend: Text backend; defaults to an :class:`OllamaClient` for *config*.
            reducer: Reducer to use instead of one built from *config*.
            logger: Logger to use instead of the module logger.
        """
        self._logger = logger or commit_digest_logger(__name__)
        self.config = config
        self.summarizer = SummarizerClient(backend or OllamaClient(config))
        self.commit_template = PromptTemplate(config.commit_message_prompt)
        self.reducer = reducer or DiffReducer(
            self.summarizer,
            PromptTemplate(config.summary_prompt),
            config.context_length,
        )

    # --- Public API ---
    def run(self, diff: str) -> str:
        """Return the raw (unsanitized) commit message for *diff*.

        Raises:
            BackendError: If any backend call fails.
            ReductionDidNotConvergeError: If the diff cannot be reduced.
        """
        self._logger.debug("Starting pipeline for diff of %d chars", len(diff))

        reduced = self.reducer.reduce(diff)
        message = self.generate(reduced)

        self._logger.debug("Pipeline completed successfully")
        return message

    def generate(self, text: str) -> str:
        """Make the single commit-message call for already reduced *text*."""

        return self.summarizer.generate(text, self.commit_template)
