import logging
from typing import Optional

from commit_digest.backend import TextBackend
from commit_digest.prompts import PromptTemplate
from commit_digest.settings import commit_digest_logger


class SummarizerClient:
    """Fill a prompt template with a payload and make one backend call for it."""

    def __init__(
        self,
        backend: TextBackend,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or commit_digest_logger(__name__)
        self.backend = backend

    # --- Public API ---
    def summarize(self, chunk: str, template: PromptTemplate) -> str:
        """Return the backend's summary of one chunk (or combined summary)."""

        self._logger.debug("Summarizing chunk of %d chars", len(chunk))
        return self._complete(chunk, template)

    def generate(self, text: str, template: PromptTemplate) -> str:
        """Return the backend's commit message for the (reduced) diff text."""

        self._logger.debug("Generating commit message from %d chars", len(text))
        return self._complete(text, template)

    # --- Private helpers ---
    def _complete(self, payload: str, template: PromptTemplate) -> str:
        return self.backend.invoke(template.render(payload))
