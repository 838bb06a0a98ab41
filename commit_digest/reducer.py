"""Shrink oversized diffs by summarizing them chunk by chunk."""

import logging
from typing import List, Optional

from commit_digest.chunker import chunk_diff
from commit_digest.config import CHUNK_OVERLAP, MAX_REDUCTION_ROUNDS, SUMMARIZE_THRESHOLD
from commit_digest.errors import ReductionDidNotConvergeError
from commit_digest.prompts import PromptTemplate
from commit_digest.settings import commit_digest_logger
from commit_digest.summarizer import SummarizerClient


class DiffReducer:
    """Reduce a diff until it fits the backend's context window.

    Text no longer than ``threshold`` is returned as is. Anything longer goes
    through reduction rounds: chunk the text to ``context_length``, summarize
    every chunk in order, join the summaries with newlines. Rounds repeat on
    the joined summaries until they fit ``context_length``.

    A round whose output is not strictly shorter than its input, or running
    out of ``max_rounds``, aborts with :class:`ReductionDidNotConvergeError`.
    """

    def __init__(
        self,
        summarizer: SummarizerClient,
        summary_template: PromptTemplate,
        context_length: int,
        *,
        threshold: int = SUMMARIZE_THRESHOLD,
        overlap: int = CHUNK_OVERLAP,
        max_rounds: int = MAX_REDUCTION_ROUNDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be at least 1, got {max_rounds}")

        self._logger = logger or commit_digest_logger(__name__)
        self.summarizer = summarizer
        self.summary_template = summary_template
        self.context_length = context_length
        self.threshold = threshold
        self.overlap = overlap
        self.max_rounds = max_rounds

    # --- Public API ---
    def reduce(self, text: str) -> str:
        """Return *text*, or a summary of it no longer than ``context_length``."""

        if len(text) <= self.threshold:
            self._logger.debug(
                "Diff length %d within threshold %d, no summarization needed",
                len(text),
                self.threshold,
            )
            return text

        current = text
        for round_number in range(1, self.max_rounds + 1):
            combined = self._run_round(current, round_number)

            if len(combined) <= self.context_length:
                self._logger.debug(
                    "Reduced %d chars to %d chars in %d round(s)",
                    len(text),
                    len(combined),
                    round_number,
                )
                return combined

            if len(combined) >= len(current):
                message = (
                    f"Summaries stopped shrinking in round {round_number}: "
                    f"{len(current)} chars in, {len(combined)} chars out"
                )
                self._logger.debug(message)
                raise ReductionDidNotConvergeError(message)

            current = combined

        message = (
            f"Summary still {len(current)} chars after {self.max_rounds} rounds "
            f"(context length: {self.context_length})"
        )
        self._logger.debug(message)
        raise ReductionDidNotConvergeError(message)

    # --- Private helpers ---
    def _run_round(self, text: str, round_number: int) -> str:
        chunks = chunk_diff(text, self.context_length, self.overlap)
        self._logger.info(
            "Round %d: summarizing %d chars in %d chunk(s)",
            round_number,
            len(text),
            len(chunks),
        )

        summaries: List[str] = []
        for index, chunk in enumerate(chunks, start=1):
            self._logger.debug("Round %d: chunk %d/%d", round_number, index, len(chunks))
            summaries.append(self.summarizer.summarize(chunk, self.summary_template))

        return "\n".join(summaries)
