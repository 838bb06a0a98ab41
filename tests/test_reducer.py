"""Unit tests for DiffReducer."""

import logging
from typing import Callable, List, Optional

import pytest

from commit_digest.chunker import chunk_diff
from commit_digest.errors import (
    BackendStatusError,
    ReductionDidNotConvergeError,
)
from commit_digest.prompts import PromptTemplate
from commit_digest.reducer import DiffReducer
from commit_digest.summarizer import SummarizerClient


SUMMARY_TEMPLATE = PromptTemplate("SUMMARIZE:\n%s")


class FakeBackend:
    """Backend stub answering every prompt through a callback."""

    def __init__(
        self,
        reply: Callable[[str], str] = lambda prompt: "summary",
        fail_on_call: Optional[int] = None,
    ) -> None:
        self.reply = reply
        self.fail_on_call = fail_on_call
        self.prompts: List[str] = []

    def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.fail_on_call == len(self.prompts):
            raise BackendStatusError(500)
        return self.reply(prompt)

    @property
    def payloads(self) -> List[str]:
        return [prompt.split("\n", 1)[1] for prompt in self.prompts]


def _reducer(backend: FakeBackend, **kwargs) -> DiffReducer:
    kwargs.setdefault("context_length", 1000)
    kwargs.setdefault("threshold", 2000)
    return DiffReducer(SummarizerClient(backend), SUMMARY_TEMPLATE, **kwargs)


def _diff(files: int, lines_per_file: int, width: int = 40) -> str:
    lines: List[str] = []
    for index in range(files):
        lines.append(f"diff --git a/file{index}.py b/file{index}.py")
        lines.extend(f"+{'x' * width}" for _ in range(lines_per_file))
    return "\n".join(lines) + "\n"


def test_text_within_threshold_is_returned_unchanged():
    backend = FakeBackend()
    text = "x" * 2000

    assert _reducer(backend).reduce(text) == text
    assert backend.prompts == []


def test_text_above_threshold_but_within_context_is_still_summarized():
    backend = FakeBackend()
    reducer = _reducer(backend, threshold=100, context_length=10_000)

    result = reducer.reduce(_diff(files=1, lines_per_file=5))

    assert result == "summary"
    assert len(backend.prompts) == 1


def test_three_thousand_char_diff_is_summarized_per_chunk():
    backend = FakeBackend(reply=lambda prompt: f"summary of {len(prompt)} chars")
    diff = "".join(f"+{'y' * 58}\n" for _ in range(50))
    assert len(diff) == 3000

    result = _reducer(backend).reduce(diff)

    assert len(backend.prompts) >= 3
    assert result == "\n".join(backend.reply(prompt) for prompt in backend.prompts)
    assert len(result) <= 1000


def test_first_round_chunks_with_context_length_and_five_line_overlap():
    backend = FakeBackend()
    diff = _diff(files=6, lines_per_file=30)

    _reducer(backend, context_length=500).reduce(diff)

    assert backend.payloads == chunk_diff(diff, 500, 5)


def test_chunks_are_summarized_in_order():
    backend = FakeBackend()
    diff = _diff(files=4, lines_per_file=10)

    _reducer(backend, threshold=100).reduce(diff)

    payloads = backend.payloads
    assert len(payloads) == 4
    for index, payload in enumerate(payloads):
        assert f"diff --git a/file{index}.py" in payload


def test_payload_is_rendered_into_summary_template():
    backend = FakeBackend()

    _reducer(backend, threshold=10).reduce(_diff(files=1, lines_per_file=2))

    assert backend.prompts[0].startswith("SUMMARIZE:\ndiff --git a/file0.py")


def test_recurses_until_combined_summary_fits_context():
    def reply(prompt: str) -> str:
        return "s" * max(20, len(prompt) // 8)

    backend = FakeBackend(reply=reply)
    diff = _diff(files=40, lines_per_file=20)

    result = _reducer(backend, context_length=1000).reduce(diff)

    assert len(result) <= 1000
    first_round_calls = 40
    assert len(backend.prompts) > first_round_calls


def test_fixed_size_summaries_converge_for_large_input():
    backend = FakeBackend(reply=lambda prompt: "short summary")
    diff = _diff(files=300, lines_per_file=25, width=60)
    assert len(diff) > 400_000

    result = _reducer(backend, context_length=1000).reduce(diff)

    assert 0 < len(result) <= 1000


def test_failure_on_second_chunk_stops_before_third():
    backend = FakeBackend(fail_on_call=2)
    diff = _diff(files=3, lines_per_file=10)

    with pytest.raises(BackendStatusError):
        _reducer(backend, threshold=100).reduce(diff)

    assert len(backend.prompts) == 2


def test_non_shrinking_summaries_raise_instead_of_looping():
    backend = FakeBackend(reply=lambda prompt: prompt + prompt)
    diff = _diff(files=3, lines_per_file=30)

    with pytest.raises(ReductionDidNotConvergeError, match="stopped shrinking"):
        _reducer(backend).reduce(diff)

    assert len(backend.prompts) == len(chunk_diff(diff, 1000, 5))


def test_round_limit_raises_when_reduction_is_too_slow():
    def reply(prompt: str) -> str:
        payload = prompt.split("\n", 1)[1]
        return payload[: len(payload) // 2]

    backend = FakeBackend(reply=reply)
    diff = _diff(files=10, lines_per_file=20)

    with pytest.raises(ReductionDidNotConvergeError, match="after 2 rounds"):
        _reducer(backend, max_rounds=2).reduce(diff)


def test_max_rounds_must_be_positive():
    with pytest.raises(ValueError):
        _reducer(FakeBackend(), max_rounds=0)


def test_reduce_logs_rounds(caplog):
    caplog.set_level(logging.DEBUG, logger="commit_digest.reducer")

    _reducer(FakeBackend(), threshold=10).reduce(_diff(files=2, lines_per_file=2))

    messages = " ".join(record.message for record in caplog.records)
    assert "Round 1: summarizing" in messages
    assert "in 1 round(s)" in messages
