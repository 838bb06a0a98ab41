"""Split large diffs into bounded, file-aligned chunks."""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from commit_digest.config import FILE_BOUNDARY_MARKER


@dataclass(frozen=True)
class Chunk:
    """A contiguous run of diff lines plus the context copied from its predecessor.

    Attributes:
        lines: The chunk's own lines, in input order.
        overlap: Trailing lines of the previous chunk, prepended for context.
    """

    lines: Tuple[str, ...]
    overlap: Tuple[str, ...] = ()

    @property
    def size(self) -> int:
        """Size of the chunk's own content, counting one separator per line."""

        return sum(len(line) + 1 for line in self.lines)

    @property
    def body(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    @property
    def text(self) -> str:
        """The chunk as sent to the summarizer: overlap prefix, then own content."""

        if not self.overlap:
            return self.body
        return "\n".join(self.overlap) + "\n" + self.body


def is_file_boundary(line: str) -> bool:
    return line.startswith(FILE_BOUNDARY_MARKER)


def split_lines(text: str) -> List[str]:
    """Split *text* on newlines without inventing an empty final line."""

    if not text:
        return []

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def build_chunks(text: str, budget: int, overlap: int) -> List[Chunk]:
    """Split *text* into chunks of at most *budget* characters each.

    A new chunk starts before every file-boundary line and whenever the next
    line would push the current chunk past *budget*. A single line longer
    than *budget* still becomes a chunk of its own; nothing is truncated.
    Every chunk after the first carries the last *overlap* lines of the
    previous chunk's own content.

    Args:
        text: Diff (or summary) text to split.
        budget: Maximum chunk size in characters, excluding the overlap.
        overlap: Number of lines copied from each chunk onto the next.

    Returns:
        Chunks in input order.

    Raises:
        ValueError: If *budget* is not positive or *overlap* is negative.
    """
    if budget <= 0:
        raise ValueError(f"Chunk budget must be positive, got {budget}")
    if overlap < 0:
        raise ValueError(f"Chunk overlap cannot be negative, got {overlap}")

    groups = _group_lines(split_lines(text), budget)
    chunks = [Chunk(lines=tuple(groups[0]))] if groups else []

    for previous, current in zip(groups, groups[1:]):
        prefix = _tail(previous, overlap)
        chunks.append(Chunk(lines=tuple(current), overlap=tuple(prefix)))

    return chunks


def chunk_diff(text: str, budget: int, overlap: int) -> List[str]:
    """Return the rendered text of every chunk of *text*."""

    return [chunk.text for chunk in build_chunks(text, budget, overlap)]


def _group_lines(lines: Sequence[str], budget: int) -> List[List[str]]:
    groups: List[List[str]] = []
    current: List[str] = []
    current_size = 0

    def flush() -> None:
        nonlocal current, current_size
        if current:
            groups.append(current)
        current = []
        current_size = 0

    for index, line in enumerate(lines):
        line_size = len(line) + 1

        if is_file_boundary(line) or current_size + line_size > budget:
            flush()

        current.append(line)
        current_size += line_size

        is_last = index == len(lines) - 1
        if is_last or is_file_boundary(lines[index + 1]):
            flush()

    return groups


def _tail(lines: Sequence[str], count: int) -> Sequence[str]:
    if count == 0:
        return ()
    return lines[-count:]
