"""
Name: Text Segmenter

Responsibilities:
  - Split long documents into bounded chunks for detection
  - Prefer natural boundaries (sentence end, then whitespace)
  - Preserve context between chunks through overlapping
  - Record each chunk's origin offset into the original document

Collaborators:
  - domain.entities.Chunk
  - application.use_cases.analyze_text: consumes the chunks

Constraints:
  - Chunk text is never stripped (offsets must stay exact)
  - Every character of the input belongs to at least one chunk
  - Chunks never exceed max_chunk_size
  - Each chunk ends strictly after the previous one

Algorithm:
  - End a chunk right after ". ", "! " or "? " within the last 100 chars
  - Otherwise right after whitespace within the last 50 chars
  - Otherwise cut at max_chunk_size (mid-word as last resort)
  - Next chunk rewinds by overlap, then advances to a word start
    (within 50 chars and never past the previous end)

Performance:
  - O(n) where n = len(text)
"""

from typing import List

from ...domain.entities import Chunk

SENTENCE_TERMINATORS = frozenset(".!?")

# R: Search windows (characters) for boundary lookups
SENTENCE_WINDOW = 100
WORD_WINDOW = 50


def _find_sentence_boundary(text: str, limit: int, floor: int) -> int:
    """
    R: Position right after the last sentence end before limit.

    A terminator counts only when followed by whitespace or end of text.
    Searches text[max(floor, limit - SENTENCE_WINDOW):limit].

    Returns:
        Boundary index (exclusive chunk end) or -1 if none found
    """
    lowest = max(floor, limit - SENTENCE_WINDOW)
    for i in range(limit - 1, lowest - 1, -1):
        if text[i] in SENTENCE_TERMINATORS:
            if i + 1 == len(text) or text[i + 1].isspace():
                return i + 1
    return -1


def _find_word_boundary(text: str, limit: int, floor: int) -> int:
    """R: Position right after the last whitespace before limit, or -1."""
    lowest = max(floor, limit - WORD_WINDOW)
    for i in range(limit - 1, lowest - 1, -1):
        if text[i].isspace():
            return i + 1
    return -1


def _find_word_start(text: str, index: int, ceiling: int) -> int:
    """
    R: Advance index to the start of the next word.

    Looks at most WORD_WINDOW characters ahead and never beyond ceiling.
    Returns index unchanged when no whitespace is found.
    """
    highest = min(ceiling, index + WORD_WINDOW, len(text))
    for i in range(index, highest):
        if text[i].isspace():
            return i + 1
    return index


def _starts_mid_word(text: str, index: int) -> bool:
    return (
        0 < index < len(text)
        and not text[index].isspace()
        and not text[index - 1].isspace()
    )


def split_text(
    text: str, max_chunk_size: int = 1000, overlap: int = 100
) -> List[Chunk]:
    """
    R: Split text into overlapping chunks preferring natural boundaries.

    Args:
        text: Document to split
        max_chunk_size: Maximum size of each chunk in characters
        overlap: Characters shared by consecutive chunks

    Returns:
        Chunks in document order with their origin offsets

    Examples:
        >>> split_text("Short text.")
        [Chunk(text='Short text.', origin_offset=0)]
    """
    if len(text) <= max_chunk_size:
        return [Chunk(text=text, origin_offset=0)]

    chunks: List[Chunk] = []
    start = 0
    prev_end = 0

    while start < len(text):
        end = start + max_chunk_size

        if end >= len(text):
            end = len(text)
        else:
            # R: A boundary at or before prev_end would repeat the previous chunk
            floor = max(start + 1, prev_end)
            boundary = _find_sentence_boundary(text, end, floor)
            if boundary == -1:
                boundary = _find_word_boundary(text, end, floor)
            if boundary > start:
                end = boundary

        chunks.append(Chunk(text=text[start:end], origin_offset=start))

        if end == len(text):
            break
        prev_end = end

        # R: Rewind for overlap, then avoid starting mid-word
        next_start = end - overlap
        if _starts_mid_word(text, next_start):
            next_start = _find_word_start(text, next_start, ceiling=end)

        # R: Progress guarantee: never go backwards, never skip characters
        if next_start <= start:
            next_start = end
        start = next_start

    return chunks


class TextSegmenter:
    """
    R: Default segmenter implementation using split_text.

    Validates parameters on initialization to fail fast.
    """

    def __init__(self, max_chunk_size: int = 1000, overlap: int = 100):
        """
        Initialize segmenter with validated parameters.

        Args:
            max_chunk_size: Maximum size of each chunk (must be > 0)
            overlap: Characters to overlap (must be >= 0 and < max_chunk_size)

        Raises:
            ValueError: If parameters are invalid
        """
        if max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be > 0, got {max_chunk_size}")
        if overlap < 0:
            raise ValueError(f"overlap must be >= 0, got {overlap}")
        if overlap >= max_chunk_size:
            raise ValueError(
                f"overlap ({overlap}) must be less than max_chunk_size ({max_chunk_size})"
            )

        self.max_chunk_size = max_chunk_size
        self.overlap = overlap

    def split(self, text: str) -> List[Chunk]:
        return split_text(text, max_chunk_size=self.max_chunk_size, overlap=self.overlap)
