"""Descriptive text statistics."""

import re
from dataclasses import asdict, dataclass

# Unicode White_Space property; narrower than re's \s, which also matches \x1c-\x1f
WHITESPACE_CLASS = r"[\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]"
_WHITESPACE = re.compile(WHITESPACE_CLASS)
_WHITESPACE_RUN = re.compile(WHITESPACE_CLASS + "+")


@dataclass(frozen=True)
class Statistics:
    """Counts computed from extracted document content."""

    char_count: int = 0
    char_count_no_space: int = 0
    word_count: int = 0
    space_count: int = 0
    image_count: int = 0

    def to_dict(self) -> dict[str, int]:
        """Return the statistics as a plain dictionary."""
        return asdict(self)


def count_whitespace(text: str) -> int:
    """Count code points matching the Unicode whitespace class."""
    return len(_WHITESPACE.findall(text))


def count_words(text: str) -> int:
    """Count runs of non-whitespace separated by whitespace."""
    return sum(1 for fragment in _WHITESPACE_RUN.split(text) if fragment)


def calculate_statistics(text: str, image_count: int = 0) -> Statistics:
    """
    Compute statistics over extracted text.

    Args:
        text: Extracted document text
        image_count: Number of images found by the extractor

    Returns:
        Statistics for the text, with the given image count attached
    """
    char_count = len(text)
    space_count = count_whitespace(text)

    return Statistics(
        char_count=char_count,
        char_count_no_space=char_count - space_count,
        word_count=count_words(text),
        space_count=space_count,
        image_count=image_count,
    )
