from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import groupby

__all__ = [
    "MAX_TEXT_CHARS",
    "WordFrequency",
    "tokenize",
    "count_word_frequency",
    "analyze_text",
]

# Upper bound on accepted input, enforced by the request layer.
MAX_TEXT_CHARS = 100_000


@dataclass(frozen=True)
class WordFrequency:
    word_counts: dict[str, int]
    total_words: int


def tokenize(text: str) -> Iterator[str]:
    """Yield lowercase words: maximal runs of Unicode letters.

    A letter is any character in general category L* (`str.isalpha`), in any
    script. Digits, punctuation, symbols, combining marks and whitespace all
    act as separators and never appear inside a word.
    """
    for is_letter, run in groupby(text.lower(), key=str.isalpha):
        if is_letter:
            yield "".join(run)


def count_word_frequency(text: str) -> dict[str, int]:
    """Map each word to its number of occurrences, in first-seen order."""
    counts: dict[str, int] = {}
    for word in tokenize(text):
        counts[word] = counts.get(word, 0) + 1
    return counts


def analyze_text(text: str) -> WordFrequency:
    """Count words and total occurrences (not unique words)."""
    counts = count_word_frequency(text)
    return WordFrequency(word_counts=counts, total_words=sum(counts.values()))
