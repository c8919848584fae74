"""
Sanitizer & Trimmer
===================

Deterministic clean-up applied to every candidate before validation:

1. Remove semicolons, colons and every dash variant.
2. Keep the first K sentences, closing any unterminated one with a period.
3. Collapse whitespace and trim.

The transform is idempotent: sanitizing sanitized text changes nothing.
"""

import re
from typing import List

# Semicolon, colon and hyphen-minus plus their Unicode look-alikes
# (hyphen, figure/en/em dash, horizontal bar, minus sign, fullwidth forms).
# Hyphenated words lose their hyphen too.
FORBIDDEN_PUNCTUATION = re.compile(
    "[;:\\-\u037e\u2010\u2011\u2012\u2013\u2014\u2015\u2212\ufe63\uff0d\uff1a\uff1b]"
)

SENTENCE_CHUNK = re.compile(r"[^.!?]+(?:[.!?]+|$)")

TERMINATORS = ".!?"

_WHITESPACE = re.compile(r"\s+")


def strip_forbidden_punctuation(text: str) -> str:
    return FORBIDDEN_PUNCTUATION.sub("", text)


def split_sentences(text: str) -> List[str]:
    """
    Split text into sentence chunks, each keeping its terminator.

    Chunks without any word characters (stray punctuation) are dropped.
    """
    sentences = []
    for chunk in SENTENCE_CHUNK.findall(text):
        chunk = _WHITESPACE.sub(" ", chunk).strip()
        if chunk.rstrip(TERMINATORS).strip():
            sentences.append(chunk)
    return sentences


def sanitize(text: str, sentence_target: int) -> str:
    """
    Normalize raw generated text to the structural contract.

    Args:
        text: Raw candidate text (may be empty).
        sentence_target: Maximum number of sentences to keep.

    Returns:
        The sanitized text, or "" when nothing usable remains.
    """
    if not text:
        return ""

    cleaned = strip_forbidden_punctuation(text)

    kept = []
    for sentence in split_sentences(cleaned)[:sentence_target]:
        if sentence[-1] not in TERMINATORS:
            sentence += "."
        kept.append(sentence)

    return " ".join(kept).strip()
