"""
Shared text utilities.
"""
import re
from typing import List

_SENTENCE_BOUNDARY = re.compile(r'(?<=[.!?])\s+')


def clean_text(text: str) -> str:
    """
    Normalize text.

    Operations:
        - Collapse whitespace
        - Fix common typographic encodings
    """
    text = re.sub(r'\s+', ' ', text)
    text = text.strip()

    text = text.replace('\u2019', "'")  # Right single quotation mark
    text = text.replace('\u201c', '"')  # Left double quotation mark
    text = text.replace('\u201d', '"')  # Right double quotation mark
    text = text.replace('\u2013', '-')  # En dash

    return text


def split_sentences(text: str) -> List[str]:
    """Split after '.', '!' or '?' followed by whitespace; drops empty pieces."""
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text.strip()) if s.strip()]


def count_words(text: str) -> int:
    return len(text.split())
