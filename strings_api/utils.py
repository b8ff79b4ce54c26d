import hashlib
from collections import Counter

from .models import StringProperties


def compute_sha256(value: str) -> str:
    """Compute SHA-256 hash for the string."""
    return hashlib.sha256(value.encode('utf-8')).hexdigest()


def utf16_units(value: str) -> list:
    """Split a string into UTF-16 code units (two-byte chunks)."""
    encoded = value.encode('utf-16-le', 'surrogatepass')
    return [encoded[i:i + 2] for i in range(0, len(encoded), 2)]


def is_palindrome(value: str) -> bool:
    """Check if string reads the same forward and backward (case-insensitive).

    Whitespace and punctuation are compared like any other character, and the
    comparison runs over UTF-16 code units, so a lone astral character such as
    an emoji is not a palindrome.
    """
    units = utf16_units(value.lower())
    return units == units[::-1]


def count_words(value: str) -> int:
    # str.split() with no separator trims and collapses whitespace runs
    return len(value.split())


def analyze_string(value: str) -> StringProperties:
    """Compute all required string properties."""
    char_freq = dict(Counter(value))

    return StringProperties(
        length=len(utf16_units(value)),
        is_palindrome=is_palindrome(value),
        unique_characters=len(char_freq),
        word_count=count_words(value),
        sha256_hash=compute_sha256(value),
        character_frequency_map=char_freq,
    )
