"""
Heuristic translation of free-text queries into structured filters.

This is a fixed list of pattern rules, not a grammar. Rules run in order
against the lower-cased query and every rule that matches writes its field,
so a later rule overrides an earlier one on the same field. The character
rules are the exception: "the character X" and "first vowel" only fill
``contains_character`` when an earlier rule has not already set it, so an
explicit "letter X" always wins over the vowel heuristic.

    >>> interpret_query("all single word palindromic strings").as_dict()
    {'is_palindrome': True, 'word_count': 1}
"""
import logging
import re

from .exceptions import UnparseableQueryError
from .filters import StructuredFilter

logger = logging.getLogger(__name__)

WORD_COUNTS = {'one': 1, 'two': 2, 'three': 3}

# "one word" but not "more than one word" or "at least two words"
WORD_COUNT_PHRASE_RE = re.compile(
    r"(?<!than )(?<!least )(?<!most )\b(one|two|three) words?\b")

LONGER_THAN_RE = re.compile(r"longer than (\d+)")
SHORTER_THAN_RE = re.compile(r"shorter than (\d+)")
WORD_COUNT_OF_RE = re.compile(r"word count of (\d+)")
LETTER_RE = re.compile(r"letter\s+([a-z0-9])")
CHARACTER_RE = re.compile(r"the character\s+([a-z0-9])\b")


def _single_word(query, parsed):
    if "single word" in query or "single-word" in query:
        parsed["word_count"] = 1


def _word_count(query, parsed):
    match = WORD_COUNT_PHRASE_RE.search(query)
    if match:
        parsed["word_count"] = WORD_COUNTS[match.group(1)]
    match = WORD_COUNT_OF_RE.search(query)
    if match:
        parsed["word_count"] = int(match.group(1))


def _palindrome(query, parsed):
    if "palindrom" in query:
        parsed["is_palindrome"] = True


def _longer_than(query, parsed):
    match = LONGER_THAN_RE.search(query)
    if match:
        parsed["min_length"] = int(match.group(1)) + 1


def _shorter_than(query, parsed):
    match = SHORTER_THAN_RE.search(query)
    if match:
        parsed["max_length"] = max(0, int(match.group(1)) - 1)


def _letter(query, parsed):
    match = LETTER_RE.search(query)
    if match:
        parsed["contains_character"] = match.group(1)


def _character(query, parsed):
    match = CHARACTER_RE.search(query)
    if match and "contains_character" not in parsed:
        parsed["contains_character"] = match.group(1)


def _first_vowel(query, parsed):
    if "first vowel" in query and "contains_character" not in parsed:
        parsed["contains_character"] = "a"


RULES = (
    _single_word,
    _word_count,
    _palindrome,
    _longer_than,
    _shorter_than,
    _letter,
    _character,
    _first_vowel,
)


def parse_query(query: str) -> dict:
    """Run every rule and return the raw field mapping (possibly empty)."""
    lowered = query.lower()
    parsed = {}
    for rule in RULES:
        rule(lowered, parsed)
    return parsed


def interpret_query(query: str) -> StructuredFilter:
    """
    Translate ``query`` into a StructuredFilter.

    Raises UnparseableQueryError if no rule matched and FilterConflictError
    (carrying the original text and parsed filters) if the result asks for
    min_length greater than max_length.
    """
    parsed = parse_query(query)
    if not parsed:
        logger.info("No rule matched natural language query %r", query)
        raise UnparseableQueryError(query)

    return StructuredFilter(**parsed).check_conflicts(original=query)
