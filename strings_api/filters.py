"""
Structured filtering over stored strings.

``validate_filters`` turns raw query parameters into a ``StructuredFilter``
(or raises), and ``apply_filters`` selects the records that satisfy every
filter present. Both the plain list endpoint and the natural language
endpoint end up here.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .exceptions import FilterConflictError, FilterValidationError
from .models import StringRecord
from .serializers import StringFilterSerializer

FILTER_FIELDS = (
    'is_palindrome',
    'min_length',
    'max_length',
    'word_count',
    'contains_character',
)


@dataclass(frozen=True)
class StructuredFilter:
    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def as_dict(self) -> dict:
        """Only the filters that are actually set, in canonical order."""
        return {
            name: getattr(self, name)
            for name in FILTER_FIELDS
            if getattr(self, name) is not None
        }

    def is_empty(self) -> bool:
        return not self.as_dict()

    def check_conflicts(self, original=None) -> 'StructuredFilter':
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise FilterConflictError(self.as_dict(), original=original)
        return self

    def matches(self, record: StringRecord) -> bool:
        props = record.properties
        if self.is_palindrome is not None and props.is_palindrome != self.is_palindrome:
            return False
        if self.min_length is not None and props.length < self.min_length:
            return False
        if self.max_length is not None and props.length > self.max_length:
            return False
        if self.word_count is not None and props.word_count != self.word_count:
            return False
        if (
            self.contains_character is not None
            and self.contains_character not in props.character_frequency_map
        ):
            return False
        return True


def validate_filters(raw_params) -> StructuredFilter:
    """
    Validate raw query parameters into a StructuredFilter.

    ``raw_params`` may be a QueryDict or a plain mapping; for a QueryDict the
    last value of a repeated parameter wins. Unknown parameters are ignored.

    Raises FilterValidationError naming the first offending field, or
    FilterConflictError when min_length is greater than max_length.
    """
    data = {key: raw_params[key] for key in FILTER_FIELDS if key in raw_params}

    serializer = StringFilterSerializer(data=data)
    if not serializer.is_valid():
        for name in FILTER_FIELDS:
            if name in serializer.errors:
                raise FilterValidationError(name, str(serializer.errors[name][0]))
        raise FilterValidationError('query', str(serializer.errors))

    return StructuredFilter(**serializer.validated_data).check_conflicts()


def apply_filters(structured: StructuredFilter, records: Iterable[StringRecord]) -> List[StringRecord]:
    """Return the records matching every filter, preserving input order."""
    return [record for record in records if structured.matches(record)]
