"""
Record types held by the in-memory repository.

There is no database behind this app, so these are plain frozen dataclasses
rather than Django models.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict

from django.utils import timezone


@dataclass(frozen=True)
class StringProperties:
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            'length': self.length,
            'is_palindrome': self.is_palindrome,
            'unique_characters': self.unique_characters,
            'word_count': self.word_count,
            'sha256_hash': self.sha256_hash,
            'character_frequency_map': dict(self.character_frequency_map),
        }


@dataclass(frozen=True)
class StringRecord:
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @classmethod
    def create(cls, value: str) -> 'StringRecord':
        """Analyze ``value`` and stamp the record with the current time."""
        from .utils import analyze_string

        props = analyze_string(value)
        return cls(
            id=props.sha256_hash,
            value=value,
            properties=props,
            created_at=timezone.now(),
        )

    def __str__(self):
        return f"{self.value} - {self.id[:50]}"
