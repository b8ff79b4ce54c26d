from django.conf import settings
from django.core.validators import ProhibitNullCharactersValidator
from rest_framework import serializers

from .exceptions import InvalidPayloadError, InvalidValueTypeError


class RawCharField(serializers.CharField):
    """CharField that lets NUL characters through.

    Lone surrogates are still rejected since they cannot be UTF-8 encoded.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.validators = [
            validator for validator in self.validators
            if not isinstance(validator, ProhibitNullCharactersValidator)
        ]


class StrictCharField(RawCharField):
    """CharField that refuses to coerce numbers or booleans into strings."""

    default_error_messages = {
        'invalid_type': 'Invalid data type for "value" (must be string).',
    }

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail('invalid_type')
        return data


class StrictBooleanField(serializers.Field):
    """Accepts only the literals true/false (any case) or a real boolean."""

    default_error_messages = {
        'invalid': 'Must be "true" or "false".',
    }

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return data
        if isinstance(data, str):
            lowered = data.lower()
            if lowered == 'true':
                return True
            if lowered == 'false':
                return False
        self.fail('invalid')

    def to_representation(self, value):
        return bool(value)


class StringPropertiesSerializer(serializers.Serializer):
    length = serializers.IntegerField()
    is_palindrome = serializers.BooleanField()
    unique_characters = serializers.IntegerField()
    word_count = serializers.IntegerField()
    sha256_hash = serializers.CharField()
    character_frequency_map = serializers.DictField(child=serializers.IntegerField())


class StringRecordSerializer(serializers.Serializer):
    id = serializers.CharField()
    value = serializers.CharField(trim_whitespace=False)
    properties = StringPropertiesSerializer()
    created_at = serializers.DateTimeField()


class StringAnalyzeSerializer(serializers.Serializer):
    value = StrictCharField(allow_blank=True, trim_whitespace=False)

    def validate_value(self, value):
        limit = getattr(settings, 'STRINGS_API', {}).get('MAX_VALUE_LENGTH')
        if limit is not None and len(value) > limit:
            raise serializers.ValidationError(
                f'Value must be at most {limit} characters long.', code='too_long')
        return value


def parse_create_payload(data) -> str:
    """
    Validate a create request body and return the submitted value.

    Raises InvalidPayloadError when the body is not an object or ``value`` is
    missing, and InvalidValueTypeError when ``value`` is present but is not a
    string.
    """
    serializer = StringAnalyzeSerializer(data=data)
    if serializer.is_valid():
        return serializer.validated_data['value']

    value_errors = serializer.errors.get('value')
    if not value_errors:
        raise InvalidPayloadError('Invalid request body or missing "value" field')

    code = getattr(value_errors[0], 'code', None)
    if code == 'required':
        raise InvalidPayloadError('Invalid request body or missing "value" field')
    if code in ('null', 'invalid_type'):
        raise InvalidValueTypeError('Invalid data type for "value" (must be string)')
    raise InvalidPayloadError(str(value_errors[0]))


class StringFilterSerializer(serializers.Serializer):
    is_palindrome = StrictBooleanField(required=False)
    min_length = serializers.IntegerField(required=False, min_value=0)
    max_length = serializers.IntegerField(required=False, min_value=0)
    word_count = serializers.IntegerField(required=False, min_value=0)
    contains_character = RawCharField(
        required=False, min_length=1, max_length=1, trim_whitespace=False)


class FiltersAppliedSerializer(serializers.Serializer):
    is_palindrome = serializers.BooleanField(required=False)
    min_length = serializers.IntegerField(required=False)
    max_length = serializers.IntegerField(required=False)
    word_count = serializers.IntegerField(required=False)
    contains_character = serializers.CharField(required=False)


class InterpretedQuerySerializer(serializers.Serializer):
    original = serializers.CharField()
    parsed_filters = FiltersAppliedSerializer()


class StringListResponseSerializer(serializers.Serializer):
    data = StringRecordSerializer(many=True)
    count = serializers.IntegerField()
    filters_applied = FiltersAppliedSerializer()


class NaturalLanguageResponseSerializer(serializers.Serializer):
    data = StringRecordSerializer(many=True)
    count = serializers.IntegerField()
    interpreted_query = InterpretedQuerySerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    interpreted_query = InterpretedQuerySerializer(required=False)
