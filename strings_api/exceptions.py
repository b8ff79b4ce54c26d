class StringsAPIError(Exception):
    """Base class for errors raised by the strings service."""


class InvalidPayloadError(StringsAPIError):
    """Request body is missing the required field or is not an object."""


class InvalidValueTypeError(StringsAPIError):
    """The ``value`` field is present but is not a string."""


class RecordConflict(StringsAPIError):
    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__("String already exists in the system")


class RecordNotFound(StringsAPIError):
    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__("String does not exist in the system")


class FilterValidationError(StringsAPIError):
    """A single filter parameter failed validation."""

    def __init__(self, field, message):
        self.field = field
        self.detail = message
        super().__init__(f'Invalid query parameter "{field}": {message}')


class FilterConflictError(StringsAPIError):
    """Filters are individually valid but cannot be satisfied together."""

    def __init__(self, filters, original=None):
        self.filters = filters
        self.original = original
        super().__init__('"min_length" cannot be greater than "max_length"')

    @property
    def interpreted_query(self):
        return {'original': self.original, 'parsed_filters': self.filters}


class UnparseableQueryError(StringsAPIError):
    def __init__(self, original, message="Unable to parse natural language query"):
        self.original = original
        super().__init__(message)
