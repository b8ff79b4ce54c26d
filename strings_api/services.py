import logging

from django.conf import settings

from .exceptions import FilterValidationError, RecordConflict
from .filters import apply_filters, validate_filters
from .models import StringRecord
from .nl_query import interpret_query
from .repository import StringRepository

logger = logging.getLogger(__name__)


class StringAnalysisService:
    """
    The operations exposed to the HTTP layer.

    Owns a StringRepository; nothing here keeps module level state, so tests
    can build as many independent services as they need.
    """

    def __init__(self, repository=None):
        self.repository = repository if repository is not None else StringRepository()

    def create(self, value: str) -> StringRecord:
        record = StringRecord.create(value)
        try:
            self.repository.insert(record)
        except RecordConflict:
            logger.info("Rejected duplicate string id=%s", record.id)
            raise
        logger.info("Analyzed and stored string id=%s length=%s",
                    record.id, record.properties.length)
        return record

    def get_by_value(self, value: str) -> StringRecord:
        return self.repository.get_by_value(value)

    def delete_by_value(self, value: str) -> None:
        record = self.repository.delete(value)
        logger.info("Deleted string id=%s", record.id)

    def list(self, raw_params):
        """
        Return ``(records, count, filters_applied)`` for the raw query params.

        Raises FilterValidationError or FilterConflictError.
        """
        structured = validate_filters(raw_params)
        records = apply_filters(structured, self.repository.all())
        return records, len(records), structured.as_dict()

    def list_by_natural_language(self, query: str):
        """
        Return ``(records, count, interpreted_query)`` for a free-text query.

        Raises FilterValidationError when the query is too long,
        UnparseableQueryError or FilterConflictError.
        """
        max_length = getattr(settings, 'STRINGS_API', {}).get('NL_QUERY_MAX_LENGTH')
        if max_length is not None and len(query) > max_length:
            raise FilterValidationError(
                'query', f"Must be at most {max_length} characters long.")

        structured = interpret_query(query)
        records = apply_filters(structured, self.repository.all())
        interpreted = {
            'original': query,
            'parsed_filters': structured.as_dict(),
        }
        logger.debug("Interpreted %r as %s", query, interpreted['parsed_filters'])
        return records, len(records), interpreted
