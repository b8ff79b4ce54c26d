import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import ParseError
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from .apps import get_service
from .exceptions import (
    FilterConflictError,
    FilterValidationError,
    InvalidPayloadError,
    InvalidValueTypeError,
    RecordConflict,
    RecordNotFound,
    UnparseableQueryError,
)
from .serializers import (
    ErrorResponseSerializer,
    NaturalLanguageResponseSerializer,
    StringAnalyzeSerializer,
    StringListResponseSerializer,
    StringRecordSerializer,
    parse_create_payload,
)

logger = logging.getLogger(__name__)


def error_response(message, http_status, **extra):
    return Response({"error": message, **extra}, status=http_status)


def internal_error():
    return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


class StringServiceMixin:
    # Overridable through as_view(service=...); defaults to the app's service.
    service = None

    def get_service(self):
        return self.service if self.service is not None else get_service()


# 1️⃣ POST & GET /strings


class StringAnalyzerView(StringServiceMixin, APIView):

    @swagger_auto_schema(
        request_body=StringAnalyzeSerializer,
        operation_summary="Analyze and store a new string",
        responses={
            201: StringRecordSerializer,
            400: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
            422: ErrorResponseSerializer,
        },
    )
    def post(self, request):
        try:
            value = parse_create_payload(request.data)
            record = self.get_service().create(value)
        except ParseError:
            return error_response("Invalid request body or missing \"value\" field", status.HTTP_400_BAD_REQUEST)
        except InvalidPayloadError as e:
            return error_response(str(e), status.HTTP_400_BAD_REQUEST)
        except InvalidValueTypeError as e:
            return error_response(str(e), status.HTTP_422_UNPROCESSABLE_ENTITY)
        except RecordConflict as e:
            return error_response(str(e), status.HTTP_409_CONFLICT)
        except Exception as e:
            logger.exception("Unexpected error while creating string: %s", e)
            return internal_error()

        return Response(StringRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @swagger_auto_schema(
        operation_summary="List all analyzed strings",
        manual_parameters=[
            openapi.Parameter(
                "is_palindrome",
                openapi.IN_QUERY,
                description="Filter by palindrome (true/false)",
                type=openapi.TYPE_BOOLEAN,
            ),
            openapi.Parameter(
                "min_length",
                openapi.IN_QUERY,
                description="Minimum string length (inclusive)",
                type=openapi.TYPE_INTEGER,
            ),
            openapi.Parameter(
                "max_length",
                openapi.IN_QUERY,
                description="Maximum string length (inclusive)",
                type=openapi.TYPE_INTEGER,
            ),
            openapi.Parameter(
                "word_count",
                openapi.IN_QUERY,
                description="Exact word count",
                type=openapi.TYPE_INTEGER,
            ),
            openapi.Parameter(
                "contains_character",
                openapi.IN_QUERY,
                description="Filter strings that contain this character",
                type=openapi.TYPE_STRING,
            ),
        ],
        responses={
            200: StringListResponseSerializer,
            400: ErrorResponseSerializer,
        },
    )
    def get(self, request):
        try:
            records, count, filters_applied = self.get_service().list(request.query_params)
        except (FilterValidationError, FilterConflictError) as e:
            return error_response(str(e), status.HTTP_400_BAD_REQUEST)
        except Exception as e:
            logger.exception("Unexpected error while listing strings: %s", e)
            return internal_error()

        return Response({
            "data": StringRecordSerializer(records, many=True).data,
            "count": count,
            "filters_applied": filters_applied,
        }, status=status.HTTP_200_OK)

# 2️⃣ GET &  DELETE  /strings/{string_value}


class StringDetailView(StringServiceMixin, APIView):

    @swagger_auto_schema(
        operation_summary="Get a specific analyzed string",
        responses={200: StringRecordSerializer, 404: ErrorResponseSerializer},
    )
    def get(self, request, value):
        try:
            record = self.get_service().get_by_value(value)
        except RecordNotFound as e:
            return error_response(str(e), status.HTTP_404_NOT_FOUND)
        except Exception as e:
            logger.exception("Unexpected error while fetching string: %s", e)
            return internal_error()

        return Response(StringRecordSerializer(record).data, status=status.HTTP_200_OK)

    @swagger_auto_schema(
        operation_summary="Delete an analyzed string",
        responses={204: "String deleted", 404: ErrorResponseSerializer},
    )
    def delete(self, request, value):
        try:
            self.get_service().delete_by_value(value)
        except RecordNotFound as e:
            return error_response(str(e), status.HTTP_404_NOT_FOUND)
        except Exception as e:
            logger.exception("Unexpected error while deleting string: %s", e)
            return internal_error()

        return Response(status=status.HTTP_204_NO_CONTENT)


# 4️⃣ GET /strings/filter-by-natural-language

class NaturalLanguageFilterView(StringServiceMixin, APIView):
    @swagger_auto_schema(
        operation_summary="Filter analyzed strings using natural language queries",
        manual_parameters=[
            openapi.Parameter(
                "query",
                openapi.IN_QUERY,
                description="Natural language query, e.g. 'all single word palindromic strings'",
                type=openapi.TYPE_STRING,
                required=True,
            )
        ],
        responses={
            200: NaturalLanguageResponseSerializer,
            400: ErrorResponseSerializer,
            422: ErrorResponseSerializer,
        },
    )
    def get(self, request):
        query = request.query_params.get("query", "")
        if not query:
            return error_response("Missing or invalid \"query\" parameter", status.HTTP_400_BAD_REQUEST)

        try:
            records, count, interpreted = self.get_service().list_by_natural_language(query)
        except (FilterValidationError, UnparseableQueryError) as e:
            return error_response(str(e), status.HTTP_400_BAD_REQUEST)
        except FilterConflictError as e:
            return error_response(
                "Query parsed but resulted in conflicting filters",
                status.HTTP_422_UNPROCESSABLE_ENTITY,
                interpreted_query=e.interpreted_query,
            )
        except Exception as e:
            logger.exception("Unexpected error while filtering strings: %s", e)
            return internal_error()

        return Response({
            "data": StringRecordSerializer(records, many=True).data,
            "count": count,
            "interpreted_query": interpreted,
        }, status=status.HTTP_200_OK)
