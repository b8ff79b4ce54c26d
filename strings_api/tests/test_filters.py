from django.http import QueryDict
from django.test import SimpleTestCase

from strings_api.exceptions import FilterConflictError, FilterValidationError
from strings_api.filters import StructuredFilter, apply_filters, validate_filters
from strings_api.models import StringRecord


def make_records(*values):
    return [StringRecord.create(v) for v in values]


class ValidateFiltersTests(SimpleTestCase):
    def test_parses_all_fields(self):
        structured = validate_filters(QueryDict(
            "is_palindrome=TRUE&min_length=2&max_length=9&word_count=1&contains_character=a"
        ))
        self.assertEqual(structured, StructuredFilter(
            is_palindrome=True,
            min_length=2,
            max_length=9,
            word_count=1,
            contains_character="a",
        ))

    def test_false_literal(self):
        self.assertIs(validate_filters({"is_palindrome": "False"}).is_palindrome, False)

    def test_empty_params_give_empty_filter(self):
        structured = validate_filters(QueryDict(""))
        self.assertTrue(structured.is_empty())
        self.assertEqual(structured.as_dict(), {})

    def test_unknown_params_are_ignored(self):
        structured = validate_filters({"sort": "desc", "word_count": "2"})
        self.assertEqual(structured.as_dict(), {"word_count": 2})

    def test_last_repeated_param_wins(self):
        structured = validate_filters(QueryDict("min_length=1&min_length=4"))
        self.assertEqual(structured.min_length, 4)

    def test_rejects_bad_boolean(self):
        for token in ("yes", "1", "", "tru"):
            with self.assertRaises(FilterValidationError) as ctx:
                validate_filters({"is_palindrome": token})
            self.assertEqual(ctx.exception.field, "is_palindrome")

    def test_rejects_negative_and_non_numeric_integers(self):
        for field in ("min_length", "max_length", "word_count"):
            for token in ("-1", "abc", ""):
                with self.assertRaises(FilterValidationError) as ctx:
                    validate_filters({field: token})
                self.assertEqual(ctx.exception.field, field)
                self.assertIn(field, str(ctx.exception))

    def test_contains_character_must_be_single_character(self):
        for token in ("", "ab"):
            with self.assertRaises(FilterValidationError) as ctx:
                validate_filters({"contains_character": token})
            self.assertEqual(ctx.exception.field, "contains_character")

    def test_contains_character_accepts_space(self):
        self.assertEqual(validate_filters({"contains_character": " "}).contains_character, " ")

    def test_contains_character_accepts_null_character(self):
        self.assertEqual(validate_filters({"contains_character": "\x00"}).contains_character, "\x00")

    def test_min_greater_than_max_is_a_conflict(self):
        with self.assertRaises(FilterConflictError) as ctx:
            validate_filters({"min_length": "10", "max_length": "5"})
        self.assertEqual(ctx.exception.filters, {"min_length": 10, "max_length": 5})

    def test_equal_bounds_are_not_a_conflict(self):
        structured = validate_filters({"min_length": "3", "max_length": "3"})
        self.assertEqual(structured.as_dict(), {"min_length": 3, "max_length": 3})


class ApplyFiltersTests(SimpleTestCase):
    def setUp(self):
        self.records = make_records("abc", "level", "hello world", "xyz", "Aha", "noon")

    def values(self, structured):
        return [r.value for r in apply_filters(structured, self.records)]

    def test_empty_filter_matches_everything(self):
        self.assertEqual(len(self.values(StructuredFilter())), len(self.records))

    def test_length_bounds_are_inclusive(self):
        self.assertEqual(
            self.values(StructuredFilter(min_length=3, max_length=3)),
            ["abc", "xyz", "Aha"],
        )

    def test_palindrome_filter(self):
        self.assertEqual(self.values(StructuredFilter(is_palindrome=True)), ["level", "Aha", "noon"])
        self.assertEqual(
            self.values(StructuredFilter(is_palindrome=False)),
            ["abc", "hello world", "xyz"],
        )

    def test_word_count(self):
        self.assertEqual(self.values(StructuredFilter(word_count=2)), ["hello world"])

    def test_contains_character_is_case_sensitive(self):
        self.assertEqual(self.values(StructuredFilter(contains_character="A")), ["Aha"])
        self.assertEqual(self.values(StructuredFilter(contains_character="a")), ["abc", "Aha"])

    def test_filters_are_conjunctive(self):
        self.assertEqual(
            self.values(StructuredFilter(is_palindrome=True, min_length=4, contains_character="o")),
            ["noon"],
        )

    def test_preserves_input_order(self):
        reversed_records = list(reversed(self.records))
        result = apply_filters(StructuredFilter(min_length=3, max_length=3), reversed_records)
        self.assertEqual([r.value for r in result], ["Aha", "xyz", "abc"])
