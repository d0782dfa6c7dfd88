from decimal import Decimal

import pytest

from json_csv_flattener.limits import ConversionLimits
from json_csv_flattener.outcome import ErrorKind, ValidationError
from json_csv_flattener.validation import is_empty, is_too_large, parse_document, validate
from json_csv_flattener.values import JsonArray, JsonNumber, JsonObject, JsonString


class TestValidate:

    def test_empty_json(self):
        result = validate("")

        assert result.success is False
        assert result.error_kind == ErrorKind.EMPTY_JSON
        assert "empty" in result.error

    def test_whitespace_only_json(self):
        result = validate("   \n\t  ")

        assert result.success is False
        assert result.error_kind == ErrorKind.EMPTY_JSON

    @pytest.mark.parametrize("text", [
        '{"name": "John", "age": 30}',
        '[{"name": "John"}, {"name": "Jane"}]',
        '{"name": "John", "age": 30, "active": true, "score": 95.5, "middleName": null}',
        '{"name": "John", "address": {"street": "Main St"}}',
        '{"name": "John", "hobbies": ["reading", "gaming"]}',
        '{"level1": {"level2": {"level3": "value"}}}',
        '[{"name": "John", "dependents": [{"name": "Lucas"}]}]',
    ])
    def test_valid_documents(self, text):
        result = validate(text)

        assert result.success is True
        assert result.csv == ""
        assert result.error is None
        assert result.error_kind == ErrorKind.NONE

    def test_malformed_json_reports_position(self):
        result = validate('{"name": "John",\n "age": 30')

        assert result.success is False
        assert result.error_kind == ErrorKind.INVALID_JSON
        assert "Invalid JSON" in result.error
        assert "line 2" in result.error
        assert "column" in result.error

    @pytest.mark.parametrize("text", [
        '{"name": "John", "age": 30,}',
        '[1, 2,]',
        '{"a": 1} // comment',
        '/* comment */ {"a": 1}',
        '{"a": NaN}',
        '{"a": Infinity}',
        "{'a': 1}",
    ])
    def test_non_strict_syntax_is_rejected(self, text):
        result = validate(text)

        assert result.success is False
        assert result.error_kind == ErrorKind.INVALID_JSON

    def test_too_large(self):
        large_json = "x" * (11 * 1024 * 1024)

        result = validate(large_json)

        assert result.success is False
        assert result.error_kind == ErrorKind.TOO_LARGE
        assert "too large" in result.error
        assert "10MB" in result.error

    def test_depth_limit(self):
        at_limit = "[" * 10 + "1" + "]" * 10
        too_deep = "[" * 11 + "1" + "]" * 11

        assert validate(at_limit).success is True

        result = validate(too_deep)
        assert result.success is False
        assert result.error_kind == ErrorKind.INVALID_JSON
        assert "too deep" in result.error

    def test_parser_recursion_overflow_is_invalid_json(self):
        result = validate("[" * 100_000 + "]" * 100_000)

        assert result.success is False
        assert result.error_kind == ErrorKind.INVALID_JSON

    def test_node_count_limit_reports_count(self):
        limits = ConversionLimits(max_nodes=10)
        # root array + 10 numbers = 11 nodes
        text = "[" + ",".join(["1"] * 10) + "]"

        result = validate(text, limits)

        assert result.success is False
        assert result.error_kind == ErrorKind.INVALID_JSON
        assert "(11)" in result.error
        assert "10" in result.error

    def test_node_count_at_limit(self):
        limits = ConversionLimits(max_nodes=10)
        text = "[" + ",".join(["1"] * 9) + "]"

        assert validate(text, limits).success is True

    def test_outcome_has_timestamp(self):
        result = validate("{}")

        assert result.timestamp is not None
        assert result.timestamp.tzinfo is not None


class TestParseDocument:

    def test_builds_tagged_values(self):
        document = parse_document('{"a": [1, "x"], "b": 2.50}')

        assert isinstance(document, JsonObject)
        assert document.get("a") == JsonArray((JsonNumber(Decimal(1)), JsonString("x")))
        assert document.get("b") == JsonNumber(Decimal("2.50"))

    def test_huge_integers_parse_without_digit_limit(self):
        digits = "9" * 5000

        document = parse_document(f'{{"n": {digits}}}')

        assert document.get("n") == JsonNumber(Decimal(digits))

    def test_duplicate_keys_last_write_wins(self):
        document = parse_document('{"a": 1, "a": 2}')

        assert [name for name, _ in document.members] == ["a"]
        assert document.get("a") == JsonNumber(Decimal(2))

    def test_raises_validation_error(self):
        with pytest.raises(ValidationError) as excinfo:
            parse_document("{")

        assert excinfo.value.kind == ErrorKind.INVALID_JSON

    def test_custom_byte_ceiling(self, small_limits):
        with pytest.raises(ValidationError) as excinfo:
            parse_document('{"a": "' + "x" * 2000 + '"}', small_limits)

        assert excinfo.value.kind == ErrorKind.TOO_LARGE


class TestHelpers:

    def test_is_empty(self):
        assert is_empty(None)
        assert is_empty("")
        assert is_empty("   ")
        assert not is_empty('{"name": "John"}')

    def test_is_too_large_counts_utf8_bytes(self):
        # "ç" is two bytes in UTF-8
        assert is_too_large("ç" * 6, max_bytes=10)
        assert not is_too_large("c" * 10, max_bytes=10)
        assert not is_too_large("", max_bytes=0)
        assert not is_too_large(None)
