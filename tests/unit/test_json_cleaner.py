"""
Unit tests for leadgen.generation.json_cleaner.
"""

import json
import pytest

from leadgen.generation.json_cleaner import (
    JSONCleanError,
    clean_json_response,
    escape_newlines_in_strings,
    extract_balanced_block,
    parse_json_response,
    strip_code_fences,
)


class TestStripCodeFences:

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_fence(self):
        assert strip_code_fences('```\n[1, 2]\n```  ') == '[1, 2]'

    def test_no_fence(self):
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


class TestExtractBalancedBlock:

    def test_object_after_commentary(self):
        text = 'Here you go: {"a": {"b": [1, 2]}} Hope that helps!'
        assert extract_balanced_block(text) == '{"a": {"b": [1, 2]}}'

    def test_braces_inside_strings_ignored(self):
        text = '{"a": "x } y", "b": "\\" }"}'
        assert extract_balanced_block(text) == text

    def test_array_first(self):
        assert extract_balanced_block('list: [1, {"a": 2}] end') == '[1, {"a": 2}]'

    def test_unclosed(self):
        assert extract_balanced_block('{"a": 1') is None

    def test_no_brackets(self):
        assert extract_balanced_block("nothing here") is None


class TestEscapeNewlines:

    def test_newline_inside_string(self):
        assert escape_newlines_in_strings('{"a": "line1\nline2"}') == '{"a": "line1\\nline2"}'

    def test_crlf_inside_string(self):
        assert escape_newlines_in_strings('{"a": "x\r\ny"}') == '{"a": "x\\ny"}'

    def test_structure_newlines_kept(self):
        text = '{\n  "a": 1\n}'
        assert escape_newlines_in_strings(text) == text


class TestCleanJsonResponse:

    def test_fenced_with_trailing_commas(self):
        raw = '```json\n{"concepts": [{"title": "A",}, {"title": "B"},],}\n```'
        assert json.loads(clean_json_response(raw)) == {"concepts": [{"title": "A"}, {"title": "B"}]}

    def test_smart_quotes(self):
        raw = '{“title”: “Guide”}'
        assert json.loads(clean_json_response(raw)) == {"title": "Guide"}

    def test_raw_newlines_in_values(self):
        raw = '{"content": "Para one.\n\nPara two."}'
        assert json.loads(clean_json_response(raw))["content"] == "Para one.\n\nPara two."

    def test_unrecoverable(self):
        with pytest.raises(JSONCleanError) as exc_info:
            clean_json_response('{"title": Guide without quotes}')
        assert exc_info.value.cleaned

    def test_empty(self):
        with pytest.raises(JSONCleanError):
            clean_json_response("")

    def test_parse_json_response(self):
        value, cleaned = parse_json_response('Sure! {"a": 1}')
        assert value == {"a": 1}
        assert cleaned == '{"a": 1}'
