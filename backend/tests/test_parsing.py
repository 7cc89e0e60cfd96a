"""Tests for JSON recovery from model text."""

import json

import pytest

from chains.parsing import extract_json


class TestExtractJson:
    def test_plain_object(self):
        assert extract_json('{"a": 1}') == {"a": 1}

    def test_markdown_fence(self):
        text = 'Here you go:\n```json\n{"plan": {"daysPerWeek": 3}}\n```\nEnjoy!'
        assert extract_json(text) == {"plan": {"daysPerWeek": 3}}

    def test_prose_on_both_sides(self):
        assert extract_json('sure {"message": "hi"} thanks') == {"message": "hi"}

    def test_nested_braces_use_outermost_span(self):
        text = 'x {"a": {"b": {"c": 1}}} y'
        assert extract_json(text) == {"a": {"b": {"c": 1}}}

    def test_top_level_scalar_parses_directly(self):
        assert extract_json("42") == 42
        assert extract_json('"text"') == "text"

    def test_array_parses_directly(self):
        assert extract_json("[1, 2]") == [1, 2]

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "no json here",
            "} reversed {",
            '{"truncated": ',
            'prefix {"a": 1,} suffix',
        ],
    )
    def test_unrecoverable_returns_none(self, text):
        assert extract_json(text) is None

    @pytest.mark.parametrize("value", [None, 12, {"a": 1}, ["x"]])
    def test_non_string_input_returns_none(self, value):
        assert extract_json(value) is None

    @pytest.mark.parametrize(
        "text",
        ['{"a": [1, 2, {"b": null}]}', '  {"x": "y"}  ', "[true, false]", "3.5"],
    )
    def test_idempotent_on_valid_json(self, text):
        first = extract_json(text)
        assert extract_json(json.dumps(first)) == first
