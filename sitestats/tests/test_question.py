"""
Unit tests for question decoding.
"""

import json

import pytest

from sitestats.errors import MalformedRecordError
from sitestats.stats.question import QuestionStat, count_words, decode_question


def test_count_words_uses_whitespace_tokens():
    assert count_words(["hello   world", "\tthree\nwords here"]) == 5
    assert count_words([]) == 0
    assert count_words(["", "   "]) == 0


def test_decode_question():
    line = '{"texts": ["How do I", "sort a list?"], "tags": ["python", "list"]}'
    assert decode_question(line) == QuestionStat(word_count=6, tags=["python", "list"])


def test_decode_keeps_duplicate_tags_and_extra_fields():
    line = '{"texts": ["a b"], "tags": ["x", "x"], "id": 12}'
    assert decode_question(line) == QuestionStat(word_count=2, tags=["x", "x"])


def test_decode_with_trailing_newline():
    assert decode_question('{"texts": ["a"], "tags": []}\n').word_count == 1


@pytest.mark.parametrize(
    "line",
    [
        '{"texts": ["broken", "tags": ["x"]',
        "not json at all",
        '["texts", "tags"]',
        '{"tags": ["x"]}',
        '{"texts": ["a"]}',
        '{"texts": "a b", "tags": ["x"]}',
        '{"texts": ["a"], "tags": [1, 2]}',
        "null",
    ],
)
def test_decode_rejects_malformed_lines(line):
    with pytest.raises(MalformedRecordError):
        decode_question(line)


def test_malformed_record_error_is_value_error():
    with pytest.raises(ValueError):
        decode_question("{")


def test_decode_rejects_deeply_nested_json():
    with pytest.raises(MalformedRecordError):
        decode_question("[" * 100000 + "]" * 100000)


def test_decode_rejects_oversized_integer_literal():
    with pytest.raises(MalformedRecordError):
        decode_question('{"texts": [], "tags": [], "n": ' + "1" * 5000 + "}")


@pytest.mark.parametrize("field_name", ["texts", "tags"])
def test_decode_rejects_lone_surrogates(field_name):
    record = {"texts": ["a"], "tags": ["x"]}
    record[field_name] = ["\ud800"]
    with pytest.raises(MalformedRecordError):
        decode_question(json.dumps(record))
