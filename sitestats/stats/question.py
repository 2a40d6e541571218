"""
Question records: decoding one JSON line into a QuestionStat.

Each input line is a JSON object of the form

    {"texts": ["title", "body", ...], "tags": ["tag1", "tag2", ...]}

The word count of a question is the number of whitespace-delimited tokens
across all of its texts.
"""

import json
from dataclasses import dataclass, field
from typing import List

from ..errors import MalformedRecordError


@dataclass
class QuestionStat:
    """Decoded question, consumed once by SiteStat.add_question."""
    word_count: int
    tags: List[str] = field(default_factory=list)


def count_words(texts: List[str]) -> int:
    """Number of whitespace-delimited tokens across all texts."""
    return sum(len(text.split()) for text in texts)


def _string_list(record: dict, key: str) -> List[str]:
    if key not in record:
        raise MalformedRecordError(f"missing field '{key}'")
    value = record[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MalformedRecordError(f"field '{key}' must be a list of strings")
    for item in value:
        try:
            item.encode("utf-8")
        except UnicodeEncodeError as e:
            raise MalformedRecordError(f"field '{key}' holds text that is not valid UTF-8: {e}") from e
    return value


def decode_question(line: str) -> QuestionStat:
    """
    Decode one raw line into a QuestionStat.

    Args:
        line: One line of a site file

    Returns:
        QuestionStat with the word count and tags of the question

    Raises:
        MalformedRecordError: If the line is not valid JSON, not an object,
            or lacks a list-of-strings "texts" or "tags" field, or holds
            text that cannot be encoded as UTF-8

    Example:
        >>> decode_question('{"texts": ["How to", "sort a list"], "tags": ["python"]}')
        QuestionStat(word_count=5, tags=['python'])
    """
    try:
        record = json.loads(line)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integer literals, too deeply nested arrays
        raise MalformedRecordError(f"invalid JSON: {e}") from e

    if not isinstance(record, dict):
        raise MalformedRecordError("record is not a JSON object")

    texts = _string_list(record, "texts")
    tags = _string_list(record, "tags")
    return QuestionStat(word_count=count_words(texts), tags=list(tags))
