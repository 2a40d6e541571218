"""
Pytest configuration and shared fixtures
"""

import os
import sys
from pathlib import Path

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

import pytest

from sitestats.executor import ExecutionContext

TESTING_DATA = Path(__file__).parent / "testing_data"

SCENARIO_A_LINES = [
    '{"texts": ["one two", "three"], "tags": ["a", "b"]}',
    '{"texts": ["four five six", "seven eight"], "tags": ["a"]}',
]


@pytest.fixture
def testing_data():
    """Directory of the JSON-lines fixtures shipped with the tests"""
    return TESTING_DATA


@pytest.fixture
def context():
    """Two-worker thread pool"""
    with ExecutionContext(num_workers=2) as ctx:
        yield ctx


@pytest.fixture
def write_site(tmp_path):
    """Write a site file from a list of lines and return its path"""

    def _write_site(name, lines, directory=None):
        directory = Path(directory) if directory is not None else tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return path

    return _write_site
