from pathlib import Path

import pytest

from basin.domains.valley import Valley, load_map

INPUTS = Path(__file__).resolve().parent.parent / "inputs"


@pytest.fixture
def example_valley() -> Valley:
    return load_map(INPUTS / "example.txt")


@pytest.fixture
def small_valley() -> Valley:
    return load_map(INPUTS / "small.txt")


@pytest.fixture
def example_path() -> Path:
    return INPUTS / "example.txt"


@pytest.fixture
def small_path() -> Path:
    return INPUTS / "small.txt"
