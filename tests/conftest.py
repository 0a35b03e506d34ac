"""Shared fixtures for codec and text tests."""

from __future__ import annotations

import pytest

from contract import CodecContract, build_contract
from immutable_text import Text
from settings import SearchConfig


@pytest.fixture(scope="session")
def contract() -> CodecContract:
    return build_contract()


@pytest.fixture
def hello() -> Text:
    return Text("hello")


@pytest.fixture
def emoji_text() -> Text:
    """'a', U+1F600 (two code units), 'b'."""
    return Text("a\U0001f600b")


@pytest.fixture
def small_search_config() -> SearchConfig:
    """A quick search: few samples, a handful of radixes."""
    return SearchConfig(seed=7, samples=40, radixes=[2, 8, 10, 16, 36], max_text_length=6)
