from __future__ import annotations
import pytest

from lsm.match import MatchConfig, MatchMode
from .counting_source import CountingSource


@pytest.fixture
def kitten_pool():
    """Word-mode pool used by the end-to-end scenarios."""
    return [
        {'id': 1, 'word': 'sitting'},
        {'id': 2, 'word': 'mitten'},
        {'id': 3, 'word': 'xyz'},
    ]


@pytest.fixture
def kitten_config():
    return MatchConfig(source_term='kitten', threshold=0.5, field='word', mode=MatchMode.WORD)


@pytest.fixture
def counting_source(kitten_pool):
    return CountingSource(kitten_pool)
