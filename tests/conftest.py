import pytest

from minisearch.index_builder import build_index

SCENARIO_DOCS = {
    "doc0": "cat dog cat",
    "doc1": "dog bird",
    "doc2": "cat bird fish",
}


@pytest.fixture
def scenario_docs():
    return dict(SCENARIO_DOCS)


@pytest.fixture
def scenario_index():
    return build_index(SCENARIO_DOCS)
