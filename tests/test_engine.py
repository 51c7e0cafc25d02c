import threading

from minisearch.engine import SearchEngine
from minisearch.search import QueryStatus
from minisearch.tokenizer import Normalizer, PorterStemmer


def test_new_engine_is_empty():
    engine = SearchEngine()
    assert engine.document_count() == 0
    assert engine.ranked_search("anything").status is QueryStatus.INDEX_EMPTY
    assert engine.boolean_and_search("anything").status is QueryStatus.INDEX_EMPTY


def test_build_and_query(scenario_docs):
    engine = SearchEngine()
    engine.build(scenario_docs)
    assert engine.document_count() == 3
    assert engine.vocabulary_size() == 4
    assert engine.boolean_and_search("cat dog").identifiers == ["doc0"]
    assert [r.identifier for r in engine.ranked_search("fish")] == ["doc2"]
    assert engine.document_magnitude(2) > 0.0
    assert set(engine.document_vector(2)) == {"cat", "bird", "fish"}


def test_build_replaces_corpus(scenario_docs):
    engine = SearchEngine()
    engine.build(scenario_docs)
    engine.build({"x": "zebra stripes"})
    assert engine.document_count() == 1
    assert engine.boolean_and_search("cat").status is QueryStatus.MISSING_TERM


def test_add_documents_publishes_a_new_index(scenario_docs):
    engine = SearchEngine()
    old = engine.build(scenario_docs)
    new = engine.add_documents({"doc3": "fish fish shark"}, titles={"doc3": "Sea"})

    assert new is engine.index
    assert new is not old
    # Published indexes are never modified in place.
    assert old.document_count() == 3
    assert old.get_entry("fish").doc_freq == 1
    assert new.document_count() == 4
    assert new.get_entry("fish").doc_freq == 2
    assert [new.identifier(i) for i in range(4)] == ["doc0", "doc1", "doc2", "doc3"]
    assert new.document(3).title == "Sea"


def test_add_documents_replaces_by_identifier(scenario_docs):
    engine = SearchEngine()
    engine.build(scenario_docs)
    engine.add_documents({"doc1": "owl"})
    assert engine.document_count() == 3
    assert engine.index.doc_id_for("doc1") == 1
    assert engine.boolean_and_search("owl").identifiers == ["doc1"]
    assert engine.boolean_and_search("dog").identifiers == ["doc0"]


def test_engine_uses_its_normalizer_for_queries():
    engine = SearchEngine(Normalizer(stemmer=PorterStemmer()))
    engine.build({"a": "running fast", "b": "walking slowly"})
    assert engine.boolean_and_search("runs").identifiers == ["a"]


def test_concurrent_readers_see_consistent_indexes(scenario_docs):
    engine = SearchEngine()
    engine.build(scenario_docs)
    errors = []

    def reader():
        for _ in range(200):
            index = engine.index
            n = index.document_count()
            for term in index.terms():
                entry = index.get_entry(term)
                if entry.doc_freq > n:
                    errors.append(term)
            engine.ranked_search("cat fish")

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for i in range(10):
        engine.add_documents({f"extra{i}": f"cat term{i}"})
    for t in threads:
        t.join()

    assert errors == []
    assert engine.document_count() == 13
