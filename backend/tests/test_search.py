"""Tests for semantic and keyword search."""

import pytest

from doc_vault.ingest.embeddings import embedding_text
from doc_vault.models.entities import FileInfo
from doc_vault.models.taxonomy import Category
from doc_vault.retrieval import SIMILARITY_FLOOR


def _ingest(pipeline, uploader, content: str, file_name: str):
    info = FileInfo(file_name=file_name, file_size=len(content), file_type="text/plain")
    return pipeline.ingest(content, info, uploader).document


def test_semantic_search_ranks_repeated_terms_first(search_service, make_document) -> None:
    model = search_service.embedding_model

    def _doc(doc_id: str, title: str, content: str):
        # Short texts keep their analysis summary equal to the content.
        vector = model.embed(embedding_text(title, content, content))
        return make_document(doc_id=doc_id, title=title, content=content, summary=content, embedding=vector)

    documents = [
        _doc("pets", "Pets", "The cat sat on the mat."),
        _doc("mat", "The cat sat on the mat.", "The cat sat on the mat."),
        _doc("revenue", "Revenue growth", "Revenue growth report. Revenue rose and growth continued."),
    ]

    results = search_service.semantic_search("revenue growth", "admin", documents)

    assert [result.document.id for result in results] == ["revenue", "pets"]
    assert results[0].score > results[1].score > SIMILARITY_FLOOR


def test_ingested_document_found_by_its_own_words(pipeline, store, search_service, uploader) -> None:
    revenue = _ingest(pipeline, uploader, "Revenue growth", "q3.txt")
    _ingest(pipeline, uploader, "Mild jazz lamb skips back", "other.txt")

    results = search_service.semantic_search("revenue growth", "admin", store.list_documents())

    assert [result.document.id for result in results] == [revenue.id]
    assert results[0].snippet == "Revenue growth..."


def test_semantic_search_respects_role(pipeline, store, search_service, uploader) -> None:
    _ingest(pipeline, uploader, "Revenue growth", "q3.txt")
    assert search_service.semantic_search("revenue growth", "finance", store.list_documents()) == []


def test_semantic_ties_keep_input_order(search_service, make_document) -> None:
    vector = search_service.embedding_model.embed("budget forecast")
    documents = [
        make_document(doc_id="b_doc", content="budget forecast", embedding=vector),
        make_document(doc_id="a_doc", content="budget forecast", embedding=vector),
    ]
    results = search_service.semantic_search("budget forecast", "admin", documents)
    assert [result.document.id for result in results] == ["b_doc", "a_doc"]
    assert results[0].score == results[1].score


def test_semantic_limit_applies_before_category_filter(search_service, make_document) -> None:
    vector = search_service.embedding_model.embed("budget forecast")
    documents = [
        make_document(doc_id="other", content="budget forecast", category=Category.OTHER, embedding=vector),
        make_document(doc_id="fin", content="budget forecast", category=Category.FINANCE, embedding=vector),
    ]
    assert len(search_service.semantic_search("budget forecast", "admin", documents, limit=1)) == 1
    assert search_service.semantic_search("budget forecast", "admin", documents, limit=1, category="Finance") == []
    filtered = search_service.semantic_search("budget forecast", "admin", documents, limit=2, category="finance")
    assert [result.document.id for result in filtered] == ["fin"]


def test_semantic_snippet_windows(search_service, make_document) -> None:
    model = search_service.embedding_model
    content = "x" * 100 + " Budget " + "y" * 300
    around = search_service.semantic_search(
        "budget", "admin", [make_document(content=content, embedding=model.embed("budget"))]
    )
    assert around[0].snippet == content[51:251] + "..."
    opening = search_service.semantic_search(
        "forecast", "admin", [make_document(content=content, embedding=model.embed("forecast"))]
    )
    assert opening[0].snippet == content[:200] + "..."


def test_keyword_search_counts_occurrences(pipeline, store, search_service, uploader) -> None:
    revenue = _ingest(pipeline, uploader, "Revenue growth", "q3.txt")
    results = search_service.keyword_search("revenue", "admin", store.list_documents())
    assert [result.document.id for result in results] == [revenue.id]
    # Title, content, summary and keywords each contain the word once.
    assert results[0].score == 4.0
    assert results[0].snippet == "Revenue growth..."


def test_keyword_search_drops_non_matches(search_service, make_document) -> None:
    documents = [
        make_document(doc_id="one", content="alpha beta"),
        make_document(doc_id="two", content="alpha alpha"),
        make_document(doc_id="three", content="gamma"),
    ]
    results = search_service.keyword_search("alpha", "admin", documents)
    assert [result.document.id for result in results] == ["two", "one"]
    assert [result.score for result in results] == [2.0, 1.0]


def test_keyword_snippet_uses_summary_when_content_lacks_match(search_service, make_document) -> None:
    documents = [make_document(title="Budget", content="numbers only", summary="Short summary")]
    results = search_service.keyword_search("budget", "admin", documents)
    assert results[0].snippet == "Short summary"


def test_keyword_snippet_window(search_service, make_document) -> None:
    content = "a" * 100 + " budget " + "b" * 300
    results = search_service.keyword_search("budget", "admin", [make_document(content=content)])
    assert results[0].snippet == content[51 : 51 + 200] + "..."


def test_unknown_category_rejected(search_service, make_document) -> None:
    with pytest.raises(ValueError):
        search_service.keyword_search("x", "admin", [make_document(content="x")], category="Memes")


def test_get_document_hidden_from_other_roles(search_service, make_document) -> None:
    documents = [make_document(doc_id="hr_doc", category=Category.HR)]
    assert search_service.get_document("hr_doc", "hr", documents) is documents[0]
    assert search_service.get_document("hr_doc", "finance", documents) is None


def test_recent_documents(search_service, make_document) -> None:
    documents = [
        make_document(doc_id="jan", upload_date="2024-01-01"),
        make_document(doc_id="mar", upload_date="2024-03-01"),
        make_document(doc_id="feb", upload_date="2024-02-01"),
    ]
    assert [doc.id for doc in search_service.recent_documents("admin", documents)] == ["mar", "feb", "jan"]
    assert [doc.id for doc in search_service.recent_documents("admin", documents, limit=1)] == ["mar"]


def test_list_documents_sorting(search_service, make_document) -> None:
    documents = [
        make_document(doc_id="b", title="beta", category=Category.LEGAL),
        make_document(doc_id="a", title="Alpha", category=Category.FINANCE),
    ]
    assert [doc.id for doc in search_service.list_documents("admin", documents, sort_by="title")] == ["a", "b"]
    assert [doc.id for doc in search_service.list_documents("admin", documents, sort_by="category")] == ["a", "b"]
    assert [doc.id for doc in search_service.list_documents("admin", documents, category="Legal")] == ["b"]
    with pytest.raises(ValueError):
        search_service.list_documents("admin", documents, sort_by="size")


def test_category_stats_follow_visibility(search_service, make_document) -> None:
    documents = [
        make_document(doc_id="f1", category=Category.FINANCE),
        make_document(doc_id="f2", category=Category.FINANCE),
        make_document(doc_id="i1", category=Category.INVOICES),
        make_document(doc_id="h1", category=Category.HR),
    ]
    assert search_service.category_stats("finance", documents) == {"Finance": 2, "Invoices": 1}
    assert search_service.category_stats("admin", documents) == {"Finance": 2, "Invoices": 1, "HR": 1}
    assert search_service.category_stats("intern", documents) == {}
