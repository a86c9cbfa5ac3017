"""Tests for tokenizing and entity extraction."""

import re

import pytest

from doc_vault.analysis.classifier import classify
from doc_vault.analysis.text import (
    ENTITY_CAP,
    EntityPattern,
    extract,
    extract_amounts,
    extract_dates,
    extract_entities,
    extract_organizations,
    extract_people,
    register_pattern,
    tokenize,
    word_frequency,
)
from doc_vault.models.taxonomy import Category


def test_tokenize_strips_punctuation() -> None:
    assert tokenize("Hello, World! hello") == ["hello", "world", "hello"]


def test_word_frequency_keeps_first_seen_order() -> None:
    freq = word_frequency("beta alpha beta gamma")
    assert list(freq) == ["beta", "alpha", "gamma"]
    assert freq["beta"] == 2


def test_invoice_entities(invoice_text: str) -> None:
    entities = extract_entities(invoice_text)
    assert entities.amounts == ("$500",)
    assert entities.dates == ("01/15/2024",)
    assert entities.organizations == ("Acme Corp",)


def test_people_and_organizations() -> None:
    assert extract_people("Jane Doe met John Smith") == ["Jane Doe", "John Smith"]
    assert extract_organizations("Deal between IBM Research and Globex Inc.") == [
        "IBM Research",
        "Globex Inc",
    ]


def test_amount_forms() -> None:
    text = "Paid $1,250.00 and 300 USD plus 45 dollars"
    assert extract_amounts(text) == ["$1,250.00", "300 USD", "45 dollars"]


def test_dates_merge_by_position() -> None:
    text = "Signed 02-03-2024 after March 3, 2024 and 01/02/2024"
    assert extract_dates(text) == ["02-03-2024", "March 3, 2024", "01/02/2024"]


def test_entities_deduplicated_and_capped() -> None:
    dates = [f"1/{day}/2020" for day in range(1, 13)]
    text = " ".join(["1/1/2020", "1/1/2020"] + dates)
    found = extract_dates(text)
    assert len(found) == ENTITY_CAP
    assert found == dates[:ENTITY_CAP]


def test_empty_text_has_no_entities() -> None:
    entities = extract_entities("")
    assert entities.to_dict() == {"people": [], "organizations": [], "amounts": [], "dates": []}


def test_unknown_family_raises() -> None:
    with pytest.raises(KeyError):
        extract("anything", "vehicles")


def test_duplicate_family_rejected() -> None:
    with pytest.raises(ValueError):
        register_pattern(EntityPattern(kind="dates", regexes=(re.compile(r"\d+"),)))


def test_numbered_invoice_scenario() -> None:
    content = "Invoice #123 payment due $500 to Acme Corp on 01/15/2024."
    assert classify(content, "invoice.txt") is Category.FINANCE
    assert "$500" in extract_amounts(content)
    assert "01/15/2024" in extract_dates(content)
    assert "Acme Corp" in extract_organizations(content)
