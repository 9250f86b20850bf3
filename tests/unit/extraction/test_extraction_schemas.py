"""Tests for the extraction record schemas."""

import pytest
from pydantic import ValidationError

from legaldocs.schemas.extraction import (
    ClauseImportance,
    ClauseType,
    DocumentLanguage,
    ExtractedClause,
    ExtractedFinancialAmount,
    ExtractedParty,
    ExtractionRecord,
    PartyType,
)


def test_record_parses_camel_case_payload(sample_record):
    assert sample_record.document_type == "lease_agreement"
    assert sample_record.language is DocumentLanguage.EN
    assert [p.name for p in sample_record.parties] == ["Ahmed Al Mansoori", "Gulf Trading LLC"]
    assert sample_record.parties[1].is_company
    assert sample_record.financials.currency == "AED"
    assert sample_record.financials.payment_terms == "Four post-dated cheques"
    assert sample_record.dates.start_date == "2025-01-01"
    assert sample_record.dates.custom_dates[0].label == "Handover"
    assert sample_record.clauses[0].is_critical
    assert [t.term for t in sample_record.key_terms] == ["Rent", "Term"]


def test_missing_categories_default_to_empty():
    record = ExtractionRecord.model_validate(
        {"parties": None, "clauses": None, "financials": None, "dates": None, "warnings": None}
    )

    assert record.parties == ()
    assert record.clauses == ()
    assert record.financials.amounts == ()
    assert record.dates.start_date is None
    assert record.dates.custom_dates == ()
    assert record.warnings == ()
    assert record.document_type == "unknown"


def test_record_is_immutable(sample_record):
    with pytest.raises(ValidationError):
        sample_record.summary = "changed"


def test_key_terms_keep_order_and_duplicates():
    record = ExtractionRecord.model_validate(
        {
            "keyTerms": [
                {"term": "Fee", "value": "100"},
                {"term": "Fee", "value": "200"},
                {"term": "Deposit", "value": "50"},
            ]
        }
    )

    assert [(t.term, t.value) for t in record.key_terms] == [
        ("Fee", "100"),
        ("Fee", "200"),
        ("Deposit", "50"),
    ]


@pytest.mark.parametrize("raw", ["unknown_future_type", "", None, 42])
def test_unknown_clause_type_becomes_other(raw):
    clause = ExtractedClause.model_validate({"id": "c1", "type": raw})

    assert clause.type is ClauseType.OTHER


def test_clause_type_is_case_insensitive():
    clause = ExtractedClause.model_validate({"id": "c1", "type": "Governing_Law"})

    assert clause.type is ClauseType.GOVERNING_LAW


def test_unknown_importance_is_standard():
    clause = ExtractedClause.model_validate({"id": "c1", "importance": "urgent"})

    assert clause.importance is ClauseImportance.STANDARD
    assert not clause.is_critical


def test_numeric_clause_id_becomes_string():
    clause = ExtractedClause.model_validate({"id": 7})

    assert clause.id == "7"


@pytest.mark.parametrize("raw, expected", [(1.4, 1.0), (-0.2, 0.0), ("0.5", 0.5), (None, 0.0), ("high", 0.0)])
def test_confidence_is_clamped(raw, expected):
    party = ExtractedParty.model_validate({"name": "X", "confidence": raw})

    assert party.confidence == expected


def test_party_type_defaults():
    assert ExtractedParty.model_validate({"name": "X"}).type is PartyType.INDIVIDUAL
    assert ExtractedParty.model_validate({"name": "X", "type": "trust"}).type is PartyType.UNKNOWN


def test_amount_value_accepts_formatted_string():
    amount = ExtractedFinancialAmount.model_validate({"value": "50,000", "description": None})

    assert amount.value == 50000.0
    assert amount.description == ""


def test_unknown_extra_fields_are_kept():
    record = ExtractionRecord.model_validate({"propertyDetails": {"area": "Marina"}})

    assert record.model_extra["propertyDetails"] == {"area": "Marina"}


def test_find_clause(sample_record):
    assert sample_record.find_clause("clause-2").title == "Maintenance"
    assert sample_record.find_clause("missing") is None


def test_amount_value_with_currency_prefix():
    assert ExtractedFinancialAmount.model_validate({"value": "AED 5,000"}).value == 5000.0
    assert ExtractedFinancialAmount.model_validate({"value": "to be agreed"}).value == 0.0


def test_clause_without_id_gets_positional_id():
    record = ExtractionRecord.model_validate(
        {"clauses": [{"id": "clause-1", "title": "Rent"}, {"title": "Deposit"}, {"id": None, "title": "Term"}]}
    )

    assert [c.id for c in record.clauses] == ["clause-1", "clause-2", "clause-3"]
    assert record.find_clause("clause-2").title == "Deposit"


def test_generated_clause_id_does_not_collide():
    record = ExtractionRecord.model_validate({"clauses": [{"title": "Rent"}, {"id": "clause-1", "title": "Term"}]})

    ids = [c.id for c in record.clauses]
    assert len(set(ids)) == 2
    assert "clause-1" in ids


def test_invalid_entries_are_dropped_individually():
    record = ExtractionRecord.model_validate(
        {
            "parties": [{"name": "Ahmed"}, "not a party", {"name": "Sara", "email": ["a", "b"]}],
            "keyTerms": [{"term": "Rent", "value": "5000"}, {"value": "no term"}],
            "warnings": ["Scan is blurry", 42, None],
        }
    )

    assert [p.name for p in record.parties] == ["Ahmed"]
    assert [t.term for t in record.key_terms] == ["Rent"]
    assert record.warnings == ("Scan is blurry",)


def test_null_custom_date_is_kept_as_empty():
    record = ExtractionRecord.model_validate({"dates": {"customDates": [{"label": "Handover", "date": None}]}})

    assert record.dates.custom_dates[0].label == "Handover"
    assert record.dates.custom_dates[0].date == ""


def test_malformed_aggregate_falls_back_to_empty():
    record = ExtractionRecord.model_validate(
        {"parties": [{"name": "Ahmed"}], "financials": "AED 5,000", "dates": {"startDate": ["2025"]}}
    )

    assert len(record.parties) == 1
    assert record.financials.amounts == ()
    assert record.dates.start_date is None


def test_collections_are_immutable(sample_record):
    assert isinstance(sample_record.parties, tuple)
    assert isinstance(sample_record.clauses, tuple)
    assert isinstance(sample_record.financials.amounts, tuple)
    with pytest.raises(AttributeError):
        sample_record.warnings.append("changed")
