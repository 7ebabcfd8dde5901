import pytest

from app.core.errors import ValidationError
from app.services.query_normalizer import normalize, tokenize


def test_tokenize_lowercases_and_drops_empty_tokens():
    assert tokenize("  Kasa   COUGH \t ") == ("kasa", "cough")
    assert tokenize("") == ()
    assert tokenize(None) == ()


def test_defaults():
    descriptor = normalize("", {})
    assert descriptor.tokens == ()
    assert descriptor.page == 1
    assert descriptor.limit == 20
    assert descriptor.category is None
    assert descriptor.min_confidence is None


def test_parses_string_inputs_from_query_string():
    descriptor = normalize(
        "Cough",
        {"category": "Ayurveda", "chapter": "Respiratory System Disorders", "minConfidence": "0.5", "maxConfidence": "0.9"},
        "2",
        "10",
    )
    assert descriptor.tokens == ("cough",)
    assert descriptor.category == "Ayurveda"
    assert descriptor.chapter_name == "Respiratory System Disorders"
    assert descriptor.min_confidence == 0.5
    assert descriptor.max_confidence == 0.9
    assert descriptor.page == 2
    assert descriptor.limit == 10
    assert descriptor.offset == 10


def test_empty_filter_values_are_absent():
    descriptor = normalize("x", {"category": "", "chapter": "  ", "minConfidence": None})
    assert descriptor.category is None
    assert descriptor.chapter_name is None
    assert descriptor.min_confidence is None


def test_chapter_name_alias():
    assert normalize("", {"chapterName": "Joint Disorders"}).chapter_name == "Joint Disorders"


@pytest.mark.parametrize(
    "filters, page, limit, field",
    [
        ({"category": "Homeopathy"}, None, None, "category"),
        ({"minConfidence": "0.9", "maxConfidence": "0.1"}, None, None, "minConfidence"),
        ({"minConfidence": "high"}, None, None, "minConfidence"),
        ({"maxConfidence": "1.5"}, None, None, "maxConfidence"),
        ({}, "0", None, "page"),
        ({}, "abc", None, "page"),
        ({}, None, "0", "limit"),
        ({}, None, "101", "limit"),
        ({}, None, 2.5, "limit"),
    ],
)
def test_rejects_invalid_input(filters, page, limit, field):
    with pytest.raises(ValidationError) as exc_info:
        normalize("", filters, page, limit)
    assert exc_info.value.field == field
    assert exc_info.value.kind == "validation_error"
    assert exc_info.value.details["field"] == field


def test_limit_at_maximum_is_accepted():
    assert normalize("", {}, 1, 100).limit == 100


def test_custom_limits():
    descriptor = normalize("", {}, None, None, default_limit=5, max_limit=10)
    assert descriptor.limit == 5
    with pytest.raises(ValidationError):
        normalize("", {}, None, 11, default_limit=5, max_limit=10)


def test_equal_confidence_bounds_are_valid():
    descriptor = normalize("", {"minConfidence": 0.9, "maxConfidence": 0.9})
    assert descriptor.min_confidence == descriptor.max_confidence == 0.9
