import pytest

from job_assistant.dialogue.slots import (
    extract_content_words,
    extract_search_terms,
    parse_location,
    parse_salary,
    parse_skill,
)


@pytest.mark.parametrize(
    "message,expected",
    [
        ("5 lakh", 500000),
        ("Jobs paying 50k", 50000),
        ("2 thousand please", 2000),
        ("salary 7 LAC", 700000),
        ("at least 12 K", 12000),
    ],
)
def test_parse_salary(message, expected):
    slot = parse_salary(message)
    assert slot is not None
    assert slot.value == expected


def test_parse_salary_absent():
    assert parse_salary("a good salary") is None
    assert parse_salary("") is None


def test_parse_location():
    assert parse_location("Show me jobs in Pune") == "Pune"
    assert parse_location("anything NEAR new york") == "new york"
    assert parse_location("work at Bangalore office") == "Bangalore office"
    assert parse_location("remote jobs") is None
    # word boundary: "update" does not start a location
    assert parse_location("update my profile") is None


def test_parse_skill_first_vocabulary_match():
    assert parse_skill("need JavaScript skill") == "javascript"
    assert parse_skill("java requirement") == "java"
    assert parse_skill("any qualification?") is None


def test_extract_search_terms():
    assert extract_search_terms("Show me jobs in Pune") == "Pune"
    assert extract_search_terms("find python developer jobs") == "python developer"
    assert extract_search_terms("show me jobs") == ""


def test_extract_content_words_drops_short_and_stop_words():
    assert extract_content_words("quantum with the data science") == ["quantum", "data", "science"]
    assert extract_content_words("ok so me") == []
