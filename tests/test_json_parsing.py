"""Tests for JSON extraction from model output."""

from idea_insight.adapters.llm.json_parsing import extract_json_object, fix_json


def test_plain_json() -> None:
    """Test plain JSON text is parsed directly."""
    assert extract_json_object('{"industry": "Pets", "keywords": []}') == {
        "industry": "Pets",
        "keywords": [],
    }


def test_extract_json_from_markdown() -> None:
    """Test extracting JSON from markdown code block."""
    text = '```json\n{"industry": "Pets", "score": 0.8}\n```'
    assert extract_json_object(text)["score"] == 0.8


def test_extract_json_from_markdown_without_language() -> None:
    """Test extracting JSON from markdown code block without language tag."""
    text = '```\n{"industry": "Travel"}\n```'
    assert extract_json_object(text) == {"industry": "Travel"}


def test_extract_nested_json_with_prefix() -> None:
    """Test extracting nested JSON when there's text around it."""
    text = (
        'Here is the analysis: {"industry": "Pets", '
        '"competitors": [{"name": "Rover", "strengths": ["brand"]}], '
        '"keywords": ["pets"],} Thanks!'
    )
    parsed = extract_json_object(text)

    assert parsed["industry"] == "Pets"
    assert parsed["competitors"][0]["name"] == "Rover"


def test_braces_inside_strings() -> None:
    """Test braces inside string values do not end the object."""
    text = 'Result: {"industry": "a } b", "nested": {"x": 1}} done'
    assert extract_json_object(text) == {"industry": "a } b", "nested": {"x": 1}}


def test_fix_json_trailing_comma() -> None:
    """Test fixing trailing comma in JSON."""
    assert fix_json('{"a": [1, 2,], "b": 3,}') == '{"a": [1, 2], "b": 3}'


def test_unparseable_returns_none() -> None:
    """Test text without JSON gives None."""
    assert extract_json_object("Sorry, I can't do that.") is None
    assert extract_json_object("{not json at all") is None
