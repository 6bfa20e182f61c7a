"""Tests for Gemini prompt building and answer parsing."""

from wcag_scanner.suggestions.gemini.models import GenerateContentResponse
from wcag_scanner.suggestions.gemini.provider import (
    NO_CODE,
    NO_EXPLANATION,
    build_prompt,
    parse_suggestion,
)
from wcag_scanner.testing.factories import ViolationFactory
from wcag_scanner.testing.payloads import generate_content_response


def test_build_prompt() -> None:
    """Includes the rule, description and markup."""
    violation = ViolationFactory.build()

    prompt = build_prompt(violation)

    assert "Rule: img-alt" in prompt
    assert "Description: Image is missing alt text" in prompt
    assert '<img src="cat.png">' in prompt


def test_parse_suggestion_with_code_block() -> None:
    """Splits the first code block from the explanation."""
    text = (
        "Add an alt attribute:\n"
        "```html\n<img src=\"cat.png\" alt=\"A sleeping cat\">\n```\n"
        "Screen readers announce the alt text."
    )

    fix = parse_suggestion(text)

    assert fix.code == '<img src="cat.png" alt="A sleeping cat">'
    assert fix.description == "AI-suggested fix"
    assert fix.explanation == "Add an alt attribute:\n\nScreen readers announce the alt text."


def test_parse_suggestion_without_code() -> None:
    """Uses placeholders when parts are missing."""
    assert parse_suggestion("Just add a label.").code == NO_CODE
    assert parse_suggestion("```<b>x</b>```").explanation == NO_EXPLANATION


def test_response_text() -> None:
    """Joins the parts of the first candidate."""
    response = GenerateContentResponse.model_validate(generate_content_response("Hello"))

    assert response.text == "Hello"
    assert GenerateContentResponse.model_validate({}).text == ""
