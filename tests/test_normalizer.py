"""Tests for tolerant response parsing."""

import json

import pytest

from skillmatch.evaluation.normalizer import (
    DEFAULT_FEEDBACK,
    MAX_LIST_ITEMS,
    extract_json_object,
    neutral_breakdown,
    parse_evaluation_response,
    round_half_up,
)


def test_extract_plain_object():
    extraction = extract_json_object('{"a": 1}')
    assert extraction.ok
    assert extraction.data == {"a": 1}


def test_extract_fenced_object_with_prose():
    text = 'Here is my evaluation:\n```json\n{"technicalScore": 70}\n```\nHope it helps!'
    extraction = extract_json_object(text)
    assert extraction.ok
    assert extraction.data == {"technicalScore": 70}


@pytest.mark.parametrize("text", [None, "", "no json here", "[1, 2, 3]", '{"broken": '])
def test_extract_failures(text):
    extraction = extract_json_object(text)
    assert not extraction.ok
    assert extraction.failure


def test_parse_full_payload(score_json):
    breakdown = parse_evaluation_response(score_json)
    assert breakdown.technical_score == 85
    assert breakdown.clarity_score == 80
    assert breakdown.communication_score == 90
    assert breakdown.overall_score == 85
    assert breakdown.strengths == ["Clean code", "Good tests"]


def test_parse_fenced_payload_matches_plain(score_json):
    fenced = f"```json\n{score_json}\n```"
    assert parse_evaluation_response(fenced) == parse_evaluation_response(score_json)


def test_overall_score_computed_when_missing():
    raw = json.dumps({"technicalScore": 80, "clarityScore": 70, "communicationScore": 91})
    breakdown = parse_evaluation_response(raw)
    # (80 + 70 + 91) / 3 = 80.33
    assert breakdown.overall_score == 80


def test_overall_score_rounds_half_up():
    raw = json.dumps({"technicalScore": 80, "clarityScore": 81, "communicationScore": 80.5})
    # communication rounds to 81, mean of 80/81/81 = 80.67
    assert parse_evaluation_response(raw).overall_score == 81
    assert round_half_up(2.5) == 3
    assert round_half_up(84.5) == 85


def test_scores_are_clamped():
    raw = json.dumps(
        {"technicalScore": 150, "clarityScore": -20, "communicationScore": "75", "overallScore": 101}
    )
    breakdown = parse_evaluation_response(raw)
    assert breakdown.technical_score == 100
    assert breakdown.clarity_score == 0
    assert breakdown.communication_score == 75
    assert breakdown.overall_score == 100


def test_missing_fields_get_defaults():
    breakdown = parse_evaluation_response('{"technicalScore": 60}')
    assert breakdown.clarity_score == 0
    assert breakdown.communication_score == 0
    assert breakdown.overall_score == 20
    assert breakdown.feedback == DEFAULT_FEEDBACK
    assert breakdown.strengths == []
    assert breakdown.improvements == []


def test_lists_are_capped():
    raw = json.dumps({"technicalScore": 50, "strengths": [f"s{i}" for i in range(9)]})
    assert len(parse_evaluation_response(raw).strengths) == MAX_LIST_ITEMS


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "The submission looks great, 9/10!",
        '{"technicalScore": "excellent"}',
        '{"technicalScore": true}',
        "[]",
    ],
)
def test_unparseable_response_yields_neutral(raw):
    breakdown = parse_evaluation_response(raw)
    assert breakdown == neutral_breakdown()
    assert breakdown.technical_score == 50
    assert breakdown.overall_score == 50
    assert breakdown.feedback
    assert breakdown.strengths
    assert breakdown.improvements


@pytest.mark.parametrize("field", ["technicalScore", "overallScore"])
def test_oversized_integer_score_yields_neutral(field):
    raw = '{"' + field + '": ' + "9" * 400 + ', "clarityScore": 80}'
    assert parse_evaluation_response(raw) == neutral_breakdown()


def test_deeply_nested_payload_yields_neutral():
    raw = '{"technicalScore": ' + "[" * 100000 + "]" * 100000 + "}"
    assert parse_evaluation_response(raw) == neutral_breakdown()
