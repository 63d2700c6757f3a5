"""Tests for infrastructure services."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from skillmatch.infrastructure.audit_logger import EvaluationAuditLog
from skillmatch.infrastructure.cost_tracker import CostTracker
from skillmatch.infrastructure.llm_client import LLMClient
from skillmatch.models.audit import AuditEntry
from skillmatch.models.evaluation import EvaluationResult, TokenUsage
from skillmatch.models.validation import ValidationResult


def _result(model_used: str, cost: float, tokens: int) -> EvaluationResult:
    return EvaluationResult(
        technical_score=80,
        clarity_score=80,
        communication_score=80,
        overall_score=80,
        feedback="ok",
        model_used=model_used,
        cost_incurred=cost,
        token_usage=TokenUsage(prompt_tokens=tokens, completion_tokens=0, total_tokens=tokens),
    )


@pytest.mark.asyncio
async def test_llm_client_generate_text(completion_factory):
    """generate_text returns content and token usage and forwards call options."""
    client = LLMClient(
        model="groq/llama-3.1-8b-instant",
        temperature=0.2,
        max_tokens=500,
        api_key="groq-test",
        timeout=30,
        json_mode=True,
    )

    with patch(
        "skillmatch.infrastructure.llm_client.acompletion", new_callable=AsyncMock
    ) as mock_completion:
        mock_completion.return_value = completion_factory('{"ok": true}', 100, 50)

        text, usage = await client.generate_text(
            messages=[{"role": "user", "content": "Judge this"}],
            system_prompt="You are a judge.",
        )

    assert text == '{"ok": true}'
    assert usage == TokenUsage(prompt_tokens=100, completion_tokens=50, total_tokens=150)

    kwargs = mock_completion.call_args.kwargs
    assert kwargs["model"] == "groq/llama-3.1-8b-instant"
    assert kwargs["api_key"] == "groq-test"
    assert kwargs["timeout"] == 30
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0] == {"role": "system", "content": "You are a judge."}
    assert kwargs["messages"][1]["content"] == "Judge this"


@pytest.mark.asyncio
async def test_llm_client_omits_unset_options(completion_factory):
    client = LLMClient(model="gpt-4o")

    with patch(
        "skillmatch.infrastructure.llm_client.acompletion", new_callable=AsyncMock
    ) as mock_completion:
        mock_completion.return_value = completion_factory(None)
        text, _ = await client.generate_text(messages=[{"role": "user", "content": "hi"}])

    assert text == ""
    kwargs = mock_completion.call_args.kwargs
    assert "api_key" not in kwargs
    assert "timeout" not in kwargs
    assert "response_format" not in kwargs
    assert len(kwargs["messages"]) == 1


@pytest.mark.asyncio
async def test_llm_client_non_transient_error_not_retried():
    client = LLMClient(model="gpt-4o")

    with patch(
        "skillmatch.infrastructure.llm_client.acompletion", new_callable=AsyncMock
    ) as mock_completion:
        mock_completion.side_effect = ValueError("bad request")
        with pytest.raises(ValueError):
            await client.generate_text(messages=[{"role": "user", "content": "hi"}])

    assert mock_completion.call_count == 1


def test_cost_tracker_accumulates_by_model():
    tracker = CostTracker()

    assert tracker.add_result(_result("gpt-4o", 0.0025, 1000)) == 0.0025
    tracker.add_result(_result("gpt-4o", 0.0015, 600))
    tracker.add_result(_result("gemini-2.0-flash", 0.0, 900))

    assert tracker.total_cost() == 0.004
    assert tracker.total_tokens().total_tokens == 2500

    summary = tracker.summary()
    assert summary["total_cost_usd"] == 0.004
    assert summary["by_model"]["gpt-4o"]["evaluations"] == 2
    assert summary["by_model"]["gpt-4o"]["tokens"]["total_tokens"] == 1600
    assert summary["by_model"]["gemini-2.0-flash"]["cost_usd"] == 0.0


def test_audit_log_records_each_stage(tmp_path: Path):
    audit = EvaluationAuditLog.for_run(tmp_path / "audit", "run-1")

    audit.log_transcription("https://cdn.site.dev/demo.mp4", "I built a todo API.")
    audit.log_validation(ValidationResult.from_findings([], ["Repository appears to be empty"], 12))
    audit.log_evaluation(_result("gemini-2.0-flash", 0.0, 900), requested_model="gpt-4o")

    entries = audit.read()
    assert [e.stage for e in entries] == ["transcription", "validation", "evaluation"]
    assert [e.sequence for e in entries] == [1, 2, 3]
    assert all(e.run_id == "run-1" for e in entries)

    transcription, validation, evaluation = entries
    assert transcription.transcript_chars == 19
    assert validation.is_valid
    assert validation.warnings == ["Repository appears to be empty"]
    assert validation.plagiarism_score == 12
    assert validation.validation_confidence == 80
    assert evaluation.requested_model == "gpt-4o"
    assert evaluation.model_used == "gemini-2.0-flash"
    assert evaluation.tokens.total_tokens == 900
    assert not evaluation.failed


def test_audit_log_failure_record(tmp_path: Path):
    audit = EvaluationAuditLog(tmp_path / "run.jsonl", "run-2")

    audit.log_failure("evaluation", RuntimeError("boom"), requested_model="gpt-4o")

    raw = json.loads((tmp_path / "run.jsonl").read_text().strip())
    assert raw["error_type"] == "RuntimeError"
    assert raw["error_message"] == "boom"
    assert "overall_score" not in raw

    entry = AuditEntry.model_validate(raw)
    assert entry.failed
    assert entry.requested_model == "gpt-4o"


def test_audit_log_read_before_any_record(tmp_path: Path):
    assert EvaluationAuditLog(tmp_path / "missing.jsonl", "run-3").read() == []
