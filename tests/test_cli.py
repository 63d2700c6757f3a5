"""Tests for configuration loading and CLI functionality."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml

from skillmatch.cli.main import async_main, build_parser
from skillmatch.cli.runner import load_submission_file, run_evaluate, run_validate
from skillmatch.models.config import Settings
from skillmatch.models.evaluation import EvaluationResult
from skillmatch.models.validation import ValidationResult
from skillmatch.orchestration.pipeline import SubmissionEvaluationPipeline, SubmissionOutcome
from skillmatch.validation.validator import SubmissionValidator


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.evaluation_temperature == 0.8
    assert settings.evaluation_max_tokens == 3000
    assert settings.validation_model == "gemini-2.0-flash"
    assert settings.github_timeout == 5.0
    assert settings.thresholds.video_issue_confidence == 70
    assert settings.thresholds.plagiarism_warning_score == 60


def test_settings_from_yaml(tmp_path: Path):
    config_path = tmp_path / "settings.yaml"
    with open(config_path, "w") as f:
        yaml.dump(
            {
                "groq_api_key": "groq-from-yaml",
                "evaluation_temperature": 0.4,
                "thresholds": {"plagiarism_issue_score": 90},
            },
            f,
        )

    settings = Settings.from_yaml(config_path, _env_file=None)

    assert settings.api_key("groq_api_key") == "groq-from-yaml"
    assert settings.api_key("openai_api_key") is None
    assert settings.evaluation_temperature == 0.4
    assert settings.thresholds.plagiarism_issue_score == 90
    assert settings.thresholds.plagiarism_warning_score == 60


def test_settings_from_missing_yaml(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        Settings.from_yaml(tmp_path / "missing.yaml")


def test_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("SKILLMATCH_OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("SKILLMATCH_THRESHOLDS__VIDEO_ISSUE_CONFIDENCE", "75")

    settings = Settings(_env_file=None)

    assert settings.api_key("openai_api_key") == "sk-env"
    assert settings.thresholds.video_issue_confidence == 75


def test_load_submission_file(submission_file: Path):
    challenge, submission = load_submission_file(str(submission_file))

    assert challenge.challenge_type == "job"
    assert challenge.pricing_tier == "balanced"
    assert challenge.difficulty == "hard"
    assert submission.text_content == "I used FastAPI and SQLite."
    assert submission.link_url is None


def test_load_submission_file_missing_section(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("submission:\n  text_content: hi\n")

    with pytest.raises(KeyError):
        load_submission_file(str(path))


@pytest.mark.asyncio
async def test_run_validate_with_injected_validator(submission_file: Path):
    validator = MagicMock(spec=SubmissionValidator)
    validator.validate_submission = AsyncMock(return_value=ValidationResult.from_findings([], []))

    result = await run_validate(str(submission_file), Settings(_env_file=None), validator=validator)

    assert result.is_valid
    context = validator.validate_submission.call_args.args[1]
    assert context.category == "backend"


@pytest.mark.asyncio
async def test_run_evaluate_applies_overrides(submission_file: Path):
    outcome = SubmissionOutcome(
        run_id="run-1",
        status="evaluated",
        score=80,
        evaluation=EvaluationResult(
            technical_score=80,
            clarity_score=80,
            communication_score=80,
            overall_score=80,
            feedback="ok",
            model_used="gpt-4o-mini",
        ),
        validation=ValidationResult.from_findings([], []),
    )
    pipeline = MagicMock(spec=SubmissionEvaluationPipeline)
    pipeline.process = AsyncMock(return_value=outcome)

    result = await run_evaluate(
        str(submission_file),
        Settings(_env_file=None),
        tier="budget",
        model="gpt-4o-mini",
        pipeline=pipeline,
    )

    assert result is outcome
    challenge = pipeline.process.call_args.args[0]
    assert challenge.pricing_tier == "budget"
    assert challenge.selected_model == "gpt-4o-mini"


def test_parser_rejects_unknown_model():
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["evaluate", "sub.yaml", "--model", "gpt-9"])


@pytest.mark.asyncio
async def test_models_command(capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    exit_code = await async_main(["models"])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "gemini-2.0-flash" in output
    assert "Pricing Tiers" in output


@pytest.mark.asyncio
async def test_estimate_command(capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    exit_code = await async_main(["estimate", "--tier", "premium", "--submissions", "400"])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "GPT-4o" in output
    assert "$1.00" in output


@pytest.mark.asyncio
async def test_validate_command_missing_file(tmp_path: Path, capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "300")
    with patch("skillmatch.cli.main.load_settings", return_value=Settings(_env_file=None)):
        exit_code = await async_main(["validate", str(tmp_path / "nope.yaml")])

    assert exit_code == 1
    assert "not found" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_no_command_prints_help():
    assert await async_main([]) == 1
