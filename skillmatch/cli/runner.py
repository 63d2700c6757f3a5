"""CLI runner: load inputs, run evaluations and render results."""

from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from skillmatch.evaluation.comparison import ModelComparison, compare_models
from skillmatch.evaluation.pricing import (
    CostQuote,
    get_model_for_challenge,
    list_models,
    list_pricing_tiers,
    quote_challenge_cost,
)
from skillmatch.evaluation.router import ModelRouter
from skillmatch.models.challenge import Challenge
from skillmatch.models.config import Settings
from skillmatch.models.evaluation import EvaluationRequest
from skillmatch.models.validation import SubmissionContent, ValidationResult
from skillmatch.orchestration.pipeline import (
    SubmissionEvaluationPipeline,
    SubmissionOutcome,
    build_submission_content,
)
from skillmatch.validation.transcription import VideoTranscriber
from skillmatch.validation.validator import SubmissionValidator


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Settings from a YAML file when given, else from the environment."""
    if config_path:
        return Settings.from_yaml(config_path)
    return Settings()


def load_submission_file(path: str) -> tuple[Challenge, SubmissionContent]:
    """Load a submission YAML with ``challenge`` and ``submission`` sections.

    Args:
        path: Path to the YAML file

    Returns:
        Tuple of (challenge, submission)

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If a required section is missing
    """
    submission_file = Path(path)
    if not submission_file.exists():
        raise FileNotFoundError(f"Submission file not found: {path}")

    with open(submission_file) as f:
        data = yaml.safe_load(f) or {}

    challenge_data: dict[str, Any] = dict(data["challenge"])
    if "type" in challenge_data:
        challenge_data["challenge_type"] = challenge_data.pop("type")

    challenge = Challenge(**challenge_data)
    submission = SubmissionContent(**(data.get("submission") or {}))
    return challenge, submission


async def run_validate(
    path: str,
    settings: Settings,
    validator: Optional[SubmissionValidator] = None,
) -> ValidationResult:
    challenge, submission = load_submission_file(path)
    validator = validator or SubmissionValidator.from_settings(settings)
    return await validator.validate_submission(submission, challenge.context())


async def run_evaluate(
    path: str,
    settings: Settings,
    tier: Optional[str] = None,
    model: Optional[str] = None,
    audit_dir: Optional[str] = None,
    pipeline: Optional[SubmissionEvaluationPipeline] = None,
) -> SubmissionOutcome:
    """Run the full submission pipeline for one YAML file.

    Args:
        path: Submission YAML path
        settings: Runtime settings
        tier: Pricing tier override
        model: Custom model override
        audit_dir: Directory for the JSONL audit log
        pipeline: Pre-built pipeline (built from settings when omitted)

    Returns:
        SubmissionOutcome
    """
    challenge, submission = load_submission_file(path)
    overrides: dict[str, Any] = {}
    if tier:
        overrides["pricing_tier"] = tier
    if model:
        overrides["selected_model"] = model
    if overrides:
        challenge = challenge.model_copy(update=overrides)

    if pipeline is None:
        pipeline = SubmissionEvaluationPipeline(
            router=ModelRouter.from_settings(settings),
            validator=SubmissionValidator.from_settings(settings),
            audit_dir=Path(audit_dir) if audit_dir else None,
            transcriber=VideoTranscriber.from_settings(settings),
        )
    return await pipeline.process(challenge, submission)


async def run_compare(
    path: str,
    model_ids: list[str],
    settings: Settings,
    router: Optional[ModelRouter] = None,
) -> ModelComparison:
    """Score one submission with several models, skipping validation."""
    challenge, submission = load_submission_file(path)
    request = EvaluationRequest(
        challenge_title=challenge.title,
        challenge_description=challenge.description,
        difficulty=challenge.difficulty,
        category=challenge.category,
        tags=challenge.tags,
        submission_content=build_submission_content(submission, challenge),
        video_transcript=submission.video_transcript,
        selected_model=get_model_for_challenge(challenge.pricing_tier, challenge.selected_model),
    )
    router = router or ModelRouter.from_settings(settings)
    return await compare_models(request, model_ids, router)


def _score_color(score: float) -> str:
    if score >= 70:
        return "green"
    if score >= 40:
        return "yellow"
    return "red"


def display_models(console: Console) -> None:
    model_table = Table(title="AI Models", show_header=True)
    model_table.add_column("Model", style="cyan")
    model_table.add_column("Provider")
    model_table.add_column("Speed")
    model_table.add_column("Accuracy", justify="right")
    model_table.add_column("Cost / Eval (USD)", justify="right")
    model_table.add_column("Free", justify="center")

    for entry in list_models():
        model_table.add_row(
            entry["id"],
            entry["provider"],
            entry["speed"],
            f"{entry['accuracy_rating']}/10",
            f"${entry['estimated_cost_per_eval']:.4f}",
            "[green]✓[/green]" if entry["is_free"] else "",
        )
    console.print(model_table)

    tier_table = Table(title="Pricing Tiers", show_header=True)
    tier_table.add_column("Tier", style="cyan")
    tier_table.add_column("Default Model")
    tier_table.add_column("Cost / Eval (USD)", justify="right")
    tier_table.add_column("Description")

    for tier in list_pricing_tiers():
        tier_table.add_row(
            tier["tier"],
            tier["default_model"],
            f"${tier['estimated_cost_per_eval']:.4f}",
            tier["description"],
        )
    console.print(tier_table)


def display_quote(quote: CostQuote, console: Console) -> None:
    info_lines = [
        f"[bold]Tier:[/bold] {quote.pricing_tier}",
        f"[bold]Model:[/bold] {quote.model_name} ({quote.selected_model})",
        f"[bold]Cost per evaluation:[/bold] ${quote.cost_per_evaluation:.4f}",
        f"[bold]Expected submissions:[/bold] {quote.expected_submissions}",
        f"[bold]Estimated total:[/bold] ${quote.estimated_total_cost:.2f}",
    ]
    if quote.is_free:
        info_lines.append("[green]This model is free to use.[/green]")
    console.print(Panel("\n".join(info_lines), title="Cost Estimate", expand=False))


def display_validation(result: ValidationResult, console: Console) -> None:
    status = "[green]VALID[/green]" if result.is_valid else "[red]INVALID[/red]"
    info_lines = [
        f"[bold]Status:[/bold] {status}",
        f"[bold]Confidence:[/bold] {result.confidence:g}",
        f"[bold]Plagiarism score:[/bold] {result.plagiarism_score:g}",
    ]
    for issue in result.issues:
        info_lines.append(f"[red]✗[/red] {issue}")
    for warning in result.warnings:
        info_lines.append(f"[yellow]![/yellow] {warning}")
    console.print(Panel("\n".join(info_lines), title="Validation Result", expand=False))


def display_outcome(outcome: SubmissionOutcome, console: Console) -> None:
    evaluation = outcome.evaluation
    color = _score_color(outcome.score)
    info_lines = [
        f"[bold]Status:[/bold] {outcome.status}",
        f"[bold]Score:[/bold] [{color}]{outcome.score}[/{color}]",
        f"[bold]Technical:[/bold] {evaluation.technical_score}",
        f"[bold]Clarity:[/bold] {evaluation.clarity_score}",
        f"[bold]Communication:[/bold] {evaluation.communication_score}",
        f"[bold]Model:[/bold] {evaluation.model_used}",
        f"[bold]Cost:[/bold] ${evaluation.cost_incurred:.6f}",
        "",
        evaluation.feedback,
    ]
    if evaluation.strengths:
        info_lines.append("")
        info_lines.append("[bold]Strengths:[/bold]")
        info_lines.extend(f"  • {item}" for item in evaluation.strengths)
    if evaluation.improvements:
        info_lines.append("")
        info_lines.append("[bold]Improvements:[/bold]")
        info_lines.extend(f"  • {item}" for item in evaluation.improvements)

    console.print(Panel("\n".join(info_lines), title=f"Evaluation {outcome.run_id}", expand=False))

    if outcome.validation.warnings:
        display_validation(outcome.validation, console)


def display_comparison(comparison: ModelComparison, console: Console) -> None:
    table = Table(title="Model Comparison", show_header=True)
    table.add_column("Requested", style="cyan")
    table.add_column("Answered By")
    table.add_column("Technical", justify="right")
    table.add_column("Clarity", justify="right")
    table.add_column("Communication", justify="right")
    table.add_column("Overall", justify="right")
    table.add_column("Cost (USD)", justify="right")

    for model_id, result in comparison.results.items():
        color = _score_color(result.overall_score)
        table.add_row(
            model_id,
            result.model_used,
            str(result.technical_score),
            str(result.clarity_score),
            str(result.communication_score),
            f"[{color}]{result.overall_score}[/{color}]",
            f"${result.cost_incurred:.6f}",
        )
    console.print(table)

    for model_id, error in comparison.failures.items():
        console.print(f"[red]✗[/red] {model_id}: {error}")

    total = comparison.cost_summary.get("total_cost_usd", 0.0)
    console.print(f"[bold]Total cost:[/bold] ${total:.6f}")
