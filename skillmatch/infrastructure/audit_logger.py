"""Append-only JSONL audit trail for a single submission run."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from skillmatch.models.audit import AuditEntry, AuditStage
from skillmatch.models.evaluation import EvaluationResult
from skillmatch.models.validation import ValidationResult


class EvaluationAuditLog:
    """Records what each pipeline stage decided for one run.

    Every record is appended and flushed immediately, so a run that dies
    mid-way still leaves the stages it completed on disk.
    """

    def __init__(self, path: Path, run_id: str) -> None:
        self.path = Path(path)
        self.run_id = run_id
        self._sequence = 0

    @classmethod
    def for_run(cls, audit_dir: Path, run_id: str) -> "EvaluationAuditLog":
        return cls(Path(audit_dir) / f"{run_id}.jsonl", run_id)

    def _append(self, stage: AuditStage, **fields: Any) -> AuditEntry:
        self._sequence += 1
        entry = AuditEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            run_id=self.run_id,
            sequence=self._sequence,
            stage=stage,
            **fields,
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a") as f:
            f.write(entry.model_dump_json(exclude_none=True) + "\n")
        return entry

    def log_transcription(self, video_url: str, transcript: Optional[str]) -> AuditEntry:
        return self._append(
            "transcription",
            video_url=video_url,
            transcript_chars=len(transcript) if transcript else 0,
        )

    def log_validation(self, result: ValidationResult) -> AuditEntry:
        return self._append(
            "validation",
            is_valid=result.is_valid,
            issues=result.issues,
            warnings=result.warnings,
            plagiarism_score=result.plagiarism_score,
            validation_confidence=result.confidence,
        )

    def log_evaluation(self, result: EvaluationResult, requested_model: str) -> AuditEntry:
        """Record a scored evaluation.

        ``model_used`` differs from ``requested_model`` when the router fell back.
        """
        return self._append(
            "evaluation",
            requested_model=requested_model,
            model_used=result.model_used,
            overall_score=result.overall_score,
            cost_usd=result.cost_incurred,
            tokens=result.token_usage,
        )

    def log_failure(
        self, stage: AuditStage, error: Exception, requested_model: Optional[str] = None
    ) -> AuditEntry:
        return self._append(
            stage,
            requested_model=requested_model,
            error_type=type(error).__name__,
            error_message=str(error),
        )

    def read(self) -> list[AuditEntry]:
        """Load every record written for this run so far."""
        if not self.path.exists():
            return []
        with self.path.open() as f:
            return [AuditEntry.model_validate_json(line) for line in f if line.strip()]
