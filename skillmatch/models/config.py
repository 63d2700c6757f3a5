"""Configuration models for the evaluation core."""

from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from skillmatch.models.catalog import DEFAULT_MODEL


class ValidationThresholds(BaseModel):
    """Tunable cut-offs for routing validation findings.

    Higher scores and confidences are more likely to block. The exact values
    are tuning constants rather than business rules.
    """

    video_issue_confidence: float = 70
    video_warning_confidence: float = 40
    plagiarism_issue_score: float = 80
    plagiarism_warning_score: float = 60
    confidence_baseline: float = 90
    warning_penalty: float = 10
    issue_confidence: float = 40
    min_transcript_chars: int = Field(default=50, ge=0)
    max_prompt_chars: int = Field(default=2000, ge=1)


class Settings(BaseSettings):
    """Runtime settings loaded from environment, ``.env`` or YAML."""

    model_config = SettingsConfigDict(
        env_prefix="SKILLMATCH_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    openai_api_key: Optional[SecretStr] = None
    gemini_api_key: Optional[SecretStr] = None
    groq_api_key: Optional[SecretStr] = None

    evaluation_temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    evaluation_max_tokens: int = Field(default=3000, ge=1)
    request_timeout: float = Field(default=60.0, gt=0)

    validation_model: str = DEFAULT_MODEL.value
    video_check_temperature: float = 0.3
    plagiarism_check_temperature: float = 0.2
    check_max_tokens: int = 500

    github_api_url: str = "https://api.github.com"
    github_timeout: float = Field(default=5.0, gt=0)
    user_agent: str = "SkillMatch-AI"

    transcription_model: str = "whisper-1"
    video_download_timeout: float = Field(default=30.0, gt=0)
    max_video_bytes: int = Field(default=25 * 1024 * 1024, ge=1)

    thresholds: ValidationThresholds = Field(default_factory=ValidationThresholds)

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> "Settings":
        """Load settings from a YAML file on top of environment defaults.

        Args:
            path: Path to a YAML mapping of setting names to values
            **overrides: Values that take precedence over the file

        Returns:
            Settings instance
        """
        config_file = Path(path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(config_file) as f:
            data = yaml.safe_load(f) or {}

        data.update(overrides)
        return cls(**data)

    def api_key(self, field_name: str) -> Optional[str]:
        """Return a secret field's plain value, or None when unset."""
        secret: Optional[SecretStr] = getattr(self, field_name)
        if secret is None:
            return None
        return secret.get_secret_value() or None
