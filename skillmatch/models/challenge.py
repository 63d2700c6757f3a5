"""Challenge description used by the submission pipeline."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from skillmatch.models.catalog import PricingTier
from skillmatch.models.validation import ChallengeContext


class IdealSolution(BaseModel):
    """Reference solution the challenger may attach for comparison."""

    type: str
    value: str


class Challenge(BaseModel):
    """A posted challenge together with its AI evaluation settings."""

    model_config = ConfigDict(protected_namespaces=())

    title: str
    description: str
    difficulty: str = "medium"
    category: str = "general"
    tags: list[str] = Field(default_factory=list)
    challenge_type: Literal["prize", "job", "practice"] = "practice"
    ideal_solution: Optional[IdealSolution] = None
    pricing_tier: str = PricingTier.FREE.value
    selected_model: Optional[str] = None
    require_video_transcript: bool = False

    def context(self) -> ChallengeContext:
        """Narrow to the fields the validation checks read."""
        return ChallengeContext(
            title=self.title,
            description=self.description,
            category=self.category,
        )
