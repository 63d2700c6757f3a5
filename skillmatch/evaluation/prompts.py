"""Prompt templates shared by every provider evaluator."""

from skillmatch.models.evaluation import EvaluationRequest

EVALUATION_SYSTEM_PROMPT = (
    "You are an expert technical evaluator for coding challenges. "
    "Analyze submissions critically and provide varied, accurate scores "
    "based on actual quality. Respond ONLY with valid JSON."
)

EVALUATION_PROMPT_TEMPLATE = """You are evaluating a technical challenge submission for SkillMatch.

**IMPORTANT EVALUATION GUIDELINES:**
- Be critical and realistic in your scoring
- Scores should vary based on actual quality (not default to 80-90)
- A poor solution should score 20-40
- A mediocre solution should score 40-60
- A good solution should score 60-80
- An excellent solution should score 80-95
- Consider the difficulty level when scoring

**Challenge Details:**
- Title: {title}
- Description: {description}
- Difficulty: {difficulty}
- Category: {category}
- Required Skills: {skills}

**Candidate's Submission:**
{submission}

{video_section}

**Evaluation Criteria:**

1. **Technical Quality (0-100):** correctness and completeness, code quality,
   efficiency, problem-solving approach, handling of edge cases.
2. **Clarity Score (0-100):** organization and structure, documentation,
   readability and maintainability, following conventions.
3. **Communication Score (0-100):** quality of the written or video
   explanation, ability to articulate technical concepts, professional
   presentation.

**Required Response Format:**
Respond with ONLY a JSON object (no markdown, no backticks, no extra text):

{{
  "technicalScore": <number 0-100>,
  "clarityScore": <number 0-100>,
  "communicationScore": <number 0-100>,
  "overallScore": <number 0-100>,
  "feedback": "<2-3 sentences of overall assessment>",
  "strengths": ["<specific strength 1>", "<specific strength 2>", "<specific strength 3>"],
  "improvements": ["<specific improvement 1>", "<specific improvement 2>", "<specific improvement 3>"]
}}

Provide specific, actionable feedback. Vary your scores based on actual quality."""

VIDEO_SECTION_TEMPLATE = """**Video Explanation Transcript:**
{transcript}

(Note: Evaluate communication skills based on the video transcript quality)"""

NO_VIDEO_SECTION = (
    "(No video explanation provided - score communication based on "
    "written explanation only)"
)


def build_evaluation_prompt(request: EvaluationRequest) -> str:
    """Render the scoring prompt for a request."""
    if request.video_transcript:
        video_section = VIDEO_SECTION_TEMPLATE.format(transcript=request.video_transcript)
    else:
        video_section = NO_VIDEO_SECTION

    return EVALUATION_PROMPT_TEMPLATE.format(
        title=request.challenge_title,
        description=request.challenge_description,
        difficulty=request.difficulty,
        category=request.category,
        skills=", ".join(request.tags) or "Not specified",
        submission=request.submission_content,
        video_section=video_section,
    )
