"""OpenAI-powered meeting summarization service using Response API."""

import logging

from openai import AsyncOpenAI

from meetscribe.config import get_settings
from meetscribe.errors import GenerationError, ValidationError

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are an expert meeting summarizer. Generate clear, well-structured "
    "summaries based on the provided instructions. Always format your "
    "response as clean HTML."
)

SUMMARIZATION_PROMPT = """{instruction}

Please process the following meeting transcript and generate a summary based on the instructions above:

{transcript}

Format the output as clean HTML that can be displayed in a web page. Use appropriate tags like <h3>, <h4>, <ul>, <li>, <p>, <strong> for structure and formatting."""

PROMPT_TEMPLATES: dict[str, str] = {
    "Executive Summary Format": (
        "Create an executive summary with key highlights, decisions made, and "
        "strategic implications. Format with clear sections and bullet points "
        "for easy executive review."
    ),
    "Action Items Only": (
        "Extract only action items, deadlines, and assigned responsibilities. "
        "List each item with the person responsible and due date clearly identified."
    ),
    "Project Status Update": (
        "Summarize project progress, milestones achieved, upcoming deliverables, "
        "and any blockers or risks identified. Focus on status and next steps."
    ),
    "Key Decisions & Outcomes": (
        "Focus on decisions made during the meeting, outcomes achieved, and next "
        "steps. Include any voting results or consensus reached."
    ),
}


class SummaryGenerator:
    """Service for turning a transcript and an instruction into an HTML summary."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
    ) -> None:
        """Initialize the generator."""
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.client = AsyncOpenAI(api_key=self.api_key or "not-configured")
        self.model = model or settings.summarization_model
        self.temperature = (
            temperature if temperature is not None else settings.summarization_temperature
        )
        self.max_output_tokens = max_output_tokens or settings.summarization_max_tokens

    async def generate(self, transcript: str, instruction: str) -> str:
        """Generate an HTML summary of a transcript.

        Single attempt; the returned markup is passed through as-is.

        Raises:
            ValidationError: Blank transcript or instruction
            GenerationError: The API call failed or produced no text
        """
        if not transcript.strip() or not instruction.strip():
            raise ValidationError("Transcript and prompt are required")

        if not self.api_key:
            logger.warning("OpenAI API key not configured")
            raise GenerationError("Failed to generate summary: OpenAI API key not configured")

        prompt = SUMMARIZATION_PROMPT.format(instruction=instruction, transcript=transcript)

        try:
            response = await self.client.responses.create(
                model=self.model,
                instructions=SYSTEM_INSTRUCTION,
                input=prompt,
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            )
        except Exception as e:
            logger.error(f"Failed to generate summary: {e}")
            raise GenerationError(f"Failed to generate summary: {e}") from e

        summary = response.output_text
        if not summary:
            logger.error("AI returned an empty summary")
            raise GenerationError("Failed to generate summary: No summary generated from AI")

        logger.info(f"Generated summary ({len(summary)} chars) with {self.model}")
        return summary


def get_prompt_templates() -> dict[str, str]:
    """Return a copy of the named instruction templates."""
    return dict(PROMPT_TEMPLATES)
