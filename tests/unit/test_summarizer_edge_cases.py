"""Edge case tests for SummaryGenerator: OpenAI failures, empty responses."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from meetscribe.errors import GenerationError, ValidationError
from meetscribe.services.summarizer import (
    PROMPT_TEMPLATES,
    SYSTEM_INSTRUCTION,
    SummaryGenerator,
    get_prompt_templates,
)


def _make_generator(output_text: str | None = "<p>ok</p>", side_effect=None) -> SummaryGenerator:
    """Create a generator whose OpenAI client is mocked."""
    generator = SummaryGenerator(
        api_key="test-key", model="gpt-4o-mini", temperature=0.3, max_output_tokens=2000
    )
    mock_response = MagicMock()
    mock_response.output_text = output_text
    generator.client = MagicMock()
    generator.client.responses = MagicMock()
    generator.client.responses.create = AsyncMock(
        return_value=mock_response, side_effect=side_effect
    )
    return generator


class TestGenerateSuccess:
    """Tests for the request the generator composes."""

    @pytest.mark.asyncio
    async def test_returns_model_output_unprocessed(self):
        generator = _make_generator(output_text="<ul><li>Decision A</li>")
        result = await generator.generate("transcript", "summarize")
        assert result == "<ul><li>Decision A</li>"

    @pytest.mark.asyncio
    async def test_request_combines_instruction_and_transcript(self):
        generator = _make_generator()
        await generator.generate("Alice: we ship Friday", "List action items")

        kwargs = generator.client.responses.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["instructions"] == SYSTEM_INSTRUCTION
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_output_tokens"] == 2000
        assert kwargs["input"].startswith("List action items")
        assert "Alice: we ship Friday" in kwargs["input"]
        assert "<h3>" in kwargs["input"]

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        generator = _make_generator()
        await generator.generate("transcript", "summarize")
        assert generator.client.responses.create.call_count == 1


class TestGenerateFailures:
    """Tests for generate error handling."""

    @pytest.mark.asyncio
    async def test_no_api_key_raises(self, caplog):
        generator = SummaryGenerator(api_key="", model="gpt-4o-mini")
        generator.client = MagicMock()
        generator.client.responses.create = AsyncMock()

        with caplog.at_level(logging.WARNING), pytest.raises(GenerationError):
            await generator.generate("transcript", "summarize")

        assert "API key not configured" in caplog.text
        generator.client.responses.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_openai_exception_wrapped(self, caplog):
        generator = _make_generator(side_effect=Exception("OpenAI rate limit"))

        with caplog.at_level(logging.ERROR), pytest.raises(GenerationError) as exc_info:
            await generator.generate("transcript", "summarize")

        assert exc_info.value.message == "Failed to generate summary: OpenAI rate limit"
        assert exc_info.value.status_code == 500
        assert "Failed to generate summary" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout_wrapped(self):
        generator = _make_generator(side_effect=TimeoutError("request timed out"))
        with pytest.raises(GenerationError, match="request timed out"):
            await generator.generate("transcript", "summarize")
        assert generator.client.responses.create.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("output_text", ["", None])
    async def test_empty_output_raises(self, output_text):
        generator = _make_generator(output_text=output_text)
        with pytest.raises(GenerationError, match="No summary generated from AI"):
            await generator.generate("transcript", "summarize")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("transcript", "instruction"),
        [("", "summarize"), ("transcript", ""), ("   ", "summarize"), ("transcript", "\n")],
    )
    async def test_blank_input_rejected_before_call(self, transcript, instruction):
        generator = _make_generator()
        with pytest.raises(ValidationError):
            await generator.generate(transcript, instruction)
        generator.client.responses.create.assert_not_called()


class TestPromptTemplates:
    """Tests for the static template catalog."""

    def test_catalog_names(self):
        assert set(PROMPT_TEMPLATES) == {
            "Executive Summary Format",
            "Action Items Only",
            "Project Status Update",
            "Key Decisions & Outcomes",
        }

    def test_all_templates_non_empty(self):
        assert all(text.strip() for text in PROMPT_TEMPLATES.values())

    def test_copy_does_not_mutate_catalog(self):
        templates = get_prompt_templates()
        templates["Custom"] = "x"
        assert "Custom" not in PROMPT_TEMPLATES
