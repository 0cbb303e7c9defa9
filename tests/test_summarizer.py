"""
Tests for the video summarizer module.
"""

import os
import pytest
from unittest.mock import patch, MagicMock

from app.core import prompts
from app.core.summarizer import VideoSummarizer
from app.models.schemas import SummaryConfig
from app.utils.error_handling import SummaryGenerationError


@pytest.fixture
def mock_init_model():
    """Fixture to mock the langchain chat model factory."""
    with patch('app.core.llm.init_chat_model') as mock_init:
        mock_model = MagicMock()

        mock_response = MagicMock()
        mock_response.content = "1. Gradient descent minimizes a loss function step by step."
        mock_model.invoke.return_value = mock_response

        mock_init.return_value = mock_model

        yield mock_init


@pytest.fixture
def mock_transcript_fetcher():
    fetcher = MagicMock()
    fetcher.get_transcript_text.return_value = "[0:00] Welcome to the course\n[0:04] Today we cover gradients"
    return fetcher


@pytest.fixture
def summarizer(mock_transcript_fetcher):
    return VideoSummarizer(api_key="test_api_key", transcript_fetcher=mock_transcript_fetcher)


def prompt_text(mock_model) -> str:
    messages = mock_model.invoke.call_args.args[0]
    return messages[0].content


@patch.dict(os.environ, {"ANTHROPIC_API_KEY": "env_api_key"})
def test_init_summarizer_from_environment():
    summarizer = VideoSummarizer(transcript_fetcher=MagicMock())
    assert summarizer.api_key == "env_api_key"


@patch.dict(os.environ, {"ANTHROPIC_API_KEY": "", "VITE_ANTHROPIC_API_KEY": ""})
def test_summarize_without_key(mock_init_model):
    summarizer = VideoSummarizer(transcript_fetcher=MagicMock())

    with pytest.raises(SummaryGenerationError, match="API key is not configured"):
        summarizer.summarize("Gradient Descent")
    mock_init_model.assert_not_called()


@patch.dict(os.environ, {"ANTHROPIC_API_KEY": "", "VITE_ANTHROPIC_API_KEY": ""})
def test_summarize_with_fallback_without_key(mock_init_model, mock_transcript_fetcher):
    summarizer = VideoSummarizer(transcript_fetcher=mock_transcript_fetcher)

    result = summarizer.summarize_with_fallback("Gradient Descent", "", "V3TUEeB0kW0")

    assert "requires a configured Anthropic API key" in result.summary
    assert result.transcript_available is False


def test_generate_summary_with_transcript(mock_init_model, summarizer, mock_transcript_fetcher):
    result = summarizer.generate_summary("Gradient Descent", "An intro to optimization", "V3TUEeB0kW0")

    assert result.summary == "1. Gradient descent minimizes a loss function step by step."
    assert result.transcript_available is True
    mock_transcript_fetcher.get_transcript_text.assert_called_once_with("V3TUEeB0kW0")

    text = prompt_text(mock_init_model.return_value)
    assert 'Title: "Gradient Descent"' in text
    assert 'Description: "An intro to optimization"' in text
    assert "[0:04] Today we cover gradients" in text

    init_kwargs = mock_init_model.call_args.kwargs
    assert init_kwargs["model_provider"] == "anthropic"
    assert init_kwargs["max_tokens"] == 8000
    assert init_kwargs["api_key"] == "test_api_key"


def test_generate_summary_without_transcript(mock_init_model, summarizer, mock_transcript_fetcher):
    mock_transcript_fetcher.get_transcript_text.return_value = None

    result = summarizer.generate_summary("Gradient Descent", "An intro to optimization", "V3TUEeB0kW0")

    assert result.transcript_available is False
    assert prompt_text(mock_init_model.return_value).startswith("Create a comprehensive educational summary")


def test_generate_summary_without_video_id(mock_init_model, summarizer, mock_transcript_fetcher):
    result = summarizer.generate_summary("Gradient Descent")

    assert result.transcript_available is False
    mock_transcript_fetcher.get_transcript_text.assert_not_called()


def test_build_prompt_truncates_long_transcript():
    config = SummaryConfig(transcript_char_limit=10)
    template, variables = VideoSummarizer.build_prompt("T", "D", "x" * 50, config)

    assert template == prompts.summary_with_transcript_template
    assert variables["transcript"] == "x" * 10 + prompts.TRANSCRIPT_CONTINUES_MARKER


def test_build_prompt_keeps_short_transcript():
    _, variables = VideoSummarizer.build_prompt("T", "D", "short transcript", SummaryConfig())
    assert variables["transcript"] == "short transcript"


def test_summarize_content_blocks(mock_init_model, summarizer):
    mock_init_model.return_value.invoke.return_value.content = [{"type": "text", "text": "Block summary"}]
    assert summarizer.summarize("Gradient Descent") == "Block summary"


def test_summarize_api_error(mock_init_model, summarizer):
    mock_init_model.return_value.invoke.side_effect = RuntimeError("overloaded")

    with pytest.raises(SummaryGenerationError, match="overloaded"):
        summarizer.summarize("Gradient Descent")


def test_summarize_empty_reply(mock_init_model, summarizer):
    mock_init_model.return_value.invoke.return_value.content = ""

    with pytest.raises(SummaryGenerationError):
        summarizer.summarize("Gradient Descent")


def test_summarize_with_fallback(mock_init_model, summarizer):
    mock_init_model.return_value.invoke.side_effect = RuntimeError("overloaded")

    result = summarizer.summarize_with_fallback("Gradient Descent", "", "V3TUEeB0kW0")

    assert result.summary.startswith('Key Points about "Gradient Descent":')
    assert result.transcript_available is False
