"""
Module for generating multiple-choice quizzes from video summaries.
"""

import json
import os
import re
from typing import Any, List, Optional

from pydantic import ValidationError

from app.core import prompts
from app.core.llm import run_prompt
from app.models.schemas import QuizCard, QuizConfig
from app.utils.error_handling import QuizGenerationError
from app.utils.helpers import truncate_text
from app.utils.logger import logging

JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
SENTENCE_BREAK_PATTERN = re.compile(r"[.!?]\s")


def parse_quiz_cards(content: str) -> Optional[List[QuizCard]]:
    """
    Extract quiz cards from a model reply.

    The reply is expected to be a JSON array, possibly wrapped in prose or a
    code fence. Items that are not valid cards are dropped.

    Returns:
        List of cards, or None if no JSON array could be parsed
    """
    match = JSON_ARRAY_PATTERN.search(content or "")
    if not match:
        return None

    try:
        raw_cards: Any = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logging.error(f"JSON parsing error in quiz reply: {e}")
        return None

    if not isinstance(raw_cards, list):
        return None

    cards = []
    for raw in raw_cards:
        if not isinstance(raw, dict):
            continue
        try:
            cards.append(QuizCard.model_validate(raw))
        except ValidationError as e:
            logging.warning(f"Skipping malformed quiz card: {e.errors()[0]['msg']}")
    return cards


def main_focus_card(title: str) -> QuizCard:
    return QuizCard(
        question=f'What is the main focus of "{title}"?',
        options=[
            "The video's main topic and key concepts",
            "Unrelated content",
            "Random information",
            "None of the above",
        ],
        correct_answer=0,
        explanation="This video focuses on explaining the key concepts and main ideas related to the topic.",
    )


def fallback_quiz(title: str, summary: str) -> List[QuizCard]:
    """Five generic questions built from the title and the first sentence of the summary."""
    first_point = SENTENCE_BREAK_PATTERN.split(summary)[0] or summary[:100]

    return [
        main_focus_card(title),
        QuizCard(
            question="According to the video, what is one of the key takeaways?",
            options=[
                truncate_text(first_point, 50),
                "Something completely different",
                "This was not mentioned",
                "An unrelated topic",
            ],
            correct_answer=0,
            explanation="This is one of the main points discussed in the video's content.",
        ),
        QuizCard(
            question="How would you best describe the content of this video?",
            options=[
                "Educational and informative",
                "Completely fictional",
                "Not related to the title",
                "Entertainment only",
            ],
            correct_answer=0,
            explanation="The video provides educational content to help viewers learn about the topic.",
        ),
        QuizCard(
            question="What type of knowledge does this video aim to provide?",
            options=[
                "Practical insights and understanding",
                "Misinformation",
                "Unverified claims",
                "Random facts",
            ],
            correct_answer=0,
            explanation="The video is designed to provide valuable, practical knowledge about the subject matter.",
        ),
        QuizCard(
            question="Who would benefit most from watching this video?",
            options=[
                "Anyone interested in learning about this topic",
                "People who already know everything",
                "Nobody at all",
                "Only experts",
            ],
            correct_answer=0,
            explanation="This video is educational and designed to help anyone interested in the topic learn more.",
        ),
    ]


def number_cards(cards: List[QuizCard]) -> List[QuizCard]:
    """Assign sequential IDs starting at 1."""
    return [card.model_copy(update={"id": index + 1}) for index, card in enumerate(cards)]


class QuizGenerator:
    """Class to handle quiz generation."""

    def __init__(self, api_key: Optional[str] = None):
        """
        Initialize the quiz generator with API key.

        Args:
            api_key: Anthropic API key (if None, will try to get from environment)
        """
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY") or os.getenv("VITE_ANTHROPIC_API_KEY")
        if not self.api_key:
            logging.warning("ANTHROPIC_API_KEY is not set; generation will use the offline fallbacks")

    def generate(self, title: str, summary: str, config: Optional[QuizConfig] = None) -> List[QuizCard]:
        """
        Generate quiz cards for a summary.

        A reply that holds no parseable JSON array, or no valid question in
        it, yields the single "main focus" card.

        Raises:
            QuizGenerationError: If no API key is configured or the model call fails
        """
        if not self.api_key:
            raise QuizGenerationError("Anthropic API key is not configured")

        config = config or QuizConfig()
        logging.info(f"Generating quiz for: {title}")

        try:
            content = run_prompt(
                prompts.quiz_template,
                {"title": title, "summary": summary[:config.summary_char_limit]},
                api_key=self.api_key,
                model=config.model,
                model_provider=config.model_provider,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
            )
        except Exception as e:
            logging.error(f"Anthropic API error while generating quiz for '{title}': {e}")
            raise QuizGenerationError(f"Anthropic API error: {e}") from e

        cards = parse_quiz_cards(content)
        if not cards:
            logging.warning("Quiz reply held no valid questions, using single-question fallback")
            return [main_focus_card(title)]

        logging.info(f"Quiz generated successfully with {len(cards)} questions")
        return cards

    def generate_with_fallback(self, title: str, summary: str, config: Optional[QuizConfig] = None) -> List[QuizCard]:
        """Like generate, but falls back to the generic five-question quiz when the model fails."""
        try:
            return self.generate(title, summary, config)
        except QuizGenerationError as e:
            logging.warning(f"Using fallback quiz for '{title}': {e}")
            return fallback_quiz(title, summary)
