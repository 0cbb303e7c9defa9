"""
Study helpers: summary flashcards and quiz sessions.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from app.models.schemas import QuizCard
from app.utils.helpers import round_half_up

POINT_SPLIT_PATTERN = re.compile(r"\n+|\.(?=\s+[A-Z])|(?<=\d\.)\s+")
LEADING_NUMBER_PATTERN = re.compile(r"^\d+\.\s*")

MAX_SUMMARY_POINTS = 8
MIN_POINT_LENGTH = 20
POINTS_PER_CARD = 2


def get_summary_points(summary: Optional[str]) -> List[str]:
    """
    Break a summary into at most eight key points.

    Pieces of 20 characters or fewer are dropped and list numbering is
    stripped. If nothing survives, the whole summary is the only point.
    """
    if not summary:
        return []

    points = []
    for piece in POINT_SPLIT_PATTERN.split(summary):
        if len(piece.strip()) <= MIN_POINT_LENGTH:
            continue
        points.append(LEADING_NUMBER_PATTERN.sub("", piece.strip()))
        if len(points) == MAX_SUMMARY_POINTS:
            break

    return points or [summary]


def get_summary_cards(points: List[str]) -> List[Dict]:
    """Group points into cards of two."""
    return [
        {"id": i // POINTS_PER_CARD, "points": points[i:i + POINTS_PER_CARD]}
        for i in range(0, len(points), POINTS_PER_CARD)
    ]


@dataclass
class QuestionResult:
    question_index: int
    selected_answer: int
    correct: bool


@dataclass
class QuizSession:
    """
    State of one pass through a project's quiz.

    Each question accepts a single answer; answering again is ignored until
    the session moves on.
    """

    cards: List[QuizCard]
    current_question: int = 0
    selected_answer: Optional[int] = None
    results: List[QuestionResult] = field(default_factory=list)
    finished: bool = False

    @property
    def current_card(self) -> QuizCard:
        return self.cards[self.current_question]

    @property
    def total_questions(self) -> int:
        return len(self.cards)

    @property
    def progress(self) -> int:
        """Percentage of questions already passed."""
        if not self.cards:
            return 0
        return round_half_up(self.current_question / len(self.cards) * 100)

    @property
    def is_last_question(self) -> bool:
        return self.current_question >= len(self.cards) - 1

    def answer(self, answer_index: int) -> Optional[bool]:
        """
        Record an answer for the current question.

        Returns:
            Whether the answer is correct, or None if the question was already answered
        """
        if self.selected_answer is not None or self.finished:
            return None

        self.selected_answer = answer_index
        correct = self.current_card.correct_answer == answer_index
        self.results.append(QuestionResult(self.current_question, answer_index, correct))
        return correct

    def next_question(self):
        """Advance to the next question, or finish after the last one."""
        if not self.is_last_question:
            self.current_question += 1
            self.selected_answer = None
        else:
            self.finished = True

    def restart(self):
        self.current_question = 0
        self.selected_answer = None
        self.results = []
        self.finished = False

    @property
    def score(self) -> int:
        return sum(1 for result in self.results if result.correct)

    @property
    def percentage(self) -> int:
        if not self.results:
            return 0
        return round_half_up(self.score / len(self.results) * 100)

    def breakdown(self) -> List[Dict]:
        """Per-question outcome with the correct option text."""
        rows = []
        for index, card in enumerate(self.cards):
            result = next((r for r in self.results if r.question_index == index), None)
            rows.append({
                "question": card.question,
                "correct": bool(result and result.correct),
                "selected_answer": result.selected_answer if result else None,
                "correct_option": card.options[card.correct_answer],
            })
        return rows

    def answers(self) -> List[Dict]:
        """Answers in the shape stored with a quiz attempt."""
        return [
            {"questionIndex": r.question_index, "selectedAnswer": r.selected_answer, "correct": r.correct}
            for r in self.results
        ]
