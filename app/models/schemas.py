"""
Data models for the Absorbey application.
"""
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.config import config
from app.utils.helpers import get_timestamp


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either case on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class VideoMetadata(BaseModel):
    """Metadata describing a YouTube video."""
    video_id: str = ""
    title: str
    thumbnail: str
    description: str = ""


class TranscriptSegment(BaseModel):
    """One timed line of a transcript."""
    text: str
    start: float
    duration: float = 0.0


class VideoTranscript(BaseModel):
    """Transcript for a video with its timestamped text rendering."""
    video_id: str
    segments: List[TranscriptSegment]
    text: str
    language: Optional[str] = None
    is_generated: Optional[bool] = None


class SummaryConfig(BaseModel):
    """Configuration for summarization operations."""
    model: str = config.DEFAULT_SUMMARY_MODEL
    model_provider: str = config.DEFAULT_MODEL_PROVIDER
    temperature: float = 0.0
    max_tokens: int = config.SUMMARY_MAX_TOKENS
    transcript_char_limit: int = config.TRANSCRIPT_CHAR_LIMIT


class QuizConfig(BaseModel):
    """Configuration for quiz generation."""
    model: str = config.DEFAULT_SUMMARY_MODEL
    model_provider: str = config.DEFAULT_MODEL_PROVIDER
    temperature: float = 0.0
    max_tokens: int = config.QUIZ_MAX_TOKENS
    summary_char_limit: int = config.QUIZ_SUMMARY_CHAR_LIMIT


class SummaryResult(BaseModel):
    """Generated summary and whether a transcript backed it."""
    summary: str
    transcript_available: bool = False


class QuizCard(CamelModel):
    """A multiple-choice question."""
    id: Optional[int] = None
    question: str
    options: List[str] = Field(min_length=1)
    correct_answer: int = 0
    explanation: str = ""

    @model_validator(mode="after")
    def check_correct_answer(self):
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError("correctAnswer must index into options")
        return self


class StudyProgress(CamelModel):
    """Per-project study statistics."""
    summary_cards_viewed: List[int] = Field(default_factory=list)
    quizzes_completed: int = 0
    average_score: int = 0
    last_studied: str = Field(default_factory=get_timestamp)


class QuizAttemptCreate(CamelModel):
    """A finished quiz run submitted by the client."""
    score: int = Field(ge=0)
    total_questions: int = Field(gt=0)
    answers: List[Dict[str, Any]] = Field(default_factory=list)
    time_spent: Optional[int] = None

    @model_validator(mode="after")
    def check_score(self):
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed totalQuestions")
        return self


class QuizAttempt(QuizAttemptCreate):
    """A stored quiz attempt."""
    id: str
    date: str
    percentage: int


class Project(CamelModel):
    """A learning project built from one YouTube video."""
    id: str
    user_id: str = config.ANONYMOUS_USER_ID
    title: str
    thumbnail: Optional[str] = None
    video_id: str
    youtube_url: str
    summary: str
    quiz_cards: List[QuizCard] = Field(default_factory=list)
    quiz_attempts: List[QuizAttempt] = Field(default_factory=list)
    flashcard_notes: Dict[str, str] = Field(default_factory=dict)
    study_progress: StudyProgress = Field(default_factory=StudyProgress)
    created_at: str = Field(default_factory=get_timestamp)
    updated_at: str = Field(default_factory=get_timestamp)

    @computed_field
    @property
    def url(self) -> str:
        return self.youtube_url

    @field_validator("flashcard_notes", mode="before")
    def stringify_note_keys(cls, v):
        if isinstance(v, dict):
            return {str(k): note for k, note in v.items()}
        return v
