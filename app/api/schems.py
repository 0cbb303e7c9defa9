from typing import Optional, List, Dict
from pydantic import Field

from app.models.schemas import CamelModel, QuizCard, StudyProgress


class SummaryRequest(CamelModel):
    """Model for requesting a video summary."""
    video_title: str
    video_description: str = ""
    video_id: Optional[str] = None


class SummaryResponse(CamelModel):
    """Model for summary responses."""
    summary: str
    transcript_available: bool = False


class QuizRequest(CamelModel):
    """Model for requesting a quiz."""
    video_title: str
    summary: str


class QuizResponse(CamelModel):
    """Model for quiz responses."""
    quiz_cards: List[QuizCard]


class MetadataResponse(CamelModel):
    """Model for video metadata responses."""
    title: str
    thumbnail: str
    description: str


class ProjectCreateRequest(CamelModel):
    """Model for creating a project from a YouTube link."""
    youtube_url: str


class ProjectUpdateRequest(CamelModel):
    """Partial project update; omitted fields are left alone."""
    title: Optional[str] = None
    thumbnail: Optional[str] = None
    summary: Optional[str] = None
    quiz_cards: Optional[List[QuizCard]] = None
    flashcard_notes: Optional[Dict[str, str]] = None
    study_progress: Optional[StudyProgress] = None


class FlashcardNoteRequest(CamelModel):
    """Model for saving a summary card note."""
    note: str


class SummaryCard(CamelModel):
    """A summary flashcard holding up to two key points."""
    id: int
    points: List[str]


class SummaryCardsResponse(CamelModel):
    """Model for a project's summary cards."""
    cards: List[SummaryCard]
    viewed: List[int] = Field(default_factory=list)


class ErrorResponse(CamelModel):
    """Body of every failed request handled by the domain error handlers."""
    error: str
