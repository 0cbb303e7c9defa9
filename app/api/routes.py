"""
API routes for the Absorbey application.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.encoders import jsonable_encoder

from app.api.auth import get_current_user_id
from app.api.schems import (
    ErrorResponse,
    FlashcardNoteRequest,
    MetadataResponse,
    ProjectCreateRequest,
    ProjectUpdateRequest,
    QuizRequest,
    QuizResponse,
    SummaryCardsResponse,
    SummaryRequest,
    SummaryResponse,
)
from app.core.quiz_generator import QuizGenerator
from app.core.study import get_summary_cards, get_summary_points
from app.core.summarizer import VideoSummarizer
from app.core.youtube_metadata import VideoMetadataFetcher
from app.db import crud
from app.db.database import get_db, DBSession
from app.main import create_project as run_project_pipeline
from app.models.schemas import Project, QuizAttemptCreate
from app.utils.logger import logging

router = APIRouter(prefix="/api", tags=["absorbey"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# Dependencies
def get_metadata_fetcher() -> VideoMetadataFetcher:
    return VideoMetadataFetcher()


def get_summarizer() -> VideoSummarizer:
    return VideoSummarizer()


def get_quiz_generator() -> QuizGenerator:
    return QuizGenerator()


def _get_project_or_404(db: DBSession, project_id: str, user_id: str):
    record = crud.get_project(db, project_id, user_id)
    if not record:
        raise HTTPException(status_code=404, detail="Project not found")
    return record


def _project_or_404(record) -> Project:
    if record is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return crud.project_to_schema(record)


# Proxy endpoints
@router.post("/generate-summary", response_model=SummaryResponse, responses=ERROR_RESPONSES)
def generate_summary(
    request: SummaryRequest,
    summarizer: VideoSummarizer = Depends(get_summarizer),
):
    """
    Generate an educational summary for a video.

    - Fetches the transcript when a video ID is given
    - Falls back to a title/description prompt when no transcript exists
    """
    logging.info(f"Generating summary for: {request.video_title}")
    result = summarizer.generate_summary(request.video_title, request.video_description, request.video_id)
    return SummaryResponse(summary=result.summary, transcript_available=result.transcript_available)


@router.post("/generate-quiz", response_model=QuizResponse, responses=ERROR_RESPONSES)
def generate_quiz(
    request: QuizRequest,
    quiz_generator: QuizGenerator = Depends(get_quiz_generator),
):
    """Generate multiple-choice quiz cards from a summary."""
    cards = quiz_generator.generate(request.video_title, request.summary)
    return QuizResponse(quiz_cards=cards)


@router.get("/video-metadata/{video_id}", response_model=MetadataResponse, responses=ERROR_RESPONSES)
def video_metadata(
    video_id: str = Path(..., description="YouTube video ID"),
    fetcher: VideoMetadataFetcher = Depends(get_metadata_fetcher),
):
    """Fetch title, thumbnail and description for a video."""
    metadata = fetcher.get_metadata(video_id)
    return MetadataResponse(title=metadata.title, thumbnail=metadata.thumbnail, description=metadata.description)


# Projects
@router.get("/projects", response_model=List[Project])
async def list_projects(
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """List the user's projects, newest first."""
    return [crud.project_to_schema(record) for record in crud.list_projects(db, user_id)]


@router.post("/projects", response_model=Project, status_code=status.HTTP_201_CREATED, responses=ERROR_RESPONSES)
def create_project(
    request: ProjectCreateRequest,
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    fetcher: VideoMetadataFetcher = Depends(get_metadata_fetcher),
    summarizer: VideoSummarizer = Depends(get_summarizer),
    quiz_generator: QuizGenerator = Depends(get_quiz_generator),
):
    """Create a project from a YouTube link: metadata, summary and quiz."""
    return run_project_pipeline(
        db,
        request.youtube_url,
        user_id,
        metadata_fetcher=fetcher,
        summarizer=summarizer,
        quiz_generator=quiz_generator,
    )


@router.get("/projects/{project_id}", response_model=Project)
async def get_project(
    project_id: str,
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return crud.project_to_schema(_get_project_or_404(db, project_id, user_id))


@router.patch("/projects/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    request: ProjectUpdateRequest,
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Update the given project fields."""
    updates = {
        name: jsonable_encoder(getattr(request, name), by_alias=True)
        for name in request.model_fields_set
    }
    return _project_or_404(crud.update_project(db, project_id, user_id, updates))


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if not crud.delete_project(db, project_id, user_id):
        raise HTTPException(status_code=404, detail="Project not found")


@router.post("/projects/{project_id}/quiz-attempts", response_model=Project)
async def save_quiz_attempt(
    project_id: str,
    attempt: QuizAttemptCreate,
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Record a finished quiz and update study progress."""
    return _project_or_404(crud.save_quiz_attempt(db, project_id, user_id, attempt))


@router.put("/projects/{project_id}/flashcard-notes/{card_index}", response_model=Project)
async def save_flashcard_note(
    project_id: str,
    request: FlashcardNoteRequest,
    card_index: int = Path(..., ge=0),
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _project_or_404(crud.save_flashcard_note(db, project_id, user_id, card_index, request.note))


@router.post("/projects/{project_id}/summary-cards/{card_index}/viewed", response_model=Project)
async def mark_summary_card_viewed(
    project_id: str,
    card_index: int = Path(..., ge=0),
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return _project_or_404(crud.mark_summary_card_viewed(db, project_id, user_id, card_index))


@router.get("/projects/{project_id}/summary-cards", response_model=SummaryCardsResponse)
async def summary_cards(
    project_id: str,
    db: DBSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Split the project's summary into flashcards of two key points each."""
    record = _get_project_or_404(db, project_id, user_id)
    cards = get_summary_cards(get_summary_points(record.summary))
    viewed = (record.study_progress or {}).get("summaryCardsViewed", [])
    return SummaryCardsResponse(cards=cards, viewed=viewed)
